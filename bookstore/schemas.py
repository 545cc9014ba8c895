"""
Request schemas for book writes.

Both schemas are strict pydantic models: a JSON string is never coerced to
an integer and a number is never coerced to a string. Whole floats such as
``200.0`` are still integers, as in JSON Schema. Validation failures
are reported as a flat list of messages, one per offending field.
"""

from typing import Annotated, Any, Dict, List, Optional, Type

from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from bookstore.errors import BookValidationError


def _whole_float_to_int(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


JSONInt = Annotated[int, BeforeValidator(_whole_float_to_int)]


class BookCreate(BaseModel):
    """Payload accepted by ``POST /books``."""
    isbn: str = Field(..., description="International Standard Book Number, used as the key")
    amazon_url: Optional[str] = Field(None, description="Link to the book on Amazon")
    author: str = Field(..., description="Book author")
    language: Optional[str] = Field(None, description="Language the book is written in")
    pages: Optional[JSONInt] = Field(None, description="Number of pages")
    publisher: Optional[str] = Field(None, description="Publisher name")
    title: str = Field(..., description="Book title")
    year: Optional[JSONInt] = Field(None, description="Publication year")

    model_config = {"strict": True, "extra": "ignore"}


class BookUpdate(BaseModel):
    """Payload accepted by ``PUT /books/{isbn}``. Every mutable field is replaced."""
    amazon_url: Optional[str] = Field(None, description="Link to the book on Amazon")
    author: str = Field(..., description="Book author")
    language: Optional[str] = Field(None, description="Language the book is written in")
    pages: Optional[JSONInt] = Field(None, description="Number of pages")
    publisher: Optional[str] = Field(None, description="Publisher name")
    title: str = Field(..., description="Book title")
    year: Optional[JSONInt] = Field(None, description="Publication year")

    model_config = {"strict": True, "extra": "ignore"}


BOOK_CREATE_SCHEMA: Dict[str, Any] = BookCreate.model_json_schema()
BOOK_UPDATE_SCHEMA: Dict[str, Any] = BookUpdate.model_json_schema()

_EXPECTED_TYPES = {
    "string_type": "string",
    "int_type": "integer",
    "int_parsing": "integer",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
}


def _instance_path(loc) -> str:
    # "body" is the prefix FastAPI puts on request body errors
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(["instance", *parts])


def type_error_message(field: Optional[str], expected: str) -> str:
    """Message for a value that is not of the expected JSON type."""
    path = f"instance.{field}" if field else "instance"
    return f"{path} is not of a type(s) {expected}"


def format_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """
    Turn pydantic error dicts into readable messages.

    Missing fields become ``instance requires property "x"`` and type
    mismatches become ``instance.x is not of a type(s) string``. A body that
    is not JSON at all is reported once, without the parser offset.
    """
    messages = []
    for error in errors:
        error_type = error.get("type")
        loc = tuple(error.get("loc", ()))
        if error_type == "json_invalid":
            reason = (error.get("ctx") or {}).get("error", error.get("msg", "JSON decode error"))
            messages.append(f"instance is not valid JSON ({reason})")
        elif error_type == "missing" and loc:
            parent = _instance_path(loc[:-1])
            messages.append(f'{parent} requires property "{loc[-1]}"')
        elif error_type in _EXPECTED_TYPES:
            messages.append(f"{_instance_path(loc)} is not of a type(s) {_EXPECTED_TYPES[error_type]}")
        else:
            messages.append(f"{_instance_path(loc)} {error.get('msg', 'is invalid')}")
    return messages


def validate_payload(schema: Type[BaseModel], payload: Any) -> Dict[str, Any]:
    """
    Validate ``payload`` against ``schema``.

    Returns:
        The validated fields, with omitted optional fields set to None

    Raises:
        BookValidationError: with every failure found, not just the first
    """
    try:
        validated = schema.model_validate(payload)
    except ValidationError as e:
        raise BookValidationError(format_errors(e.errors())) from e
    return validated.model_dump()
