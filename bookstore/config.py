"""
API configuration settings.
"""

from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Bookstore API"
    api_version: str = "1.0.0"
    api_description: str = "A REST API for managing a collection of books"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # CORS Settings
    cors_origins: list = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"  # Ignore extra fields from .env
    }


# Global config instance
config = APIConfig()
