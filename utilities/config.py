"""
Configuration management using environment variables.
Handles storage and logging settings with proper validation and defaults.
"""

from typing import Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    """
    Shared settings for the API server and the maintenance scripts.
    Uses pydantic BaseSettings for environment variable management.
    """

    # Database Configuration
    database_url: str = Field(default="sqlite:///./bookstore.db", env="DATABASE_URL")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")

    # Logging Configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(default="json", env="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, env="LOG_FILE")

    # Development/Testing
    debug: bool = Field(default=False, env="DEBUG")

    @validator('database_url')
    def validate_database_url(cls, v):
        """Ensure a SQLAlchemy-style URL was given."""
        if "://" not in v:
            raise ValueError('database_url must be a URL such as sqlite:///./bookstore.db')
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from .env

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None


# Global configuration instance
config = Settings()
