"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_DESCRIPTION_FILES = ["package.json"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


class ResolverConfig(BaseModel):
    """Root configuration object."""

    description_files: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DESCRIPTION_FILES),
        min_length=1,
        description="Description file names to look for, in priority order",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("description_files")
    @classmethod
    def validate_description_files(cls, v: List[str]) -> List[str]:
        """Strip names and reject blanks, path separators and duplicates."""
        names = []
        for name in v:
            stripped = name.strip()
            if not stripped:
                raise ValueError("Description file names cannot be empty or whitespace-only")
            if "/" in stripped or "\\" in stripped:
                raise ValueError(f"Description file name must not contain a path separator: {stripped}")
            if stripped in names:
                raise ValueError(f"Duplicate description file name: {stripped}")
            names.append(stripped)
        return names
