"""Environment variable overrides."""

import os
from typing import List, Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Overrides read from the environment; None means not set."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        description_files: Optional[List[str]] = None,
        environment: Optional[str] = None,
    ):
        self.log_level = log_level
        self.description_files = description_files
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - DEPVERSION_LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - DEPVERSION_DESCRIPTION_FILES: Comma-separated description file names
    - ENVIRONMENT: Environment label attached to log records (default: local)

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("DEPVERSION_LOG_LEVEL")
    description_files_str = os.getenv("DEPVERSION_DESCRIPTION_FILES")
    environment = os.getenv("ENVIRONMENT")

    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid DEPVERSION_LOG_LEVEL: '{log_level}'. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    description_files = None
    if description_files_str is not None:
        description_files = [
            name.strip() for name in description_files_str.split(",") if name.strip()
        ]
        if not description_files:
            errors.append("DEPVERSION_DESCRIPTION_FILES is set but lists no file names")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the DEPVERSION_* variables in your environment or .env file",
                "Unset a variable to fall back to the configuration file",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level or None,
        description_files=description_files,
        environment=environment,
    )
