"""Configuration management for depversion."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    DEFAULT_DESCRIPTION_FILES,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ResolverConfig,
)

__all__ = [
    "load_config",
    "load_environment_config",
    "ResolverConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "DEFAULT_DESCRIPTION_FILES",
    "LogLevel",
    "LogFormat",
    "ConfigurationError",
]
