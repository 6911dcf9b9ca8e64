"""Configuration management."""

from notemind.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from notemind.config.models import (
    ChatConfig,
    Config,
    LLMConfig,
    LoggingConfig,
    ReflectionConfig,
    StorageConfig,
)

__all__ = [
    "ChatConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "ReflectionConfig",
    "StorageConfig",
    "expand_env_vars",
    "load_config",
]
