"""YAML config loading with environment variable expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from notemind.config.models import (
    DEFAULT_BASE_URL,
    DEFAULT_LOG_FORMAT,
    DEFAULT_MODEL,
    ChatConfig,
    Config,
    LLMConfig,
    LoggingConfig,
    ReflectionConfig,
    StorageConfig,
)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """A config value is missing or invalid."""


class EnvironmentVariableError(ConfigError):
    """A referenced environment variable is not set."""


# ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} references with environment variable values.

    Args:
        value: String to expand.

    Returns:
        The expanded string.

    Raises:
        EnvironmentVariableError: A referenced variable is not set.
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """Return a required field's value.

    Args:
        data: Mapping to read from.
        field: Field name.
        parent: Parent section name (for error messages).

    Raises:
        ConfigValidationError: The field is missing or null.
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _optional_section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigValidationError(f"Section '{name}' must be a mapping")
    return section


def _positive_int(value: Any, path: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigValidationError(f"'{path}' must be a positive integer")
    return value


def load_config(path: str | Path) -> Config:
    """Load the application config file.

    Args:
        path: Path to config.yaml.

    Returns:
        Config object.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigValidationError: A required field is missing or invalid.
        EnvironmentVariableError: A referenced variable is not set.
        yaml.YAMLError: Malformed YAML.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    data = _expand_recursive(raw_data)

    storage_data = _validate_required_field(data, "storage")
    storage = StorageConfig(
        database_path=_validate_required_field(
            storage_data, "database_path", "storage"
        ),
    )

    llm_data = _optional_section(data, "llm")
    llm = LLMConfig(
        base_url=llm_data.get("base_url", DEFAULT_BASE_URL),
        model=llm_data.get("model", DEFAULT_MODEL),
        timeout_seconds=llm_data.get("timeout_seconds"),
    )

    chat_data = _optional_section(data, "chat")
    chat = ChatConfig(
        system_prompt=chat_data.get("system_prompt"),
        language=chat_data.get("language", "English"),
        context_window_size=_positive_int(
            chat_data.get("context_window_size", 10), "chat.context_window_size"
        ),
        pending_message_delay_seconds=chat_data.get(
            "pending_message_delay_seconds", 0.5
        ),
    )

    reflection_data = _optional_section(data, "reflection")
    reflection = ReflectionConfig(
        system_prompt=reflection_data.get("system_prompt"),
        opening_marker=reflection_data.get("opening_marker", "\n[REFLECTION:"),
        closing_marker=reflection_data.get("closing_marker", "]\n"),
    )

    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        storage=storage,
        llm=llm,
        chat=chat,
        reflection=reflection,
        logging=logging_config,
    )
