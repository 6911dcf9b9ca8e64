"""Configuration dataclasses."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:11434/v1/chat/completions"
DEFAULT_MODEL = "qwen2:0.5b"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LLMConfig:
    """Local inference server settings.

    Attributes:
        base_url: Chat-completions endpoint of the local server.
        model: Model name sent with every request.
        timeout_seconds: Request timeout. None waits indefinitely.
    """

    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: float | None = None


@dataclass
class ChatConfig:
    """Chat panel settings.

    Attributes:
        system_prompt: Overrides the templated system prompt when set.
        language: Reply language mentioned in the templated system prompt.
        context_window_size: Number of transcript entries sent per request.
        pending_message_delay_seconds: Delay before a relayed message is sent.
    """

    system_prompt: str | None = None
    language: str = "English"
    context_window_size: int = 10
    pending_message_delay_seconds: float = 0.5


@dataclass
class ReflectionConfig:
    """Reflection insertion settings."""

    system_prompt: str | None = None
    opening_marker: str = "\n[REFLECTION:"
    closing_marker: str = "]\n"


@dataclass
class StorageConfig:
    """Note store settings."""

    database_path: str


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """Application settings."""

    storage: StorageConfig
    llm: LLMConfig
    chat: ChatConfig
    reflection: ReflectionConfig
    logging: LoggingConfig | None = None
