"""Composition root for the note application back end.

The GUI layer builds an Application from the loaded config and drives the
controllers it exposes.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

from notemind.application.services import (
    ChatSessionController,
    PendingMessageChannel,
    PendingMessageRelay,
    ReflectionController,
)
from notemind.application.use_cases import ImportNotesUseCase
from notemind.config import Config, LoggingConfig
from notemind.infrastructure.llm import (
    OllamaChatClient,
    render_chat_system_prompt,
    render_reflection_system_prompt,
)
from notemind.infrastructure.persistence import (
    DatabaseManager,
    SQLiteFolderRepository,
    SQLiteNoteRepository,
    SQLiteTranscriptRepository,
)

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, leaves logging untouched.
    """
    if config is None:
        return

    root_logger = logging.getLogger()
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    else:
        logging.basicConfig(level=level, format=config.format)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


@dataclass
class Application:
    """Wired application components."""

    config: Config
    db_manager: DatabaseManager
    folder_repository: SQLiteFolderRepository
    note_repository: SQLiteNoteRepository
    transcript_repository: SQLiteTranscriptRepository
    chat: ChatSessionController
    reflection: ReflectionController
    pending_messages: PendingMessageChannel
    relay: PendingMessageRelay
    import_notes: ImportNotesUseCase
    _relay_task: asyncio.Task[None] | None = field(default=None, repr=False)

    async def start(self) -> None:
        """Create tables, restore the chat transcript and start the relay."""
        await self.db_manager.create_tables()
        await self.chat.load_history()
        self._relay_task = asyncio.create_task(self.relay.start())
        logger.info("Application started")

    async def close(self) -> None:
        """Stop background work and release the database."""
        self.chat.cancel()
        self.reflection.cancel()
        await self.relay.stop()
        if self._relay_task is not None:
            self._relay_task.cancel()
            await asyncio.gather(self._relay_task, return_exceptions=True)
            self._relay_task = None
        await self.chat.flush()
        await self.db_manager.close()
        logger.info("Application closed")


def build_application(
    config: Config,
    transport: httpx.AsyncBaseTransport | None = None,
    on_chat_change: Callable[[], None] | None = None,
    on_note_content_update: Callable[[str], None] | None = None,
) -> Application:
    """Build the application from config.

    The chat panel and the reflection action use separate clients, so
    starting or cancelling one never interrupts the other.

    Args:
        config: Application config.
        transport: Optional httpx transport for both LLM clients.
        on_chat_change: Chat transcript/state change listener.
        on_note_content_update: Receives documents updated by reflections.
    """
    configure_logging(config.logging)
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)

    db_manager = DatabaseManager(config.storage.database_path)
    folder_repository = SQLiteFolderRepository(db_manager.get_session)
    note_repository = SQLiteNoteRepository(db_manager.get_session)
    transcript_repository = SQLiteTranscriptRepository(db_manager.get_session)

    chat = ChatSessionController(
        chat_service=OllamaChatClient(
            config.llm, transport=transport, debug_llm_messages=debug_llm_messages
        ),
        system_prompt=config.chat.system_prompt
        or render_chat_system_prompt(config.chat.language),
        context_window_size=config.chat.context_window_size,
        transcript_repository=transcript_repository,
        on_change=on_chat_change,
    )
    reflection = ReflectionController(
        chat_service=OllamaChatClient(
            config.llm, transport=transport, debug_llm_messages=debug_llm_messages
        ),
        system_prompt=config.reflection.system_prompt
        or render_reflection_system_prompt(),
        on_content_update=on_note_content_update,
        opening_marker=config.reflection.opening_marker,
        closing_marker=config.reflection.closing_marker,
    )

    pending_messages = PendingMessageChannel()
    relay = PendingMessageRelay(
        pending_messages,
        chat,
        delay_seconds=config.chat.pending_message_delay_seconds,
    )

    return Application(
        config=config,
        db_manager=db_manager,
        folder_repository=folder_repository,
        note_repository=note_repository,
        transcript_repository=transcript_repository,
        chat=chat,
        reflection=reflection,
        pending_messages=pending_messages,
        relay=relay,
        import_notes=ImportNotesUseCase(note_repository, folder_repository),
    )
