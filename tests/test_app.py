"""Tests for application wiring."""

import asyncio
import json
import logging
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest

from notemind.app import Application, build_application, configure_logging
from notemind.application.services import SessionState
from notemind.config import (
    ChatConfig,
    Config,
    LLMConfig,
    LoggingConfig,
    ReflectionConfig,
    StorageConfig,
)
from notemind.domain.entities import TextRange


def stream_response(request: httpx.Request) -> httpx.Response:
    lines = [
        "data: " + json.dumps({"choices": [{"delta": {"content": part}}]})
        for part in ["Why ", "so?"]
    ]
    lines.append("data: [DONE]")
    return httpx.Response(200, content=("\n".join(lines) + "\n").encode())


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        storage=StorageConfig(database_path=str(tmp_path / "notes.db")),
        llm=LLMConfig(),
        chat=ChatConfig(),
        reflection=ReflectionConfig(),
    )


@pytest.fixture
def documents() -> list[str]:
    return []


@pytest.fixture
async def app(config: Config, documents: list[str]):
    application = build_application(
        config,
        transport=httpx.MockTransport(stream_response),
        on_note_content_update=documents.append,
    )
    await application.start()
    yield application
    await application.close()


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    root_logger.setLevel(level)
    logging.getLogger("httpx").setLevel(logging.NOTSET)


async def wait_for(predicate, timeout: float = 2) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(poll(), timeout=timeout)


class TestBuildApplication:
    """build_application tests."""

    async def test_chat_round_trip_is_persisted(
        self, app: Application, config: Config
    ) -> None:
        await app.chat.send("I feel stuck")
        await app.chat.wait_until_idle()
        await app.chat.flush()

        contents = [entry.content for entry in app.chat.transcript]
        assert contents == ["I feel stuck", "Why so?"]
        assert app.chat.state is SessionState.IDLE

        stored = await app.transcript_repository.find_all()
        assert [entry.content for entry in stored] == contents

    async def test_history_is_restored_on_start(self, app: Application, config) -> None:
        await app.chat.send("Remember me")
        await app.chat.wait_until_idle()
        await app.chat.flush()

        restarted = build_application(
            config, transport=httpx.MockTransport(stream_response)
        )
        await restarted.start()
        try:
            assert [e.content for e in restarted.chat.transcript] == [
                "Remember me",
                "Why so?",
            ]
        finally:
            await restarted.close()

    async def test_reflection_updates_document(
        self, app: Application, documents: list[str]
    ) -> None:
        document = "Today was long. I slept."

        started = app.reflection.generate_reflection(
            document, "Today was long.", TextRange(0, 15)
        )
        await wait_for(lambda: not app.reflection.is_generating)

        assert started
        assert documents[-1] == "Today was long.\n[REFLECTION:Why so?]\n I slept."

    async def test_pending_message_is_relayed(self, config: Config) -> None:
        config.chat.pending_message_delay_seconds = 0
        application = build_application(
            config, transport=httpx.MockTransport(stream_response)
        )
        await application.start()
        try:
            application.pending_messages.post("Discuss this note")
            await wait_for(lambda: len(application.chat.transcript) == 2)
        finally:
            await application.close()

        assert application.chat.transcript[0].content == "Discuss this note"

    def test_templated_prompts_respect_overrides(self, config: Config) -> None:
        config.chat.system_prompt = "Custom chat prompt"

        application = build_application(config)

        window = application.chat.build_conversation_window()
        assert window[0].content == "Custom chat prompt"
        reflection_window = application.reflection.build_conversation_window("x")
        assert "reflect" in reflection_window[0].content


class TestConfigureLogging:
    """configure_logging tests."""

    def test_none_leaves_logging_untouched(self, restore_root_logger) -> None:
        root_logger = logging.getLogger()
        level = root_logger.level

        configure_logging(None)

        assert root_logger.level == level

    def test_sets_levels(self, restore_root_logger) -> None:
        configure_logging(LoggingConfig(level="debug", loggers={"httpx": "WARNING"}))

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
