"""Shared test fixtures and configuration."""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from agent_orchestrator.adapters.base import AgentHandle
from agent_orchestrator.clients.base import BaseLLMClient
from agent_orchestrator.config import get_settings
from agent_orchestrator.naming import NameGenerator
from agent_orchestrator.registry import AgentRegistry
from agent_orchestrator.types import AgentConfig, AgentKind


class FakeHandle(AgentHandle):
    """In-memory agent handle that records what the orchestrator does to it."""

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self.sent: list[str] = []
        self.kill_count = 0
        self.close_count = 0

    def send(self, message: str) -> None:
        self.sent.append(message)

    def kill(self) -> None:
        self.kill_count += 1

    async def aclose(self) -> None:
        self.close_count += 1

    def emit_output(self, chunk: str) -> None:
        self._emit_output(chunk)

    def emit_exit(self, code: int = 0) -> None:
        self._emit_exit(code)


def make_config(agent_id: str = "fix-auth", task: str = "Fix auth", **kwargs) -> AgentConfig:
    kwargs.setdefault("kind", AgentKind.CLAUDE_CODE)
    kwargs.setdefault("working_directory", "/tmp")
    return AgentConfig(id=agent_id, task=task, **kwargs)


def make_text_block(text: str) -> MagicMock:
    block = MagicMock()
    block.type = "text"
    block.text = text
    return block


def make_response(*blocks) -> MagicMock:
    """Build a fake messages API response from text strings or block mocks."""
    response = MagicMock()
    response.content = [make_text_block(b) if isinstance(b, str) else b for b in blocks]
    return response


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry():
    return AgentRegistry()


@pytest.fixture
def fake_handle():
    return FakeHandle(make_config())


@pytest.fixture
def mock_llm():
    """LLM client whose ``complete`` coroutine is an AsyncMock."""
    client = MagicMock(spec=BaseLLMClient)
    client.model = "test-model"
    client.complete = AsyncMock(return_value="")
    return client


@pytest.fixture
def mock_sdk():
    """Stand-in for AsyncAnthropic with an awaitable ``messages.create``."""
    sdk = MagicMock()
    sdk.messages.create = AsyncMock(return_value=make_response("{}"))
    return sdk


@pytest.fixture
def name_generator():
    return NameGenerator(rng=random.Random(1234))
