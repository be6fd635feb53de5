"""Tests for core types."""

import dataclasses

import pytest

from agent_orchestrator.exceptions import (
    AdapterNotImplementedError,
    RateLimitError,
    SpawnError,
    UnknownAgentKindError,
)
from agent_orchestrator.types import (
    ACTIVE_STATES,
    TERMINAL_STATES,
    AgentConfig,
    AgentKind,
    AgentState,
    AgentStatus,
    StatusUpdate,
)


class TestAgentState:
    """Tests for AgentState enum."""

    def test_enum_values(self):
        """Test that enum has expected values."""
        assert AgentState.STARTING.value == "starting"
        assert AgentState.WORKING.value == "working"
        assert AgentState.NEEDS_INPUT.value == "needs_input"
        assert AgentState.DONE.value == "done"
        assert AgentState.ERROR.value == "error"

    def test_state_groups(self):
        assert ACTIVE_STATES == {AgentState.STARTING, AgentState.WORKING}
        assert TERMINAL_STATES == {AgentState.DONE, AgentState.ERROR}
        assert AgentState.NEEDS_INPUT not in ACTIVE_STATES | TERMINAL_STATES


class TestAgentKind:
    """Tests for AgentKind enum."""

    def test_enum_values(self):
        assert AgentKind("claude-code") is AgentKind.CLAUDE_CODE
        assert AgentKind("amp") is AgentKind.AMP


class TestAgentConfig:
    """Tests for AgentConfig dataclass."""

    def test_is_immutable(self):
        config = AgentConfig(id="a", kind=AgentKind.CLAUDE_CODE, working_directory="/", task="t")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.task = "other"

    def test_optional_fields_default_to_none(self):
        config = AgentConfig(id="a", kind=AgentKind.CLAUDE_CODE, working_directory="/", task="t")
        assert config.tools is None
        assert config.system_prompt is None


class TestStatusUpdate:
    """Tests for partial status updates."""

    def test_as_fields_skips_unset(self):
        update = StatusUpdate(state=AgentState.DONE)
        assert update.as_fields() == {"state": AgentState.DONE}

    def test_empty_strings_are_set(self):
        update = StatusUpdate(summary="")
        assert update.as_fields() == {"summary": ""}

    def test_default_status(self):
        status = AgentStatus(id="a")
        assert status.state == AgentState.STARTING
        assert status.summary == ""
        assert status.last_output == ""


class TestExceptions:
    """Tests for exception messages."""

    def test_messages(self):
        assert str(UnknownAgentKindError("cursor")) == "Unknown agent type: cursor"
        assert str(AdapterNotImplementedError("amp", "Amp")) == "Amp adapter not yet implemented"
        assert str(SpawnError("fix-auth", "no such file")) == "Failed to spawn agent 'fix-auth': no such file"

    def test_rate_limit_retry_after(self):
        assert RateLimitError(retry_after=2.5).retry_after == 2.5
