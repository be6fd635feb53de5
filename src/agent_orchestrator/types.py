"""Core types for the agent orchestrator.

These types are shared by the registry, the orchestration loop, the
classifiers and the adapters. The presentation layer renders from them.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class AgentKind(str, Enum):
    """Kind of external coding agent backing a subprocess."""
    CLAUDE_CODE = "claude-code"
    AMP = "amp"


class AgentState(str, Enum):
    """Lifecycle state of an agent."""
    STARTING = "starting"
    WORKING = "working"
    NEEDS_INPUT = "needs_input"
    DONE = "done"
    ERROR = "error"


# states that are still eligible for status classification
ACTIVE_STATES = frozenset({AgentState.STARTING, AgentState.WORKING})

# once reached, an agent never leaves these
TERMINAL_STATES = frozenset({AgentState.DONE, AgentState.ERROR})


@dataclass(frozen=True)
class AgentConfig:
    """Immutable description of one spawn request.

    Attributes:
        id: Unique agent id, also used as the display name
        kind: Which adapter spawns the process
        working_directory: Directory the process runs in
        task: Free-text instruction sent to the agent
        tools: Ordered tool names the agent may use (None means adapter default)
        system_prompt: Optional system prompt override
    """
    id: str
    kind: AgentKind
    working_directory: str
    task: str
    tools: tuple[str, ...] | None = None
    system_prompt: str | None = None


@dataclass
class AgentStatus:
    """Mutable status of an agent, updated by partial merges."""
    id: str
    state: AgentState = AgentState.STARTING
    summary: str = ""
    last_output: str = ""


@dataclass
class StatusUpdate:
    """Partial status payload. Fields left as None are not merged."""
    state: AgentState | None = None
    summary: str | None = None
    last_output: str | None = None

    def as_fields(self) -> dict[str, Any]:
        """Return only the fields that are set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class TaskRequest:
    """A single task extracted from user input."""
    prompt: str
    suggested_tools: list[str] | None = None


@dataclass
class CleanedInput:
    """Result of classifying raw user input.

    Attributes:
        tasks: Tasks to spawn agents for, in order
        clarification_needed: Question to show the user instead of spawning
    """
    tasks: list[TaskRequest] = field(default_factory=list)
    clarification_needed: str | None = None
