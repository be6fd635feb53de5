"""In-memory registry of running agents.

The registry is the only shared mutable state in the orchestrator. Every
mutation goes through its small set of operations so that the buffer
invariants hold no matter how output callbacks, status refreshes and user
actions interleave on the event loop.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from .adapters.base import AgentHandle
from .logging import get_logger
from .types import AgentConfig, AgentStatus, StatusUpdate

logger = get_logger("store")

MAX_OUTPUT_BUFFER_LENGTH = 2000
MAX_LAST_OUTPUT_LENGTH = 500


@dataclass
class Agent:
    """A supervised agent: its config, process handle, status and output."""

    config: AgentConfig
    handle: AgentHandle
    status: AgentStatus
    output_buffer: str = ""

    @property
    def id(self) -> str:
        return self.config.id


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of the registry for rendering.

    Attributes:
        agents: Agents keyed by id, in insertion order
        focused_agent_id: Focus pointer; may reference a removed agent
        orchestrator_input: Reserved for future use
    """

    agents: Mapping[str, Agent]
    focused_agent_id: str | None = None
    orchestrator_input: str = ""

    @property
    def focused_agent(self) -> Agent | None:
        """The focused agent, or None if nothing (or a removed agent) is focused."""
        if self.focused_agent_id is None:
            return None
        return self.agents.get(self.focused_agent_id)

    def ordered(self) -> list[Agent]:
        """Agents in display order."""
        return list(self.agents.values())


@dataclass
class AgentRegistry:
    """Owns the table of agents and the UI focus pointer."""

    _agents: dict[str, Agent] = field(default_factory=dict)
    focused_agent_id: str | None = None
    orchestrator_input: str = ""

    def add_agent(self, config: AgentConfig, handle: AgentHandle) -> Agent:
        """Register a new agent in the ``starting`` state.

        Callers must guarantee ``config.id`` is unique; a duplicate id
        replaces the existing entry.
        """
        logger.info("adding agent", id=config.id, task=config.task)
        if config.id in self._agents:
            logger.warning("duplicate agent id replaced", id=config.id)
        agent = Agent(config=config, handle=handle, status=AgentStatus(id=config.id))
        self._agents[config.id] = agent
        return agent

    def update_status(self, agent_id: str, update: StatusUpdate) -> None:
        """Merge the set fields of ``update`` onto the agent's status.

        Unknown ids are ignored: classification results can race with removal.
        """
        agent = self._agents.get(agent_id)
        if agent is None:
            logger.warning("update for unknown agent", id=agent_id)
            return

        old_state = agent.status.state
        for name, value in update.as_fields().items():
            setattr(agent.status, name, value)
        logger.debug(
            "status updated",
            id=agent_id,
            oldState=old_state.value,
            newState=agent.status.state.value,
        )

    def append_output(self, agent_id: str, chunk: str) -> None:
        """Append a chunk of output, keeping only the most recent characters."""
        agent = self._agents.get(agent_id)
        if agent is None:
            return

        buffer = agent.output_buffer + chunk
        if len(buffer) > MAX_OUTPUT_BUFFER_LENGTH:
            buffer = buffer[-MAX_OUTPUT_BUFFER_LENGTH:]
        agent.output_buffer = buffer
        # keep the UI fallback live before any classification has run
        agent.status.last_output = buffer[-MAX_LAST_OUTPUT_LENGTH:]
        logger.debug(
            "output appended",
            id=agent_id,
            chunkLength=len(chunk),
            bufferLength=len(buffer),
        )

    def set_focused_agent(self, agent_id: str | None) -> None:
        logger.debug("focus changed", **{"from": self.focused_agent_id, "to": agent_id})
        self.focused_agent_id = agent_id

    def remove_agent(self, agent_id: str) -> None:
        """Kill the agent's process and drop it. Unknown ids are ignored."""
        agent = self._agents.get(agent_id)
        if agent is None:
            return
        logger.info("removing agent", id=agent_id)
        try:
            agent.handle.kill()
        finally:
            del self._agents[agent_id]

    def get(self, agent_id: str) -> Agent | None:
        return self._agents.get(agent_id)

    def items(self) -> list[tuple[str, Agent]]:
        """Stable copy of the table, safe to iterate across awaits."""
        return list(self._agents.items())

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            agents=MappingProxyType(dict(self._agents)),
            focused_agent_id=self.focused_agent_id,
            orchestrator_input=self.orchestrator_input,
        )

    def reset(self) -> None:
        """Discard every agent without killing them and clear focus."""
        self._agents.clear()
        self.focused_agent_id = None
        self.orchestrator_input = ""

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))
