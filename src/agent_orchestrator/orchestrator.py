"""Orchestration loop.

The Orchestrator turns user submissions into running agents and keeps their
status fresh:

    submit(text)
        |
        +-- InputClassifier.clean  -> tasks | clarification
        +-- spawn_agent per task   -> handle
        +-- AgentRegistry.add_agent, wire output/exit callbacks
        v
    every refresh_interval seconds
        +-- StatusClassifier.classify for active agents with output
        +-- AgentRegistry.update_status
        +-- publish one snapshot to listeners

Everything runs on a single asyncio event loop, so the registry needs no
locking. Output callbacks, refresh ticks and submissions may interleave at
any await point.
"""

import asyncio
import os
from typing import Awaitable, Callable

from .adapters import spawn_agent
from .adapters.base import AgentHandle
from .input_classifier import InputClassifier
from .logging import get_logger
from .naming import NameGenerator
from .registry import AgentRegistry, StoreSnapshot
from .status_classifier import StatusClassifier
from .types import (
    ACTIVE_STATES,
    TERMINAL_STATES,
    AgentConfig,
    AgentKind,
    AgentState,
    StatusUpdate,
    TaskRequest,
)

logger = get_logger("orchestrator")

STATUS_REFRESH_INTERVAL = 3.0

SpawnFunction = Callable[[AgentConfig], Awaitable[AgentHandle]]
SnapshotListener = Callable[[StoreSnapshot], None]


class Orchestrator:
    """Coordinates agent creation, output capture and status refresh."""

    def __init__(
        self,
        registry: AgentRegistry,
        input_classifier: InputClassifier,
        status_classifier: StatusClassifier,
        spawn: SpawnFunction = spawn_agent,
        name_generator: NameGenerator | None = None,
        agent_kind: AgentKind = AgentKind.CLAUDE_CODE,
        working_directory: str | None = None,
        refresh_interval: float = STATUS_REFRESH_INTERVAL,
    ):
        """Initialize the orchestrator.

        Args:
            registry: The registry this orchestrator owns and mutates.
            input_classifier: Splits user input into tasks.
            status_classifier: Classifies agent output.
            spawn: Coroutine function starting an agent for a config.
            name_generator: Source of unique agent ids.
            agent_kind: Kind of agent spawned for new tasks.
            working_directory: Directory agents run in (defaults to cwd).
            refresh_interval: Seconds between status refresh ticks.
        """
        self.registry = registry
        self.input_classifier = input_classifier
        self.status_classifier = status_classifier
        self.name_generator = name_generator or NameGenerator()
        self.agent_kind = agent_kind
        self.working_directory = working_directory or os.getcwd()
        self.refresh_interval = refresh_interval
        self._spawn = spawn

        self.is_processing = False
        self.error_message: str | None = None
        self.clarification: str | None = None

        self._listeners: list[SnapshotListener] = []
        self._refresh_task: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register a callback that receives every published snapshot."""
        self._listeners.append(listener)

    def snapshot(self) -> StoreSnapshot:
        return self.registry.snapshot()

    def publish(self) -> StoreSnapshot:
        """Take a snapshot and hand it to every listener."""
        snapshot = self.registry.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("listener failed", error=str(e))
        return snapshot

    # ------------------------------------------------------------------
    # submission
    # ------------------------------------------------------------------

    async def submit(self, text: str) -> bool:
        """Handle one line of user input.

        A submission while another is in flight is dropped, not queued.

        Args:
            text: The raw line the user entered.

        Returns:
            True if the input was processed, False if it was ignored.
        """
        if not text.strip() or self.is_processing:
            if text.strip():
                logger.debug("submission dropped, already processing")
            return False

        self.is_processing = True
        self.error_message = None
        self.clarification = None
        logger.info("submission received", input=text)
        self.publish()

        try:
            cleaned = await self.input_classifier.clean(text)

            if cleaned.clarification_needed:
                self.clarification = cleaned.clarification_needed
                logger.info("clarification needed", question=cleaned.clarification_needed)
                return True

            spawned = []
            for task in cleaned.tasks:
                spawned.append(await self._start_agent(task))

            logger.info("submission completed", agentIds=spawned)
            return True

        except Exception as e:
            self.error_message = f"Error: {e}"
            logger.error("submission failed", error=f"{type(e).__name__}: {e}")
            return True

        finally:
            self.is_processing = False
            self.publish()

    async def _start_agent(self, task: TaskRequest) -> str:
        agent_id = self.name_generator.generate(task.prompt)
        config = AgentConfig(
            id=agent_id,
            kind=self.agent_kind,
            working_directory=self.working_directory,
            task=task.prompt,
            tools=tuple(task.suggested_tools) if task.suggested_tools else None,
        )

        handle = await self._spawn(config)
        self.registry.add_agent(config, handle)

        handle.on_output(lambda chunk: self.registry.append_output(agent_id, chunk))
        handle.on_exit(lambda code: self._handle_exit(agent_id, code))
        self.publish()
        return agent_id

    def _handle_exit(self, agent_id: str, code: int) -> None:
        # exit code is logged but not mapped to the error state
        logger.info("agent exited", id=agent_id, exitCode=code)
        self.registry.update_status(agent_id, StatusUpdate(state=AgentState.DONE))
        self.publish()

    # ------------------------------------------------------------------
    # status refresh
    # ------------------------------------------------------------------

    async def refresh_statuses(self) -> StoreSnapshot:
        """Run one status refresh tick and publish a single snapshot."""
        for agent_id, agent in self.registry.items():
            if agent.status.state not in ACTIVE_STATES:
                continue
            if not agent.output_buffer:
                logger.debug("skipping status detection, no output", id=agent_id)
                continue

            try:
                update = await self.status_classifier.classify(agent_id, agent.output_buffer)
            except Exception as e:
                logger.error("status detection raised", id=agent_id, error=f"{type(e).__name__}: {e}")
                continue

            current = self.registry.get(agent_id)
            if current is None or current.status.state in TERMINAL_STATES:
                # the agent was removed or exited while we were waiting
                logger.debug("discarding stale status", id=agent_id)
                continue
            self.registry.update_status(agent_id, update)

        return self.publish()

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            try:
                await self.refresh_statuses()
            except Exception as e:
                logger.error("status refresh failed", error=f"{type(e).__name__}: {e}")

    def start(self) -> None:
        """Start the periodic status refresh on the running event loop."""
        if self._refresh_task is None or self._refresh_task.done():
            logger.info("status refresh started", interval=self.refresh_interval)
            self._refresh_task = asyncio.create_task(self._refresh_loop(), name="status-refresh")

    async def stop(self) -> None:
        """Cancel the periodic status refresh."""
        task, self._refresh_task = self._refresh_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("status refresh stopped")

    @property
    def is_running(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    # ------------------------------------------------------------------
    # focus and agent control
    # ------------------------------------------------------------------

    def focused_agent_id(self) -> str | None:
        """The focused id, or None when nothing (or a removed agent) is focused."""
        focused = self.registry.focused_agent_id
        if focused is not None and focused not in self.registry:
            return None
        return focused

    def focus_by_number(self, number: int) -> bool:
        """Focus the N-th agent (1-based) in display order.

        Ignored while an agent is focused or when N is out of range.

        Returns:
            True if focus changed.
        """
        if self.focused_agent_id() is not None:
            return False
        agents = self.registry.items()
        if not 1 <= number <= min(len(agents), 9):
            return False
        self.registry.set_focused_agent(agents[number - 1][0])
        self.publish()
        return True

    def unfocus(self) -> bool:
        """Return to the list view. Returns True if something was focused."""
        was_focused = self.focused_agent_id() is not None
        self.registry.set_focused_agent(None)
        self.publish()
        return was_focused

    def send_input(self, agent_id: str, text: str) -> bool:
        """Send a line of input to an agent's process."""
        agent = self.registry.get(agent_id)
        if agent is None:
            return False
        logger.info("input sent to agent", id=agent_id, length=len(text))
        agent.handle.send(text)
        return True

    def kill_agent(self, agent_id: str) -> None:
        """Kill an agent's process and remove it from the registry."""
        self.registry.remove_agent(agent_id)
        self.publish()

    async def shutdown(self) -> None:
        """Stop the refresh timer, kill every agent and wait for their handles to close."""
        await self.stop()
        handles = []
        for agent_id, agent in self.registry.items():
            handles.append(agent.handle)
            try:
                self.registry.remove_agent(agent_id)
            except Exception as e:
                logger.error("kill failed", id=agent_id, error=str(e))
        self.registry.set_focused_agent(None)

        for handle in handles:
            try:
                await handle.aclose()
            except Exception as e:
                logger.error("close failed", id=handle.id, error=str(e))
        logger.info("orchestrator shut down")

    def reset(self) -> None:
        """Forget all agents and issued names. Does not kill processes."""
        self.registry.reset()
        self.name_generator.reset()
        self.error_message = None
        self.clarification = None
