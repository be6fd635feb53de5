"""Base class for agent process handles.

A handle is the capability the orchestrator gets back from an adapter's
``spawn``. Through it the orchestrator sends input, kills the process and
subscribes to output and exit events.
"""

from abc import ABC, abstractmethod
from typing import Callable

from ..logging import get_logger
from ..types import AgentConfig

logger = get_logger("adapter")

OutputCallback = Callable[[str], None]
ExitCallback = Callable[[int], None]


class AgentHandle(ABC):
    """Abstract handle to a running agent process.

    Subclasses implement ``send`` and ``kill`` and call ``_emit_output`` /
    ``_emit_exit`` as events arrive. Any number of subscribers may be
    registered; they run in registration order.
    """

    def __init__(self, config: AgentConfig):
        self.config = config
        self._output_callbacks: list[OutputCallback] = []
        self._exit_callbacks: list[ExitCallback] = []

    @property
    def id(self) -> str:
        return self.config.id

    @abstractmethod
    def send(self, message: str) -> None:
        """Write a line of input to the agent."""

    @abstractmethod
    def kill(self) -> None:
        """Terminate the agent process. Must not raise."""

    async def aclose(self) -> None:
        """Wait for background work to finish after ``kill``.

        Handles without background tasks have nothing to wait for.
        """

    def on_output(self, callback: OutputCallback) -> None:
        self._output_callbacks.append(callback)

    def on_exit(self, callback: ExitCallback) -> None:
        self._exit_callbacks.append(callback)

    def _emit_output(self, chunk: str) -> None:
        for callback in list(self._output_callbacks):
            try:
                callback(chunk)
            except Exception as e:
                logger.error("output callback failed", id=self.id, error=str(e))

    def _emit_exit(self, code: int) -> None:
        for callback in list(self._exit_callbacks):
            try:
                callback(code)
            except Exception as e:
                logger.error("exit callback failed", id=self.id, error=str(e))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id='{self.id}')"
