"""Agent adapters.

This module provides a centralized way to spawn agents based on their kind,
using a registry pattern that makes it easy to add new adapters.
"""

import importlib
from typing import Any

from ..exceptions import AdapterNotImplementedError, UnknownAgentKindError
from ..types import AgentConfig, AgentKind
from .base import AgentHandle, ExitCallback, OutputCallback

# registry of adapter configurations; a None class_path means not implemented yet
_ADAPTER_REGISTRY: dict[AgentKind, dict[str, Any]] = {
    AgentKind.CLAUDE_CODE: {
        "class_path": "agent_orchestrator.adapters.claude_code.ClaudeCodeAdapter",
        "label": "Claude Code",
    },
    AgentKind.AMP: {
        "class_path": None,
        "label": "Amp",
    },
}


def get_available_kinds() -> list[str]:
    """Get the agent kinds that can actually be spawned."""
    return [kind.value for kind, cfg in _ADAPTER_REGISTRY.items() if cfg["class_path"]]


def get_adapter(kind: AgentKind | str) -> Any:
    """Create the adapter for an agent kind.

    Raises:
        UnknownAgentKindError: If the kind is not registered.
        AdapterNotImplementedError: If the kind has no adapter yet.
    """
    try:
        kind = AgentKind(kind)
    except ValueError:
        raise UnknownAgentKindError(str(kind)) from None

    config = _ADAPTER_REGISTRY.get(kind)
    if config is None:
        raise UnknownAgentKindError(kind.value)
    if not config["class_path"]:
        raise AdapterNotImplementedError(kind.value, config["label"])

    module_path, class_name = config["class_path"].rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)()


async def spawn_agent(config: AgentConfig) -> AgentHandle:
    """Spawn an agent process using the adapter for ``config.kind``."""
    adapter = get_adapter(config.kind)
    return await adapter.spawn(config)


__all__ = [
    "AgentHandle",
    "ExitCallback",
    "OutputCallback",
    "get_adapter",
    "get_available_kinds",
    "spawn_agent",
]
