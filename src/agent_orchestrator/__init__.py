"""Agent Orchestrator - supervise several coding agents from one terminal.

This package turns free-form task descriptions into concurrently running
coding-agent subprocesses, keeps a short tail of their output and classifies
their status with a small model.
"""

from .exceptions import (
    AdapterError,
    ClientError,
    ConfigurationError,
    OrchestratorError,
    SpawnError,
)
from .naming import NameGenerator, generate_agent_name, reset_used_names
from .orchestrator import Orchestrator
from .registry import Agent, AgentRegistry, StoreSnapshot
from .types import (
    AgentConfig,
    AgentKind,
    AgentState,
    AgentStatus,
    CleanedInput,
    StatusUpdate,
    TaskRequest,
)

__all__ = [
    # orchestration
    "Orchestrator",
    "AgentRegistry",
    "Agent",
    "StoreSnapshot",
    # naming
    "NameGenerator",
    "generate_agent_name",
    "reset_used_names",
    # types
    "AgentConfig",
    "AgentKind",
    "AgentState",
    "AgentStatus",
    "CleanedInput",
    "StatusUpdate",
    "TaskRequest",
    # exceptions
    "AdapterError",
    "ClientError",
    "ConfigurationError",
    "OrchestratorError",
    "SpawnError",
]
