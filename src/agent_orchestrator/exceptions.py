"""Custom exception hierarchy for the agent orchestrator.

This module defines all custom exceptions used throughout the orchestrator,
organized into logical categories: configuration errors, client errors and
adapter errors.
"""


class OrchestratorError(Exception):
    """Base exception for all orchestrator errors."""


# =============================================================================
# Configuration Errors - Issues detected before the UI starts
# =============================================================================

class ConfigurationError(OrchestratorError):
    """Required configuration is missing or invalid."""


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(OrchestratorError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Response from provider could not be parsed."""


# =============================================================================
# Adapter Errors - Issues spawning or talking to agent processes
# =============================================================================

class AdapterError(OrchestratorError):
    """Base class for agent adapter errors."""


class SpawnError(AdapterError):
    """The agent process could not be started."""

    def __init__(self, agent_id: str, cause: Exception | str):
        self.agent_id = agent_id
        self.cause = cause
        super().__init__(f"Failed to spawn agent '{agent_id}': {cause}")


class UnknownAgentKindError(AdapterError):
    """No adapter is registered for the requested agent kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown agent type: {kind}")


class AdapterNotImplementedError(AdapterError):
    """The agent kind is known but has no working adapter yet."""

    def __init__(self, kind: str, label: str | None = None):
        self.kind = kind
        super().__init__(f"{label or kind} adapter not yet implemented")
