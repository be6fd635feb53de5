from .app import OrchestratorApp

__all__ = ["OrchestratorApp"]
