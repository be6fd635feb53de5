"""centralized configuration management using pydantic settings.

this module provides type-safe, validated configuration for the orchestrator.
configuration is loaded from environment variables and optional .env files.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_MODEL = "claude-3-5-haiku-20241022"
DEFAULT_LOG_FILE = "orchestrator-debug.log"
LOG_LEVELS = ("debug", "info", "warn", "error")


class Settings(BaseSettings):
    """main settings class for the orchestrator.

    configuration is loaded from environment variables. a .env file in the
    working directory is also loaded if present.

    attributes:
        anthropic_api_key: api key for anthropic, required at startup
        log_level: log level (debug, info, warn, error)
        log_file: path of the newline-delimited json log
        model: model used by both classifiers
        refresh_interval: seconds between status refresh ticks
        agent_kind: adapter used for newly spawned agents
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore extra env vars
        populate_by_name=True,
    )

    anthropic_api_key: str | None = None

    log_level: str = Field(default="debug", alias="LOG_LEVEL")
    log_file: str = Field(default=DEFAULT_LOG_FILE, alias="ORCHESTRATOR_LOG_FILE")

    model: str = Field(default=DEFAULT_MODEL, alias="ORCHESTRATOR_MODEL")
    refresh_interval: float = Field(default=3.0, gt=0, alias="ORCHESTRATOR_REFRESH_INTERVAL")
    agent_kind: str = Field(default="claude-code", alias="ORCHESTRATOR_AGENT_KIND")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        value = value.strip().lower()
        if value == "warning":
            return "warn"
        return value

    def require_api_key(self) -> str:
        """return the anthropic api key or raise if it is not configured.

        raises:
            ConfigurationError: if ANTHROPIC_API_KEY is unset or blank
        """
        if not self.anthropic_api_key or not self.anthropic_api_key.strip():
            raise ConfigurationError("ANTHROPIC_API_KEY environment variable is required.")
        return self.anthropic_api_key


@lru_cache
def get_settings() -> Settings:
    """get the singleton settings instance.

    uses lru_cache to ensure only one instance is created.
    call get_settings.cache_clear() to reload settings if needed.

    returns:
        the settings instance
    """
    return Settings()
