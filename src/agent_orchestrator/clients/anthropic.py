"""Anthropic client implementation.

This client handles communication with the Anthropic messages API and
reduces each reply to its text content.
"""

import os
from typing import Any

from anthropic import APIConnectionError, AsyncAnthropic, InternalServerError
from anthropic import AuthenticationError as AnthropicAuthError
from anthropic import RateLimitError as AnthropicRateLimitError

from ..config import DEFAULT_MODEL
from ..exceptions import (
    AuthenticationError,
    ProviderUnavailableError,
    RateLimitError,
)
from .base import BaseLLMClient, with_retry


def extract_text(response: Any) -> str:
    """Concatenate the text blocks of a messages API response.

    Non-text blocks (tool use, thinking) are treated as empty strings.
    """
    parts = []
    for block in getattr(response, "content", None) or []:
        if getattr(block, "type", None) == "text":
            parts.append(block.text)
    return "".join(parts)


class AnthropicClient(BaseLLMClient):
    """Anthropic API client for short classification prompts."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        client: AsyncAnthropic | None = None,
    ):
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to Claude 3.5 Haiku.
            client: Pre-built SDK client, mainly for tests.
        """
        super().__init__(model)
        self.client = client or AsyncAnthropic(api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"))

    @with_retry()
    async def complete(self, prompt: str, max_tokens: int) -> str:
        """Send a single user message to Anthropic.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ProviderUnavailableError: If API is unavailable
        """
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except AnthropicAuthError as e:
            raise AuthenticationError(f"Anthropic authentication failed: {e}") from e
        except AnthropicRateLimitError as e:
            raise RateLimitError("Anthropic rate limit exceeded") from e
        except (APIConnectionError, InternalServerError) as e:
            raise ProviderUnavailableError(f"Anthropic API unavailable: {e}") from e

        return extract_text(response)
