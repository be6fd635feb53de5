"""Base class for LLM clients.

The classifiers only need one thing from a language model: send a single
prompt and get text back. Clients implement that on top of a provider SDK
and translate provider errors into the orchestrator's exception hierarchy.
"""

import asyncio
import functools
import random
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

from ..exceptions import ProviderUnavailableError, RateLimitError
from ..logging import get_logger

logger = get_logger("client")

T = TypeVar("T")


def with_retry(
    max_retries: int = 2,
    initial_delay: float = 0.5,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator for retrying async API calls with exponential backoff.

    Retries on RateLimitError and ProviderUnavailableError. Other exceptions
    are raised immediately.

    Args:
        max_retries: Maximum number of retry attempts (default: 2)
        initial_delay: Initial delay in seconds between retries (default: 0.5)
        max_delay: Maximum delay in seconds (default: 10.0)
        exponential_base: Base for exponential backoff (default: 2.0)
        jitter: Whether to add random jitter to delay (default: True)

    Returns:
        Decorated coroutine function with retry logic.

    Example:
        @with_retry(max_retries=3, initial_delay=1.0)
        async def make_api_call():
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (RateLimitError, ProviderUnavailableError) as e:
                    if attempt == max_retries:
                        logger.warning(
                            "max retries exceeded",
                            function=func.__name__,
                            maxRetries=max_retries,
                            error=str(e),
                        )
                        raise

                    actual_delay = min(delay, max_delay)
                    if isinstance(e, RateLimitError) and e.retry_after:
                        actual_delay = min(e.retry_after, max_delay)
                    elif jitter:
                        actual_delay *= (0.5 + random.random())

                    logger.info(
                        "retrying",
                        function=func.__name__,
                        attempt=attempt + 1,
                        delay=round(actual_delay, 2),
                        error=str(e),
                    )
                    await asyncio.sleep(actual_delay)
                    delay *= exponential_base

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper
    return decorator


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients used by the classifiers."""

    def __init__(self, model: str):
        self.model = model

    @abstractmethod
    async def complete(self, prompt: str, max_tokens: int) -> str:
        """Send a single user prompt and return the text of the reply.

        Only text content is returned; any other content blocks contribute
        nothing, so a reply without text yields an empty string.

        Args:
            prompt: The user message.
            max_tokens: Token budget for the reply.

        Returns:
            The concatenated text of the reply.
        """
