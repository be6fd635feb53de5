"""LLM client implementations.

All clients implement the BaseLLMClient interface.
"""

from .anthropic import AnthropicClient
from .base import BaseLLMClient, with_retry

__all__ = [
    "AnthropicClient",
    "BaseLLMClient",
    "with_retry",
]
