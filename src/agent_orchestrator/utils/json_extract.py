"""Extraction of JSON objects from model replies.

Models asked for "only JSON" still sometimes wrap the object in prose or a
code fence. The reply is scanned for the span from the first ``{`` to the
last ``}`` and only that span is parsed.
"""

import json
from typing import Any

from ..exceptions import InvalidResponseError


def find_json_span(text: str) -> str | None:
    """Return the substring from the first '{' to the last '}', if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the JSON object embedded in a model reply.

    Args:
        text: Raw reply text.

    Returns:
        The parsed object.

    Raises:
        InvalidResponseError: If no span is found, it is not valid JSON, or
            it does not decode to an object.
    """
    span = find_json_span(text)
    if span is None:
        raise InvalidResponseError("No JSON object found in response")

    try:
        parsed = json.loads(span)
    except json.JSONDecodeError as e:
        raise InvalidResponseError(f"Invalid JSON in response: {e}") from e

    if not isinstance(parsed, dict):
        raise InvalidResponseError("JSON in response is not an object")
    return parsed
