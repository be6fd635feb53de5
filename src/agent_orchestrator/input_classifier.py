"""Input classification: free text to structured tasks.

The user's raw line is handed to a model that splits it into one or more
clear task prompts, or asks a clarifying question. When the model call or
its reply is unusable, the raw input itself becomes the single task so the
user's request is never lost.
"""

from .clients.base import BaseLLMClient
from .logging import get_logger
from .prompts import format_input_prompt
from .schemas import CleanedInputResponse
from .types import CleanedInput, TaskRequest
from .utils.json_extract import extract_json_object

logger = get_logger("input-cleaner")

INPUT_MAX_TOKENS = 500
EMPTY_INPUT_CLARIFICATION = "Please provide a task description."


class InputClassifier:
    """Turns raw user input into tasks or a clarification request."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    async def clean(self, raw_input: str) -> CleanedInput:
        """Classify raw user input.

        Args:
            raw_input: The line the user submitted.

        Returns:
            Tasks to spawn and/or a clarification question. Blank input is
            answered locally without calling the model.
        """
        logger.debug("received input", raw=raw_input)

        if not raw_input.strip():
            logger.info("empty input")
            return CleanedInput(tasks=[], clarification_needed=EMPTY_INPUT_CLARIFICATION)

        try:
            logger.debug("calling model", model=self.client.model)
            text = await self.client.complete(format_input_prompt(raw_input), INPUT_MAX_TOKENS)
            logger.debug("received response", text=text)

            parsed = CleanedInputResponse.model_validate(extract_json_object(text))
        except Exception as e:
            logger.error("failed", error=f"{type(e).__name__}: {e}", fallback=True)
            return self._fallback(raw_input)

        result = CleanedInput(
            tasks=[
                TaskRequest(prompt=task.prompt, suggested_tools=task.suggested_tools)
                for task in parsed.tasks
            ],
            clarification_needed=parsed.clarification_needed or None,
        )
        logger.info(
            "parsed result",
            taskCount=len(result.tasks),
            clarificationNeeded=result.clarification_needed is not None,
        )
        return result

    @staticmethod
    def _fallback(raw_input: str) -> CleanedInput:
        # the whole line becomes one task, untouched
        return CleanedInput(tasks=[TaskRequest(prompt=raw_input)])
