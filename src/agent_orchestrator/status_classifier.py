"""Status classification of agent output.

Asks a cheap model whether an agent is working, waiting for input or done,
based on the tail of its output. Failures never propagate: the classifier
falls back to a neutral "working" status so a flaky model call is invisible
to the user.
"""

from .clients.base import BaseLLMClient
from .logging import get_logger
from .prompts import format_status_prompt
from .schemas import StatusResponse
from .types import AgentState, StatusUpdate
from .utils.json_extract import extract_json_object

logger = get_logger("status-detector")

MAX_CLASSIFIER_INPUT = 500
STATUS_MAX_TOKENS = 150
FALLBACK_SUMMARY = "Processing..."


class StatusClassifier:
    """Maps recent agent output to a coarse lifecycle state and summary."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    async def classify(self, agent_id: str, recent_output: str) -> StatusUpdate:
        """Classify an agent's recent output.

        Only the last 500 characters are sent to the model.

        Args:
            agent_id: Id of the agent, for logging.
            recent_output: Output text of any length.

        Returns:
            State, summary and the truncated output. On any failure the
            state is ``working`` with the summary ``Processing...``.
        """
        truncated = recent_output[-MAX_CLASSIFIER_INPUT:]
        logger.debug("detecting status", agentId=agent_id, outputLength=len(truncated))

        try:
            text = await self.client.complete(format_status_prompt(truncated), STATUS_MAX_TOKENS)
            logger.debug("received response", agentId=agent_id, text=text)

            parsed = StatusResponse.model_validate(extract_json_object(text))
        except Exception as e:
            logger.error("detection failed", agentId=agent_id, error=f"{type(e).__name__}: {e}")
            return self._fallback(truncated)

        logger.info("status detected", agentId=agent_id, status=parsed.status, summary=parsed.summary)
        return StatusUpdate(
            state=AgentState(parsed.status),
            summary=parsed.summary,
            last_output=truncated,
        )

    @staticmethod
    def _fallback(truncated: str) -> StatusUpdate:
        return StatusUpdate(
            state=AgentState.WORKING,
            summary=FALLBACK_SUMMARY,
            last_output=truncated,
        )
