"""Tests for status classification."""

from unittest.mock import MagicMock

import pytest

from agent_orchestrator.clients import AnthropicClient
from agent_orchestrator.config import DEFAULT_MODEL
from agent_orchestrator.status_classifier import (
    FALLBACK_SUMMARY,
    STATUS_MAX_TOKENS,
    StatusClassifier,
)
from agent_orchestrator.types import AgentState

from conftest import make_response


@pytest.fixture
def classifier(mock_sdk):
    return StatusClassifier(AnthropicClient(model=DEFAULT_MODEL, client=mock_sdk))


class TestClassify:
    """Tests for StatusClassifier.classify."""

    @pytest.mark.asyncio
    async def test_parses_status_and_summary(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response(
            '{"status": "needs_input", "summary": "Asking which file to edit"}'
        )

        update = await classifier.classify("fix-auth", "Which file should I edit?")

        assert update.state == AgentState.NEEDS_INPUT
        assert update.summary == "Asking which file to edit"
        assert update.last_output == "Which file should I edit?"

    @pytest.mark.asyncio
    async def test_request_parameters(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response('{"status": "working", "summary": "x"}')

        await classifier.classify("fix-auth", "output")

        kwargs = mock_sdk.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-3-5-haiku-20241022"
        assert kwargs["max_tokens"] == STATUS_MAX_TOKENS == 150
        assert kwargs["messages"][0]["role"] == "user"

    @pytest.mark.asyncio
    async def test_only_last_500_characters_are_sent(self, classifier, mock_sdk):
        """300 A's then 300 B's: the prompt sees 200 A's and all the B's."""
        mock_sdk.messages.create.return_value = make_response('{"status": "working", "summary": "x"}')

        update = await classifier.classify("fix-auth", "A" * 300 + "B" * 300)

        prompt = mock_sdk.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "A" * 200 + "B" * 300 in prompt
        assert "A" * 201 not in prompt
        assert update.last_output == "A" * 200 + "B" * 300

    @pytest.mark.asyncio
    async def test_json_wrapped_in_prose(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response(
            'Here is the analysis:\n```json\n{"status": "done", "summary": "Finished"}\n```\nHope this helps.'
        )

        update = await classifier.classify("fix-auth", "All done.")

        assert update.state == AgentState.DONE
        assert update.summary == "Finished"

    @pytest.mark.asyncio
    async def test_text_split_across_blocks(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response('{"status": "done", ', '"summary": "ok"}')

        update = await classifier.classify("fix-auth", "output")

        assert update.state == AgentState.DONE


class TestFallback:
    """The classifier never raises; every failure yields working/Processing..."""

    def assert_fallback(self, update, output):
        assert update.state == AgentState.WORKING
        assert update.summary == FALLBACK_SUMMARY == "Processing..."
        assert update.last_output == output

    @pytest.mark.asyncio
    async def test_empty_content(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response()
        self.assert_fallback(await classifier.classify("a", "out"), "out")

    @pytest.mark.asyncio
    async def test_non_text_block(self, classifier, mock_sdk):
        tool_block = MagicMock()
        tool_block.type = "tool_use"
        mock_sdk.messages.create.return_value = make_response(tool_block)
        self.assert_fallback(await classifier.classify("a", "out"), "out")

    @pytest.mark.asyncio
    async def test_not_json(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response("The agent is working on it.")
        self.assert_fallback(await classifier.classify("a", "out"), "out")

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, classifier, mock_sdk):
        mock_sdk.messages.create.return_value = make_response('{"status": "sleeping", "summary": "zz"}')
        self.assert_fallback(await classifier.classify("a", "out"), "out")

    @pytest.mark.asyncio
    async def test_api_error(self, classifier, mock_sdk):
        mock_sdk.messages.create.side_effect = RuntimeError("network down")
        self.assert_fallback(await classifier.classify("a", "out"), "out")

    @pytest.mark.asyncio
    async def test_fallback_output_is_truncated(self, mock_llm):
        mock_llm.complete.side_effect = RuntimeError("boom")
        classifier = StatusClassifier(mock_llm)

        update = await classifier.classify("a", "x" * 800)

        self.assert_fallback(update, "x" * 500)
