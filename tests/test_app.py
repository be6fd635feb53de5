"""Tests for the Textual front end."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from textual.widgets import Input, Static

from agent_orchestrator.orchestrator import Orchestrator
from agent_orchestrator.types import CleanedInput, StatusUpdate, TaskRequest
from agent_orchestrator.ui import OrchestratorApp

from conftest import FakeHandle


@pytest.fixture
def orchestrator(registry, name_generator):
    handles = {}

    async def spawn(config):
        handles[config.id] = FakeHandle(config)
        return handles[config.id]

    input_classifier = MagicMock()
    input_classifier.clean = AsyncMock(return_value=CleanedInput(tasks=[TaskRequest(prompt="Fix auth")]))
    status_classifier = MagicMock()
    status_classifier.classify = AsyncMock(return_value=StatusUpdate())

    orchestrator = Orchestrator(
        registry,
        input_classifier,
        status_classifier,
        spawn=spawn,
        name_generator=name_generator,
        working_directory="/work",
        refresh_interval=60,
    )
    orchestrator.handles = handles
    return orchestrator


def view_text(app):
    return str(app.query_one("#agent-view", Static).render())


class TestOrchestratorApp:
    """Tests driving the app with Textual's pilot."""

    @pytest.mark.asyncio
    async def test_empty_list_on_start(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert "No agents running" in view_text(app)
            assert orchestrator.is_running

    @pytest.mark.asyncio
    async def test_submit_focus_and_back(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            app.query_one("#task-input", Input).value = "fix auth"
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert "1. fix-auth" in view_text(app)

            await pilot.press("1")
            await pilot.pause()
            assert orchestrator.focused_agent_id() == "fix-auth"
            assert "Press ESC to go back" in view_text(app)

            await pilot.press("y", "enter")
            await pilot.pause()
            assert orchestrator.handles["fix-auth"].sent == ["y"]

            await pilot.press("escape")
            await pilot.pause()
            assert orchestrator.focused_agent_id() is None
            assert app.is_running

    @pytest.mark.asyncio
    async def test_out_of_range_digit_is_ignored(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            await pilot.press("3")
            await pilot.pause()
            assert app.query_one("#task-input", Input).value == ""
            assert orchestrator.focused_agent_id() is None

    @pytest.mark.asyncio
    async def test_digit_is_typed_into_a_task(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            app.query_one("#task-input", Input).value = "fix auth"
            await pilot.press("enter")
            await app.workers.wait_for_complete()

            await pilot.press("f", "1")
            await pilot.pause()
            assert app.query_one("#task-input", Input).value == "f1"
            assert orchestrator.focused_agent_id() is None

    @pytest.mark.asyncio
    async def test_digit_while_focused_goes_to_the_agent(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            app.query_one("#task-input", Input).value = "fix auth"
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.press("1")
            await pilot.pause()
            assert orchestrator.focused_agent_id() == "fix-auth"

            await pilot.press("2")
            await pilot.pause()
            assert orchestrator.focused_agent_id() == "fix-auth"
            assert app.query_one("#task-input", Input).value == "2"

            await pilot.press("enter")
            await pilot.pause()
            assert orchestrator.handles["fix-auth"].sent == ["2"]

    @pytest.mark.asyncio
    async def test_escape_exits_and_shuts_down(self, orchestrator):
        app = OrchestratorApp(orchestrator)
        async with app.run_test() as pilot:
            app.query_one("#task-input", Input).value = "fix auth"
            await pilot.press("enter")
            await app.workers.wait_for_complete()
            await pilot.press("escape")
            await pilot.pause()

        assert orchestrator.handles["fix-auth"].kill_count == 1
        assert not orchestrator.is_running
