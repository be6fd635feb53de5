"""Terminal UI for the orchestrator.

A single-screen Textual app: a task input at the top, a banner for errors
and clarification questions, and below it either the numbered agent list or
the output of the focused agent.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Input, Static

from ..logging import get_logger
from ..orchestrator import Orchestrator
from ..registry import StoreSnapshot
from .render import render_agent_list, render_focused_agent

logger = get_logger("ui")

APP_TITLE = "Agent Orchestrator"
HINT = "ESC to exit | Enter to submit task | 1-9 to focus an agent"
INPUT_PLACEHOLDER = "Enter task..."
PROCESSING_PLACEHOLDER = "Processing..."
FOCUSED_PLACEHOLDER = "Send input to agent..."
FOCUS_KEYS = "123456789"


class TaskInput(Input):
    """Task input that leaves the focus digits to the app while it is idle.

    ``Input`` claims every printable key, which would hide the app's digit
    bindings. A digit is passed through only when the box is empty and no
    agent is focused; otherwise it is typed as usual.
    """

    def check_consume_key(self, key: str, character: str | None) -> bool:
        if (
            character
            and character in FOCUS_KEYS
            and not self.value
            and self.app.orchestrator.focused_agent_id() is None
        ):
            return False
        return super().check_consume_key(key, character)


class OrchestratorApp(App):
    """Textual front end driving an :class:`Orchestrator`."""

    TITLE = APP_TITLE

    CSS = """
    #title {
        text-style: bold;
        color: cyan;
    }
    #hint {
        color: $text-muted;
        margin-bottom: 1;
    }
    #banner {
        display: none;
        margin-top: 1;
    }
    #banner.error {
        display: block;
        color: red;
    }
    #banner.clarification {
        display: block;
        color: yellow;
    }
    #agents {
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back / Exit", priority=True),
        *[
            Binding(n, f"focus_agent({n})", show=False, priority=True)
            for n in FOCUS_KEYS
        ],
    ]

    def __init__(self, orchestrator: Orchestrator, **kwargs):
        super().__init__(**kwargs)
        self.orchestrator = orchestrator

    def compose(self) -> ComposeResult:
        yield Static(APP_TITLE, id="title")
        yield Static(HINT, id="hint")
        yield TaskInput(placeholder=INPUT_PLACEHOLDER, id="task-input")
        yield Static("", id="banner")
        with VerticalScroll(id="agents"):
            yield Static("", id="agent-view")

    def on_mount(self) -> None:
        self.orchestrator.add_listener(self._on_snapshot)
        self.orchestrator.start()
        self.query_one("#task-input", Input).focus()
        self.refresh_view(self.orchestrator.snapshot())
        logger.info("ui mounted")

    async def on_unmount(self) -> None:
        await self.orchestrator.shutdown()

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------

    def _on_snapshot(self, snapshot: StoreSnapshot) -> None:
        # listeners run on the app's event loop, so widgets can be touched directly
        if self.is_running:
            self.refresh_view(snapshot)

    def refresh_view(self, snapshot: StoreSnapshot) -> None:
        view = self.query_one("#agent-view", Static)
        focused = snapshot.focused_agent
        if focused is not None:
            view.update(render_focused_agent(focused))
        else:
            view.update(render_agent_list(snapshot.ordered()))

        task_input = self.query_one("#task-input", Input)
        if self.orchestrator.is_processing:
            task_input.placeholder = PROCESSING_PLACEHOLDER
        elif focused is not None:
            task_input.placeholder = FOCUSED_PLACEHOLDER
        else:
            task_input.placeholder = INPUT_PLACEHOLDER

        self._update_banner()

    def _update_banner(self) -> None:
        banner = self.query_one("#banner", Static)
        banner.remove_class("error", "clarification")
        if self.orchestrator.error_message:
            banner.update(self.orchestrator.error_message)
            banner.add_class("error")
        elif self.orchestrator.clarification:
            banner.update(self.orchestrator.clarification)
            banner.add_class("clarification")
        else:
            banner.update("")

    # ------------------------------------------------------------------
    # input
    # ------------------------------------------------------------------

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value
        event.input.value = ""
        if not text.strip():
            return

        focused_id = self.orchestrator.focused_agent_id()
        if focused_id is not None:
            self.orchestrator.send_input(focused_id, text)
            return

        self.run_worker(self.orchestrator.submit(text), group="submit", exit_on_error=False)

    def action_focus_agent(self, number: int) -> None:
        # out of range is a no-op
        self.orchestrator.focus_by_number(number)

    async def action_back(self) -> None:
        if self.orchestrator.focused_agent_id() is not None:
            self.orchestrator.unfocus()
            return
        logger.info("exit requested")
        await self.orchestrator.shutdown()
        self.exit()
