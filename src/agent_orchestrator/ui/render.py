"""Formatting helpers shared by the agent list and the focused view."""

from rich.markup import escape

from ..registry import Agent
from ..types import AgentState, AgentStatus

MAX_SUMMARY_LENGTH = 60
FOCUSED_TAIL_LINES = 30
STARTING_SUMMARY = "Starting..."

STATE_COLORS = {
    AgentState.STARTING: "yellow",
    AgentState.WORKING: "green",
    AgentState.NEEDS_INPUT: "red",
    AgentState.DONE: "blue",
    AgentState.ERROR: "grey50",
}

NEEDS_INPUT_INDICATOR = "⚠"
DEFAULT_INDICATOR = "●"


def truncate_text(text: str, max_length: int = MAX_SUMMARY_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def display_summary(status: AgentStatus) -> str:
    """One-line description of what an agent is doing.

    Prefers the last non-empty line of the agent's recent output, then the
    classifier summary, then a placeholder.
    """
    lines = [line.strip() for line in status.last_output.split("\n")]
    lines = [line for line in lines if line]
    if lines:
        return truncate_text(lines[-1])
    if status.summary.strip():
        return truncate_text(status.summary)
    return STARTING_SUMMARY


def state_color(state: AgentState) -> str:
    return STATE_COLORS.get(state, "white")


def status_indicator(state: AgentState) -> str:
    return NEEDS_INPUT_INDICATOR if state == AgentState.NEEDS_INPUT else DEFAULT_INDICATOR


def tail_lines(output: str, count: int = FOCUSED_TAIL_LINES) -> list[str]:
    """Return the last ``count`` lines of ``output``."""
    if not output:
        return []
    return output.split("\n")[-count:]


def render_agent_list(agents: list[Agent]) -> str:
    """Rich markup for the numbered agent list."""
    if not agents:
        return "[dim]No agents running[/dim]"

    rows = []
    for number, agent in enumerate(agents, start=1):
        state = agent.status.state
        color = state_color(state)
        rows.append(
            f"[{color}]{status_indicator(state)}[/{color}] "
            f"[bold]{number}. {escape(agent.id)}[/bold] "
            f"[{color}]({state.value})[/{color}]"
        )
        rows.append(f"   [dim]{escape(display_summary(agent.status))}[/dim]")
    return "\n".join(rows)


def render_focused_agent(agent: Agent) -> str:
    """Rich markup for the detail view of a single agent."""
    header = (
        f"[bold cyan]{escape(agent.id)}[/bold cyan] - [yellow]{agent.status.state.value}[/yellow]\n"
        "[dim]Press ESC to go back[/dim]\n"
    )
    body = "\n".join(escape(line) for line in tail_lines(agent.output_buffer))
    return header + "\n" + body
