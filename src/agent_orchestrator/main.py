"""Main entry point for the agent orchestrator CLI.

Resolves configuration, checks credentials, wires the orchestrator together
and hands the terminal to the Textual UI.
"""

import argparse
import os
import sys

import yaml
from dotenv import find_dotenv, load_dotenv

from .adapters import get_available_kinds
from .clients import AnthropicClient
from .config import LOG_LEVELS, Settings, get_settings
from .exceptions import ConfigurationError
from .input_classifier import InputClassifier
from .logging import get_logger, setup_logging
from .naming import NameGenerator
from .orchestrator import Orchestrator
from .registry import AgentRegistry
from .status_classifier import StatusClassifier
from .types import AgentKind


def load_yaml_config(path: str = "config.yaml") -> dict:
    """Load configuration from config.yaml if it exists."""
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def positive_float(value: str) -> float:
    """argparse type for strictly positive numbers."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value}")
    return number


def resolve_options(args: argparse.Namespace, yaml_config: dict, settings: Settings) -> dict:
    """Determine the effective runtime options.

    Priority order:
    1. CLI arguments
    2. Config file (config.yaml, ``orchestrator`` section)
    3. Environment variables (via pydantic settings)

    Raises:
        ConfigurationError: If the refresh interval is not a positive number.
    """
    section = yaml_config.get("orchestrator") or {}

    # 0 is a value, not a missing option
    refresh_interval = args.refresh_interval
    if refresh_interval is None:
        refresh_interval = section.get("refresh_interval")
    if refresh_interval is None:
        refresh_interval = settings.refresh_interval
    try:
        refresh_interval = float(refresh_interval)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"refresh_interval must be a number, got {refresh_interval!r}") from e
    if not refresh_interval > 0:
        raise ConfigurationError(f"refresh_interval must be greater than 0, got {refresh_interval}")

    # priority: cli > yaml > env
    return {
        "model": args.model or section.get("model") or settings.model,
        "refresh_interval": refresh_interval,
        "agent_kind": args.agent_kind or section.get("agent_kind") or settings.agent_kind,
        "log_level": args.log_level or settings.log_level,
        "log_file": args.log_file or settings.log_file,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Agent Orchestrator")
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        help="Log level (also settable via LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--log-file",
        help="Path of the debug log (also settable via ORCHESTRATOR_LOG_FILE)"
    )
    parser.add_argument(
        "--agent-kind",
        choices=get_available_kinds(),
        help="Kind of agent to spawn for new tasks (default: claude-code)"
    )
    parser.add_argument(
        "--refresh-interval",
        type=positive_float,
        help="Seconds between status refreshes (default: 3)"
    )
    parser.add_argument(
        "--model",
        help="Model used to classify input and agent status"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the agent orchestrator CLI."""
    args = build_parser().parse_args(argv)

    # spawned agents inherit the process environment, .env included
    load_dotenv(find_dotenv(usecwd=True))
    settings = get_settings()

    try:
        api_key = settings.require_api_key()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a .env file with: ANTHROPIC_API_KEY=your-key-here", file=sys.stderr)
        sys.exit(1)

    try:
        options = resolve_options(args, load_yaml_config(), settings)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        agent_kind = AgentKind(options["agent_kind"])
    except ValueError:
        print(f"Error: Unknown agent type: {options['agent_kind']}", file=sys.stderr)
        sys.exit(1)

    setup_logging(options["log_level"], options["log_file"])
    logger = get_logger("startup")
    logger.info(
        "orchestrator starting",
        logLevel=options["log_level"],
        logFile=options["log_file"],
        cwd=os.getcwd(),
        model=options["model"],
        agentKind=options["agent_kind"],
    )

    client = AnthropicClient(api_key=api_key, model=options["model"])
    orchestrator = Orchestrator(
        registry=AgentRegistry(),
        input_classifier=InputClassifier(client),
        status_classifier=StatusClassifier(client),
        name_generator=NameGenerator(),
        agent_kind=agent_kind,
        working_directory=os.getcwd(),
        refresh_interval=options["refresh_interval"],
    )

    # imported late so that --help works without touching the terminal
    from .ui import OrchestratorApp

    OrchestratorApp(orchestrator).run()
    logger.info("orchestrator stopped")


if __name__ == "__main__":
    main()
