"""CLI commands for the cmdcenter estimating command line.

Provides subcommands for parsing commands and managing the open project.

Commands:
    cmdcenter parse TEXT     - Show the actions a command would propose
    cmdcenter capabilities   - List every command the parser understands
    cmdcenter open ID        - Set the open project for later commands
    cmdcenter close          - Clear the open project
    cmdcenter shell          - Interactive command prompt
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import AppConfig
from .core.commands import (
    PARSER_VERSION,
    ActionType,
    CommandContext,
    CommandParser,
    ParseResult,
    format_action_preview,
)

logger = logging.getLogger(__name__)

console = Console()

EXIT_WORDS = {"quit", "exit", "q"}


def load_config(args: argparse.Namespace) -> AppConfig:
    """Load configuration for the project directory given on the command line."""
    return AppConfig.load(Path(args.project_path).resolve())


def resolve_context(args: argparse.Namespace, config: AppConfig) -> CommandContext:
    """Build the parser context, letting command-line flags override the config.

    Args:
        args: Parsed arguments (project_id, project_type)
        config: Loaded configuration

    Returns:
        CommandContext for this invocation
    """
    project_id = getattr(args, "project_id", None) or config.project_id
    project_type = getattr(args, "project_type", None) or config.project_type
    return CommandContext(project_id=project_id, project_type=project_type)


def print_capabilities(parser: CommandParser, as_json: bool = False) -> None:
    """Print every rule with its example commands."""
    caps = parser.capabilities()

    if as_json:
        console.print_json(data=caps)
        return

    table = Table(title=f"Available Commands (v{PARSER_VERSION})")
    table.add_column("Command", style="cyan")
    table.add_column("Examples")

    for rule in caps["rules"]:
        table.add_row(rule["name"], "\n".join(f"• {e}" for e in rule["examples"]))

    console.print(table)


def print_result(result: ParseResult, as_json: bool = False) -> None:
    """Render a ParseResult: proposed actions, a question, or suggestions."""
    if as_json:
        console.print_json(data=result.to_dict())
        return

    if result.missing_info:
        console.print(f"[yellow]?[/yellow] {result.missing_info}")
        return

    if not result.success:
        console.print(f"[red]✗[/red] {result.error or 'Nothing to do.'}")
        for suggestion in result.suggestions or []:
            console.print(f'  • {suggestion.label}: [cyan]"{suggestion.command}"[/cyan]')
        return

    table = Table(title="Proposed Actions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Action", style="cyan")
    table.add_column("Preview")
    table.add_column("Confidence", justify="right")

    for i, action in enumerate(result.actions, start=1):
        table.add_row(str(i), action.type, format_action_preview(action), f"{action.confidence:.2f}")

    console.print(table)


def parse_text(args: argparse.Namespace) -> int:
    """Parse a command and show what it would do.

    Args:
        args: Parsed arguments (text, project_id, project_type, json)

    Returns:
        Exit code (0 if actions were proposed, 1 otherwise)
    """
    config = load_config(args)
    parser = CommandParser(max_input_length=config.max_input_length)
    context = resolve_context(args, config)
    as_json = args.json or config.output_format == "json"

    result = parser.parse(" ".join(args.text), context)
    print_result(result, as_json=as_json)

    return 0 if result.success else 1


def show_capabilities(args: argparse.Namespace) -> int:
    """List the commands the parser understands.

    Args:
        args: Parsed arguments (json)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)
    print_capabilities(CommandParser(), as_json=args.json or config.output_format == "json")
    return 0


def open_project(args: argparse.Namespace) -> int:
    """Record the open project so later commands run in its context.

    Args:
        args: Parsed arguments (project_id, type)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)
    config.project_id = args.project_id
    config.project_type = args.type
    config.save()

    detail = f" ({args.type})" if args.type else ""
    console.print(f"[green]✓[/green] Opened project {args.project_id}{detail}")
    return 0


def close_project(args: argparse.Namespace) -> int:
    """Clear the open project.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)
    if not config.has_open_project():
        console.print("[dim]No project is open.[/dim]")
        return 0

    closed = config.project_id
    config.project_id = None
    config.project_type = None
    config.save()

    console.print(f"[green]✓[/green] Closed project {closed}")
    return 0


def run_shell(args: argparse.Namespace) -> int:
    """Interactive prompt: parse each line and show the proposed actions.

    Args:
        args: Parsed arguments (project_id, project_type)

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args)
    parser = CommandParser(max_input_length=config.max_input_length)
    context = resolve_context(args, config)

    opened = f"project {context.project_id}" if context.project_id else "no project open"
    console.print(f"[bold]cmdcenter[/bold] v{PARSER_VERSION} ({opened}). Type 'quit' to leave.")

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break

        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break

        result = parser.parse(line, context)
        logger.info(f"Parsed {line!r}: success={result.success} actions={result.action_types()}")

        if result.success and result.action_types() == [ActionType.SYSTEM_CAPABILITIES.value]:
            print_capabilities(parser)
            continue

        print_result(result)

    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="cmdcenter",
        description="cmdcenter: plain-English commands for construction estimates",
    )
    parser.add_argument(
        "--project",
        "-p",
        dest="project_path",
        default=".",
        help="Directory holding .cmdcenter/config.yaml (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_context_args(p: argparse.ArgumentParser) -> None:
        """Add the open-project overrides to a subcommand."""
        p.add_argument(
            "--project-id",
            "-i",
            help="Open project ID (overrides the saved context)",
        )
        p.add_argument(
            "--project-type",
            "-t",
            help="Open project type, e.g. basement_finish",
        )

    # =========================================================================
    # parse command
    # =========================================================================
    parse_parser = subparsers.add_parser("parse", help="Show the actions a command proposes")
    parse_parser.add_argument(
        "text",
        nargs="+",
        help='Command text, e.g. "Add drywall 1050 sf at $12.99"',
    )
    add_context_args(parse_parser)
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parse_parser.set_defaults(func=parse_text)

    # =========================================================================
    # capabilities command
    # =========================================================================
    caps_parser = subparsers.add_parser("capabilities", help="List available commands")
    caps_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the capabilities as JSON",
    )
    caps_parser.set_defaults(func=show_capabilities)

    # =========================================================================
    # open / close commands
    # =========================================================================
    open_parser = subparsers.add_parser("open", help="Set the open project")
    open_parser.add_argument("project_id", help="Project ID")
    open_parser.add_argument(
        "--type",
        help="Project type, e.g. basement_finish, deck, kitchen_remodel",
    )
    open_parser.set_defaults(func=open_project)

    close_parser = subparsers.add_parser("close", help="Clear the open project")
    close_parser.set_defaults(func=close_project)

    # =========================================================================
    # shell command
    # =========================================================================
    shell_parser = subparsers.add_parser("shell", help="Interactive command prompt")
    add_context_args(shell_parser)
    shell_parser.set_defaults(func=run_shell)

    return parser


def run_cli(args: list[str] | None = None) -> int | None:
    """Run the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code, or None when no subcommand was given
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if hasattr(parsed, "func"):
        try:
            return parsed.func(parsed)
        except KeyboardInterrupt:
            console.print("\n[dim]Cancelled.[/dim]")
            return 130
        except Exception as e:
            logger.exception("Command failed")
            console.print(f"[red]Error:[/red] {e}")
            return 1

    # No subcommand = interactive shell
    return None


__all__ = [
    "create_parser",
    "run_cli",
    "parse_text",
    "show_capabilities",
    "open_project",
    "close_project",
    "run_shell",
    "print_result",
    "print_capabilities",
]
