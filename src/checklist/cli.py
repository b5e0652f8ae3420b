"""Command-line interface for the checklist."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .commands import CommandDispatcher, CommandResult
from .config import ensure_checklist_file, load_config, resolve_checklist_path
from .errors import ChecklistError, InvalidCommand
from .presenter import get_themed_console, render_table


PACKAGE_LOGGER = "checklist"

# task names such as "-5k" reach the command as arguments instead of options
POSITIONAL_ONLY = {"ignore_unknown_options": True}


def setup_logging(verbose: bool = False) -> None:
    """Send package logs to stderr through rich; DEBUG when verbose."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


@dataclass
class CliState:
    dispatcher: CommandDispatcher
    console: Console


class ChecklistGroup(click.Group):
    """Click group that reports unknown commands as InvalidCommand."""

    def resolve_command(self, ctx, args):
        name = click.utils.make_str(args[0])
        if name not in self.commands:
            raise click.ClickException(str(InvalidCommand(name)))
        return super().resolve_command(ctx, args)


def run_command(state: CliState, command: str, args: Sequence[str]) -> CommandResult:
    """Dispatch one command, turning checklist errors into click errors."""
    try:
        result = state.dispatcher.dispatch(command, args)
    except ChecklistError as e:
        raise click.ClickException(str(e)) from e

    if result.table is not None:
        render_table(result.table, state.console)
    return result


@click.group(cls=ChecklistGroup, invoke_without_command=True)
@click.option("--config", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config file")
@click.option("--file", "-f", "checklist_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Checklist file (overrides CHECKLIST_FILE and the config)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="checklist")
@click.pass_context
def main(ctx, config: Optional[Path], checklist_file: Optional[Path], verbose: bool):
    """Checklist - recurring tasks in a plain text file."""
    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        raise click.UsageError("no command given", ctx=ctx)

    settings = load_config(config)
    path = resolve_checklist_path(settings, checklist_file)
    try:
        ensure_checklist_file(path)
    except ChecklistError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj = CliState(
        dispatcher=CommandDispatcher(path),
        console=get_themed_console(no_color=settings.no_color),
    )


@main.command(context_settings=POSITIONAL_ONLY)
@click.argument("args", nargs=-1)
@click.pass_obj
def add(state: CliState, args):
    """Add a task: NAME DUE_DATE [INTERVAL|once].

    DUE_DATE is YYYY-MM-DD, INTERVAL a number of days.
    """
    run_command(state, "add", args)


@main.command(context_settings=POSITIONAL_ONLY)
@click.argument("args", nargs=-1)
@click.pass_obj
def remove(state: CliState, args):
    """Remove the task called NAME."""
    run_command(state, "remove", args)


@main.command("list", context_settings=POSITIONAL_ONLY)
@click.argument("args", nargs=-1)
@click.pass_obj
def list_tasks(state: CliState, args):
    """Show all tasks; overdue ones are highlighted. Extra arguments are ignored."""
    run_command(state, "list", ())


@main.command(context_settings=POSITIONAL_ONLY)
@click.argument("args", nargs=-1)
@click.pass_obj
def check(state: CliState, args):
    """Complete task NAME, rescheduling it if it recurs."""
    run_command(state, "check", args)


@main.command(context_settings=POSITIONAL_ONLY)
@click.argument("args", nargs=-1)
@click.pass_obj
def uncheck(state: CliState, args):
    """Accepted for NAME; currently makes no change."""
    run_command(state, "uncheck", args)


if __name__ == "__main__":
    main()
