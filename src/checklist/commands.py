"""Checklist commands and the dispatcher that maps names onto them.

Each command receives a :class:`CommandContext` holding the store for the
already-resolved checklist file, the raw positional arguments, and the current
calendar date. Commands either rewrite the file or, for ``list``, return a
table for the presenter; they never print.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from .errors import DuplicateTask, InvalidCommand, MissingArguments, TaskNotFound
from .presenter import ChecklistTable, build_table
from .storage import ChecklistStore
from .task import TaskRecord


logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """Everything a command needs for one invocation."""

    store: ChecklistStore
    args: List[str] = field(default_factory=list)
    today: date = field(default_factory=date.today)

    def require_args(self, command: str, count: int) -> None:
        if len(self.args) < count:
            raise MissingArguments(command, count, len(self.args))


@dataclass
class CommandResult:
    """Outcome of a successful command."""

    command: str
    changed: bool = False
    table: Optional[ChecklistTable] = None
    record: Optional[TaskRecord] = None


Command = Callable[[CommandContext], CommandResult]


def add(ctx: CommandContext) -> CommandResult:
    """add NAME DUE_DATE [INTERVAL|once]"""
    ctx.require_args("add", 2)
    name, due_date = ctx.args[0], ctx.args[1]
    interval = ctx.args[2] if len(ctx.args) > 2 else None

    checklist = ctx.store.snapshot()
    if checklist.find(name) is not None:
        raise DuplicateTask(name)

    record = TaskRecord.build(name, due_date, interval)
    ctx.store.append_front(checklist.content, record)
    logger.info(f"Added {record}")
    return CommandResult(command="add", changed=True, record=record)


def remove(ctx: CommandContext) -> CommandResult:
    """remove NAME"""
    ctx.require_args("remove", 1)
    name = ctx.args[0]

    checklist = ctx.store.snapshot()
    remaining = checklist.without(name)
    if len(remaining) == len(checklist):
        raise TaskNotFound(name)

    ctx.store.rewrite(remaining)
    logger.info(f"Removed task '{name}'")
    return CommandResult(command="remove", changed=True)


def list_tasks(ctx: CommandContext) -> CommandResult:
    """list"""
    records = ctx.store.load()
    table = build_table(records, ctx.today)
    logger.debug(
        f"Listing {len(records)} tasks, {len(table.overdue_rows)} overdue as of {ctx.today}"
    )
    return CommandResult(command="list", table=table)


def check(ctx: CommandContext) -> CommandResult:
    """check NAME

    One-off tasks are removed. Recurring tasks are rescheduled to ``interval``
    days after today, with the old line dropped and the new one prepended in a
    single write.
    """
    ctx.require_args("check", 1)
    name = ctx.args[0]

    checklist = ctx.store.snapshot()
    record = checklist.find(name)
    if record is None:
        raise TaskNotFound(name)

    if not record.is_recurring:
        ctx.store.rewrite(checklist.without(name))
        logger.info(f"Completed one-off task '{name}'")
        return CommandResult(command="check", changed=True)

    rescheduled = record.next_occurrence(ctx.today)
    ctx.store.replace(checklist, name, rescheduled)
    logger.info(f"Completed '{name}', next due {rescheduled.due_date.isoformat()}")
    return CommandResult(command="check", changed=True, record=rescheduled)


def uncheck(ctx: CommandContext) -> CommandResult:
    """uncheck NAME

    Accepted so the command surface stays stable; it does not modify the
    checklist yet.
    """
    ctx.require_args("uncheck", 1)
    logger.info(f"uncheck '{ctx.args[0]}' accepted; no change made")
    return CommandResult(command="uncheck")


COMMANDS: Dict[str, Command] = {
    "add": add,
    "remove": remove,
    "list": list_tasks,
    "check": check,
    "uncheck": uncheck,
}


def parse_command(name: str) -> Command:
    """Look up a command by name.

    Raises:
        InvalidCommand: If no command has that name.
    """
    try:
        return COMMANDS[name]
    except KeyError:
        raise InvalidCommand(name) from None


class CommandDispatcher:
    """Runs commands against one checklist file."""

    def __init__(
        self,
        store: Union[ChecklistStore, str, Path],
        clock: Callable[[], date] = date.today,
    ):
        if not isinstance(store, ChecklistStore):
            store = ChecklistStore(store)
        self.store = store
        self.clock = clock

    def dispatch(self, command: str, args: Sequence[str] = ()) -> CommandResult:
        """Run ``command`` with ``args``; any failure raises a ChecklistError."""
        handler = parse_command(command)
        ctx = CommandContext(store=self.store, args=list(args), today=self.clock())
        logger.debug(f"Dispatching '{command}' with {len(ctx.args)} args on {self.store.path}")
        return handler(ctx)

    def run(self, argv: Sequence[str]) -> CommandResult:
        """Run a flat argument list whose first element is the command name."""
        if not argv:
            raise MissingArguments("checklist", 1, 0)
        return self.dispatch(argv[0], argv[1:])
