"""Checklist - a recurring-task checklist kept in a flat text file."""

__version__ = "0.1.0"

from .errors import ChecklistError
from .task import TaskRecord
from .storage import Checklist, ChecklistStore
from .commands import CommandDispatcher, CommandResult

__all__ = [
    "ChecklistError",
    "TaskRecord",
    "Checklist",
    "ChecklistStore",
    "CommandDispatcher",
    "CommandResult",
    "__version__",
]
