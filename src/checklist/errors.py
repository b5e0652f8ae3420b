"""Exception types raised by the checklist core.

Every failure a command can hit is a subclass of :class:`ChecklistError`, so
the command-line layer only needs a single ``except`` to turn them into an
error message and a non-zero exit status.
"""

from typing import Optional


class ChecklistError(Exception):
    """Base class for all checklist failures."""


class MissingArguments(ChecklistError):
    """Raised when a command receives fewer positional arguments than it needs."""

    def __init__(self, command: str, required: int, given: int):
        self.command = command
        self.required = required
        self.given = given
        super().__init__(
            f"not enough parameters for '{command}': expected at least {required}, got {given}"
        )


class InvalidCommand(ChecklistError):
    """Raised for a command name the dispatcher does not know."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"invalid command: '{command}'")


class DuplicateTask(ChecklistError):
    """Raised when adding a task whose name is already on the checklist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"entry with name \"{name}\" already exists")


class TaskNotFound(ChecklistError):
    """Raised when a named task is not on the checklist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"cannot find task named \"{name}\"")


class InvalidTaskName(ChecklistError):
    """Raised when a task name cannot be stored in the line format."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"invalid task name {name!r}: {reason}")


class RecordDecodeError(ChecklistError):
    """Base class for failures decoding one stored line."""

    def __init__(self, message: str, value: str):
        self.value = value
        self.line_number: Optional[int] = None
        self._message = message
        super().__init__(message)

    def at_line(self, line_number: int) -> "RecordDecodeError":
        """Attach the 1-based line number the failure was found on."""
        self.line_number = line_number
        self.args = (f"line {line_number}: {self._message}",)
        return self


class MalformedRecord(RecordDecodeError):
    """Raised when a line does not split into exactly three fields."""

    def __init__(self, line: str, field_count: int):
        self.field_count = field_count
        super().__init__(
            f"incorrect number of fields in {line!r}: expected 3, got {field_count}",
            line,
        )


class InvalidDate(RecordDecodeError):
    """Raised when a due date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: str):
        super().__init__(f"invalid due date {value!r}, expected YYYY-MM-DD", value)


class InvalidInterval(RecordDecodeError):
    """Raised when an interval is not a non-negative whole number of days."""

    def __init__(self, value: str):
        super().__init__(
            f"invalid interval {value!r}, expected a non-negative number of days or 'once'",
            value,
        )


class DateOverflowError(ChecklistError):
    """Raised when rescheduling would leave the representable date range."""

    def __init__(self, start, days: int):
        self.start = start
        self.days = days
        super().__init__(f"could not calculate new due date: {start} + {days} days")


class IoFailure(ChecklistError):
    """Raised when the checklist file cannot be read or written."""

    def __init__(self, path, action: str, cause: Exception):
        self.path = path
        self.action = action
        self.cause = cause
        super().__init__(f"could not {action} checklist file {path}: {cause}")
