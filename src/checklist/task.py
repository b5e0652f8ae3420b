"""Task record model for the checklist application."""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from .errors import (
    DateOverflowError,
    InvalidDate,
    InvalidInterval,
    InvalidTaskName,
    MalformedRecord,
)


FIELD_SEPARATOR = ","
DATE_FORMAT = "%Y-%m-%d"
ONE_OFF_LABEL = "once"
# Largest interval accepted on disk (unsigned 32-bit day count)
MAX_INTERVAL = 2**32 - 1

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
INTERVAL_RE = re.compile(r"[0-9]+")


def parse_due_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises:
        InvalidDate: If the text is not zero-padded ISO or not a real date.
    """
    if not DATE_RE.fullmatch(value):
        raise InvalidDate(value)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDate(value) from None


def parse_interval(value: str) -> int:
    """Parse a decimal day count.

    Raises:
        InvalidInterval: If the text is not a non-negative integer literal.
    """
    if not INTERVAL_RE.fullmatch(value):
        raise InvalidInterval(value)
    interval = int(value)
    if interval > MAX_INTERVAL:
        raise InvalidInterval(value)
    return interval


def validate_name(name: str) -> str:
    """Return ``name`` unchanged if it can be stored as the first field of a line."""
    if not name:
        raise InvalidTaskName(name, "task name must not be empty")
    if FIELD_SEPARATOR in name:
        raise InvalidTaskName(name, "task name must not contain commas")
    if "\n" in name or "\r" in name:
        raise InvalidTaskName(name, "task name must not contain line breaks")
    return name


@dataclass
class TaskRecord:
    """One named, datable, optionally recurring checklist entry."""

    name: str
    due_date: date
    interval: int = 0  # days; 0 means one-off

    @property
    def is_recurring(self) -> bool:
        return self.interval > 0

    @property
    def interval_label(self) -> str:
        """Interval as shown in the table: ``once`` or the day count."""
        return ONE_OFF_LABEL if self.interval == 0 else str(self.interval)

    def is_overdue(self, today: date) -> bool:
        """A task is overdue when its due date is strictly before ``today``."""
        return self.due_date < today

    def next_occurrence(self, today: date) -> "TaskRecord":
        """Return the rescheduled record, due ``interval`` days after ``today``.

        Raises:
            DateOverflowError: If the new due date is out of range.
        """
        try:
            new_due_date = today + timedelta(days=self.interval)
        except OverflowError:
            raise DateOverflowError(today, self.interval) from None
        return TaskRecord(name=self.name, due_date=new_due_date, interval=self.interval)

    def to_line(self) -> str:
        """Encode the record as one line of the checklist file."""
        return FIELD_SEPARATOR.join(
            [self.name, self.due_date.isoformat(), str(self.interval)]
        )

    @classmethod
    def from_line(cls, line: str) -> "TaskRecord":
        """Decode one line of the checklist file.

        Raises:
            MalformedRecord: If the line does not have exactly three fields.
            InvalidDate: If the second field is not a ``YYYY-MM-DD`` date.
            InvalidInterval: If the third field is not a non-negative integer.
        """
        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != 3:
            raise MalformedRecord(line, len(fields))

        name, due_text, interval_text = fields
        return cls(
            name=name,
            due_date=parse_due_date(due_text),
            interval=parse_interval(interval_text),
        )

    @classmethod
    def build(
        cls, name: str, due_date: str, interval: Optional[str] = None
    ) -> "TaskRecord":
        """Create a record from command-line text.

        A missing interval and the literal ``once`` both mean a one-off task.
        """
        validate_name(name)
        if interval is None or interval == ONE_OFF_LABEL:
            interval = "0"
        return cls(
            name=name,
            due_date=parse_due_date(due_date),
            interval=parse_interval(interval),
        )

    def table_fields(self) -> Sequence[str]:
        return (self.name, self.due_date.isoformat(), self.interval_label)

    def as_table_row(self, column_widths: Sequence[int]) -> str:
        """Render the record as a left-aligned, padded table row."""
        return " ".join(
            f"{value:<{width}}"
            for value, width in zip(self.table_fields(), column_widths)
        )

    def __str__(self) -> str:
        return (
            f"Task name: {self.name}, Due until: {self.due_date.isoformat()}, "
            f"Interval: {self.interval} days"
        )


def encode(record: TaskRecord) -> str:
    return record.to_line()


def decode(line: str) -> TaskRecord:
    return TaskRecord.from_line(line)


def format_row(record: TaskRecord, column_widths: Sequence[int]) -> str:
    return record.as_table_row(column_widths)
