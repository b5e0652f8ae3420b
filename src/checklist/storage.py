"""Storage layer for the checklist using a flat comma-separated text file.

The file holds one task per line (``name,YYYY-MM-DD,interval``). Every command
reads the whole file, transforms the records in memory, and writes the whole
file back in a single write call.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import IoFailure, RecordDecodeError
from .task import TaskRecord


logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


def parse_checklist(content: str) -> List[TaskRecord]:
    """Decode every non-empty line of ``content``.

    The first malformed line aborts the whole read; the raised error carries
    its 1-based line number.
    """
    records = []
    for line_number, line in enumerate(content.split(LINE_SEPARATOR), start=1):
        # only "\n" ends a record; other Unicode line boundaries may appear in names
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        try:
            records.append(TaskRecord.from_line(line))
        except RecordDecodeError as e:
            e.at_line(line_number)
            raise
    return records


def serialize_checklist(records: Iterable[TaskRecord]) -> str:
    """Join encoded records with newlines, without a trailing newline."""
    return LINE_SEPARATOR.join(record.to_line() for record in records)


@dataclass
class Checklist:
    """In-memory snapshot of the checklist file."""

    content: str = ""
    records: List[TaskRecord] = field(default_factory=list)

    @classmethod
    def from_text(cls, content: str) -> "Checklist":
        return cls(content=content, records=parse_checklist(content))

    def to_text(self) -> str:
        return serialize_checklist(self.records)

    @property
    def names(self) -> List[str]:
        return [record.name for record in self.records]

    def find(self, name: str) -> Optional[TaskRecord]:
        return ChecklistStore.find_by_name(self.records, name)

    def without(self, name: str) -> List[TaskRecord]:
        """Records remaining after dropping every record called ``name``."""
        return [record for record in self.records if record.name != name]

    def __len__(self) -> int:
        return len(self.records)


class ChecklistStore:
    """Whole-file read/rewrite access to one checklist file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read_text(self) -> str:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure(self.path, "read", e) from e

        logger.debug(f"Read {len(content)} characters from {self.path}")
        return content

    def write_text(self, content: str) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise IoFailure(self.path, "write", e) from e

        logger.debug(f"Wrote {len(content)} characters to {self.path}")

    def snapshot(self) -> Checklist:
        """Read and decode the file, keeping the raw content alongside."""
        return Checklist.from_text(self.read_text())

    def load(self) -> List[TaskRecord]:
        """Load all records from the file.

        Raises:
            IoFailure: If the file cannot be read.
            RecordDecodeError: On the first line that fails to decode.
        """
        return self.snapshot().records

    @staticmethod
    def find_by_name(
        records: Iterable[TaskRecord], name: str
    ) -> Optional[TaskRecord]:
        """Return the record whose name equals ``name``, if any."""
        for record in records:
            if record.name == name:
                return record
        return None

    def rewrite(self, records: Iterable[TaskRecord]) -> None:
        """Overwrite the file with ``records``, one per line."""
        self.write_text(serialize_checklist(records))

    def append_front(self, existing_content: str, record: TaskRecord) -> None:
        """Prepend ``record`` to ``existing_content`` and write the result."""
        self.write_text(record.to_line() + LINE_SEPARATOR + existing_content)

    def replace(self, checklist: Checklist, name: str, record: TaskRecord) -> None:
        """Drop every record called ``name`` and prepend ``record`` in one write."""
        remaining = serialize_checklist(checklist.without(name))
        self.append_front(remaining, record)
