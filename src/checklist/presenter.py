"""Table formatting and themed console output for ``checklist list``."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from .task import TaskRecord


HEADERS = ("task", "due until", "interval")

CHECKLIST_THEME = Theme({
    "header": "bold",
    "border": "dim",
    "todo_pending": "default",
    "todo_overdue": "bold red",
})


@dataclass
class TableRow:
    text: str
    overdue: bool = False


@dataclass
class ChecklistTable:
    """A rendered-to-text table plus which rows are overdue."""

    column_widths: List[int]
    header: str
    rule: str
    rows: List[TableRow] = field(default_factory=list)

    @property
    def overdue_rows(self) -> List[TableRow]:
        return [row for row in self.rows if row.overdue]

    def lines(self) -> List[str]:
        return [self.header, self.rule] + [row.text for row in self.rows]


def column_widths(records: Sequence[TaskRecord]) -> List[int]:
    """Width of each column: the longest of the header label and every value."""
    widths = [len(label) for label in HEADERS]
    for record in records:
        for i, value in enumerate(record.table_fields()):
            widths[i] = max(widths[i], len(value))
    return widths


def build_table(records: Sequence[TaskRecord], today: date) -> ChecklistTable:
    """Lay out ``records`` as an aligned table, flagging overdue entries."""
    widths = column_widths(records)
    header = " ".join(f"{label:<{width}}" for label, width in zip(HEADERS, widths))
    # two single-space gaps between the three columns
    rule = "-" * (sum(widths) + 2)

    rows = [
        TableRow(text=record.as_table_row(widths), overdue=record.is_overdue(today))
        for record in records
    ]
    return ChecklistTable(column_widths=widths, header=header, rule=rule, rows=rows)


def get_themed_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Console used for all checklist output."""
    return Console(
        theme=CHECKLIST_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        stderr=stderr,
    )


def render_table(table: ChecklistTable, console: Optional[Console] = None) -> None:
    """Print the table, emphasising overdue rows."""
    if console is None:
        console = get_themed_console()

    console.print(Text(table.header, style="header"))
    console.print(Text(table.rule, style="border"))
    for row in table.rows:
        style = "todo_overdue" if row.overdue else "todo_pending"
        console.print(Text(row.text, style=style))
