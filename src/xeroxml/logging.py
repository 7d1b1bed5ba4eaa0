"""Excel reports of invoice problems.

Each report is a single worksheet: a bold, frozen header taken from the
row type's ``columns`` followed by one row per record.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Iterable, Protocol, Sequence


class ReportRow(Protocol):
    """Record that knows its report header and cell values."""

    columns: ClassVar[Sequence[str]]

    def as_cells(self) -> Iterable[str]:
        """Return the cell values, in ``columns`` order."""


@dataclass(slots=True)
class ExcelLoggerConfig:
    """Where and under which header rows are written."""

    columns: Sequence[str]
    filename: str = "xero-invoices-report.xlsx"
    sheet_title: str = "Issues"


class ExcelLogger:
    """Write :class:`ReportRow` records to a new workbook."""

    def __init__(self, config: ExcelLoggerConfig) -> None:
        self.config = config

    @classmethod
    def for_rows(cls, row_type: type[ReportRow], destination: Path) -> "ExcelLogger":
        """Build a logger whose header is ``row_type.columns``."""

        return cls(ExcelLoggerConfig(columns=tuple(row_type.columns), filename=str(destination)))

    def write_rows(self, rows: Iterable[ReportRow]) -> Path:
        """Persist ``rows`` and return the workbook path.

        Columns are widened to fit their longest value.
        """

        from openpyxl import Workbook
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        destination = Path(self.config.filename)
        destination.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.config.sheet_title

        header = list(self.config.columns)
        widths = [len(name) for name in header]
        worksheet.append(header)
        for cell in worksheet[1]:
            cell.font = Font(bold=True)
        worksheet.freeze_panes = "A2"

        for row in rows:
            cells = [str(value) for value in row.as_cells()]
            for index, value in enumerate(cells[: len(widths)]):
                widths[index] = max(widths[index], len(value))
            worksheet.append(cells)

        for index, width in enumerate(widths, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = min(width + 2, 80)

        workbook.save(destination)
        return destination


__all__ = ["ReportRow", "ExcelLoggerConfig", "ExcelLogger"]
