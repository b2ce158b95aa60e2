"""
Abstract 2-D sheet store.

Sheets are addressed with 1-based ``(row, column)`` coordinates. Row 1 is
the header row; the first value column is column 2. Concrete stores only
implement the primitives (``last_row``, ``last_column``, ``get_values``,
``set_value``); header and append helpers are built on top of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from bitrise_report.domain.header import FIRST_VALUE_COLUMN

HEADER_ROW = 1


def is_blank(value: Any) -> bool:
    return value is None or value == ""


class Sheet(ABC):
    """A named, append-only grid of cells."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def last_row(self) -> int:
        """Index of the last row holding any value, 0 when empty."""

    @abstractmethod
    def last_column(self) -> int:
        """Index of the last column holding any value in any row, 0 when empty."""

    @abstractmethod
    def get_values(
        self, row: int, column: int, num_rows: int, num_columns: int
    ) -> List[List[Any]]:
        """Return a ``num_rows`` x ``num_columns`` block; empty cells are ``""``."""

    @abstractmethod
    def set_value(self, row: int, column: int, value: Any) -> None:
        """Write a single cell."""

    def get_value(self, row: int, column: int) -> Any:
        return self.get_values(row, column, 1, 1)[0][0]

    def get_header(self) -> List[str]:
        """Header names from column 2 to the last used column, trailing blanks trimmed."""
        width = self.last_column() - (FIRST_VALUE_COLUMN - 1)
        if width <= 0:
            return []
        cells = self.get_values(HEADER_ROW, FIRST_VALUE_COLUMN, 1, width)[0]
        header = ["" if is_blank(cell) else str(cell) for cell in cells]
        while header and not header[-1]:
            header.pop()
        return header

    def append_column(self, name: str, column: Optional[int] = None) -> int:
        """Write ``name`` right after the last header name and return its column.

        Callers that already track the header pass ``column`` to skip re-reading it.
        """
        if column is None:
            column = FIRST_VALUE_COLUMN + len(self.get_header())
        self.set_value(HEADER_ROW, column, name)
        return column

    def append_row(self, values: Sequence[Any]) -> int:
        """Write ``values`` (column 1 first) at ``last_row + 1``; ``None`` cells are left empty."""
        row = self.last_row() + 1
        for offset, value in enumerate(values):
            if value is None:
                continue
            self.set_value(row, offset + 1, value)
        return row

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class SheetStore(ABC):
    """A collection of sheets addressed by name."""

    @abstractmethod
    def get(self, name: str) -> Optional[Sheet]:
        """Return the sheet called ``name`` or ``None``."""

    @abstractmethod
    def create(self, name: str) -> Sheet:
        """Create an empty sheet called ``name``."""

    def find_or_create(self, name: str) -> Sheet:
        sheet = self.get(name)
        if sheet is None:
            sheet = self.create(name)
        return sheet
