"""Process-local sheet store, used for dry runs and tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .base import Sheet, SheetStore


class InMemorySheet(Sheet):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.cells: Dict[Tuple[int, int], Any] = {}

    def last_row(self) -> int:
        return max((row for row, _ in self.cells), default=0)

    def last_column(self) -> int:
        return max((column for _, column in self.cells), default=0)

    def get_values(
        self, row: int, column: int, num_rows: int, num_columns: int
    ) -> List[List[Any]]:
        return [
            [self.cells.get((r, c), "") for c in range(column, column + num_columns)]
            for r in range(row, row + num_rows)
        ]

    def set_value(self, row: int, column: int, value: Any) -> None:
        if row < 1 or column < 1:
            raise ValueError(f"Cell ({row}, {column}) is out of range")
        self.cells[(row, column)] = value

    def rows(self) -> List[List[Any]]:
        """Whole sheet as a list of rows, padded to the last used column."""
        return self.get_values(1, 1, self.last_row(), self.last_column())


class InMemorySheetStore(SheetStore):
    def __init__(self) -> None:
        self.sheets: Dict[str, InMemorySheet] = {}

    def get(self, name: str) -> Optional[Sheet]:
        return self.sheets.get(name)

    def create(self, name: str) -> Sheet:
        sheet = InMemorySheet(name)
        self.sheets[name] = sheet
        return sheet
