"""
Keep report sheets in sync with the names produced by a run.

Each sheet grows in two directions only: new names are appended to the
right of the header row, and each run appends one labelled row at the
bottom. Nothing already written is moved or rewritten.

Header growth is not safe against concurrent runs on the same sheet; only
one run is expected to be active at a time.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from bitrise_report.domain.header import ColumnIndex, grow_header
from bitrise_report.infra.sheets.base import HEADER_ROW, Sheet, SheetStore, is_blank

logger = logging.getLogger(__name__)

DEFAULT_HEADER_LABEL = "date"


def find_or_create_table(store: SheetStore, name: str) -> Sheet:
    return store.find_or_create(name)


class TableSynchronizer:
    def __init__(self, header_label: str = DEFAULT_HEADER_LABEL) -> None:
        self.header_label = header_label

    def ensure_columns(self, sheet: Sheet, keys: Sequence[str]) -> List[str]:
        """Add missing ``keys`` to the header and return the full header (columns 2..N)."""
        current = sheet.get_header()
        updated = grow_header(current, keys)
        index = ColumnIndex(current)

        if self.header_label and is_blank(sheet.get_value(HEADER_ROW, 1)):
            sheet.set_value(HEADER_ROW, 1, self.header_label)

        for name in updated[len(current):]:
            column = sheet.append_column(name, column=index.add(name))
            logger.info(f"Added column {name!r} to sheet {sheet.name!r} at column {column}")
        return updated

    def append_row(
        self,
        sheet: Sheet,
        date_label: str,
        values_by_key: Mapping[str, Any],
        header: Sequence[str],
    ) -> int:
        """Append ``date_label`` and one value per known key at ``last_row + 1``."""
        index = ColumnIndex(header)
        cells: List[Any] = [date_label] + [None] * len(index)
        for key, value in values_by_key.items():
            column = index.column_of(key)
            if column is None:
                logger.debug(f"Skipping {key!r}: not in header of sheet {sheet.name!r}")
                continue
            cells[column - 1] = value
        row = sheet.append_row(cells)
        logger.info(f"Wrote row {row} ({date_label}) to sheet {sheet.name!r}")
        return row

    def sync(self, sheet: Sheet, date_label: str, values_by_key: Mapping[str, Any]) -> int:
        header = self.ensure_columns(sheet, list(values_by_key))
        return self.append_row(sheet, date_label, values_by_key, header)
