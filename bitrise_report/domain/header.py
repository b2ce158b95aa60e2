"""
Header bookkeeping for report sheets.

Row 1 of a sheet holds a fixed label in column 1 and one name per value
column from column 2 onwards. Names are only ever appended at the right
edge, so a name keeps its column for the lifetime of the sheet.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence

# Sheet column holding the first header name (column 1 is the date label)
FIRST_VALUE_COLUMN = 2


def grow_header(current: Sequence[str], keys: Iterable[str]) -> List[str]:
    """Return ``current`` followed by every key it does not contain yet.

    Keys keep their input order; repeated keys are added once and blank keys
    are ignored. Existing entries are never moved, so applying the same keys twice
    is a no-op.
    """
    header = list(current)
    seen = {name for name in header if name}
    for key in keys:
        if not key or key in seen:
            continue
        header.append(key)
        seen.add(key)
    return header


class ColumnIndex:
    """Ordered header cells with a name -> sheet column lookup.

    Every header cell keeps its position, so later names map to the right
    column even after a blank or repeated cell. Blank cells cannot be looked
    up; a repeated name resolves to its first column.
    """

    def __init__(self, header: Iterable[str] = ()) -> None:
        self._keys: List[str] = []
        self._columns: Dict[str, int] = {}
        for name in header:
            column = self.next_column
            self._keys.append(name)
            if name:
                self._columns.setdefault(name, column)

    def add(self, key: str) -> int:
        existing = self._columns.get(key) if key else None
        if existing is not None:
            return existing
        column = self.next_column
        self._keys.append(key)
        if key:
            self._columns[key] = column
        return column

    def column_of(self, key: str) -> Optional[int]:
        return self._columns.get(key)

    @property
    def next_column(self) -> int:
        return FIRST_VALUE_COLUMN + len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"ColumnIndex({self._keys!r})"
