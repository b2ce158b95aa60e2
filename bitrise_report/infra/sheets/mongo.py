"""MongoDB-backed sheet store.

One document per sheet lives in the sheets collection; every non-empty cell
is its own document ``{sheet, row, column, value}`` in the cells collection,
unique on ``(sheet, row, column)``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Set

from pydantic import BaseModel, Field
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from .base import Sheet, SheetStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SheetRecord(BaseModel):
    name: str
    created_at: datetime = Field(default_factory=_now)

    def to_mongo(self, exclude: Optional[Set[str]] = None) -> Dict[str, Any]:
        return self.model_dump(exclude=exclude, exclude_none=True)


class CellRecord(BaseModel):
    sheet: str
    row: int
    column: int
    value: Any = None
    updated_at: datetime = Field(default_factory=_now)

    def to_mongo(self) -> Dict[str, Any]:
        return self.model_dump()


class MongoSheet(Sheet):
    def __init__(self, name: str, cells: Collection) -> None:
        super().__init__(name)
        self.cells = cells

    def _max(self, field: str) -> int:
        doc = self.cells.find_one(
            {"sheet": self.name}, projection={field: 1}, sort=[(field, DESCENDING)]
        )
        return int(doc[field]) if doc else 0

    def last_row(self) -> int:
        return self._max("row")

    def last_column(self) -> int:
        return self._max("column")

    def get_values(
        self, row: int, column: int, num_rows: int, num_columns: int
    ) -> List[List[Any]]:
        grid: List[List[Any]] = [["" for _ in range(num_columns)] for _ in range(num_rows)]
        cursor = self.cells.find(
            {
                "sheet": self.name,
                "row": {"$gte": row, "$lt": row + num_rows},
                "column": {"$gte": column, "$lt": column + num_columns},
            },
            projection={"row": 1, "column": 1, "value": 1},
        )
        for doc in cursor:
            grid[doc["row"] - row][doc["column"] - column] = doc.get("value", "")
        return grid

    def set_value(self, row: int, column: int, value: Any) -> None:
        if row < 1 or column < 1:
            raise ValueError(f"Cell ({row}, {column}) is out of range")
        self.cells.update_one(
            {"sheet": self.name, "row": row, "column": column},
            {"$set": {"value": value, "updated_at": _now()}},
            upsert=True,
        )

    def append_row(self, values: Sequence[Any]) -> int:
        row = self.last_row() + 1
        docs = [
            CellRecord(sheet=self.name, row=row, column=offset + 1, value=value).to_mongo()
            for offset, value in enumerate(values)
            if value is not None
        ]
        if docs:
            self.cells.insert_many(docs, ordered=True)
        logger.debug(f"Appended row {row} to sheet {self.name!r} ({len(docs)} cells)")
        return row


class MongoSheetStore(SheetStore):
    def __init__(
        self,
        db: Database,
        sheets_collection: str = "report_sheets",
        cells_collection: str = "report_cells",
    ) -> None:
        self.db = db
        self.sheets: Collection = db[sheets_collection]
        self.cells: Collection = db[cells_collection]

    def ensure_indexes(self) -> None:
        self.sheets.create_index([("name", ASCENDING)], unique=True)
        self.cells.create_index(
            [("sheet", ASCENDING), ("row", ASCENDING), ("column", ASCENDING)],
            unique=True,
        )

    def get(self, name: str) -> Optional[Sheet]:
        if self.sheets.find_one({"name": name}) is None:
            return None
        return MongoSheet(name, self.cells)

    def create(self, name: str) -> Sheet:
        self.sheets.update_one(
            {"name": name},
            {"$setOnInsert": SheetRecord(name=name).to_mongo(exclude={"name"})},
            upsert=True,
        )
        logger.info(f"Created sheet {name!r}")
        return MongoSheet(name, self.cells)
