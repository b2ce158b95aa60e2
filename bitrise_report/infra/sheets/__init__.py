"""Sheet stores: the persisted report tables."""

from .base import HEADER_ROW, Sheet, SheetStore
from .memory import InMemorySheet, InMemorySheetStore
from .mongo import MongoSheet, MongoSheetStore

__all__ = [
    "HEADER_ROW",
    "Sheet",
    "SheetStore",
    "InMemorySheet",
    "InMemorySheetStore",
    "MongoSheet",
    "MongoSheetStore",
]
