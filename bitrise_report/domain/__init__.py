"""Domain layer: provider records, derived statistics and header mapping."""

from .entities import App, AppStatistic, Build, TypeStatistic
from .header import FIRST_VALUE_COLUMN, ColumnIndex, grow_header

__all__ = [
    "App",
    "AppStatistic",
    "Build",
    "TypeStatistic",
    "FIRST_VALUE_COLUMN",
    "ColumnIndex",
    "grow_header",
]
