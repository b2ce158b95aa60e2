"""Configuration and logging for the report job."""

from .config import Settings, get_settings, load_settings
from .logging import ReportJSONFormatter, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "ReportJSONFormatter",
    "setup_logging",
]
