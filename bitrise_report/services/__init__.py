"""Report services: metrics, aggregation, sheet sync, notifications and the run driver."""

from bitrise_report.services.metrics import build_duration, hold_duration
from bitrise_report.services.notifications import (
    NotificationError,
    NotificationService,
    compose_hold_summary,
)
from bitrise_report.services.report import (
    ReportDependencies,
    ReportDriver,
    ReportResult,
    run,
)
from bitrise_report.services.statistics import aggregate_app, aggregate_by_type
from bitrise_report.services.table_sync import TableSynchronizer, find_or_create_table
from bitrise_report.services.time_window import (
    TimeWindow,
    format_date_label,
    previous_morning,
    today_morning,
)

__all__ = [
    "build_duration",
    "hold_duration",
    "NotificationError",
    "NotificationService",
    "compose_hold_summary",
    "ReportDependencies",
    "ReportDriver",
    "ReportResult",
    "run",
    "aggregate_app",
    "aggregate_by_type",
    "TableSynchronizer",
    "find_or_create_table",
    "TimeWindow",
    "format_date_label",
    "previous_morning",
    "today_morning",
]
