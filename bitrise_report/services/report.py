"""
Daily report run.

Fetches yesterday's builds for every enabled app, reduces them to per-app
and per-type statistics, appends one row to each report sheet and posts the
hold-time summary. Collaborators are injected so the whole run can be
driven without network access.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence

from pydantic import BaseModel, Field

from bitrise_report.core.config import NotificationSettings, ReportSettings
from bitrise_report.domain.entities import App, AppStatistic, Build, TypeStatistic
from bitrise_report.infra.sheets.base import SheetStore
from bitrise_report.services.notifications import NotificationService, compose_hold_summary
from bitrise_report.services.statistics import aggregate_app, aggregate_by_type
from bitrise_report.services.table_sync import TableSynchronizer, find_or_create_table
from bitrise_report.services.time_window import TimeWindow

logger = logging.getLogger(__name__)


class BuildSource(Protocol):
    def list_apps(self) -> List[App]: ...

    def list_builds(self, app_slug: str, after: int, before: int) -> List[Build]: ...


@dataclass
class ReportDependencies:
    client: BuildSource
    store: SheetStore
    notifier: NotificationService


class ReportResult(BaseModel):
    date_label: str
    window_after: int
    window_before: int
    app_statistics: List[AppStatistic] = Field(default_factory=list)
    type_statistics: List[TypeStatistic] = Field(default_factory=list)
    # Sheet name -> row index written this run
    rows: Dict[str, int] = Field(default_factory=dict)
    summary: str = ""
    notified: bool = False


class ReportDriver:
    def __init__(
        self,
        dependencies: ReportDependencies,
        settings: Optional[ReportSettings] = None,
        notification_settings: Optional[NotificationSettings] = None,
    ) -> None:
        self.deps = dependencies
        self.settings = settings or ReportSettings()
        self.notification_settings = notification_settings or NotificationSettings()
        self.synchronizer = TableSynchronizer(header_label=self.settings.header_label)

    def collect_statistics(self, apps: Sequence[App], window: TimeWindow) -> List[AppStatistic]:
        def _collect(app: App) -> AppStatistic:
            builds = self.deps.client.list_builds(app.slug, window.after, window.before)
            return aggregate_app(app, builds)

        if self.settings.max_workers <= 1 or len(apps) <= 1:
            return [_collect(app) for app in apps]

        # map() yields in input order, so the result follows app order
        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
            return list(pool.map(_collect, apps))

    def write_sheet(self, name: str, date_label: str, values_by_key: Dict[str, Any]) -> int:
        sheet = find_or_create_table(self.deps.store, name)
        return self.synchronizer.sync(sheet, date_label, values_by_key)

    def run(self, now: Optional[datetime] = None) -> ReportResult:
        window = TimeWindow.for_yesterday(
            self.settings.timezone, now=now, hour=self.settings.cutoff_hour
        )
        date_label = window.label(self.settings.timezone, self.settings.date_format)
        logger.info(
            f"Starting report for {date_label} (window {window.after}..{window.before})"
        )

        fetched = self.deps.client.list_apps()
        apps = [app for app in fetched if not app.is_disabled]
        logger.info(f"Fetched {len(fetched)} apps ({len(apps)} enabled)")
        app_stats = self.collect_statistics(apps, window)
        result = ReportResult(
            date_label=date_label,
            window_after=window.after,
            window_before=window.before,
            app_statistics=app_stats,
        )

        result.rows[self.settings.build_avg_sheet] = self.write_sheet(
            self.settings.build_avg_sheet,
            date_label,
            {stat.name: stat.avg_build_time for stat in app_stats},
        )
        result.rows[self.settings.build_count_sheet] = self.write_sheet(
            self.settings.build_count_sheet,
            date_label,
            {stat.name: stat.count for stat in app_stats},
        )

        type_stats = aggregate_by_type(app_stats)
        result.type_statistics = type_stats
        result.rows[self.settings.hold_avg_sheet] = self.write_sheet(
            self.settings.hold_avg_sheet,
            date_label,
            {stat.type: stat.avg_hold_time for stat in type_stats},
        )

        result.summary = compose_hold_summary(
            type_stats,
            message_template=self.notification_settings.message_template,
            item_template=self.notification_settings.item_template,
            separator=self.notification_settings.separator,
        )
        result.notified = self.deps.notifier.send(result.summary)

        logger.info(
            f"Report for {date_label} done: {len(app_stats)} apps, "
            f"{len(type_stats)} types, notified={result.notified}"
        )
        return result


def run(
    dependencies: ReportDependencies,
    settings: Optional[ReportSettings] = None,
    notification_settings: Optional[NotificationSettings] = None,
    now: Optional[datetime] = None,
) -> ReportResult:
    return ReportDriver(dependencies, settings, notification_settings).run(now=now)
