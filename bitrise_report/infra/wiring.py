"""Build the report collaborators from settings."""

from __future__ import annotations

from typing import Callable, Optional

from pymongo.database import Database

from bitrise_report.core.config import Settings
from bitrise_report.infra.bitrise_client import BitriseClient
from bitrise_report.infra.mongo import get_database
from bitrise_report.infra.sheets import InMemorySheetStore, MongoSheetStore, SheetStore
from bitrise_report.services.notifications import NotificationService
from bitrise_report.services.report import ReportDependencies


def get_bitrise_client(settings: Settings) -> BitriseClient:
    return BitriseClient(
        token=settings.bitrise.token,
        api_url=settings.bitrise.api_url,
        timeout=settings.bitrise.timeout,
    )


def get_report_db(settings: Settings) -> Database:
    return get_database(settings.mongo.uri, settings.mongo.database, **settings.mongo.options)


def get_sheet_store(
    settings: Settings, db_factory: Optional[Callable[[], Database]] = None
) -> SheetStore:
    if settings.storage.backend == "memory":
        return InMemorySheetStore()

    db = db_factory() if db_factory else get_report_db(settings)
    store = MongoSheetStore(
        db,
        sheets_collection=settings.storage.sheets_collection,
        cells_collection=settings.storage.cells_collection,
    )
    store.ensure_indexes()
    return store


def get_notifier(settings: Settings) -> NotificationService:
    return NotificationService(
        settings.notifications.slack_webhook_url,
        timeout=settings.notifications.timeout,
    )


def build_dependencies(
    settings: Settings, db_factory: Optional[Callable[[], Database]] = None
) -> ReportDependencies:
    return ReportDependencies(
        client=get_bitrise_client(settings),
        store=get_sheet_store(settings, db_factory),
        notifier=get_notifier(settings),
    )
