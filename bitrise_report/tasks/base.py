"""Celery base task for the report job."""

from __future__ import annotations

import logging
from typing import Any

from celery import Task
from pymongo.database import Database

from bitrise_report.core.config import get_settings
from bitrise_report.infra.wiring import get_report_db

logger = logging.getLogger(__name__)


class ReportTask(Task):
    """
    Celery task base class that lazily provides the report database handle.
    """

    abstract = True

    def __init__(self) -> None:
        self._db: Database | None = None

    @staticmethod
    def db_factory() -> Database:
        return get_report_db(get_settings())

    @property
    def db(self) -> Database:
        if self._db is None:
            self._db = self.db_factory()
        return self._db

    def after_return(  # pragma: no cover - lifecycle hook
        self, status: str, retval: Any, task_id: str, args: tuple, kwargs: dict, einfo
    ) -> None:
        self._db = None

    def on_failure(  # pragma: no cover - logging only
        self, exc: Exception, task_id: str, args: tuple, kwargs: dict, einfo
    ) -> None:
        logger.error("Task %s failed: %s", self.name, exc, exc_info=exc)
