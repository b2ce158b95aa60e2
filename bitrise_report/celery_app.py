"""Celery application instance for the report job."""

from __future__ import annotations

from celery import Celery, signals

from bitrise_report.core.config import get_settings
from bitrise_report.core.logging import setup_logging

settings = get_settings()


@signals.setup_logging.connect
def on_setup_logging(**kwargs):
    setup_logging(settings.logging.level)


celery_app = Celery(
    "bitrise_report",
    broker=settings.broker.url,
    backend=settings.broker.result_backend,
    include=["bitrise_report.tasks.report"],
)

celery_app.conf.update(
    task_default_queue=settings.broker.default_queue,
    worker_prefetch_multiplier=1,
    broker_connection_retry_on_startup=True,
    # A run appends rows; redelivery would append a second row for the same day
    task_acks_late=False,
)


@celery_app.task(name="healthcheck")
def healthcheck() -> str:
    return "OK"
