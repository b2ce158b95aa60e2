"""Celery tasks."""

TASK_UPDATE_REPORT = "bitrise_report.tasks.update_report"

__all__ = ["TASK_UPDATE_REPORT"]
