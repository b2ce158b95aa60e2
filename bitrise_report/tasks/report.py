from typing import Any, Dict

from bitrise_report.celery_app import celery_app
from bitrise_report.core.config import get_settings
from bitrise_report.infra.wiring import build_dependencies
from bitrise_report.services.report import ReportDriver
from bitrise_report.tasks import TASK_UPDATE_REPORT
from bitrise_report.tasks.base import ReportTask


@celery_app.task(bind=True, base=ReportTask, name=TASK_UPDATE_REPORT)
def update_report(self: ReportTask) -> Dict[str, Any]:
    settings = get_settings()
    deps = build_dependencies(settings, db_factory=lambda: self.db)
    try:
        result = ReportDriver(deps, settings.report, settings.notifications).run()
    finally:
        deps.client.close()
    return result.model_dump()
