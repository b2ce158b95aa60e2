#!/usr/bin/env python3
"""
Run the daily report once, outside Celery.

Usage:
    python -m bitrise_report [--dry-run] [--config path/to/report.yml]

With --dry-run the rows go to an in-memory store and are printed instead of
being persisted, and no notification is sent.
"""
import argparse
import json
import sys
from pathlib import Path

from bitrise_report.core.config import get_settings, load_settings
from bitrise_report.core.logging import setup_logging
from bitrise_report.infra.sheets import InMemorySheetStore
from bitrise_report.infra.wiring import build_dependencies
from bitrise_report.services.notifications import NotificationService
from bitrise_report.services.report import ReportDriver


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="bitrise_report")
    parser.add_argument("--config", type=Path, help="path to report.yml")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(argv)

    settings = load_settings(args.config) if args.config else get_settings()
    if args.dry_run:
        settings.storage.backend = "memory"
    setup_logging(settings.logging.level)

    deps = build_dependencies(settings)
    if args.dry_run:
        deps.notifier = NotificationService(None)

    try:
        result = ReportDriver(deps, settings.report, settings.notifications).run()
    finally:
        deps.client.close()

    if isinstance(deps.store, InMemorySheetStore):
        for name, sheet in deps.store.sheets.items():
            print(f"# {name}")
            for row in sheet.rows():
                print("\t".join(str(cell) for cell in row))
    print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
