"""Per-build durations, expressed in days."""

from datetime import datetime
from typing import Optional

from bitrise_report.domain.entities import Build

SECONDS_PER_DAY = 24 * 60 * 60


def _days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


def build_duration(build: Build) -> float:
    """Time from environment preparation finishing to the build finishing.

    Returns 0 when either timestamp is missing (the build is still running
    or the record is incomplete). Inconsistent data may yield a negative
    value; it is passed through unchanged.
    """
    if not build.finished_at or not build.environment_prepare_finished_at:
        return 0.0
    return _days_between(build.environment_prepare_finished_at, build.finished_at)


def hold_duration(build: Build) -> float:
    """Time a build waited in the queue before a worker picked it up.

    Returns 0 when either timestamp is missing. Negative differences caused
    by provider clock skew are clamped to 0.
    """
    started: Optional[datetime] = build.started_on_worker_at
    triggered: Optional[datetime] = build.triggered_at
    if not triggered or not started:
        return 0.0
    if started < triggered:
        return 0.0
    return _days_between(triggered, started)
