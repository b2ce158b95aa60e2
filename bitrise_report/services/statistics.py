"""Reduce builds to per-app statistics and per-app statistics to per-type ones."""

from typing import Dict, Iterable, List, Sequence

from bitrise_report.domain.entities import App, AppStatistic, Build, TypeStatistic
from bitrise_report.services.metrics import build_duration, hold_duration


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def aggregate_app(app: App, builds: Sequence[Build]) -> AppStatistic:
    return AppStatistic(
        name=app.title,
        type=app.project_type,
        avg_build_time=_mean([build_duration(build) for build in builds]),
        avg_hold_time=_mean([hold_duration(build) for build in builds]),
        count=len(builds),
    )


def aggregate_by_type(statistics: Iterable[AppStatistic]) -> List[TypeStatistic]:
    """Average hold time per project type, in order of first appearance."""
    groups: Dict[str, List[float]] = {}
    for stat in statistics:
        groups.setdefault(stat.type, []).append(stat.avg_hold_time)
    return [
        TypeStatistic(type=project_type, avg_hold_time=_mean(hold_times))
        for project_type, hold_times in groups.items()
    ]
