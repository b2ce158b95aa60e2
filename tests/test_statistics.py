import unittest
from datetime import datetime, timedelta, timezone

from bitrise_report.domain.entities import App, AppStatistic, Build
from bitrise_report.services.statistics import aggregate_app, aggregate_by_type

T = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


def _stat(name, type_, hold):
    return AppStatistic(name=name, type=type_, avg_hold_time=hold)


class TestAggregateApp(unittest.TestCase):
    def setUp(self):
        self.app = App(slug="x", title="X", project_type="ios")

    def test_empty_build_list(self):
        stat = aggregate_app(self.app, [])
        self.assertEqual(stat.count, 0)
        self.assertEqual(stat.avg_build_time, 0)
        self.assertEqual(stat.avg_hold_time, 0)

    def test_single_build(self):
        build = Build(
            environment_prepare_finished_at=T,
            finished_at=T + timedelta(milliseconds=3600000),
            triggered_at=T - timedelta(milliseconds=600000),
            started_on_worker_at=T,
        )
        stat = aggregate_app(self.app, [build])
        self.assertEqual(stat.name, "X")
        self.assertEqual(stat.type, "ios")
        self.assertEqual(stat.count, 1)
        self.assertAlmostEqual(stat.avg_build_time, 1 / 24)
        self.assertAlmostEqual(stat.avg_hold_time, 600000 / 1000 / 60 / 60 / 24)

    def test_incomplete_builds_count_towards_the_mean(self):
        finished = Build(
            environment_prepare_finished_at=T,
            finished_at=T + timedelta(hours=2),
        )
        running = Build(environment_prepare_finished_at=T)
        stat = aggregate_app(self.app, [finished, running])
        self.assertEqual(stat.count, 2)
        self.assertAlmostEqual(stat.avg_build_time, 1 / 24)


class TestAggregateByType(unittest.TestCase):
    def test_averages_hold_time_per_type(self):
        result = aggregate_by_type([_stat("A", "android", 0.01), _stat("B", "android", 0.03)])
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].type, "android")
        self.assertAlmostEqual(result[0].avg_hold_time, 0.02)

    def test_keeps_first_occurrence_order(self):
        result = aggregate_by_type(
            [
                _stat("A", "react-native", 0.1),
                _stat("B", "ios", 0.2),
                _stat("C", "android", 0.3),
                _stat("D", "ios", 0.4),
            ]
        )
        self.assertEqual([t.type for t in result], ["react-native", "ios", "android"])
        self.assertAlmostEqual(result[1].avg_hold_time, 0.3)

    def test_empty_input(self):
        self.assertEqual(aggregate_by_type([]), [])


if __name__ == "__main__":
    unittest.main()
