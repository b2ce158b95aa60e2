import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

from bitrise_report.core.config import NotificationSettings, ReportSettings
from bitrise_report.domain.entities import App, Build
from bitrise_report.infra.sheets import InMemorySheetStore
from bitrise_report.services.notifications import NotificationService
from bitrise_report.services.report import ReportDependencies, ReportDriver, run

T = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 5, 2, 10, 0, 0, tzinfo=ZoneInfo("Asia/Tokyo"))


def _build(hold_minutes=10, build_minutes=60):
    return Build(
        triggered_at=T - timedelta(minutes=hold_minutes),
        started_on_worker_at=T,
        environment_prepare_finished_at=T,
        finished_at=T + timedelta(minutes=build_minutes),
    )


class TestReportDriver(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.client.list_apps.return_value = [
            App(slug="x", title="X", project_type="ios"),
            App(slug="y", title="Y", project_type="android"),
            App(slug="z", title="Z", project_type="android"),
            App(slug="off", title="Off", project_type="ios", is_disabled=True),
        ]
        self.builds = {
            "x": [_build(hold_minutes=10, build_minutes=60)],
            "y": [_build(hold_minutes=14.4), _build(hold_minutes=14.4)],
            "z": [_build(hold_minutes=43.2)],
        }
        self.client.list_builds.side_effect = lambda slug, after, before: self.builds[slug]
        self.store = InMemorySheetStore()
        self.notifier = MagicMock(spec=NotificationService)
        self.notifier.send.return_value = True
        self.deps = ReportDependencies(
            client=self.client, store=self.store, notifier=self.notifier
        )

    def test_full_run(self):
        result = ReportDriver(self.deps).run(now=NOW)

        self.assertEqual(result.date_label, "2024/05/01")
        self.assertEqual([s.name for s in result.app_statistics], ["X", "Y", "Z"])
        self.assertAlmostEqual(result.app_statistics[0].avg_build_time, 1 / 24)
        self.assertAlmostEqual(result.app_statistics[0].avg_hold_time, 10 / 1440)

        android = result.type_statistics[1]
        self.assertEqual(android.type, "android")
        self.assertAlmostEqual(android.avg_hold_time, 0.02)

        avg = self.store.sheets["Build Avg Time"].rows()
        self.assertEqual(avg[0], ["date", "X", "Y", "Z"])
        self.assertEqual(avg[1][0], "2024/05/01")
        self.assertAlmostEqual(avg[1][1], 1 / 24)

        self.assertEqual(
            self.store.sheets["Build Count"].rows(),
            [["date", "X", "Y", "Z"], ["2024/05/01", 1, 2, 1]],
        )
        self.assertEqual(
            self.store.sheets["Hold Avg Time"].rows()[0], ["date", "ios", "android"]
        )
        self.assertEqual(result.rows, {"Build Avg Time": 2, "Build Count": 2, "Hold Avg Time": 2})

        self.notifier.send.assert_called_once_with(result.summary)
        self.assertIn("android: 28.8分", result.summary)
        self.assertTrue(result.notified)

    def test_disabled_apps_are_not_fetched(self):
        ReportDriver(self.deps).run(now=NOW)
        slugs = [call.args[0] for call in self.client.list_builds.call_args_list]
        self.assertNotIn("off", slugs)

    def test_builds_are_queried_for_yesterday_window(self):
        ReportDriver(self.deps).run(now=NOW)
        _, after, before = self.client.list_builds.call_args_list[0].args
        self.assertEqual(after, int(datetime(2024, 5, 1, 6, tzinfo=ZoneInfo("Asia/Tokyo")).timestamp()))
        self.assertEqual(before - after, 86400)

    def test_second_run_appends_rows(self):
        ReportDriver(self.deps).run(now=NOW)
        result = ReportDriver(self.deps).run(now=NOW + timedelta(days=1))
        self.assertEqual(result.rows["Build Count"], 3)
        rows = self.store.sheets["Build Count"].rows()
        self.assertEqual(rows[0], ["date", "X", "Y", "Z"])
        self.assertEqual([row[0] for row in rows[1:]], ["2024/05/01", "2024/05/02"])

    def test_without_webhook_nothing_is_sent(self):
        self.deps.notifier = NotificationService(None)
        result = ReportDriver(self.deps).run(now=NOW)
        self.assertFalse(result.notified)
        self.assertTrue(result.summary)

    def test_concurrent_fetch_keeps_app_order(self):
        settings = ReportSettings(max_workers=4)
        result = run(self.deps, settings=settings, now=NOW)
        self.assertEqual([s.name for s in result.app_statistics], ["X", "Y", "Z"])

    def test_custom_sheet_names_and_message(self):
        settings = ReportSettings(build_count_sheet="Counts")
        notifications = NotificationSettings(
            slack_webhook_url=None,
            message_template="Hold: {summary}",
            item_template="{type}={minutes}",
            separator=" | ",
        )
        result = run(self.deps, settings, notifications, now=NOW)
        self.assertIn("Counts", self.store.sheets)
        self.assertEqual(result.summary, "Hold: ios=10.0 | android=28.8")

    def test_fetch_failure_aborts_before_any_write(self):
        self.client.list_builds.side_effect = RuntimeError("provider down")
        with self.assertRaises(RuntimeError):
            ReportDriver(self.deps).run(now=NOW)
        self.assertEqual(self.store.sheets, {})
        self.notifier.send.assert_not_called()


if __name__ == "__main__":
    unittest.main()
