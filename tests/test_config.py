import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from bitrise_report.core.config import Settings, load_settings
from bitrise_report.infra.sheets import InMemorySheetStore
from bitrise_report.infra.wiring import build_dependencies


class TestLoadSettings(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "report.yml"

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_gives_defaults(self):
        settings = load_settings(self.path)
        self.assertEqual(settings.report.timezone, "Asia/Tokyo")
        self.assertEqual(settings.report.cutoff_hour, 6)
        self.assertEqual(settings.report.build_avg_sheet, "Build Avg Time")

    def test_yaml_overrides(self):
        self.path.write_text(
            "report:\n  timezone: Europe/Berlin\n  max_workers: 3\n"
            "storage:\n  backend: memory\n",
            encoding="utf-8",
        )
        settings = load_settings(self.path)
        self.assertEqual(settings.report.timezone, "Europe/Berlin")
        self.assertEqual(settings.report.max_workers, 3)
        self.assertEqual(settings.storage.backend, "memory")

    def test_non_mapping_is_rejected(self):
        self.path.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_settings(self.path)

    def test_env_defaults(self):
        with patch.dict(
            os.environ,
            {"BITRISE_TOKEN": "tok", "SLACK_WEBHOOK_URL": "https://hooks.test/x"},
        ):
            settings = Settings()
        self.assertEqual(settings.bitrise.token, "tok")
        self.assertEqual(settings.notifications.slack_webhook_url, "https://hooks.test/x")


class TestBuildDependencies(unittest.TestCase):
    def test_memory_backend(self):
        settings = Settings()
        settings.bitrise.token = "tok"
        settings.storage.backend = "memory"
        settings.notifications.slack_webhook_url = None
        deps = build_dependencies(settings)
        try:
            self.assertIsInstance(deps.store, InMemorySheetStore)
            self.assertIsNone(deps.notifier.webhook_url)
        finally:
            deps.client.close()


if __name__ == "__main__":
    unittest.main()
