import json
import unittest

import httpx

from bitrise_report.domain.entities import TypeStatistic
from bitrise_report.services.notifications import (
    NotificationError,
    NotificationService,
    compose_hold_summary,
    format_minutes,
)


class TestComposeHoldSummary(unittest.TestCase):
    def test_format_minutes_rounds_to_one_decimal(self):
        self.assertEqual(format_minutes(0.02), "28.8")
        self.assertEqual(format_minutes(0), "0.0")

    def test_default_message(self):
        text = compose_hold_summary(
            [
                TypeStatistic(type="android", avg_hold_time=0.02),
                TypeStatistic(type="ios", avg_hold_time=1 / 1440),
            ]
        )
        self.assertEqual(
            text, "昨日のだいたいのホールド時間は、 android: 28.8分、ios: 1.0分 でした"
        )

    def test_custom_templates(self):
        text = compose_hold_summary(
            [TypeStatistic(type="android", avg_hold_time=0.02)],
            message_template="Hold time yesterday: {summary}",
            item_template="{type} {minutes} min",
            separator=", ",
        )
        self.assertEqual(text, "Hold time yesterday: android 28.8 min")


class TestNotificationService(unittest.TestCase):
    def test_skips_without_webhook(self):
        service = NotificationService(None)
        self.assertFalse(service.send("hello"))

    def test_posts_text_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="ok")

        service = NotificationService(
            "https://hooks.test/abc", transport=httpx.MockTransport(handler)
        )
        self.assertTrue(service.send("hello"))
        self.assertEqual(seen[0].method, "POST")
        self.assertEqual(json.loads(seen[0].content), {"text": "hello"})

    def test_failure_raises(self):
        service = NotificationService(
            "https://hooks.test/abc",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with self.assertRaises(NotificationError):
            service.send("hello")


if __name__ == "__main__":
    unittest.main()
