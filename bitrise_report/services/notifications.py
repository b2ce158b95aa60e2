import logging
from typing import Iterable, Optional

import httpx

from bitrise_report.domain.entities import TypeStatistic

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

DEFAULT_MESSAGE_TEMPLATE = "昨日のだいたいのホールド時間は、 {summary} でした"
DEFAULT_ITEM_TEMPLATE = "{type}: {minutes}分"
DEFAULT_SEPARATOR = "、"


class NotificationError(RuntimeError):
    """Raised when the webhook rejects or never receives a message."""


def format_minutes(days: float) -> str:
    """Days as minutes rounded to one decimal, e.g. 0.02 -> "28.8"."""
    return f"{round(days * MINUTES_PER_DAY, 1):.1f}"


def compose_hold_summary(
    statistics: Iterable[TypeStatistic],
    message_template: str = DEFAULT_MESSAGE_TEMPLATE,
    item_template: str = DEFAULT_ITEM_TEMPLATE,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    summary = separator.join(
        item_template.format(type=stat.type, minutes=format_minutes(stat.avg_hold_time))
        for stat in statistics
    )
    return message_template.format(summary=summary)


class NotificationService:
    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport

    def send(self, text: str) -> bool:
        """Post ``text`` to the webhook; returns False when no webhook is configured."""
        if not self.webhook_url:
            logger.warning("SLACK_WEBHOOK_URL not set, skipping notification")
            return False

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.webhook_url, json={"text": text})
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to send Slack notification: {e}") from e

        logger.info("Sent Slack notification")
        return True
