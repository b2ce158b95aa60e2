"""Infrastructure adapters: the Bitrise API, MongoDB and sheet stores."""

from bitrise_report.infra.bitrise_client import BitriseClient
from bitrise_report.infra.bitrise_exceptions import (
    BitriseAPIError,
    BitriseConfigurationError,
    BitriseError,
    BitriseRateLimitError,
    BitriseRequestError,
)
from bitrise_report.infra.mongo import get_client, get_database

__all__ = [
    "BitriseClient",
    "BitriseAPIError",
    "BitriseConfigurationError",
    "BitriseError",
    "BitriseRateLimitError",
    "BitriseRequestError",
    "get_client",
    "get_database",
]
