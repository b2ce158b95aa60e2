from typing import Optional, Union


class BitriseError(Exception):
    pass


class BitriseConfigurationError(BitriseError):
    pass


class BitriseAPIError(BitriseError):
    """Raised when the Bitrise API answers with an error status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class BitriseRateLimitError(BitriseAPIError):
    def __init__(self, message: str, retry_after: Union[int, float, None] = None):
        super().__init__(429, message)
        self.retry_after: Optional[float] = retry_after


class BitriseRequestError(BitriseError):
    """Transport-level failure (DNS, connect, timeout)."""
