"""Daily Bitrise build statistics appended to growing report sheets."""

__version__ = "0.1.0"
