"""Pull-based alert generation and notification-state engine for personal finance."""

__version__ = "0.1.0"
