"""Core module — config, types, identity, formatting, logging."""

from spendalerts.core.config import (
    AlertThresholds,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)
from spendalerts.core.formatting import (
    CurrencyFormatter,
    Formatters,
    MessageCatalog,
    default_formatters,
)
from spendalerts.core.identity import make_alert_id
from spendalerts.core.logging import setup_logging
from spendalerts.core.types import (
    Alert,
    AlertCategory,
    Bill,
    Budget,
    Debt,
    FeedPage,
    Goal,
    NotificationState,
    Severity,
    Snapshot,
    Subscription,
    Transaction,
)

__all__ = [
    "Alert",
    "AlertCategory",
    "AlertThresholds",
    "Bill",
    "Budget",
    "CurrencyFormatter",
    "Debt",
    "FeedPage",
    "Formatters",
    "Goal",
    "MessageCatalog",
    "NotificationState",
    "Settings",
    "Severity",
    "Snapshot",
    "Subscription",
    "Transaction",
    "default_formatters",
    "get_settings",
    "load_settings",
    "make_alert_id",
    "reset_settings",
    "setup_logging",
]
