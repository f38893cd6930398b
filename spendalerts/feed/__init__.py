"""Feed assembly: ranking, persisted notification state and mutations."""

from spendalerts.feed.aggregator import merge, sort_key
from spendalerts.feed.engine import AlertFeedEngine
from spendalerts.feed.exceptions import StateError, StorageError
from spendalerts.feed.queries import (
    critical_alerts,
    filter_feed,
    paginate,
    split_by_read,
    unread_count,
)
from spendalerts.feed.state import NotificationStateStore, assemble_feed
from spendalerts.feed.storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    create_storage,
)

__all__ = [
    "AlertFeedEngine",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "NotificationStateStore",
    "StateError",
    "StorageError",
    "assemble_feed",
    "create_storage",
    "critical_alerts",
    "filter_feed",
    "merge",
    "paginate",
    "sort_key",
    "split_by_read",
    "unread_count",
]
