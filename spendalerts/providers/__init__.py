"""Read-only snapshot sources for budgets, goals, bills and debts."""

from spendalerts.providers.base import SnapshotProvider, fetch_snapshot, parse_records
from spendalerts.providers.exceptions import (
    SnapshotError,
    SnapshotFetchError,
    SnapshotParseError,
)
from spendalerts.providers.http import HttpSnapshotProvider
from spendalerts.providers.json_file import JsonFileSnapshotProvider
from spendalerts.providers.memory import MemorySnapshotProvider

__all__ = [
    "HttpSnapshotProvider",
    "JsonFileSnapshotProvider",
    "MemorySnapshotProvider",
    "SnapshotError",
    "SnapshotFetchError",
    "SnapshotParseError",
    "SnapshotProvider",
    "fetch_snapshot",
    "parse_records",
]
