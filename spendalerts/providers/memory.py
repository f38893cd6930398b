"""In-process provider for collections the host app already holds."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence

from spendalerts.providers.base import DOMAINS, Record, SnapshotProvider


class MemorySnapshotProvider(SnapshotProvider):
    """Serves copies of in-memory record lists, keyed by domain name."""

    def __init__(self, data: Mapping[str, Sequence[Record]] | None = None) -> None:
        self._data: dict[str, list[Record]] = {domain: [] for domain in DOMAINS}
        for domain, records in (data or {}).items():
            self.set(domain, records)

    def set(self, domain: str, records: Sequence[Record]) -> None:
        """Replace the records for one domain."""
        if domain not in self._data:
            raise KeyError(f"unknown domain: {domain}")
        self._data[domain] = list(records)

    def _get(self, domain: str) -> list[Record]:
        return copy.deepcopy(self._data[domain])

    async def get_budgets(self) -> list[Record]:
        return self._get("budgets")

    async def get_transactions(self) -> list[Record]:
        return self._get("transactions")

    async def get_goals(self) -> list[Record]:
        return self._get("goals")

    async def get_subscriptions(self, status: str = "active") -> list[Record]:
        return [
            r for r in self._get("subscriptions")
            if not isinstance(r, dict) or r.get("status", "active") == status
        ]

    async def get_bills(self) -> list[Record]:
        return self._get("bills")

    async def get_debts(self) -> list[Record]:
        return self._get("debts")
