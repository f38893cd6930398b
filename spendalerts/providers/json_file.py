"""Provider reading one JSON document with an array per domain.

Expected structure::

    {
        "budgets": [{"id": "b1", "amount": "500", ...}],
        "transactions": [...],
        "goals": [...],
        "subscriptions": [...],
        "bills": [...],
        "debts": [...]
    }

Missing domains read as empty.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from spendalerts.providers.base import Record, SnapshotProvider
from spendalerts.providers.exceptions import SnapshotFetchError, SnapshotParseError


class JsonFileSnapshotProvider(SnapshotProvider):
    """Re-reads the file on every call so each refresh sees current data."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SnapshotFetchError(f"cannot read {self._path}: {exc}") from exc
        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotParseError(f"{self._path} is not valid JSON") from exc
        if not isinstance(body, dict):
            raise SnapshotParseError(f"{self._path} must contain a JSON object")
        return body

    async def _domain(self, domain: str) -> list[Record]:
        body = await asyncio.to_thread(self._read_document)
        records = body.get(domain, [])
        if not isinstance(records, list):
            raise SnapshotParseError(f"'{domain}' in {self._path} is not an array")
        return records

    async def get_budgets(self) -> list[Record]:
        return await self._domain("budgets")

    async def get_transactions(self) -> list[Record]:
        return await self._domain("transactions")

    async def get_goals(self) -> list[Record]:
        return await self._domain("goals")

    async def get_subscriptions(self, status: str = "active") -> list[Record]:
        records = await self._domain("subscriptions")
        return [
            r for r in records
            if not isinstance(r, dict) or r.get("status", "active") == status
        ]

    async def get_bills(self) -> list[Record]:
        return await self._domain("bills")

    async def get_debts(self) -> list[Record]:
        return await self._domain("debts")
