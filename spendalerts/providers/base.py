"""Abstract snapshot provider and the concurrent, failure-isolating fetch."""

from __future__ import annotations

import abc
import asyncio
from collections.abc import Sequence
from types import TracebackType
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from spendalerts.core.types import Bill, Budget, Debt, Goal, Snapshot, Subscription, Transaction

logger = structlog.stdlib.get_logger()

Record = dict[str, Any]

M = TypeVar("M", bound=BaseModel)

DOMAINS = ("budgets", "transactions", "goals", "subscriptions", "bills", "debts")

_DOMAIN_MODELS: dict[str, type[BaseModel]] = {
    "budgets": Budget,
    "transactions": Transaction,
    "goals": Goal,
    "subscriptions": Subscription,
    "bills": Bill,
    "debts": Debt,
}


class SnapshotProvider(abc.ABC):
    """Read-only source of current-state financial collections.

    Subclasses implement the six getters; ``connect()`` and ``close()`` are
    optional hooks for providers holding a client.

    Usage::

        async with JsonFileSnapshotProvider("data/snapshot.json") as provider:
            snapshot = await fetch_snapshot(provider)
    """

    async def connect(self) -> None:
        """Open any underlying resources."""

    async def close(self) -> None:
        """Release any underlying resources."""

    @abc.abstractmethod
    async def get_budgets(self) -> list[Record]: ...

    @abc.abstractmethod
    async def get_transactions(self) -> list[Record]: ...

    @abc.abstractmethod
    async def get_goals(self) -> list[Record]: ...

    @abc.abstractmethod
    async def get_subscriptions(self, status: str = "active") -> list[Record]: ...

    @abc.abstractmethod
    async def get_bills(self) -> list[Record]: ...

    @abc.abstractmethod
    async def get_debts(self) -> list[Record]: ...

    async def __aenter__(self) -> SnapshotProvider:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()


def parse_records(domain: str, model: type[M], records: Sequence[object]) -> list[M]:
    """Validate raw records one at a time, dropping the ones that fail."""
    parsed: list[M] = []
    for index, record in enumerate(records):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            entity_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                "entity_skipped",
                domain=domain,
                index=index,
                entity_id=entity_id,
                errors=exc.error_count(),
            )
    return parsed


async def fetch_snapshot(provider: SnapshotProvider) -> Snapshot:
    """Fetch all six domains concurrently and build a Snapshot.

    A domain whose fetch fails is logged and treated as empty; the other
    domains are unaffected.
    """
    results = await asyncio.gather(
        provider.get_budgets(),
        provider.get_transactions(),
        provider.get_goals(),
        provider.get_subscriptions("active"),
        provider.get_bills(),
        provider.get_debts(),
        return_exceptions=True,
    )

    collections: dict[str, list[Any]] = {}
    for domain, result in zip(DOMAINS, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error(
                "snapshot_fetch_failed",
                domain=domain,
                error=str(result),
                error_type=type(result).__name__,
            )
            collections[domain] = []
            continue
        if not isinstance(result, list):
            logger.error("snapshot_not_a_list", domain=domain, got=type(result).__name__)
            collections[domain] = []
            continue
        collections[domain] = parse_records(domain, _DOMAIN_MODELS[domain], result)

    snapshot = Snapshot(**collections)
    logger.debug(
        "snapshot_fetched",
        **{domain: len(collections[domain]) for domain in DOMAINS},
    )
    return snapshot
