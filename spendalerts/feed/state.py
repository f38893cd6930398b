"""NotificationStateStore — persisted dismissed/read id sets.

Reads fail open (an unreadable set counts as empty) and writes are logged
and swallowed: a lost write costs a re-shown alert, never a broken feed.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable

import structlog

from spendalerts.core.config import StorageConfig
from spendalerts.core.types import Alert, NotificationState
from spendalerts.feed.storage import KeyValueStorage

logger = structlog.stdlib.get_logger()


def decode_ids(blob: str | None) -> set[str]:
    """Parse a JSON array of ids; anything else decodes to an empty set."""
    if not blob:
        return set()
    try:
        raw = json.loads(blob)
    except json.JSONDecodeError:
        logger.warning("state_blob_invalid_json", size=len(blob))
        return set()
    if not isinstance(raw, list):
        logger.warning("state_blob_not_a_list", got=type(raw).__name__)
        return set()
    return {item for item in raw if isinstance(item, str)}


def encode_ids(ids: Iterable[str]) -> str:
    # Sorted so identical sets always serialize identically.
    return json.dumps(sorted(ids))


def assemble_feed(candidates: list[Alert], state: NotificationState) -> list[Alert]:
    """Drop dismissed alerts and stamp ``read`` on the survivors, keeping order."""
    return [
        alert.model_copy(update={"read": alert.id in state.read_ids})
        for alert in candidates
        if alert.id not in state.dismissed_ids
    ]


class NotificationStateStore:
    """Loads and grows the two persisted id sets.

    Each ``add_*`` call is a read-union-write critical section guarded by one
    lock, so concurrent mutations never drop each other's ids.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        config: StorageConfig | None = None,
    ) -> None:
        cfg = config or StorageConfig()
        self._storage = storage
        self._dismissed_key = cfg.dismissed_key
        self._read_key = cfg.read_key
        self._lock = asyncio.Lock()

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    async def _try_load(self, key: str) -> set[str] | None:
        """Stored set, or None when the backend failed."""
        try:
            blob = await self._storage.get(key)
        except Exception:
            logger.exception("state_read_failed", key=key)
            return None
        return decode_ids(blob)

    async def _load_set(self, key: str) -> set[str]:
        loaded = await self._try_load(key)
        return loaded if loaded is not None else set()

    async def _save_set(self, key: str, ids: set[str]) -> bool:
        try:
            await self._storage.set(key, encode_ids(ids))
        except Exception:
            logger.exception("state_write_failed", key=key, count=len(ids))
            return False
        return True

    async def load(self) -> NotificationState:
        """Read both sets together."""
        dismissed, read = await asyncio.gather(
            self._load_set(self._dismissed_key),
            self._load_set(self._read_key),
        )
        return NotificationState(dismissed_ids=dismissed, read_ids=read)

    async def _add(self, key: str, ids: Iterable[str]) -> set[str]:
        new_ids = set(ids)
        async with self._lock:
            current = await self._try_load(key)
            if current is None:
                # Writing now would replace the stored set with a partial one.
                logger.warning("state_write_skipped", key=key, count=len(new_ids))
                return new_ids
            if new_ids <= current:
                return current
            merged = current | new_ids
            if await self._save_set(key, merged):
                logger.debug("state_ids_added", key=key, added=len(merged) - len(current))
            return merged

    async def add_read(self, ids: Iterable[str]) -> set[str]:
        """Add ids to the read set in one write; returns the resulting set."""
        return await self._add(self._read_key, ids)

    async def add_dismissed(self, ids: Iterable[str]) -> set[str]:
        """Add ids to the dismissed set in one write; returns the resulting set."""
        return await self._add(self._dismissed_key, ids)
