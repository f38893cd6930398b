"""AlertFeedEngine — refresh the feed and apply read/dismiss mutations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

import structlog

from spendalerts.core.config import AlertThresholds, get_settings
from spendalerts.core.formatting import Formatters, default_formatters
from spendalerts.core.types import Alert
from spendalerts.detectors import DETECTORS, Detector, run_detectors
from spendalerts.feed.aggregator import merge
from spendalerts.feed.state import NotificationStateStore, assemble_feed
from spendalerts.providers.base import SnapshotProvider, fetch_snapshot

logger = structlog.stdlib.get_logger()

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class AlertFeedEngine:
    """Pull-based alert feed.

    The engine holds no feed: ``refresh_feed()`` returns the ranked list and
    every mutation takes the caller's current list and returns the patched
    one. Only the dismissed/read id sets are persisted.

    Usage::

        engine = AlertFeedEngine(provider, NotificationStateStore(storage))
        feed = await engine.refresh_feed()
        feed = await engine.mark_read(feed, feed[0].id)
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        state: NotificationStateStore,
        formatters: Formatters | None = None,
        thresholds: AlertThresholds | None = None,
        detectors: Sequence[tuple[str, Detector]] = DETECTORS,
        clock: Clock | None = None,
    ) -> None:
        self._provider = provider
        self._state = state
        self._formatters = formatters or default_formatters()
        self._thresholds = thresholds or get_settings().thresholds
        self._detectors = tuple(detectors)
        self._clock = clock or _local_now

    @property
    def state(self) -> NotificationStateStore:
        return self._state

    async def generate(self, now: datetime | None = None) -> list[Alert]:
        """Fetch snapshots and return ranked candidates, before state filtering."""
        now = now or self._clock()
        snapshot = await fetch_snapshot(self._provider)
        groups = run_detectors(self._detectors, snapshot, now, self._formatters, self._thresholds)
        return merge(groups)

    async def refresh_feed(self, now: datetime | None = None) -> list[Alert]:
        """Regenerate every alert and apply the persisted dismissed/read sets."""
        candidates = await self.generate(now)
        # Loaded once, after detection, so the feed reflects a single state read.
        state = await self._state.load()
        feed = assemble_feed(candidates, state)
        logger.info(
            "feed_refreshed",
            candidates=len(candidates),
            shown=len(feed),
            unread=sum(1 for a in feed if not a.read),
        )
        return feed

    # ── Mutations ───────────────────────────────────────────────

    async def mark_read(self, feed: list[Alert], alert_id: str) -> list[Alert]:
        """Persist one id as read and return the feed with that entry read."""
        await self._state.add_read([alert_id])
        return [
            a.model_copy(update={"read": True}) if a.id == alert_id else a
            for a in feed
        ]

    async def mark_all_read(self, feed: list[Alert]) -> list[Alert]:
        """Persist every id in *feed* as read in one write."""
        if feed:
            await self._state.add_read(a.id for a in feed)
        logger.info("feed_marked_read", count=len(feed))
        return [a if a.read else a.model_copy(update={"read": True}) for a in feed]

    async def dismiss(self, feed: list[Alert], alert_id: str) -> list[Alert]:
        """Persist one dismissal and return the feed without that entry."""
        await self._state.add_dismissed([alert_id])
        return [a for a in feed if a.id != alert_id]

    async def clear_all(self, feed: list[Alert]) -> list[Alert]:
        """Dismiss every id in *feed* in one write; the feed becomes empty."""
        if feed:
            await self._state.add_dismissed(a.id for a in feed)
        logger.info("feed_cleared", count=len(feed))
        return []
