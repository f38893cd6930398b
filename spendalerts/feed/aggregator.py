"""Aggregator — merge detector outputs into one ranked sequence."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from spendalerts.core.types import Alert

logger = structlog.stdlib.get_logger()


def sort_key(alert: Alert) -> tuple[int, int]:
    """Severity tier ascending, then rank descending (most recent first)."""
    return (int(alert.severity), -alert.rank)


def merge(groups: Iterable[list[Alert]]) -> list[Alert]:
    """Concatenate per-detector outputs in order, then stable-sort.

    Equal keys keep detector-then-insertion order because ``list.sort`` is
    stable. Should two candidates share an id, the first one after sorting
    wins.
    """
    merged: list[Alert] = [alert for group in groups for alert in group]
    merged.sort(key=sort_key)

    ranked: list[Alert] = []
    seen: set[str] = set()
    for alert in merged:
        if alert.id in seen:
            logger.warning("duplicate_alert_id", alert_id=alert.id)
            continue
        seen.add(alert.id)
        ranked.append(alert)

    return ranked
