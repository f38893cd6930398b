"""Detector interface and the failure-isolating runner."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

import structlog

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.types import Alert, Snapshot

logger = structlog.stdlib.get_logger()

# (snapshot, now, formatters, thresholds) -> candidate alerts
Detector = Callable[[Snapshot, datetime, Formatters, AlertThresholds], list[Alert]]


def skip_entity(detector: str, entity_id: str) -> None:
    """Log a per-entity failure; call from inside an ``except`` block."""
    logger.exception("entity_skipped", detector=detector, entity_id=entity_id)


def run_detector(
    name: str,
    detector: Detector,
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """Run one detector; any exception yields an empty list."""
    try:
        alerts = detector(snapshot, now, fmt, thresholds)
    except Exception:
        logger.exception("detector_error", detector=name)
        return []
    logger.debug("detector_ran", detector=name, alerts=len(alerts))
    return alerts


def run_detectors(
    detectors: Sequence[tuple[str, Detector]],
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[list[Alert]]:
    """Run detectors sequentially, in registry order, one output list each."""
    return [
        run_detector(name, detector, snapshot, now, fmt, thresholds)
        for name, detector in detectors
    ]
