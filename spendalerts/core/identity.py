"""Alert identity and the shared arithmetic every detector thresholds against."""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from spendalerts.core.types import AlertCategory

_ONE_DAY_SECS = 86400.0


def make_alert_id(
    category: AlertCategory,
    entity_id: str,
    bucket: str | None = None,
) -> str:
    """Build the deterministic id for an alert.

    The id depends only on what the alert is about, never on the amounts
    that triggered it, so a dismissal keeps matching while the numbers move
    within the same band.

    >>> make_alert_id(AlertCategory.GOAL_MILESTONE, "g1", "75")
    'goal_milestone:g1:75'
    """
    alert_id = f"{category.value}:{entity_id}"
    if bucket:
        alert_id = f"{alert_id}:{bucket}"
    return alert_id


def round_percent(numerator: Decimal, denominator: Decimal) -> int:
    """Whole-number percentage rounded half-up; 0 when denominator <= 0."""
    if denominator <= 0:
        return 0
    pct = numerator / denominator * 100
    return int(pct.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def as_datetime(value: date | datetime, like: datetime) -> datetime:
    """Promote a date to midnight, in the same timezone awareness as *like*."""
    if isinstance(value, datetime):
        if value.tzinfo is None and like.tzinfo is not None:
            return value.replace(tzinfo=like.tzinfo)
        if value.tzinfo is not None and like.tzinfo is None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min, tzinfo=like.tzinfo)


def days_until(target: date | datetime, now: datetime) -> int:
    """Whole days from *now* until *target*, rounded up. Negative when past."""
    delta = as_datetime(target, now) - now
    return math.ceil(delta.total_seconds() / _ONE_DAY_SECS)


def days_since(past: date | datetime, now: datetime) -> int:
    """Whole days elapsed since *past*, rounded up."""
    delta = now - as_datetime(past, now)
    return math.ceil(delta.total_seconds() / _ONE_DAY_SECS)


def days_left_in_month(now: datetime) -> int:
    days_in_month = calendar.monthrange(now.year, now.month)[1]
    return days_in_month - now.day


def start_of_month(now: datetime) -> date:
    return date(now.year, now.month, 1)


def days_ago(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)


def now_rank(now: datetime) -> int:
    """Rank of an alert stamped at *now*; detectors subtract offsets from it."""
    return int(now.timestamp() * 1000)


def epoch_ms(moment: date | datetime, like: datetime) -> int:
    """Milliseconds since the epoch, used as the recency rank."""
    return int(as_datetime(moment, like).timestamp() * 1000)
