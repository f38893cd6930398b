"""Subscription detector — upcoming renewals and subscriptions nobody uses."""

from __future__ import annotations

from datetime import datetime

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import days_since, days_until, make_alert_id, now_rank
from spendalerts.core.types import Alert, AlertCategory, Severity, Snapshot, Subscription
from spendalerts.detectors.base import skip_entity

ROUTE = "/(tabs)/transactions"


def _renewal_alert(
    sub: Subscription,
    days: int,
    base_rank: int,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> Alert:
    params = {"name": sub.label, "amount": fmt.format_currency(sub.amount)}
    if days == 0:
        message = fmt.translate("alerts.renewsToday", params)
        display_time = fmt.translate("alerts.todayTime")
    elif days == 1:
        message = fmt.translate("alerts.renewsTomorrow", params)
        display_time = fmt.translate("alerts.daysLeft", {"days": days})
    else:
        message = fmt.translate("alerts.renewsInDays", {**params, "days": days})
        display_time = fmt.translate("alerts.daysLeft", {"days": days})

    return Alert(
        id=make_alert_id(AlertCategory.SUBSCRIPTION_RENEWAL, sub.id),
        category=AlertCategory.SUBSCRIPTION_RENEWAL,
        severity=Severity.WARNING if days <= thresholds.urgent_days else Severity.INFO,
        title=fmt.translate("alerts.renewing", {"name": sub.label}),
        message=message,
        display_time=display_time,
        route=ROUTE,
        rank=base_rank - days * 1000,
        entity_id=sub.id,
    )


def _unused_alert(sub: Subscription, days: int, base_rank: int, fmt: Formatters) -> Alert:
    return Alert(
        id=make_alert_id(AlertCategory.SUBSCRIPTION_UNUSED, sub.id),
        category=AlertCategory.SUBSCRIPTION_UNUSED,
        severity=Severity.INFO,
        title=fmt.translate("alerts.unusedSubscription"),
        message=fmt.translate("alerts.unusedSubMessage", {
            "name": sub.label,
            "days": days,
            "amount": fmt.format_currency(sub.amount),
        }),
        display_time=fmt.translate("alerts.daysUnused", {"days": days}),
        route=ROUTE,
        rank=base_rank - 50000,
        entity_id=sub.id,
    )


def detect_subscription_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """Renewals within the window, then subscriptions unused for a month.

    The two passes are independent: one subscription may produce both.
    """
    alerts: list[Alert] = []
    base_rank = now_rank(now)
    active = [s for s in snapshot.subscriptions if s.status == "active"]

    for sub in active:
        if sub.next_billing_date is None:
            continue
        try:
            days = days_until(sub.next_billing_date, now)
            if 0 <= days <= thresholds.subscription_renewal_window_days:
                alerts.append(_renewal_alert(sub, days, base_rank, fmt, thresholds))
        except Exception:
            skip_entity("subscription", sub.id)

    for sub in active:
        if sub.last_used_at is None:
            continue
        try:
            days = days_since(sub.last_used_at, now)
            if days >= thresholds.subscription_unused_days:
                alerts.append(_unused_alert(sub, days, base_rank, fmt))
        except Exception:
            skip_entity("subscription", sub.id)

    return alerts
