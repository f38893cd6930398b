"""Bill detector — unpaid bills due this month, by day-of-month."""

from __future__ import annotations

from datetime import datetime

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import make_alert_id, now_rank
from spendalerts.core.types import Alert, AlertCategory, Bill, Severity, Snapshot
from spendalerts.detectors.base import skip_entity

ROUTE = "/settings/bills"


def days_until_due(due_day: int, current_day: int) -> int:
    """Signed distance from today to the due day, within the current month.

    A due day earlier in the month is overdue; there is no rollover into
    next month.
    """
    return due_day - current_day


def _overdue_alert(bill: Bill, days_overdue: int, base_rank: int, fmt: Formatters) -> Alert:
    return Alert(
        id=make_alert_id(AlertCategory.BILL_OVERDUE, bill.id),
        category=AlertCategory.BILL_OVERDUE,
        severity=Severity.ERROR,
        title=fmt.translate("alerts.billOverdue", {"name": bill.name}),
        message=fmt.translate("alerts.billOverdueMessage", {
            "name": bill.name,
            "amount": fmt.format_currency(bill.amount),
            "days": days_overdue,
        }),
        display_time=fmt.translate("alerts.daysOverdue", {"days": days_overdue}),
        route=ROUTE,
        rank=base_rank,
        entity_id=bill.id,
    )


def _upcoming_alert(
    bill: Bill,
    days: int,
    base_rank: int,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> Alert:
    params = {"name": bill.name, "amount": fmt.format_currency(bill.amount)}
    if days == 0:
        title = fmt.translate("alerts.billDueToday", {"name": bill.name})
        message = fmt.translate("alerts.billDueTodayMessage", params)
        display_time = fmt.translate("alerts.todayTime")
    else:
        title = fmt.translate("alerts.billDueSoon", {"name": bill.name})
        if days == 1:
            message = fmt.translate("alerts.billDueTomorrowMessage", params)
        else:
            message = fmt.translate("alerts.billDueInDaysMessage", {**params, "days": days})
        display_time = fmt.translate("alerts.daysLeft", {"days": days})

    return Alert(
        id=make_alert_id(AlertCategory.BILL_UPCOMING, bill.id),
        category=AlertCategory.BILL_UPCOMING,
        severity=Severity.WARNING if days <= thresholds.urgent_days else Severity.INFO,
        title=title,
        message=message,
        display_time=display_time,
        route=ROUTE,
        rank=base_rank - days * 1000,
        entity_id=bill.id,
    )


def detect_bill_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """Overdue and soon-due alerts for every unpaid bill."""
    alerts: list[Alert] = []
    base_rank = now_rank(now)

    for bill in snapshot.bills:
        if bill.is_paid:
            continue
        try:
            days = days_until_due(bill.due_date, now.day)
            if days < 0:
                alerts.append(_overdue_alert(bill, -days, base_rank, fmt))
            elif days <= thresholds.bill_upcoming_window_days:
                alerts.append(_upcoming_alert(bill, days, base_rank, fmt, thresholds))
        except Exception:
            skip_entity("bill", bill.id)

    return alerts
