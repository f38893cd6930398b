"""Debt detector — worst high-interest debt and the monthly payment reminder."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import make_alert_id, now_rank
from spendalerts.core.types import Alert, AlertCategory, Severity, Snapshot

ROUTE = "/settings/debts"

# Entity id for the reminder that summarizes every debt.
PORTFOLIO_ENTITY = "portfolio"


def detect_debt_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """At most one high-interest warning and at most one payment reminder."""
    alerts: list[Alert] = []
    debts = snapshot.debts
    base_rank = now_rank(now)

    high_interest = [d for d in debts if d.interest_rate >= thresholds.debt_high_interest_rate]
    if high_interest:
        # max() keeps the first of equal rates, in snapshot order.
        worst = max(high_interest, key=lambda d: d.interest_rate)
        alerts.append(Alert(
            id=make_alert_id(AlertCategory.DEBT_HIGH_INTEREST, worst.id),
            category=AlertCategory.DEBT_HIGH_INTEREST,
            severity=Severity.WARNING,
            title=fmt.translate("alerts.highInterestDebt"),
            message=fmt.translate("alerts.highInterestDebtMessage", {
                "name": worst.name,
                "rate": fmt.format_rate(worst.interest_rate),
            }),
            display_time=fmt.translate("alerts.ongoing"),
            route=ROUTE,
            rank=base_rank - 60000,
            entity_id=worst.id,
        ))

    total_balance = sum((d.balance for d in debts), Decimal(0))
    total_min_payment = sum((d.minimum_payment for d in debts), Decimal(0))
    if debts and total_min_payment > 0:
        alerts.append(Alert(
            id=make_alert_id(AlertCategory.DEBT_MONTHLY_REMINDER, PORTFOLIO_ENTITY),
            category=AlertCategory.DEBT_MONTHLY_REMINDER,
            severity=Severity.INFO,
            title=fmt.translate("alerts.monthlyDebtPayments"),
            message=fmt.translate("alerts.monthlyDebtPaymentsMessage", {
                "payment": fmt.format_currency(total_min_payment),
                "count": len(debts),
                "total": fmt.format_currency(total_balance),
            }),
            display_time=fmt.translate("alerts.monthly"),
            route=ROUTE,
            rank=base_rank - 70000,
            entity_id=PORTFOLIO_ENTITY,
        ))

    return alerts
