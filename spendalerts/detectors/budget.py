"""Budget detector — month-to-date spending against each active budget."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import (
    as_datetime,
    days_left_in_month,
    make_alert_id,
    now_rank,
    round_percent,
    start_of_month,
)
from spendalerts.core.types import Alert, AlertCategory, Budget, Severity, Snapshot, Transaction
from spendalerts.detectors.base import skip_entity

ROUTE = "/settings/budgets"


def month_to_date_spent(budget: Budget, transactions: list[Transaction], now: datetime) -> Decimal:
    """Sum of this month's outflows in the budget's category (absolute values)."""
    month_start = as_datetime(start_of_month(now), now)
    return sum(
        (
            abs(tx.amount)
            for tx in transactions
            if as_datetime(tx.transaction_date, now) >= month_start
            and tx.category_id == budget.category_id
            and tx.is_outflow
        ),
        Decimal(0),
    )


def detect_budget_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """One alert per active budget at or over its threshold.

    Exceeded (>= 100%) and warning (>= alert_threshold) are exclusive.
    """
    alerts: list[Alert] = []
    if not snapshot.budgets:
        return alerts

    base_rank = now_rank(now)
    days_left = days_left_in_month(now)

    for budget in snapshot.budgets:
        if not budget.is_active:
            continue
        try:
            spent = month_to_date_spent(budget, snapshot.transactions, now)
            percentage = round_percent(spent, budget.amount)
            threshold = budget.alert_threshold or thresholds.budget_default_alert_threshold
            category = budget.category_name

            if percentage >= 100:
                alerts.append(Alert(
                    id=make_alert_id(AlertCategory.BUDGET_EXCEEDED, budget.id),
                    category=AlertCategory.BUDGET_EXCEEDED,
                    severity=Severity.ERROR,
                    title=fmt.translate("alerts.overBudget", {"category": category}),
                    message=fmt.translate("alerts.overBudgetMessage", {
                        "spent": fmt.format_currency(spent),
                        "budget": fmt.format_currency(budget.amount),
                        "over": fmt.format_currency(spent - budget.amount),
                    }),
                    display_time=fmt.translate("alerts.thisMonth"),
                    route=ROUTE,
                    rank=base_rank,
                    entity_id=budget.id,
                ))
            elif percentage >= threshold:
                alerts.append(Alert(
                    id=make_alert_id(AlertCategory.BUDGET_WARNING, budget.id),
                    category=AlertCategory.BUDGET_WARNING,
                    severity=Severity.WARNING,
                    title=fmt.translate("alerts.budgetAlertTitle", {"category": category}),
                    message=fmt.translate("alerts.budgetAlertMessage", {
                        "percentage": percentage,
                        "remaining": fmt.format_currency(budget.amount - spent),
                        "days": days_left,
                    }),
                    display_time=fmt.translate("alerts.thisMonth"),
                    route=ROUTE,
                    rank=base_rank - 1000,
                    entity_id=budget.id,
                ))
        except Exception:
            skip_entity("budget", budget.id)

    return alerts
