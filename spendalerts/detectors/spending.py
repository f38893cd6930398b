"""Spending detector — large recent purchases and an unusually expensive week."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import (
    as_datetime,
    days_ago,
    days_since,
    epoch_ms,
    make_alert_id,
    now_rank,
    round_percent,
)
from spendalerts.core.types import Alert, AlertCategory, Severity, Snapshot, Transaction
from spendalerts.detectors.base import skip_entity

TRANSACTIONS_ROUTE = "/(tabs)/transactions"
STATS_ROUTE = "/(tabs)/stats"

# Entity id for the week-over-normal summary.
TRAILING_WEEK_ENTITY = "trailing-week"


def outflows_since(transactions: list[Transaction], since: datetime) -> list[Transaction]:
    """Outflow transactions dated on or after *since*, in snapshot order."""
    result: list[Transaction] = []
    for tx in transactions:
        try:
            if as_datetime(tx.transaction_date, since) >= since and tx.is_outflow:
                result.append(tx)
        except Exception:
            skip_entity("spending", tx.id)
    return result


def total_outflow(transactions: list[Transaction]) -> Decimal:
    return sum((abs(tx.amount) for tx in transactions), Decimal(0))


def _large_transaction_alert(
    tx: Transaction,
    amount: Decimal,
    now: datetime,
    fmt: Formatters,
) -> Alert:
    days = days_since(tx.transaction_date, now)
    merchant = tx.merchant_name or fmt.translate("alerts.unknownMerchant")
    return Alert(
        id=make_alert_id(AlertCategory.LARGE_TRANSACTION, tx.id),
        category=AlertCategory.LARGE_TRANSACTION,
        severity=Severity.INFO,
        title=fmt.translate("alerts.largeTransactionTitle"),
        message=fmt.translate("alerts.largeTransactionMessage", {
            "amount": fmt.format_currency(amount),
            "merchant": merchant,
            "daysAgo": days,
        }),
        display_time=(
            fmt.translate("alerts.todayTime")
            if days == 0
            else fmt.translate("alerts.daysAgo", {"days": days})
        ),
        route=TRANSACTIONS_ROUTE,
        rank=epoch_ms(tx.transaction_date, now),
        entity_id=tx.id,
    )


def detect_spending_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """Compare the trailing week against the trailing month's daily average.

    Large transactions are taken in snapshot order and capped, not sorted by
    amount.
    """
    alerts: list[Alert] = []
    transactions = snapshot.transactions
    if not transactions:
        return alerts

    recent = outflows_since(transactions, days_ago(now, thresholds.spending_week_days))
    month = outflows_since(transactions, days_ago(now, thresholds.spending_lookback_days))

    daily_avg = total_outflow(month) / thresholds.spending_lookback_days
    large_threshold = max(
        daily_avg * thresholds.large_transaction_multiplier,
        thresholds.large_transaction_floor,
    )

    large_count = 0
    for tx in recent:
        if large_count >= thresholds.large_transaction_max_alerts:
            break
        try:
            amount = abs(tx.amount)
            if amount >= large_threshold:
                alerts.append(_large_transaction_alert(tx, amount, now, fmt))
                large_count += 1
        except Exception:
            skip_entity("spending", tx.id)

    weekly_total = total_outflow(recent)
    weekly_avg = daily_avg * thresholds.spending_week_days
    if weekly_total > 0 and weekly_avg > 0:
        weekly_pct = round_percent(weekly_total, weekly_avg)
        if weekly_pct >= thresholds.unusual_week_pct:
            alerts.append(Alert(
                id=make_alert_id(AlertCategory.UNUSUAL_SPENDING_WEEK, TRAILING_WEEK_ENTITY),
                category=AlertCategory.UNUSUAL_SPENDING_WEEK,
                severity=Severity.WARNING,
                title=fmt.translate("alerts.higherThanUsual"),
                message=fmt.translate("alerts.higherThanUsualMessage", {
                    "amount": fmt.format_currency(weekly_total),
                    "percentage": weekly_pct - 100,
                }),
                display_time=fmt.translate("alerts.thisWeekTime"),
                route=STATS_ROUTE,
                rank=now_rank(now) - 40000,
                entity_id=TRAILING_WEEK_ENTITY,
            ))

    return alerts
