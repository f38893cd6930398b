"""Tests for the spending detector — large transactions and unusual weeks."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import CurrencyFormatter, Formatters, MessageCatalog
from spendalerts.core.types import AlertCategory, Severity, Snapshot, Transaction
from spendalerts.detectors.spending import (
    detect_spending_alerts,
    outflows_since,
    total_outflow,
)

NOW = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)

# ── Helpers ─────────────────────────────────────────────────────


def _fmt() -> Formatters:
    return Formatters(format_currency=CurrencyFormatter(), translate=MessageCatalog().translate)


def _tx(
    tx_id: str,
    amount: str,
    on: date,
    merchant: str | None = "Store",
    transaction_type: str | None = None,
) -> Transaction:
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        merchant_name=merchant,
        transaction_date=on,
        transaction_type=transaction_type,
    )


def _background(count: int = 20, amount: str = "-30") -> list[Transaction]:
    """Small purchases spread over the second half of February."""
    return [
        _tx(f"bg-{i}", amount, date(2024, 2, 10) + timedelta(days=i % 14))
        for i in range(count)
    ]


def _daily(amount: str = "-10") -> list[Transaction]:
    """One purchase a day for the 30 days ending today."""
    return [
        _tx(f"d-{i}", amount, date(2024, 3, 10) - timedelta(days=i))
        for i in range(30)
    ]


def _detect(txs: list[Transaction]):
    return detect_spending_alerts(Snapshot(transactions=txs), NOW, _fmt(), AlertThresholds())


def _of(alerts, category: AlertCategory):
    return [a for a in alerts if a.category == category]


# ── Window helpers ──────────────────────────────────────────────


class TestOutflowsSince:
    def test_window_start_by_date(self) -> None:
        since = NOW - timedelta(days=7)
        txs = [
            _tx("in", "-5", date(2024, 3, 4)),
            _tx("out", "-5", date(2024, 3, 3)),
        ]
        assert [t.id for t in outflows_since(txs, since)] == ["in"]

    def test_skips_income(self) -> None:
        since = NOW - timedelta(days=7)
        txs = [_tx("pay", "2000", date(2024, 3, 8), transaction_type="income")]
        assert outflows_since(txs, since) == []

    def test_total_is_absolute(self) -> None:
        txs = [_tx("a", "-5", date(2024, 3, 8)), _tx("b", "7", date(2024, 3, 8), transaction_type="purchase")]
        assert total_outflow(txs) == Decimal(12)


# ── Large transactions ──────────────────────────────────────────


class TestLargeTransactions:
    def test_large_purchase_flagged(self) -> None:
        txs = _background() + [_tx("big", "-500", date(2024, 3, 8), merchant="Apple")]
        alerts = _of(_detect(txs), AlertCategory.LARGE_TRANSACTION)
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.id == "large_transaction:big"
        assert alert.severity == Severity.INFO
        assert "$500.00" in alert.message
        assert "Apple" in alert.message
        assert alert.route == "/(tabs)/transactions"

    def test_rank_is_transaction_date(self) -> None:
        txs = _background() + [_tx("big", "-500", date(2024, 3, 8))]
        alert = _of(_detect(txs), AlertCategory.LARGE_TRANSACTION)[0]
        expected = int(datetime(2024, 3, 8, tzinfo=timezone.utc).timestamp() * 1000)
        assert alert.rank == expected

    def test_capped_in_snapshot_order(self) -> None:
        # Threshold is a tenth of the month's total (137); all five qualify.
        big = [
            _tx("t-a", "-200", date(2024, 3, 5)),
            _tx("t-b", "-250", date(2024, 3, 6)),
            _tx("t-c", "-220", date(2024, 3, 7)),
            _tx("t-d", "-400", date(2024, 3, 8)),
            _tx("t-e", "-300", date(2024, 3, 9)),
        ]
        alerts = _of(_detect(big), AlertCategory.LARGE_TRANSACTION)
        assert [a.entity_id for a in alerts] == ["t-a", "t-b", "t-c"]

    def test_floor_applies_when_average_is_low(self) -> None:
        assert _of(_detect([_tx("x", "-99", date(2024, 3, 8))]), AlertCategory.LARGE_TRANSACTION) == []
        alerts = _of(_detect([_tx("x", "-100", date(2024, 3, 8))]), AlertCategory.LARGE_TRANSACTION)
        assert len(alerts) == 1

    def test_unknown_merchant(self) -> None:
        alerts = _detect([_tx("x", "-150", date(2024, 3, 8), merchant=None)])
        alert = _of(alerts, AlertCategory.LARGE_TRANSACTION)[0]
        assert "an unknown merchant" in alert.message

    def test_older_purchases_not_flagged(self) -> None:
        txs = [_tx("old", "-500", date(2024, 2, 20))]
        assert _of(_detect(txs), AlertCategory.LARGE_TRANSACTION) == []

    def test_income_ignored(self) -> None:
        txs = [_tx("pay", "3000", date(2024, 3, 8), transaction_type="income")]
        assert _detect(txs) == []


# ── Unusual week ────────────────────────────────────────────────


class TestUnusualWeek:
    def test_higher_than_usual(self) -> None:
        # Month total 1100 -> weekly average ~256.67; 500 this week is ~195%.
        txs = _background() + [_tx("big", "-500", date(2024, 3, 8))]
        alerts = _of(_detect(txs), AlertCategory.UNUSUAL_SPENDING_WEEK)
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.id == "unusual_spending_week:trailing-week"
        assert alert.severity == Severity.WARNING
        assert "95% more" in alert.message
        assert "$500.00" in alert.message
        assert alert.route == "/(tabs)/stats"

    def test_steady_spending_not_unusual(self) -> None:
        assert _detect(_daily()) == []

    def test_no_spending_this_week(self) -> None:
        assert _of(_detect(_background()), AlertCategory.UNUSUAL_SPENDING_WEEK) == []

    def test_no_transactions(self) -> None:
        assert _detect([]) == []
