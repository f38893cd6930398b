"""Tests for the budget detector — month-to-date spend vs. threshold."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import CurrencyFormatter, Formatters, MessageCatalog
from spendalerts.core.types import (
    AlertCategory,
    Budget,
    Category,
    Severity,
    Snapshot,
    Transaction,
)
from spendalerts.detectors.budget import detect_budget_alerts, month_to_date_spent

NOW = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)

# ── Helpers ─────────────────────────────────────────────────────


def _fmt() -> Formatters:
    return Formatters(format_currency=CurrencyFormatter(), translate=MessageCatalog().translate)


def _budget(
    budget_id: str = "b1",
    amount: str = "1000",
    alert_threshold: str | None = "80",
    category_id: str = "food",
    **kwargs: object,
) -> Budget:
    return Budget(
        id=budget_id,
        category_id=category_id,
        amount=Decimal(amount),
        alert_threshold=Decimal(alert_threshold) if alert_threshold is not None else None,
        category=Category(id=category_id, name="Food"),
        **kwargs,  # type: ignore[arg-type]
    )


def _tx(
    amount: str,
    tx_id: str = "t1",
    category_id: str = "food",
    on: date | datetime = date(2024, 3, 5),
    transaction_type: str | None = None,
) -> Transaction:
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        category_id=category_id,
        transaction_date=on,
        transaction_type=transaction_type,
    )


def _detect(budgets: list[Budget], txs: list[Transaction], fmt: Formatters | None = None):
    snapshot = Snapshot(budgets=budgets, transactions=txs)
    return detect_budget_alerts(snapshot, NOW, fmt or _fmt(), AlertThresholds())


# ── month_to_date_spent ─────────────────────────────────────────


class TestMonthToDateSpent:
    def test_sums_absolute_outflows(self) -> None:
        txs = [_tx("-400", "t1"), _tx("-150", "t2")]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(550)

    def test_excludes_previous_month(self) -> None:
        txs = [_tx("-400", "t1"), _tx("-500", "t2", on=date(2024, 2, 28))]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(400)

    def test_excludes_other_categories(self) -> None:
        txs = [_tx("-400", "t1"), _tx("-500", "t2", category_id="rent")]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(400)

    def test_excludes_income(self) -> None:
        txs = [_tx("-400", "t1"), _tx("500", "t2", transaction_type="income")]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(400)

    def test_positive_purchase_counts(self) -> None:
        txs = [_tx("250", "t1", transaction_type="purchase")]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(250)

    def test_timestamped_transactions(self) -> None:
        txs = [
            _tx("-400", "t1", on=datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc)),
            _tx("-500", "t2", on=datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc)),
            _tx("-50", "t3", on=date(2024, 3, 1)),
        ]
        assert month_to_date_spent(_budget(), txs, NOW) == Decimal(450)


# ── detect_budget_alerts ────────────────────────────────────────


class TestBudgetWarning:
    def test_warning_at_95_percent(self) -> None:
        alerts = _detect([_budget()], [_tx("-950")])
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.category == AlertCategory.BUDGET_WARNING
        assert alert.severity == Severity.WARNING
        assert alert.id == "budget_warning:b1"
        assert "95%" in alert.message
        assert "$50.00" in alert.message
        assert "21 days" in alert.message
        assert alert.title == "Food budget alert"
        assert alert.route == "/settings/budgets"

    def test_warning_from_timestamped_record(self) -> None:
        tx = Transaction.model_validate({
            "id": "t1",
            "amount": "-950",
            "category_id": "food",
            "transaction_date": "2024-03-05T10:30:00Z",
        })
        alerts = _detect([_budget()], [tx])
        assert [a.id for a in alerts] == ["budget_warning:b1"]
        assert "95%" in alerts[0].message

    def test_below_threshold_no_alert(self) -> None:
        assert _detect([_budget()], [_tx("-500")]) == []

    def test_threshold_compares_rounded_percentage(self) -> None:
        # 79.5% rounds to 80%
        alerts = _detect([_budget()], [_tx("-795")])
        assert [a.category for a in alerts] == [AlertCategory.BUDGET_WARNING]

    def test_default_threshold_when_unset(self) -> None:
        alerts = _detect([_budget(alert_threshold=None)], [_tx("-800")])
        assert [a.category for a in alerts] == [AlertCategory.BUDGET_WARNING]

    def test_custom_threshold(self) -> None:
        alerts = _detect([_budget(alert_threshold="50")], [_tx("-500")])
        assert [a.category for a in alerts] == [AlertCategory.BUDGET_WARNING]

    def test_id_stable_as_spending_moves(self) -> None:
        first = _detect([_budget()], [_tx("-850")])
        second = _detect([_budget()], [_tx("-900")])
        assert first[0].id == second[0].id
        assert first[0].message != second[0].message


class TestBudgetExceeded:
    def test_exceeded(self) -> None:
        alerts = _detect([_budget()], [_tx("-1200")])
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.category == AlertCategory.BUDGET_EXCEEDED
        assert alert.severity == Severity.ERROR
        assert alert.id == "budget_exceeded:b1"
        assert "$1,200.00" in alert.message
        assert "$200.00" in alert.message

    def test_exactly_100_is_exceeded(self) -> None:
        alerts = _detect([_budget()], [_tx("-1000")])
        assert [a.category for a in alerts] == [AlertCategory.BUDGET_EXCEEDED]

    def test_exceeded_and_warning_exclusive(self) -> None:
        alerts = _detect([_budget()], [_tx("-1500")])
        assert {a.category for a in alerts} == {AlertCategory.BUDGET_EXCEEDED}

    def test_exceeded_ranks_above_warning(self) -> None:
        exceeded = _detect([_budget()], [_tx("-1500")])[0]
        warning = _detect([_budget()], [_tx("-900")])[0]
        assert exceeded.rank > warning.rank


class TestBudgetSkips:
    def test_inactive_budget_skipped(self) -> None:
        assert _detect([_budget(is_active=False)], [_tx("-1500")]) == []

    def test_zero_amount_budget_no_alert(self) -> None:
        assert _detect([_budget(amount="0")], [_tx("-50")]) == []

    def test_no_budgets(self) -> None:
        assert _detect([], [_tx("-50")]) == []

    def test_entity_failure_isolated(self) -> None:
        currency = CurrencyFormatter()

        def flaky(amount: Decimal) -> str:
            if amount == Decimal(10):
                raise ValueError("boom")
            return currency(amount)

        fmt = Formatters(format_currency=flaky, translate=MessageCatalog().translate)
        budgets = [
            _budget("b1"),
            _budget("b2", amount="300", category_id="fun"),
        ]
        txs = [_tx("-950", "t1"), _tx("-290", "t2", category_id="fun")]
        alerts = _detect(budgets, txs, fmt)
        assert [a.id for a in alerts] == ["budget_warning:b1"]
