"""Tests for the goal detector — milestones, deadline and overdue alerts."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import CurrencyFormatter, Formatters, MessageCatalog
from spendalerts.core.types import AlertCategory, Goal, Severity, Snapshot
from spendalerts.detectors.goal import detect_goal_alerts

NOW = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)

# ── Helpers ─────────────────────────────────────────────────────


def _fmt() -> Formatters:
    return Formatters(format_currency=CurrencyFormatter(), translate=MessageCatalog().translate)


def _goal(
    current: str,
    target: str = "1000",
    target_date: date | datetime | None = None,
    goal_id: str = "g1",
    status: str = "active",
) -> Goal:
    return Goal(
        id=goal_id,
        name="Emergency fund",
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        target_date=target_date,
        status=status,
    )


def _detect(*goals: Goal):
    return detect_goal_alerts(Snapshot(goals=list(goals)), NOW, _fmt(), AlertThresholds())


# ── Milestones ──────────────────────────────────────────────────


class TestMilestones:
    def test_below_halfway_no_alert(self) -> None:
        assert _detect(_goal("400")) == []

    def test_halfway(self) -> None:
        alerts = _detect(_goal("500"))
        assert len(alerts) == 1
        assert alerts[0].id == "goal_milestone:g1:50"
        assert alerts[0].severity == Severity.INFO
        assert alerts[0].bucket == "50"

    def test_almost_there(self) -> None:
        alerts = _detect(_goal("800"))
        assert [a.id for a in alerts] == ["goal_milestone:g1:75"]
        assert alerts[0].severity == Severity.SUCCESS
        assert "$200.00" in alerts[0].message

    def test_reached(self) -> None:
        alerts = _detect(_goal("1000"))
        assert [a.id for a in alerts] == ["goal_milestone:g1:100"]
        assert alerts[0].severity == Severity.SUCCESS
        assert "$1,000.00" in alerts[0].message

    def test_at_most_one_milestone(self) -> None:
        for current in ("0", "499", "500", "749", "750", "999", "1000", "2500"):
            alerts = _detect(_goal(current))
            milestones = [a for a in alerts if a.category == AlertCategory.GOAL_MILESTONE]
            assert len(milestones) <= 1

    def test_higher_milestone_ranks_higher(self) -> None:
        half = _detect(_goal("500"))[0]
        almost = _detect(_goal("800"))[0]
        done = _detect(_goal("1000"))[0]
        assert done.rank > almost.rank > half.rank

    def test_zero_target_no_alert(self) -> None:
        assert _detect(_goal("100", target="0")) == []

    def test_inactive_goal_skipped(self) -> None:
        assert _detect(_goal("1000", status="completed")) == []


# ── Deadline / overdue ──────────────────────────────────────────


class TestDeadline:
    def test_milestone_suppresses_deadline_at_80_percent(self) -> None:
        alerts = _detect(_goal("800", target_date=date(2024, 3, 20)))
        assert [a.id for a in alerts] == ["goal_milestone:g1:75"]

    def test_deadline_when_underfunded(self) -> None:
        alerts = _detect(_goal("400", target_date=date(2024, 3, 30)))
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.category == AlertCategory.GOAL_DEADLINE_APPROACHING
        assert alert.severity == Severity.WARNING
        assert alert.id == "goal_deadline:g1:deadline"
        assert alert.display_time == "20 days left"

    def test_milestone_and_deadline_together(self) -> None:
        alerts = _detect(_goal("600", target_date=date(2024, 3, 30)))
        assert {a.id for a in alerts} == {"goal_milestone:g1:50", "goal_deadline:g1:deadline"}

    def test_timestamped_target_date(self) -> None:
        alerts = _detect(_goal("400", target_date=datetime(2024, 3, 30, 12, 0, tzinfo=timezone.utc)))
        assert [a.id for a in alerts] == ["goal_deadline:g1:deadline"]
        assert alerts[0].display_time == "21 days left"

    def test_deadline_outside_window(self) -> None:
        assert _detect(_goal("400", target_date=date(2024, 5, 1))) == []

    def test_overdue(self) -> None:
        alerts = _detect(_goal("400", target_date=date(2024, 3, 9)))
        assert len(alerts) == 1
        assert alerts[0].category == AlertCategory.GOAL_OVERDUE
        assert alerts[0].severity == Severity.ERROR
        assert alerts[0].id == "goal_overdue:g1:overdue"

    def test_target_date_today_is_overdue(self) -> None:
        alerts = _detect(_goal("400", target_date=date(2024, 3, 10)))
        assert [a.category for a in alerts] == [AlertCategory.GOAL_OVERDUE]

    def test_overdue_but_above_deadline_pct(self) -> None:
        alerts = _detect(_goal("900", target_date=date(2024, 3, 1)))
        assert {a.category for a in alerts} == {
            AlertCategory.GOAL_MILESTONE,
            AlertCategory.GOAL_OVERDUE,
        }

    def test_completed_goal_never_overdue(self) -> None:
        alerts = _detect(_goal("1000", target_date=date(2024, 1, 1)))
        assert [a.id for a in alerts] == ["goal_milestone:g1:100"]

    def test_deadline_and_overdue_exclusive(self) -> None:
        for target_date in (date(2024, 3, 1), date(2024, 3, 10), date(2024, 3, 11), date(2024, 4, 1)):
            alerts = _detect(_goal("100", target_date=target_date))
            kinds = {a.category for a in alerts}
            assert not (
                AlertCategory.GOAL_DEADLINE_APPROACHING in kinds
                and AlertCategory.GOAL_OVERDUE in kinds
            )
