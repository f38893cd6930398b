"""Goal detector — funding milestones and target-date pressure."""

from __future__ import annotations

from datetime import datetime

from spendalerts.core.config import AlertThresholds
from spendalerts.core.formatting import Formatters
from spendalerts.core.identity import days_until, make_alert_id, now_rank, round_percent
from spendalerts.core.types import Alert, AlertCategory, Goal, Severity, Snapshot
from spendalerts.detectors.base import skip_entity

ROUTE = "/settings/goals"


def _milestone_alert(
    goal: Goal,
    percentage: int,
    base_rank: int,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> Alert | None:
    """Highest milestone reached, or None below the halfway mark."""
    if percentage >= 100:
        bucket = "100"
        severity = Severity.SUCCESS
        title = fmt.translate("alerts.goalReached")
        message = fmt.translate("alerts.goalReachedMessage", {
            "name": goal.name,
            "amount": fmt.format_currency(goal.target_amount),
        })
        display_time = fmt.translate("alerts.recently")
        rank = base_rank
    elif percentage >= thresholds.goal_almost_pct:
        bucket = "75"
        severity = Severity.SUCCESS
        title = fmt.translate("alerts.almostThere")
        message = fmt.translate("alerts.almostThereMessage", {
            "percentage": percentage,
            "name": goal.name,
            "remaining": fmt.format_currency(goal.target_amount - goal.current_amount),
        })
        display_time = fmt.translate("alerts.inProgressTime")
        rank = base_rank - 5000
    elif percentage >= thresholds.goal_halfway_pct:
        bucket = "50"
        severity = Severity.INFO
        title = fmt.translate("alerts.halfwayThere")
        message = fmt.translate("alerts.halfwayThereMessage", {
            "percentage": percentage,
            "name": goal.name,
        })
        display_time = fmt.translate("alerts.inProgressTime")
        rank = base_rank - 10000
    else:
        return None

    return Alert(
        id=make_alert_id(AlertCategory.GOAL_MILESTONE, goal.id, bucket),
        category=AlertCategory.GOAL_MILESTONE,
        severity=severity,
        title=title,
        message=message,
        display_time=display_time,
        route=ROUTE,
        rank=rank,
        entity_id=goal.id,
        bucket=bucket,
    )


def _deadline_alert(
    goal: Goal,
    percentage: int,
    now: datetime,
    base_rank: int,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> Alert | None:
    if goal.target_date is None:
        return None

    days_remaining = days_until(goal.target_date, now)

    if 0 < days_remaining <= thresholds.goal_deadline_window_days and (
        percentage < thresholds.goal_deadline_min_pct
    ):
        return Alert(
            id=make_alert_id(AlertCategory.GOAL_DEADLINE_APPROACHING, goal.id, "deadline"),
            category=AlertCategory.GOAL_DEADLINE_APPROACHING,
            severity=Severity.WARNING,
            title=fmt.translate("alerts.goalDeadlineApproaching"),
            message=fmt.translate("alerts.goalDeadlineMessage", {
                "name": goal.name,
                "days": days_remaining,
                "percentage": percentage,
            }),
            display_time=fmt.translate("alerts.daysLeft", {"days": days_remaining}),
            route=ROUTE,
            rank=base_rank - 3000,
            entity_id=goal.id,
            bucket="deadline",
        )

    if days_remaining <= 0 and percentage < 100:
        return Alert(
            id=make_alert_id(AlertCategory.GOAL_OVERDUE, goal.id, "overdue"),
            category=AlertCategory.GOAL_OVERDUE,
            severity=Severity.ERROR,
            title=fmt.translate("alerts.goalOverdue"),
            message=fmt.translate("alerts.goalOverdueMessage", {
                "name": goal.name,
                "percentage": percentage,
            }),
            display_time=fmt.translate("alerts.overdue"),
            route=ROUTE,
            rank=base_rank - 2000,
            entity_id=goal.id,
            bucket="overdue",
        )

    return None


def detect_goal_alerts(
    snapshot: Snapshot,
    now: datetime,
    fmt: Formatters,
    thresholds: AlertThresholds,
) -> list[Alert]:
    """At most one milestone plus at most one deadline/overdue alert per goal.

    A completed goal emits only its completion milestone.
    """
    alerts: list[Alert] = []
    base_rank = now_rank(now)

    for goal in snapshot.goals:
        if goal.status != "active":
            continue
        try:
            percentage = round_percent(goal.current_amount, goal.target_amount)

            milestone = _milestone_alert(goal, percentage, base_rank, fmt, thresholds)
            if milestone is not None:
                alerts.append(milestone)
            if percentage >= 100:
                continue

            deadline = _deadline_alert(goal, percentage, now, base_rank, fmt, thresholds)
            if deadline is not None:
                alerts.append(deadline)
        except Exception:
            skip_entity("goal", goal.id)

    return alerts
