"""Detector registry — one pure rule function per financial domain.

Order matters: the aggregator's tie-break preserves it.
"""

from spendalerts.detectors.base import Detector, run_detector, run_detectors
from spendalerts.detectors.bill import detect_bill_alerts
from spendalerts.detectors.budget import detect_budget_alerts
from spendalerts.detectors.debt import detect_debt_alerts
from spendalerts.detectors.goal import detect_goal_alerts
from spendalerts.detectors.spending import detect_spending_alerts
from spendalerts.detectors.subscription import detect_subscription_alerts

DETECTORS: tuple[tuple[str, Detector], ...] = (
    ("budget", detect_budget_alerts),
    ("goal", detect_goal_alerts),
    ("subscription", detect_subscription_alerts),
    ("bill", detect_bill_alerts),
    ("debt", detect_debt_alerts),
    ("spending", detect_spending_alerts),
)

__all__ = [
    "DETECTORS",
    "Detector",
    "detect_bill_alerts",
    "detect_budget_alerts",
    "detect_debt_alerts",
    "detect_goal_alerts",
    "detect_spending_alerts",
    "detect_subscription_alerts",
    "run_detector",
    "run_detectors",
]
