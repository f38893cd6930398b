"""Built-in English message templates for alert rendering.

Keys mirror the host app's translation keys; placeholders use ``str.format``.
"""

from __future__ import annotations

DEFAULT_MESSAGES: dict[str, str] = {
    # Budgets
    "alerts.overBudget": "{category} budget exceeded",
    "alerts.overBudgetMessage": "You've spent {spent} of your {budget} budget, {over} over",
    "alerts.budgetAlertTitle": "{category} budget alert",
    "alerts.budgetAlertMessage": (
        "You've used {percentage}% of your budget. {remaining} remaining for {days} days"
    ),
    # Goals
    "alerts.goalReached": "Goal reached!",
    "alerts.goalReachedMessage": "You reached your {name} goal of {amount}",
    "alerts.almostThere": "Almost there!",
    "alerts.almostThereMessage": "{name} is {percentage}% funded, {remaining} to go",
    "alerts.halfwayThere": "Halfway there",
    "alerts.halfwayThereMessage": "{name} is {percentage}% funded",
    "alerts.goalDeadlineApproaching": "Goal deadline approaching",
    "alerts.goalDeadlineMessage": "{name} is due in {days} days and is only {percentage}% funded",
    "alerts.goalOverdue": "Goal overdue",
    "alerts.goalOverdueMessage": "{name} passed its target date at {percentage}% funded",
    # Subscriptions
    "alerts.renewing": "{name} renewing",
    "alerts.renewsToday": "{name} renews today for {amount}",
    "alerts.renewsTomorrow": "{name} renews tomorrow for {amount}",
    "alerts.renewsInDays": "{name} renews in {days} days for {amount}",
    "alerts.unusedSubscription": "Unused subscription",
    "alerts.unusedSubMessage": "You haven't used {name} in {days} days. It costs {amount}",
    # Bills
    "alerts.billOverdue": "{name} is overdue",
    "alerts.billOverdueMessage": "{name} ({amount}) is {days} days overdue",
    "alerts.billDueToday": "{name} due today",
    "alerts.billDueSoon": "{name} due soon",
    "alerts.billDueTodayMessage": "{name} ({amount}) is due today",
    "alerts.billDueTomorrowMessage": "{name} ({amount}) is due tomorrow",
    "alerts.billDueInDaysMessage": "{name} ({amount}) is due in {days} days",
    # Debts
    "alerts.highInterestDebt": "High interest debt",
    "alerts.highInterestDebtMessage": "{name} charges {rate}% interest. Consider paying it down first",
    "alerts.monthlyDebtPayments": "Monthly debt payments",
    "alerts.monthlyDebtPaymentsMessage": (
        "{payment} in minimum payments across {count} debts ({total} total)"
    ),
    # Spending
    "alerts.largeTransactionTitle": "Large transaction",
    "alerts.largeTransactionMessage": "{amount} at {merchant}, {daysAgo} days ago",
    "alerts.unknownMerchant": "an unknown merchant",
    "alerts.higherThanUsual": "Spending higher than usual",
    "alerts.higherThanUsualMessage": "You spent {amount} this week, {percentage}% more than usual",
    # Display times
    "alerts.thisMonth": "This month",
    "alerts.recently": "Recently",
    "alerts.inProgressTime": "In progress",
    "alerts.daysLeft": "{days} days left",
    "alerts.overdue": "Overdue",
    "alerts.todayTime": "Today",
    "alerts.daysUnused": "{days} days unused",
    "alerts.daysOverdue": "{days} days overdue",
    "alerts.ongoing": "Ongoing",
    "alerts.monthly": "Monthly",
    "alerts.daysAgo": "{days} days ago",
    "alerts.thisWeekTime": "This week",
}
