"""Domain types for the alert engine. All money values use Decimal."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field, field_validator

# A calendar day, or an exact moment when the source carries a time of day.
Moment = date | datetime

# ── Financial entities ──────────────────────────────────────────


class Category(BaseModel):
    """Spending category attached to budgets and transactions."""

    id: str
    name: str = ""


class Budget(BaseModel):
    """Monthly spending budget for one category."""

    id: str
    category_id: str | None = None
    name: str | None = None
    amount: Decimal
    alert_threshold: Decimal | None = None
    is_active: bool = True
    category: Category | None = None

    @property
    def category_name(self) -> str:
        if self.category is not None and self.category.name:
            return self.category.name
        return self.name or "Unknown"


class Transaction(BaseModel):
    """A single posted transaction. Outflows are negative or typed as purchases."""

    id: str
    amount: Decimal
    merchant_name: str | None = None
    category_id: str | None = None
    transaction_date: Moment
    transaction_type: str | None = None

    @property
    def is_outflow(self) -> bool:
        return self.transaction_type == "purchase" or self.amount < 0


class Goal(BaseModel):
    """Savings goal with an optional target date."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    target_date: Moment | None = None
    status: str = "active"


class Subscription(BaseModel):
    """Recurring subscription charge."""

    id: str
    merchant_name: str
    display_name: str | None = None
    amount: Decimal
    next_billing_date: Moment | None = None
    last_used_at: datetime | None = None
    status: str = "active"

    @property
    def label(self) -> str:
        return self.display_name or self.merchant_name


class Bill(BaseModel):
    """Monthly bill keyed by day-of-month."""

    id: str
    name: str
    amount: Decimal
    due_date: int = Field(ge=1, le=31)
    is_paid: bool = False


class Debt(BaseModel):
    """Outstanding debt account."""

    id: str
    name: str
    balance: Decimal = Decimal(0)
    interest_rate: Decimal = Decimal(0)
    minimum_payment: Decimal = Decimal(0)


class Snapshot(BaseModel):
    """Point-in-time view of every domain the detectors read."""

    budgets: list[Budget] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    subscriptions: list[Subscription] = Field(default_factory=list)
    bills: list[Bill] = Field(default_factory=list)
    debts: list[Debt] = Field(default_factory=list)


# ── Alerts ──────────────────────────────────────────────────────


class Severity(IntEnum):
    """Alert severity. The value is the feed sort tier; lower sorts first."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    SUCCESS = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class AlertCategory(StrEnum):
    """Kind of condition an alert reports."""

    BUDGET_EXCEEDED = "budget_exceeded"
    BUDGET_WARNING = "budget_warning"
    GOAL_MILESTONE = "goal_milestone"
    GOAL_DEADLINE_APPROACHING = "goal_deadline"
    GOAL_OVERDUE = "goal_overdue"
    SUBSCRIPTION_RENEWAL = "subscription_renewal"
    SUBSCRIPTION_UNUSED = "subscription_unused"
    BILL_UPCOMING = "bill_upcoming"
    BILL_OVERDUE = "bill_overdue"
    DEBT_HIGH_INTEREST = "debt_high_interest"
    DEBT_MONTHLY_REMINDER = "debt_monthly_reminder"
    LARGE_TRANSACTION = "large_transaction"
    UNUSUAL_SPENDING_WEEK = "unusual_spending_week"


class Alert(BaseModel):
    """Transient notification derived from one qualifying condition.

    Only ``id`` outlives a refresh, through the dismissed/read id sets.
    ``read`` is stamped at feed-assembly time.
    """

    id: str
    category: AlertCategory
    severity: Severity
    title: str
    message: str
    display_time: str = ""
    route: str | None = None
    rank: int = 0
    read: bool = False
    entity_id: str = ""
    bucket: str | None = None

    @field_validator("id")
    @classmethod
    def _id_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("alert id must not be empty")
        return v


class NotificationState(BaseModel):
    """Persisted user actions, keyed by alert id."""

    dismissed_ids: set[str] = Field(default_factory=set)
    read_ids: set[str] = Field(default_factory=set)


class FeedPage(BaseModel):
    """One page of the ranked feed."""

    items: list[Alert] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
    has_more: bool = False
