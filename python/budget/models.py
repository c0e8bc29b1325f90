"""
Budget Data Model

Value types shared by the allocator, period resolver, spend aggregator and
alert evaluator. Inputs are frozen so the computations never mutate them.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .money import percentage_of


class BudgetPeriod(str, Enum):
    """Recurring budget cycle, or a custom date range."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class AlertSeverity(str, Enum):
    """Ordered classification of spend relative to a limit."""

    NONE = "none"
    APPROACHING = "approaching"
    WARNING = "warning"
    EXCEEDED = "exceeded"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = [
    AlertSeverity.NONE,
    AlertSeverity.APPROACHING,
    AlertSeverity.WARNING,
    AlertSeverity.EXCEEDED,
]


@dataclass(frozen=True)
class CategoryBudget:
    """Planned allocation for one category of a budget."""

    name: str
    amount: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": float(self.amount),
            "percentage": float(self.percentage),
        }


@dataclass(frozen=True)
class Budget:
    """A spending budget with per-category allocations."""

    id: str
    name: str
    total_amount: Decimal
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date | None = None
    end_date: date | None = None
    categories: tuple[CategoryBudget, ...] = ()
    alert_threshold: int = 80
    auto_allocate: bool = True

    def category(self, name: str) -> CategoryBudget | None:
        """Look up a category by name."""
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "total_amount": float(self.total_amount),
            "period": self.period.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "categories": [c.to_dict() for c in self.categories],
            "alert_threshold": self.alert_threshold,
            "auto_allocate": self.auto_allocate,
        }


@dataclass(frozen=True)
class PurchaseRecord:
    """A dated, categorized purchase supplied by the wardrobe store."""

    id: str
    category_name: str
    amount: Decimal
    purchase_date: date


@dataclass(frozen=True)
class PeriodWindow:
    """Date range, inclusive on both ends."""

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class SpendSummary:
    """Spending within a window. Recomputed on every query, never stored.

    ``by_category`` is stored as a read-only mapping and is left out of the
    hash.
    """

    period_window: PeriodWindow
    total_spent: Decimal
    by_category: Mapping[str, Decimal] = field(default_factory=dict, hash=False)
    item_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "by_category", MappingProxyType(dict(self.by_category)))

    def category_shares(self) -> dict[str, Decimal]:
        """Percentage of total spend per category (0 when nothing spent)."""
        if self.total_spent == 0:
            return {name: Decimal("0.0") for name in self.by_category}
        return {
            name: percentage_of(amount, self.total_spent)
            for name, amount in self.by_category.items()
        }

    def to_dict(self) -> dict:
        return {
            "period_window": self.period_window.to_dict(),
            "total_spent": float(self.total_spent),
            "by_category": {k: float(v) for k, v in self.by_category.items()},
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class SpendTrend:
    """Change in total spend between two consecutive periods."""

    change_amount: Decimal
    change_percentage: Decimal | None

    @property
    def is_increase(self) -> bool:
        return self.change_amount > 0

    def to_dict(self) -> dict:
        return {
            "change_amount": float(self.change_amount),
            "change_percentage": (
                float(self.change_percentage) if self.change_percentage is not None else None
            ),
            "is_increase": self.is_increase,
        }


@dataclass(frozen=True)
class Alert:
    """Classification of spend against a limit."""

    severity: AlertSeverity
    message: str
    amount_over_or_remaining: Decimal

    @property
    def should_notify(self) -> bool:
        """True when the alert should be handed to notification dispatch."""
        return self.severity.rank >= AlertSeverity.APPROACHING.rank

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "amount_over_or_remaining": float(self.amount_over_or_remaining),
        }


@dataclass(frozen=True)
class CategoryVariance:
    """Planned vs. actual spend for one category."""

    name: str
    planned: Decimal
    actual: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.planned - self.actual

    @property
    def utilization_percent(self) -> Decimal:
        if self.planned == 0:
            return Decimal("0.0")
        return percentage_of(self.actual, self.planned)

    @property
    def is_over_budget(self) -> bool:
        return self.actual > self.planned

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "planned": float(self.planned),
            "actual": float(self.actual),
            "remaining": float(self.remaining),
            "utilization_percent": float(self.utilization_percent),
            "is_over_budget": self.is_over_budget,
        }
