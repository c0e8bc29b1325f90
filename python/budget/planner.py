"""
Budget Planner Module

Checks whether a planned purchase fits the remaining budget and projects
period-end spending from the current pace.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ValidationError
from .models import Budget, SpendSummary
from .money import HUNDRED, format_currency, format_percentage, round_money, to_decimal
from .period_resolver import to_utc_date

logger = logging.getLogger(__name__)


@dataclass
class Recommendation:
    """Advice attached to a plan or analysis."""

    type: str  # 'warning', 'caution', 'alert'
    message: str
    suggestion: str = ""

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message, "suggestion": self.suggestion}


@dataclass
class PurchasePlan:
    """Affordability of a planned purchase."""

    estimated_cost: Decimal
    total_budget: Decimal
    current_spending: Decimal
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def remaining_budget(self) -> Decimal:
        return self.total_budget - self.current_spending

    @property
    def can_afford(self) -> bool:
        return self.remaining_budget >= self.estimated_cost

    def to_dict(self) -> dict:
        return {
            "estimated_cost": float(self.estimated_cost),
            "total_budget": float(self.total_budget),
            "current_spending": float(self.current_spending),
            "remaining_budget": float(self.remaining_budget),
            "can_afford": self.can_afford,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass
class BudgetAnalytics:
    """Utilization and projection for a budget window."""

    total_budget: Decimal
    total_spent: Decimal
    utilization_rate: Decimal
    projected_spending: Decimal
    days_elapsed: int
    days_in_period: int
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def remaining_budget(self) -> Decimal:
        return self.total_budget - self.total_spent

    def to_dict(self) -> dict:
        return {
            "total_budget": float(self.total_budget),
            "total_spent": float(self.total_spent),
            "remaining_budget": float(self.remaining_budget),
            "utilization_rate": float(self.utilization_rate),
            "projected_spending": float(self.projected_spending),
            "days_elapsed": self.days_elapsed,
            "days_in_period": self.days_in_period,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


class BudgetPlanner:
    """Purchase planning and budget projections."""

    DEFAULT_LARGE_PURCHASE_RATIO = Decimal("0.5")
    DEFAULT_HIGH_UTILIZATION = Decimal("90")

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize the planner.

        Args:
            config_dir: Path to configuration directory
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent.parent.parent / "config"
        self._load_config()

    def _load_config(self) -> None:
        """Load planning configuration."""
        config_file = self.config_dir / "budget_config.yaml"
        config = {}
        if config_file.exists():
            with open(config_file) as f:
                config = yaml.safe_load(f) or {}

        planning = config.get("planning", {})
        self.large_purchase_ratio = to_decimal(
            planning.get("large_purchase_ratio", self.DEFAULT_LARGE_PURCHASE_RATIO)
        )
        self.high_utilization = to_decimal(
            planning.get("high_utilization_percent", self.DEFAULT_HIGH_UTILIZATION)
        )
        self.currency_symbol = config.get("currency", {}).get("symbol", "$")

    def plan_purchase(self, total_budget: Any, current_spending: Any, estimated_cost: Any) -> PurchasePlan:
        """Check a planned purchase against the remaining budget.

        Args:
            total_budget: Budget limit
            current_spending: Amount already spent
            estimated_cost: Estimated cost of the planned purchase

        Returns:
            PurchasePlan with recommendations

        Raises:
            ValidationError: If any amount is negative
        """
        plan = PurchasePlan(
            estimated_cost=round_money(estimated_cost),
            total_budget=round_money(total_budget),
            current_spending=round_money(current_spending),
        )
        if min(plan.estimated_cost, plan.total_budget, plan.current_spending) < 0:
            raise ValidationError("Planning amounts must not be negative")

        remaining = plan.remaining_budget

        if not plan.can_afford:
            shortfall = plan.estimated_cost - remaining
            plan.recommendations.append(Recommendation(
                type="warning",
                message=f"Budget shortfall of {format_currency(shortfall, self.currency_symbol)}",
                suggestion="Consider reducing the budget or postponing some purchases",
            ))

        if plan.estimated_cost > remaining * self.large_purchase_ratio:
            plan.recommendations.append(Recommendation(
                type="caution",
                message=(
                    f"This purchase will use more than "
                    f"{format_percentage(self.large_purchase_ratio * HUNDRED)}% of your remaining budget"
                ),
                suggestion="Consider spreading purchases over multiple months",
            ))

        return plan

    def analyze(self, budget: Budget, summary: SpendSummary, as_of: Any) -> BudgetAnalytics:
        """Project period-end spending from the pace so far.

        Args:
            budget: Budget being tracked
            summary: Spending in the budget window
            as_of: Date up to which spending is known

        Returns:
            BudgetAnalytics
        """
        window = summary.period_window
        as_of = to_utc_date(as_of)
        days_in_period = window.days

        if as_of < window.start_date:
            days_elapsed = 0
        elif as_of > window.end_date:
            days_elapsed = days_in_period
        else:
            days_elapsed = (as_of - window.start_date).days + 1

        if days_elapsed:
            projected = round_money(summary.total_spent / days_elapsed * days_in_period)
        else:
            projected = summary.total_spent

        if budget.total_amount > 0:
            utilization = round_money(summary.total_spent / budget.total_amount * HUNDRED)
        else:
            utilization = Decimal("0.00")

        analytics = BudgetAnalytics(
            total_budget=budget.total_amount,
            total_spent=summary.total_spent,
            utilization_rate=utilization,
            projected_spending=projected,
            days_elapsed=days_elapsed,
            days_in_period=days_in_period,
        )

        if utilization > self.high_utilization:
            analytics.recommendations.append(Recommendation(
                type="warning",
                message=(
                    f"Budget utilization is over {format_percentage(self.high_utilization)}%. "
                    f"Consider reducing spending for the rest of the period."
                ),
            ))

        if projected > budget.total_amount:
            overage = format_currency(projected - budget.total_amount, self.currency_symbol)
            analytics.recommendations.append(Recommendation(
                type="alert",
                message=f"Based on current spending patterns, you may exceed your budget by {overage}",
            ))

        logger.debug(
            f"Budget {budget.id}: {utilization}% used, projected {projected} "
            f"after {days_elapsed}/{days_in_period} days"
        )
        return analytics
