"""
Category Allocator Module

Splits a total budget across categories by percentage weight, converts
amounts back to percentages, validates budget definitions and reconciles
planned category amounts against actual spend.
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable

import yaml

from .exceptions import ValidationError
from .models import Budget, CategoryBudget, CategoryVariance, SpendSummary
from .money import HUNDRED, from_cents, round_money, round_percentage, to_cents, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = {
    "Menswear": 25,
    "Womenswear": 35,
    "Kidswear": 15,
    "Accessories": 15,
    "Shoes": 10,
}


class CategoryAllocator:
    """Allocates budget amounts to categories."""

    DEFAULT_WEIGHT_TOLERANCE = Decimal("0.001")
    DEFAULT_AMOUNT_TOLERANCE = Decimal("0.01")

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize the allocator.

        Args:
            config_dir: Path to configuration directory
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent.parent.parent / "config"
        self._load_config()

    def _load_config(self) -> None:
        """Load allocation configuration."""
        config_file = self.config_dir / "budget_config.yaml"
        config = {}
        if config_file.exists():
            with open(config_file) as f:
                config = yaml.safe_load(f) or {}
            logger.info(f"Loaded allocation config from {config_file}")
        else:
            logger.debug("No budget config found, using default weights")

        weights = config.get("default_weights") or DEFAULT_WEIGHTS
        self.default_weight_table = {name: to_decimal(pct) for name, pct in weights.items()}

        allocation = config.get("allocation", {})
        self.weight_tolerance = to_decimal(
            allocation.get("weight_tolerance", self.DEFAULT_WEIGHT_TOLERANCE)
        )
        self.amount_tolerance = to_decimal(
            allocation.get("amount_tolerance", self.DEFAULT_AMOUNT_TOLERANCE)
        )

    def default_weights(self, names: Iterable[str]) -> list[dict]:
        """Default weights for the given category names.

        Names missing from the default table get 0%.
        """
        return [
            {"name": name, "percentage": self.default_weight_table.get(name, Decimal("0"))}
            for name in names
        ]

    def allocate(self, total_amount: Any, weights: list[dict] | None = None) -> list[dict]:
        """Derive per-category amounts from percentage weights.

        Each amount is rounded half up to the cent. The last weighted category
        absorbs the rounding residual so the amounts add up exactly to the
        weighted share of the total (the whole total when weights sum to 100).
        An overshoot larger than that category's share is taken back from the
        preceding categories, so no amount goes below zero.

        Args:
            total_amount: Total budget, >= 0
            weights: Ordered list of {"name", "percentage"}; defaults to the
                default weight table

        Returns:
            List of {"name", "amount"} in input order

        Raises:
            ValidationError: Negative total or weight, duplicate name, or
                weights summing above 100
        """
        total = to_decimal(total_amount)
        if total < 0:
            raise ValidationError(f"Total amount must not be negative: {total}")

        if weights is None:
            weights = self.default_weights(self.default_weight_table)

        names = []
        percentages = []
        for weight in weights:
            name = weight["name"]
            pct = to_decimal(weight.get("percentage", 0))
            if pct < 0:
                raise ValidationError(f"Percentage for {name} must not be negative")
            if name in names:
                raise ValidationError(f"Duplicate category name: {name}")
            names.append(name)
            percentages.append(pct)

        weight_sum = sum(percentages, Decimal("0"))
        if weight_sum > HUNDRED + self.weight_tolerance:
            logger.warning(f"Rejected weights summing to {weight_sum}%")
            raise ValidationError(f"Category percentages sum to {weight_sum}%, which exceeds 100%")

        total_cents = to_cents(total)
        weighted_total = min(weight_sum, HUNDRED)
        target_cents = to_cents(Decimal(total_cents) * weighted_total / HUNDRED / 100)

        cents = [to_cents(Decimal(total_cents) * pct / HUNDRED / 100) for pct in percentages]

        residual = target_cents - sum(cents)
        if residual:
            weighted = [i for i, pct in enumerate(percentages) if pct > 0]
            absorber = weighted[-1]
            logger.debug(f"Applying {residual} cent residual ending at {names[absorber]}")
            if residual > 0:
                cents[absorber] += residual
            else:
                # Rounded-up shares can overshoot the target by more than the
                # last share holds; take the excess back from the end.
                for i in reversed(weighted):
                    taken = min(cents[i], -residual)
                    cents[i] -= taken
                    residual += taken
                    if not residual:
                        break

        return [
            {"name": name, "amount": from_cents(amount)}
            for name, amount in zip(names, cents)
        ]

    def auto_allocate(self, total_amount: Any, names: Iterable[str]) -> list[CategoryBudget]:
        """Allocate a total across named categories using the default weights."""
        weights = self.default_weights(names)
        allocation = self.allocate(total_amount, weights)
        return [
            CategoryBudget(name=item["name"], amount=item["amount"], percentage=weight["percentage"])
            for item, weight in zip(allocation, weights)
        ]

    def amount_to_percentage(self, amount: Any, total_amount: Any) -> Decimal:
        """Express an amount as a percentage of the total (1 dp).

        Returns 0 when the total is 0.
        """
        total = to_decimal(total_amount)
        if total < 0:
            raise ValidationError(f"Total amount must not be negative: {total}")
        if total == 0:
            return Decimal("0.0")
        return round_percentage(to_decimal(amount) / total * HUNDRED)

    def validate_budget(self, budget: Budget) -> None:
        """Check a budget definition for consistency.

        Raises:
            ValidationError: On the first inconsistency found
        """
        if budget.total_amount < 0:
            raise ValidationError("Total budget must not be negative")

        if not 0 <= budget.alert_threshold <= 100:
            raise ValidationError(
                f"Alert threshold must be between 0 and 100, got {budget.alert_threshold}"
            )

        seen = set()
        for category in budget.categories:
            if not category.name:
                raise ValidationError("Category name is required")
            if category.name in seen:
                raise ValidationError(f"Duplicate category name: {category.name}")
            seen.add(category.name)
            if category.amount < 0:
                raise ValidationError(f"Amount for {category.name} must not be negative")
            if not 0 <= category.percentage <= 100:
                raise ValidationError(
                    f"Percentage for {category.name} must be between 0 and 100"
                )

        total_percentage = sum((c.percentage for c in budget.categories), Decimal("0"))
        if total_percentage > HUNDRED + self.weight_tolerance:
            raise ValidationError(f"Category percentages sum to {total_percentage}%, which exceeds 100%")

        if budget.auto_allocate:
            total_category_amount = sum((c.amount for c in budget.categories), Decimal("0"))
            if abs(total_category_amount - budget.total_amount) > self.amount_tolerance:
                logger.warning(f"Budget {budget.id} category amounts do not match total")
                raise ValidationError(
                    f"Category amounts ({round_money(total_category_amount)}) "
                    f"don't match total budget ({round_money(budget.total_amount)})"
                )

    def reconcile(self, budget: Budget, summary: SpendSummary) -> list[CategoryVariance]:
        """Compare planned category amounts with actual spend.

        Budget categories come first in budget order, followed by any spent
        category the budget does not plan for (planned 0).
        """
        variances = [
            CategoryVariance(
                name=category.name,
                planned=category.amount,
                actual=summary.by_category.get(category.name, Decimal("0.00")),
            )
            for category in budget.categories
        ]

        planned_names = {category.name for category in budget.categories}
        for name, actual in summary.by_category.items():
            if name not in planned_names:
                variances.append(CategoryVariance(name=name, planned=Decimal("0.00"), actual=actual))

        return variances
