"""
Budget Tracker Module

Runs the full budget check: validate the budget, resolve its window,
aggregate spending, compare with the previous period, reconcile categories
and evaluate alerts.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from .alert_evaluator import AlertEvaluator
from .category_allocator import CategoryAllocator
from .models import (
    Alert,
    Budget,
    CategoryVariance,
    PurchaseRecord,
    SpendSummary,
    SpendTrend,
)
from .period_resolver import previous_window, resolve
from .spend_aggregator import aggregate, compare_trend

logger = logging.getLogger(__name__)


@dataclass
class BudgetStatus:
    """Everything known about a budget for one window."""

    budget: Budget
    summary: SpendSummary
    alert: Alert
    category_variances: list[CategoryVariance] = field(default_factory=list)
    category_alerts: dict[str, Alert] = field(default_factory=dict)
    previous_summary: SpendSummary | None = None
    trend: SpendTrend | None = None
    trend_alert: Alert | None = None

    @property
    def alerts(self) -> list[Alert]:
        """All alerts worth showing, overall alert first."""
        alerts = [self.alert] if self.alert.should_notify else []
        alerts.extend(self.category_alerts.values())
        if self.trend_alert:
            alerts.append(self.trend_alert)
        return alerts

    def to_dict(self) -> dict:
        return {
            "budget": self.budget.to_dict(),
            "summary": self.summary.to_dict(),
            "alert": self.alert.to_dict(),
            "category_variances": [v.to_dict() for v in self.category_variances],
            "category_alerts": {k: v.to_dict() for k, v in self.category_alerts.items()},
            "previous_summary": self.previous_summary.to_dict() if self.previous_summary else None,
            "trend": self.trend.to_dict() if self.trend else None,
            "trend_alert": self.trend_alert.to_dict() if self.trend_alert else None,
        }


class BudgetTracker:
    """Tracks spending against a budget."""

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize the tracker.

        Args:
            config_dir: Path to configuration directory
        """
        self.allocator = CategoryAllocator(config_dir)
        self.evaluator = AlertEvaluator(config_dir)

    def track(
        self,
        budget: Budget,
        records: Iterable[PurchaseRecord],
        reference_date: Any,
        compare_previous: bool = True,
    ) -> BudgetStatus:
        """Build the status of ``budget`` for the period containing reference_date.

        Args:
            budget: Budget definition
            records: Purchase records from the wardrobe store
            reference_date: Date inside the period to report on
            compare_previous: Also aggregate the previous period for a trend

        Returns:
            BudgetStatus

        Raises:
            ValidationError: If the budget or its window is invalid
        """
        self.allocator.validate_budget(budget)
        records = list(records)

        window = resolve(budget.period, reference_date, budget.start_date, budget.end_date)
        summary = aggregate(records, window)
        alert = self.evaluator.evaluate(summary, budget)

        variances = self.allocator.reconcile(budget, summary)
        status = BudgetStatus(
            budget=budget,
            summary=summary,
            alert=alert,
            category_variances=variances,
            category_alerts=self.evaluator.evaluate_categories(
                [v for v in variances if v.planned > 0 or v.actual > 0],
                budget.alert_threshold,
            ),
        )

        if compare_previous:
            status.previous_summary = aggregate(records, previous_window(budget.period, window))
            status.trend = compare_trend(summary, status.previous_summary)
            status.trend_alert = self.evaluator.evaluate_trend(status.trend)

        logger.info(
            f"Tracked budget {budget.id} ({window.start_date} .. {window.end_date}): "
            f"{summary.total_spent} spent, {alert.severity.value}"
        )
        return status
