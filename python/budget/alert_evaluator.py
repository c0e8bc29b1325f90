"""
Budget Alert Evaluator Module

Classifies spend against a budget limit into an alert severity. Evaluation
is stateless: identical inputs always produce the identical alert.
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from .models import Alert, AlertSeverity, Budget, CategoryVariance, SpendSummary, SpendTrend
from .money import HUNDRED, format_currency, format_percentage, round_money, to_decimal

logger = logging.getLogger(__name__)


class AlertEvaluator:
    """Evaluates budget utilization and spending trends."""

    DEFAULT_THRESHOLD = 80
    DEFAULT_LIMIT_TOLERANCE = Decimal("0.001")
    DEFAULT_TREND_INCREASE = Decimal("50")

    DEFAULT_MESSAGES = {
        "approaching": "{pct}% of budget used. {remaining} remaining.",
        "warning": "Budget limit reached.",
        "exceeded": "Budget exceeded by {overage}.",
        "trend": "Spending increased by {pct}% from last period.",
    }

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize the evaluator.

        Args:
            config_dir: Path to configuration directory
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent.parent.parent / "config"
        self._load_config()

    def _load_config(self) -> None:
        """Load alert configuration."""
        config_file = self.config_dir / "budget_config.yaml"
        config = {}
        if config_file.exists():
            with open(config_file) as f:
                config = yaml.safe_load(f) or {}

        alerts = config.get("alerts", {})
        self.default_threshold = int(alerts.get("default_threshold", self.DEFAULT_THRESHOLD))
        self.limit_tolerance = to_decimal(alerts.get("limit_tolerance", self.DEFAULT_LIMIT_TOLERANCE))
        self.trend_increase = to_decimal(
            alerts.get("trend_increase_percent", self.DEFAULT_TREND_INCREASE)
        )
        self.messages = {**self.DEFAULT_MESSAGES, **(alerts.get("messages") or {})}
        self.currency_symbol = config.get("currency", {}).get("symbol", "$")

    def classify(self, spent: Any, limit: Any, threshold: int | None = None) -> Alert:
        """Classify an amount spent against a limit.

        Args:
            spent: Amount spent
            limit: Spending limit
            threshold: Percentage at which "approaching" starts

        Returns:
            Alert
        """
        spent = to_decimal(spent)
        limit = to_decimal(limit)
        threshold = self.default_threshold if threshold is None else threshold
        remaining = round_money(limit - spent)

        if limit == 0:
            if spent > 0:
                return self._exceeded(round_money(spent))
            return Alert(severity=AlertSeverity.NONE, message="", amount_over_or_remaining=remaining)

        ratio = spent / limit

        if ratio > 1 + self.limit_tolerance:
            return self._exceeded(round_money(spent - limit))

        if abs(ratio - 1) <= self.limit_tolerance:
            return Alert(
                severity=AlertSeverity.WARNING,
                message=self.messages["warning"],
                amount_over_or_remaining=remaining,
            )

        if ratio >= Decimal(threshold) / HUNDRED:
            message = self.messages["approaching"].format(
                pct=format_percentage(ratio * HUNDRED),
                remaining=format_currency(remaining, self.currency_symbol),
            )
            return Alert(
                severity=AlertSeverity.APPROACHING,
                message=message,
                amount_over_or_remaining=remaining,
            )

        return Alert(severity=AlertSeverity.NONE, message="", amount_over_or_remaining=remaining)

    def _exceeded(self, overage: Decimal) -> Alert:
        return Alert(
            severity=AlertSeverity.EXCEEDED,
            message=self.messages["exceeded"].format(
                overage=format_currency(overage, self.currency_symbol)
            ),
            amount_over_or_remaining=overage,
        )

    def evaluate(self, summary: SpendSummary, budget: Budget, threshold: int | None = None) -> Alert:
        """Classify a spending summary against a budget.

        Args:
            summary: Spending in the budget window
            budget: Budget providing the limit and alert threshold
            threshold: Overrides the budget's alert threshold

        Returns:
            Alert
        """
        if threshold is None:
            threshold = budget.alert_threshold
        alert = self.classify(summary.total_spent, budget.total_amount, threshold)
        if alert.should_notify:
            logger.info(f"Budget {budget.id}: {alert.severity.value} - {alert.message}")
        return alert

    def evaluate_categories(
        self,
        variances: list[CategoryVariance],
        threshold: int | None = None,
    ) -> dict[str, Alert]:
        """Classify each category's actual spend against its planned amount.

        Only categories with a severity above none are returned.
        """
        alerts = {}
        for variance in variances:
            alert = self.classify(variance.actual, variance.planned, threshold)
            if alert.severity != AlertSeverity.NONE:
                alerts[variance.name] = alert
        return alerts

    def evaluate_trend(self, trend: SpendTrend) -> Alert | None:
        """Alert when spending rose more than the configured percentage."""
        if trend.change_percentage is None or trend.change_percentage <= self.trend_increase:
            return None
        return Alert(
            severity=AlertSeverity.WARNING,
            message=self.messages["trend"].format(pct=format_percentage(trend.change_percentage)),
            amount_over_or_remaining=trend.change_amount,
        )
