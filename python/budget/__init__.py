"""
Budget Tracking Module

Category allocation, budget periods, spend aggregation, alert evaluation,
purchase planning and spending reports for the wardrobe budget.
"""

from .exceptions import DivisionError, ValidationError
from .models import (
    Alert,
    AlertSeverity,
    Budget,
    BudgetPeriod,
    CategoryBudget,
    CategoryVariance,
    PeriodWindow,
    PurchaseRecord,
    SpendSummary,
    SpendTrend,
)
from .category_allocator import CategoryAllocator, DEFAULT_WEIGHTS
from .period_resolver import previous_window, resolve, to_utc_date
from .spend_aggregator import (
    MonthlySpend,
    SpendingOverview,
    aggregate,
    compare_trend,
    monthly_breakdown,
    spending_overview,
)
from .alert_evaluator import AlertEvaluator
from .planner import BudgetAnalytics, BudgetPlanner, PurchasePlan, Recommendation
from .tracker import BudgetStatus, BudgetTracker
from .report_generator import SpendingReportGenerator

__all__ = [
    # Errors
    "ValidationError",
    "DivisionError",
    # Data model
    "Alert",
    "AlertSeverity",
    "Budget",
    "BudgetPeriod",
    "CategoryBudget",
    "CategoryVariance",
    "PeriodWindow",
    "PurchaseRecord",
    "SpendSummary",
    "SpendTrend",
    # Allocation
    "CategoryAllocator",
    "DEFAULT_WEIGHTS",
    # Periods
    "resolve",
    "previous_window",
    "to_utc_date",
    # Aggregation
    "aggregate",
    "compare_trend",
    "monthly_breakdown",
    "spending_overview",
    "MonthlySpend",
    "SpendingOverview",
    # Alerts
    "AlertEvaluator",
    # Planning
    "BudgetPlanner",
    "BudgetAnalytics",
    "PurchasePlan",
    "Recommendation",
    # Tracking and reporting
    "BudgetTracker",
    "BudgetStatus",
    "SpendingReportGenerator",
]
