"""
Spend Aggregator Module

Aggregates purchase records into spending summaries for a window, compares
consecutive periods, and builds yearly breakdowns.
"""

import calendar
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .exceptions import ValidationError
from .models import PeriodWindow, PurchaseRecord, SpendSummary, SpendTrend
from .money import from_cents, percentage_of, round_money, to_cents
from .period_resolver import resolve, to_utc_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlySpend:
    """Spending for one calendar month."""

    month: int
    total: Decimal
    item_count: int

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "month_name": self.month_name,
            "total": float(self.total),
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class SpendingOverview:
    """Yearly spending totals and averages."""

    year: int
    total_spending: Decimal
    total_items: int
    average_per_item: Decimal
    average_per_month: Decimal

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "total_spending": float(self.total_spending),
            "total_items": self.total_items,
            "average_per_item": float(self.average_per_item),
            "average_per_month": float(self.average_per_month),
        }


def _record_cents(record: PurchaseRecord) -> int:
    if record.amount < 0:
        raise ValidationError(f"Purchase {record.id} has a negative amount")
    return to_cents(record.amount)


def aggregate(records: Iterable[PurchaseRecord], window: PeriodWindow) -> SpendSummary:
    """Summarize spending of the records falling inside ``window``.

    Amounts are accumulated in integer cents. Category keys keep the order
    in which each category was first seen.

    Args:
        records: Purchase records (not modified)
        window: Inclusive date window

    Returns:
        SpendSummary

    Raises:
        ValidationError: If a record inside the window has a negative amount
    """
    total_cents = 0
    category_cents: dict[str, int] = {}
    item_count = 0

    for record in records:
        if not window.contains(to_utc_date(record.purchase_date)):
            continue

        cents = _record_cents(record)
        total_cents += cents
        category_cents[record.category_name] = category_cents.get(record.category_name, 0) + cents
        item_count += 1

    logger.debug(
        f"Aggregated {item_count} purchases for {window.start_date} .. {window.end_date}"
    )

    return SpendSummary(
        period_window=window,
        total_spent=from_cents(total_cents),
        by_category={name: from_cents(cents) for name, cents in category_cents.items()},
        item_count=item_count,
    )


def compare_trend(current: SpendSummary, previous: SpendSummary) -> SpendTrend:
    """Change in total spend from ``previous`` to ``current``.

    The percentage is None when the previous period had no spending.
    """
    change = current.total_spent - previous.total_spent
    if previous.total_spent == 0:
        return SpendTrend(change_amount=change, change_percentage=None)
    return SpendTrend(
        change_amount=change,
        change_percentage=percentage_of(change, previous.total_spent),
    )


def monthly_breakdown(records: Iterable[PurchaseRecord], year: int) -> list[MonthlySpend]:
    """Spending per calendar month of ``year``, months without spending omitted."""
    window = resolve("yearly", f"{year:04d}-01-01")
    totals: dict[int, list[int]] = {}

    for record in records:
        day = to_utc_date(record.purchase_date)
        if not window.contains(day):
            continue
        bucket = totals.setdefault(day.month, [0, 0])
        bucket[0] += _record_cents(record)
        bucket[1] += 1

    return [
        MonthlySpend(month=month, total=from_cents(cents), item_count=count)
        for month, (cents, count) in sorted(totals.items())
    ]


def spending_overview(records: Iterable[PurchaseRecord], year: int) -> SpendingOverview:
    """Total, item count and averages for ``year``."""
    months = monthly_breakdown(records, year)
    total = sum((m.total for m in months), Decimal("0.00"))
    items = sum(m.item_count for m in months)

    return SpendingOverview(
        year=year,
        total_spending=total,
        total_items=items,
        average_per_item=round_money(total / items) if items else Decimal("0.00"),
        average_per_month=round_money(total / 12),
    )
