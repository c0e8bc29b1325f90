"""
Budget Period Resolver Module

Turns a period kind and a reference date into an inclusive date window.
All computation is date-only; timestamps are truncated to their UTC date first.
"""

import calendar
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any

from .exceptions import ValidationError
from .models import BudgetPeriod, PeriodWindow

logger = logging.getLogger(__name__)


def to_utc_date(value: Any) -> date:
    """Truncate a date, datetime or ISO string to a UTC calendar date.

    Naive datetimes are taken to already be in UTC.

    Args:
        value: date, datetime or ISO-8601 string

    Returns:
        date

    Raises:
        ValidationError: If the value cannot be interpreted as a date
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    if isinstance(value, date):
        return value

    raise ValidationError(f"Invalid date: {value!r}")


def parse_period(period: BudgetPeriod | str) -> BudgetPeriod:
    """Normalize a period kind.

    Raises:
        ValidationError: For an unknown period
    """
    if isinstance(period, BudgetPeriod):
        return period
    try:
        return BudgetPeriod(str(period).lower())
    except ValueError:
        raise ValidationError(f"Unknown budget period: {period!r}")


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def resolve(
    period: BudgetPeriod | str,
    reference_date: Any,
    start_date: Any = None,
    end_date: Any = None,
) -> PeriodWindow:
    """Compute the inclusive window of the period containing reference_date.

    Args:
        period: weekly, monthly, quarterly, yearly or custom
        reference_date: Any date inside the wanted period
        start_date: Explicit start, custom periods only
        end_date: Explicit end, custom periods only

    Returns:
        PeriodWindow

    Raises:
        ValidationError: Unknown period, bad dates, or custom end before start
    """
    period = parse_period(period)

    if period == BudgetPeriod.CUSTOM:
        if start_date is None or end_date is None:
            raise ValidationError("Custom period requires both a start and an end date")
        start = to_utc_date(start_date)
        end = to_utc_date(end_date)
        if end < start:
            logger.warning(f"Rejected custom window {start} .. {end}")
            raise ValidationError(
                f"End date ({end.isoformat()}) is before start date ({start.isoformat()})"
            )
        return PeriodWindow(start_date=start, end_date=end)

    ref = to_utc_date(reference_date)

    if period == BudgetPeriod.WEEKLY:
        # Weeks start on Sunday
        days_since_sunday = (ref.weekday() + 1) % 7
        start = ref - timedelta(days=days_since_sunday)
        end = start + timedelta(days=6)
    elif period == BudgetPeriod.MONTHLY:
        start = ref.replace(day=1)
        end = _last_day_of_month(ref.year, ref.month)
    elif period == BudgetPeriod.QUARTERLY:
        first_month = (ref.month - 1) // 3 * 3 + 1
        start = date(ref.year, first_month, 1)
        end = _last_day_of_month(ref.year, first_month + 2)
    else:
        start = date(ref.year, 1, 1)
        end = date(ref.year, 12, 31)

    logger.debug(f"Resolved {period.value} window for {ref}: {start} .. {end}")
    return PeriodWindow(start_date=start, end_date=end)


def previous_window(period: BudgetPeriod | str, window: PeriodWindow) -> PeriodWindow:
    """Window of the period immediately before ``window``.

    Custom windows are shifted back by their own length.
    """
    period = parse_period(period)
    day_before = window.start_date - timedelta(days=1)

    if period == BudgetPeriod.CUSTOM:
        start = window.start_date - timedelta(days=window.days)
        return PeriodWindow(start_date=start, end_date=day_before)

    return resolve(period, day_before)
