from __future__ import annotations

import datetime as dt
from calendar import monthrange
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from expense_tracker.models.category import category_keys, describe_category, is_known_category
from expense_tracker.models.expense import Expense, TimeWindow
from expense_tracker.utils.budget_evaluator import evaluate_budgets

ZERO = Decimal("0")
HUNDRED = Decimal("100")

WINDOW_MONTHS = {
    TimeWindow.SIX_MONTHS: 6,
    TimeWindow.ONE_YEAR: 12,
}


@dataclass(frozen=True)
class CategoryTotal:
    """Spend for one category across the whole expense snapshot."""

    category: str
    total: Decimal

    @property
    def label(self) -> str:
        return describe_category(self.category).label

    @property
    def emoji(self) -> str:
        return describe_category(self.category).emoji

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "label": self.label,
            "emoji": self.emoji,
            "total": str(self.total),
        }


@dataclass(frozen=True)
class MonthlyBucket:
    """One calendar month of the trend series."""

    month_start: dt.date
    month_end: dt.date
    total: Decimal
    expenses: Tuple[Expense, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return self.month_start.strftime("%b %Y")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.label,
            "month_start": self.month_start.isoformat(),
            "month_end": self.month_end.isoformat(),
            "total": str(self.total),
            "expense_ids": [exp.id for exp in self.expenses],
        }


def grand_total(expenses: Iterable[Expense]) -> Decimal:
    return sum((exp.amount for exp in expenses), ZERO)


def category_totals(expenses: Iterable[Expense]) -> List[CategoryTotal]:
    """
    Group expenses by category and sum their amounts exactly.

    Categories without expenses are left out. Registered categories come
    first in canonical order, unknown ones follow in first-seen order.
    """
    totals: Dict[str, Decimal] = {}
    for exp in expenses:
        totals[exp.category] = totals.get(exp.category, ZERO) + exp.amount

    ordered = [key for key in category_keys() if key in totals]
    ordered.extend(key for key in totals if not is_known_category(key))
    return [CategoryTotal(category=key, total=totals[key]) for key in ordered]


def category_percentages(totals: Sequence[CategoryTotal]) -> Dict[str, Decimal]:
    """Share of the grand total per category, 0 everywhere when nothing was spent."""
    overall = sum((item.total for item in totals), ZERO)
    if overall == 0:
        return {item.category: ZERO for item in totals}
    return {item.category: HUNDRED * item.total / overall for item in totals}


def relative_widths(values: Sequence[Decimal]) -> List[Decimal]:
    """Scale values against the largest one (0-100), all zero if the largest is zero."""
    if not values:
        return []
    largest = max(values)
    if largest <= 0:
        return [ZERO for _ in values]
    return [HUNDRED * value / largest for value in values]


def month_bounds(month: dt.date) -> Tuple[dt.date, dt.date]:
    start = month.replace(day=1)
    return start, start.replace(day=monthrange(start.year, start.month)[1])


def month_range(start: dt.date, end: dt.date) -> List[dt.date]:
    """First day of every calendar month between start and end, both inclusive."""
    if start > end:
        return []

    months = []
    current = start.replace(day=1)
    while current <= end:
        months.append(current)
        current += relativedelta(months=1)
    return months


def window_bounds(
    window: TimeWindow,
    now: dt.date,
    expenses: Sequence[Expense] = (),
) -> Tuple[dt.date, dt.date]:
    """
    Resolve a time window to a [start, end] date range ending at now.

    ALL_TIME starts at the earliest expense, or at now when there are none,
    so the series never pads decades of empty months.
    """
    window = TimeWindow(window)
    if window == TimeWindow.ALL_TIME:
        start = min((exp.date for exp in expenses), default=now)
    else:
        start = now - relativedelta(months=WINDOW_MONTHS[window])
    return start, now


def monthly_trends(
    expenses: Iterable[Expense],
    window: TimeWindow = TimeWindow.SIX_MONTHS,
    now: Optional[dt.date] = None,
) -> List[MonthlyBucket]:
    """
    Build the chronological month-by-month spend series for a window.

    Every month in range gets a bucket, including months without expenses.
    Expenses are grouped by (year, month) in a single pass before the
    months are walked.
    """
    snapshot = list(expenses)
    now = now or dt.date.today()
    start, end = window_bounds(window, now, snapshot)

    by_month: Dict[Tuple[int, int], List[Expense]] = defaultdict(list)
    for exp in snapshot:
        by_month[(exp.date.year, exp.date.month)].append(exp)

    buckets = []
    for month in month_range(start, end):
        month_start, month_end = month_bounds(month)
        matched = tuple(by_month.get((month.year, month.month), ()))
        buckets.append(
            MonthlyBucket(
                month_start=month_start,
                month_end=month_end,
                total=grand_total(matched),
                expenses=matched,
            )
        )
    return buckets


def summarize(
    expenses: Iterable[Expense],
    budgets: Mapping[str, Decimal],
    window: TimeWindow = TimeWindow.SIX_MONTHS,
    now: Optional[dt.date] = None,
) -> Dict[str, Any]:
    """Full analytics payload for the presentation layer, amounts as decimal strings."""
    snapshot = list(expenses)
    window = TimeWindow(window)
    totals = category_totals(snapshot)
    shares = category_percentages(totals)
    category_widths = relative_widths([item.total for item in totals])
    trends = monthly_trends(snapshot, window, now)
    trend_widths = relative_widths([bucket.total for bucket in trends])

    return {
        "window": window.value,
        "total_spent": str(grand_total(snapshot)),
        "expense_count": len(snapshot),
        "category_totals": [
            {**item.to_dict(), "percentage": str(shares[item.category]), "width": str(width)}
            for item, width in zip(totals, category_widths)
        ],
        "monthly_trends": [
            {**bucket.to_dict(), "width": str(width)}
            for bucket, width in zip(trends, trend_widths)
        ],
        "budgets": [status.to_dict() for status in evaluate_budgets(totals, budgets)],
    }
