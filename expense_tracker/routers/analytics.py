"""
Analytics Router
Category totals, monthly trends and the combined analytics summary
"""
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from expense_tracker.core.config import settings
from expense_tracker.core.deps import get_budget_store, get_expenses
from expense_tracker.core.exceptions import BudgetPersistenceError
from expense_tracker.models.expense import Expense, TimeWindow
from expense_tracker.utils import analyzer
from expense_tracker.utils.budget_store import BudgetStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _resolve_window(window: Optional[TimeWindow]) -> TimeWindow:
    return window or TimeWindow(settings.DEFAULT_TIME_WINDOW)


@router.get("/{user_id}/analytics")
def get_analytics_summary(
    user_id: str,
    window: Optional[TimeWindow] = None,
    expenses: List[Expense] = Depends(get_expenses),
    store: BudgetStore = Depends(get_budget_store),
) -> Dict:
    """
    Totals, category breakdown, monthly trend series and budget utilization
    for the selected window (6months, 1year or all).
    """
    try:
        budgets = store.get_budgets()
    except BudgetPersistenceError as e:
        logger.error(f"Could not initialize budgets for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load budgets")

    summary = analyzer.summarize(expenses, budgets, _resolve_window(window))
    logger.info(f"Analytics for {user_id}: {summary['expense_count']} expenses, window={summary['window']}")
    return summary


@router.get("/{user_id}/analytics/trends")
def get_monthly_trends(
    user_id: str,
    window: Optional[TimeWindow] = None,
    expenses: List[Expense] = Depends(get_expenses),
) -> Dict:
    window = _resolve_window(window)
    buckets = analyzer.monthly_trends(expenses, window)
    widths = analyzer.relative_widths([bucket.total for bucket in buckets])
    return {
        "window": window.value,
        "months": [{**bucket.to_dict(), "width": str(width)} for bucket, width in zip(buckets, widths)],
    }


@router.get("/{user_id}/analytics/categories")
def get_category_breakdown(user_id: str, expenses: List[Expense] = Depends(get_expenses)) -> Dict:
    totals = analyzer.category_totals(expenses)
    shares = analyzer.category_percentages(totals)
    return {
        "total_spent": str(analyzer.grand_total(expenses)),
        "categories": [
            {**item.to_dict(), "percentage": str(shares[item.category])} for item in totals
        ],
    }
