"""
Budgets Router
Read and edit per-category budgets, and report utilization against them
"""
import logging
from decimal import Decimal
from typing import Dict, List, Mapping

from fastapi import APIRouter, Depends, HTTPException

from expense_tracker.core.deps import get_budget_store, get_expenses
from expense_tracker.core.exceptions import BudgetPersistenceError, UnknownCategoryError
from expense_tracker.models.budget import BudgetUpdate
from expense_tracker.models.expense import Expense
from expense_tracker.utils.analyzer import category_totals
from expense_tracker.utils.budget_evaluator import evaluate_budgets, over_budget_categories
from expense_tracker.utils.budget_store import BudgetStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _serialize(budgets: Mapping[str, Decimal]) -> Dict[str, str]:
    return {category: str(limit) for category, limit in budgets.items()}


@router.get("/{user_id}/budgets")
def get_budgets(user_id: str, store: BudgetStore = Depends(get_budget_store)) -> Dict:
    try:
        return {"budgets": _serialize(store.get_budgets())}
    except BudgetPersistenceError as e:
        logger.error(f"Could not initialize budgets for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load budgets")


@router.put("/{user_id}/budgets/{category}")
def update_budget(
    user_id: str,
    category: str,
    update: BudgetUpdate,
    store: BudgetStore = Depends(get_budget_store),
) -> Dict:
    """
    Set one category's limit. Negative or non-numeric values are stored as 0.
    """
    category = category.strip().lower()
    try:
        budgets = store.set_budget(category, update.value)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BudgetPersistenceError as e:
        logger.error(f"Error saving budget for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save budgets")

    return {
        "success": True,
        "category": category,
        "limit": str(budgets[category]),
        "budgets": _serialize(budgets),
    }


@router.post("/{user_id}/budgets/reset")
def reset_budgets(user_id: str, store: BudgetStore = Depends(get_budget_store)) -> Dict:
    try:
        budgets = store.reset_budgets()
    except BudgetPersistenceError as e:
        logger.error(f"Error resetting budgets for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save budgets")
    return {"success": True, "budgets": _serialize(budgets)}


@router.get("/{user_id}/budgets/status")
def get_budget_status(
    user_id: str,
    expenses: List[Expense] = Depends(get_expenses),
    store: BudgetStore = Depends(get_budget_store),
) -> Dict:
    """
    Spent, limit, utilization and overflow for every registered category.
    """
    try:
        budgets = store.get_budgets()
    except BudgetPersistenceError as e:
        logger.error(f"Could not initialize budgets for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load budgets")

    statuses = evaluate_budgets(category_totals(expenses), budgets)
    return {
        "statuses": [status.to_dict() for status in statuses],
        "over_budget": {
            category: str(overage) for category, overage in over_budget_categories(statuses).items()
        },
    }
