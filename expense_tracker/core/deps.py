"""
Shared FastAPI dependencies.
Both are overridden in tests through app.dependency_overrides.
"""
import logging
from typing import List

from fastapi import HTTPException, status

from expense_tracker.core.exceptions import ExpenseSourceError
from expense_tracker.db import dynamo
from expense_tracker.db.budget_storage import create_budget_storage
from expense_tracker.models.expense import Expense
from expense_tracker.utils.budget_store import BudgetStore

logger = logging.getLogger(__name__)


def get_expenses(user_id: str) -> List[Expense]:
    """Snapshot of the user's full expense history from the expenses table."""
    try:
        records = dynamo.get_all_expenses_for_user(user_id)
    except ExpenseSourceError as e:
        logger.error(f"Could not load expenses for {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Expense store unavailable")
    return Expense.from_records(records)


def get_budget_store(user_id: str) -> BudgetStore:
    return BudgetStore(create_budget_storage(user_id))
