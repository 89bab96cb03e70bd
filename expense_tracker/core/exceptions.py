"""
Exception hierarchy for the expense budget engine.

The analytics engine itself recovers from bad input locally; these errors
only surface at its boundaries (budget writes and the storage adapters).
"""
from typing import Optional


class ExpenseTrackerError(Exception):
    """
    Base exception for all expense tracker errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional error context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        msg = self.message
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({detail_str})"
        return msg


class UnknownCategoryError(ExpenseTrackerError, ValueError):
    """Raised when a budget is written for a category outside the registry."""


class BudgetPersistenceError(ExpenseTrackerError):
    """Raised when the budget mapping cannot be written to storage."""


class ExpenseSourceError(ExpenseTrackerError):
    """Raised when the expense store cannot be read."""
