"""
Budget Store
Per-user category budgets, defaulted on first use and written through to storage
"""
import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol

from expense_tracker.core.exceptions import UnknownCategoryError
from expense_tracker.models.budget import Budgets, coerce_limit, default_budgets, sanitize_budgets
from expense_tracker.models.category import CategoryKey, category_keys, is_known_category

logger = logging.getLogger(__name__)


class BudgetStorage(Protocol):
    """Persistence seam for a single user's budget mapping."""

    def load(self) -> Optional[Mapping[str, Any]]:
        """Return the stored mapping, or None/empty when nothing was saved yet."""
        ...

    def save(self, budgets: Mapping[str, Decimal]) -> None:
        """Persist the whole mapping, replacing whatever was stored."""
        ...


class BudgetStore:
    """
    Holds one user's category budgets.

    The mapping is replaced as a whole on every write (last write wins) and
    every write persists the full mapping immediately.
    """

    def __init__(self, storage: BudgetStorage) -> None:
        self._storage = storage
        self._budgets: Optional[Budgets] = None

    def _ensure_loaded(self) -> Budgets:
        if self._budgets is None:
            stored = self._storage.load()
            if stored:
                self._budgets = sanitize_budgets(stored)
            else:
                logger.info("No stored budgets found, initializing defaults")
                self._budgets = default_budgets()
                self._storage.save(self._budgets)
        return self._budgets

    def get_budgets(self) -> Budgets:
        return dict(self._ensure_loaded())

    def set_budget(self, category: str, value: Any) -> Budgets:
        """
        Set the limit for one category and persist the whole mapping.

        The value is coerced to a non-negative Decimal (non-numeric input
        becomes 0). Categories outside the registry are rejected.
        """
        if isinstance(category, CategoryKey):
            category = category.value
        elif isinstance(category, str):
            category = category.strip().lower()
        if not is_known_category(category):
            raise UnknownCategoryError(
                "Unknown budget category",
                details={"category": category, "allowed": ",".join(category_keys())},
            )

        limit = coerce_limit(value)
        updated = {**self._ensure_loaded(), category: limit}
        self._storage.save(updated)
        self._budgets = updated
        logger.info(f"Budget for {category} set to {limit}")
        return dict(updated)

    def reset_budgets(self) -> Budgets:
        defaults = default_budgets()
        self._storage.save(defaults)
        self._budgets = defaults
        logger.info("Budgets reset to defaults")
        return dict(defaults)
