"""
Budget storage adapters
Implementations of the load()/save(mapping) seam used by BudgetStore
"""
import json
import logging
import os
import re
import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from expense_tracker.core.config import Settings, settings as default_settings
from expense_tracker.core.exceptions import BudgetPersistenceError, ExpenseTrackerError
from expense_tracker.db import dynamo

logger = logging.getLogger(__name__)


class InMemoryBudgetStorage:
    """Keeps the mapping in process memory. Used by tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Optional[Dict[str, Any]] = dict(initial) if initial else None
        self.save_count = 0

    def load(self) -> Optional[Dict[str, Any]]:
        return dict(self._data) if self._data is not None else None

    def save(self, budgets: Mapping[str, Decimal]) -> None:
        self._data = dict(budgets)
        self.save_count += 1


class JsonFileBudgetStorage:
    """
    One JSON file per user. Amounts are written as strings and read back as
    Decimal; writes replace the file atomically.
    """

    def __init__(self, path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            with self.path.open() as fp:
                data = json.load(fp, parse_float=Decimal)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read budgets from {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.error(f"Ignoring budgets file {self.path}: expected a JSON object")
            return None
        return data

    def save(self, budgets: Mapping[str, Decimal]) -> None:
        payload = {category: str(limit) for category, limit in budgets.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w") as fp:
                    json.dump(payload, fp, indent=2, sort_keys=True)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Could not write budgets to {self.path}: {e}", exc_info=True)
            raise BudgetPersistenceError(
                "Failed to save budgets", details={"path": str(self.path)}, original_error=e
            ) from e


class DynamoBudgetStorage:
    """Stores the mapping on the user's item in the DynamoDB users table."""

    def __init__(self, user_id: str, table=None) -> None:
        self.user_id = user_id
        self.table = table

    def load(self) -> Optional[Dict[str, Any]]:
        return dynamo.get_user_budgets(self.user_id, table=self.table)

    def save(self, budgets: Mapping[str, Decimal]) -> None:
        dynamo.save_user_budgets(self.user_id, budgets, table=self.table)


# Process-wide in-memory storages, one per user
_memory_storages: Dict[str, InMemoryBudgetStorage] = {}


def _safe_file_name(user_id: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]", "_", user_id) or "_"


def create_budget_storage(user_id: str, config: Optional[Settings] = None):
    """Pick the budget storage adapter configured by BUDGET_STORAGE_BACKEND."""
    config = config or default_settings
    backend = config.BUDGET_STORAGE_BACKEND.lower()
    if backend == "memory":
        return _memory_storages.setdefault(user_id, InMemoryBudgetStorage())
    if backend == "json":
        return JsonFileBudgetStorage(Path(config.BUDGET_STORE_DIR) / f"{_safe_file_name(user_id)}.json")
    if backend == "dynamo":
        return DynamoBudgetStorage(user_id)
    raise ExpenseTrackerError("Unsupported budget storage backend", details={"backend": backend})
