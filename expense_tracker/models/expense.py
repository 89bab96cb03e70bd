import logging
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from expense_tracker.models.category import CategoryKey

logger = logging.getLogger(__name__)


class TimeWindow(str, Enum):
    """Lower bound selector for the monthly trend series. Values match the UI select box."""

    SIX_MONTHS = "6months"
    ONE_YEAR = "1year"
    ALL_TIME = "all"


class Expense(BaseModel):
    """Read-only snapshot of one expense record handed over by the expense store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default="", validation_alias=AliasChoices("id", "expense_id", "_id"))
    description: str = ""
    amount: Decimal = Field(ge=0)
    category: str = CategoryKey.OTHER.value
    date: dt.date = Field(validation_alias=AliasChoices("date", "timestamp"))

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_from_float(cls, value: Any) -> Any:
        # Go through str() so 0.1 stays 0.1 instead of its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str:
        if isinstance(value, CategoryKey):
            return value.value
        if value is None:
            return CategoryKey.OTHER.value
        normalized = str(value).strip().lower()
        return normalized or CategoryKey.OTHER.value

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            # ISO timestamps such as "2025-11-01T12:00:00Z" keep only the date part
            return value[:10]
        return value

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> List["Expense"]:
        """
        Parse raw store records into expenses.

        Records that fail validation are skipped with a warning so a single bad
        row never hides the rest of the user's history.
        """
        expenses: List[Expense] = []
        for record in records:
            try:
                expenses.append(cls.model_validate(record))
            except ValidationError as e:
                record_id = (record.get("expense_id") or record.get("id")) if isinstance(record, Mapping) else repr(record)
                logger.warning(f"Skipping invalid expense record {record_id}: {e.error_count()} error(s)")
        return expenses
