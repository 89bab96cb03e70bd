from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Mapping

from pydantic import BaseModel

from expense_tracker.models.category import CategoryKey

Budgets = Dict[str, Decimal]

# Keeps every limit within the 38 significant digits DynamoDB numbers allow
MAX_BUDGET_LIMIT = Decimal("999999999999999.99")
CENT = Decimal("0.01")

DEFAULT_BUDGETS: Budgets = {
    CategoryKey.FOOD.value: Decimal("500"),
    CategoryKey.TRANSPORT.value: Decimal("200"),
    CategoryKey.SHOPPING.value: Decimal("300"),
    CategoryKey.BILLS.value: Decimal("1000"),
    CategoryKey.OTHER.value: Decimal("200"),
}


class BudgetUpdate(BaseModel):
    # Left untyped on purpose: non-numeric input is coerced to 0, not rejected
    value: Any = None


def default_budgets() -> Budgets:
    return dict(DEFAULT_BUDGETS)


def coerce_limit(value: Any) -> Decimal:
    """
    Turn arbitrary user input into a budget limit.

    Non-numeric values, booleans, None, NaN and infinities become 0,
    negatives are clamped to 0 and huge values to MAX_BUDGET_LIMIT.
    Anything finer than a cent is rounded to the cent.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")

    try:
        if isinstance(value, Decimal):
            limit = value
        elif isinstance(value, float):
            limit = Decimal(str(value))
        elif isinstance(value, int):
            limit = Decimal(value)
        elif isinstance(value, str):
            limit = Decimal(value.strip()) if value.strip() else Decimal("0")
        else:
            return Decimal("0")
    except (InvalidOperation, ValueError):
        return Decimal("0")

    if not limit.is_finite():
        return Decimal("0")
    if limit <= 0:
        return Decimal("0")
    if limit > MAX_BUDGET_LIMIT:
        return MAX_BUDGET_LIMIT
    if limit.as_tuple().exponent < -2:
        limit = limit.quantize(CENT, rounding=ROUND_HALF_UP)
    return limit


def sanitize_budgets(raw: Mapping[str, Any]) -> Budgets:
    """Apply the same coercion used for writes to every entry of a stored mapping."""
    return {str(category): coerce_limit(value) for category, value in raw.items()}
