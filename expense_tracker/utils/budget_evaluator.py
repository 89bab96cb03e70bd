from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Union

from expense_tracker.models.budget import coerce_limit
from expense_tracker.models.category import category_keys, describe_category

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Utilization reported for a category with a zero limit and non-zero spend
OVER_BUDGET_SENTINEL = Decimal("Infinity")


@dataclass(frozen=True)
class BudgetStatus:
    """
    Budget utilization of a single category.

    Attributes:
        category: Category key
        spent: Total spent in the category
        limit: Budget limit for the category (0 when none is set)
        percentage: 100 * spent / limit, OVER_BUDGET_SENTINEL for spend against a zero limit
        remaining: limit - spent, negative once the budget is exceeded
    """

    category: str
    spent: Decimal
    limit: Decimal
    percentage: Decimal
    remaining: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.percentage > HUNDRED

    @property
    def overage(self) -> Decimal:
        return max(ZERO, self.spent - self.limit)

    @property
    def progress(self) -> Decimal:
        """Bar fill, capped at 100."""
        return min(self.percentage, HUNDRED)

    def to_dict(self) -> Dict[str, Any]:
        info = describe_category(self.category)
        return {
            "category": self.category,
            "label": info.label,
            "emoji": info.emoji,
            "spent": str(self.spent),
            "limit": str(self.limit),
            "percentage": str(self.percentage),
            "progress": str(self.progress),
            "remaining": str(self.remaining),
            "overage": str(self.overage),
            "is_over_budget": self.is_over_budget,
        }


def _totals_by_category(totals: Union[Mapping[str, Decimal], Iterable[Any]]) -> Dict[str, Decimal]:
    if isinstance(totals, Mapping):
        return dict(totals)
    return {item.category: item.total for item in totals}


def budget_for(category: str, budgets: Mapping[str, Decimal]) -> Decimal:
    return coerce_limit(budgets.get(category))


def utilization(spent: Decimal, limit: Decimal) -> Decimal:
    if limit > 0:
        return HUNDRED * spent / limit
    if spent > 0:
        return OVER_BUDGET_SENTINEL
    return ZERO


def evaluate_budgets(
    totals: Union[Mapping[str, Decimal], Iterable[Any]],
    budgets: Mapping[str, Decimal],
) -> List[BudgetStatus]:
    """
    Compare category spend with budget limits for every registered category.

    ``totals`` is either a category -> amount mapping or the CategoryTotal list
    produced by the analyzer. Registered categories without spend are reported
    with spent=0; the result follows the registry's canonical order.
    """
    spent_by_category = _totals_by_category(totals)

    statuses = []
    for category in category_keys():
        spent = spent_by_category.get(category, ZERO)
        limit = budget_for(category, budgets)
        statuses.append(
            BudgetStatus(
                category=category,
                spent=spent,
                limit=limit,
                percentage=utilization(spent, limit),
                remaining=limit - spent,
            )
        )
    return statuses


def over_budget_categories(statuses: Iterable[BudgetStatus]) -> Dict[str, Decimal]:
    """Category -> overage for every category past its limit."""
    return {status.category: status.overage for status in statuses if status.is_over_budget}
