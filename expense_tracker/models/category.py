from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class CategoryKey(str, Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    BILLS = "bills"
    OTHER = "other"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for a single expense category."""

    key: str
    label: str
    emoji: str

    @property
    def display_name(self) -> str:
        return f"{self.emoji} {self.label}"


# Canonical order; the budget evaluator reports categories in this order.
CATEGORIES: Dict[str, CategoryInfo] = {
    CategoryKey.FOOD.value: CategoryInfo(CategoryKey.FOOD.value, "Food", "🍔"),
    CategoryKey.TRANSPORT.value: CategoryInfo(CategoryKey.TRANSPORT.value, "Transport", "🚗"),
    CategoryKey.SHOPPING.value: CategoryInfo(CategoryKey.SHOPPING.value, "Shopping", "🛍️"),
    CategoryKey.BILLS.value: CategoryInfo(CategoryKey.BILLS.value, "Bills", "📝"),
    CategoryKey.OTHER.value: CategoryInfo(CategoryKey.OTHER.value, "Other", "📌"),
}

FALLBACK_LABEL = "Other"
FALLBACK_EMOJI = "📌"


def category_keys() -> List[str]:
    return list(CATEGORIES)


def is_known_category(key: object) -> bool:
    return isinstance(key, str) and key in CATEGORIES


def describe_category(key: object) -> CategoryInfo:
    """
    Return display metadata for a category key.

    Unrecognised keys (including non-string values) get the generic
    "📌 Other" metadata while keeping their own key.
    """
    if isinstance(key, CategoryKey):
        key = key.value
    if is_known_category(key):
        return CATEGORIES[key]
    return CategoryInfo(key=str(key), label=FALLBACK_LABEL, emoji=FALLBACK_EMOJI)
