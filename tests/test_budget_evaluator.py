from datetime import date
from decimal import Decimal

from expense_tracker.models.budget import default_budgets
from expense_tracker.models.expense import Expense
from expense_tracker.utils.analyzer import category_totals
from expense_tracker.utils.budget_evaluator import (
    OVER_BUDGET_SENTINEL,
    budget_for,
    evaluate_budgets,
    over_budget_categories,
)

sample_expenses = [
    Expense(amount=100, category="food", date=date(2024, 1, 15)),
    Expense(amount=50, category="food", date=date(2024, 2, 10)),
    Expense(amount=30, category="transport", date=date(2024, 2, 20)),
    Expense(amount=350, category="shopping", date=date(2024, 2, 21)),
    Expense(amount=75, category="travel", date=date(2024, 2, 22)),
]


def _by_category(statuses):
    return {status.category: status for status in statuses}


def test_reports_every_registered_category_in_canonical_order():
    statuses = evaluate_budgets(category_totals(sample_expenses), default_budgets())
    assert [status.category for status in statuses] == ["food", "transport", "shopping", "bills", "other"]


def test_utilization_with_default_budgets():
    statuses = _by_category(evaluate_budgets(category_totals(sample_expenses), default_budgets()))

    food = statuses["food"]
    assert food.spent == Decimal("150")
    assert food.limit == Decimal("500")
    assert food.percentage == Decimal("30")
    assert food.is_over_budget is False
    assert food.remaining == Decimal("350")

    bills = statuses["bills"]
    assert bills.spent == Decimal("0")
    assert bills.percentage == Decimal("0")
    assert bills.remaining == Decimal("1000")


def test_over_budget_has_negative_remaining_and_overage():
    shopping = _by_category(evaluate_budgets(category_totals(sample_expenses), default_budgets()))["shopping"]
    assert shopping.is_over_budget is True
    assert shopping.remaining == Decimal("-50")
    assert shopping.overage == Decimal("50")
    assert shopping.progress == Decimal("100")


def test_zero_limit_with_spend_is_over_budget():
    statuses = _by_category(evaluate_budgets({"food": Decimal("50")}, {**default_budgets(), "food": Decimal("0")}))
    food = statuses["food"]
    assert food.percentage == OVER_BUDGET_SENTINEL
    assert food.is_over_budget is True
    assert food.remaining == Decimal("-50")
    assert food.to_dict()["percentage"] == "Infinity"


def test_zero_limit_without_spend_is_not_over_budget():
    statuses = _by_category(evaluate_budgets({}, {"food": Decimal("0")}))
    assert statuses["food"].percentage == Decimal("0")
    assert statuses["food"].is_over_budget is False


def test_missing_budget_entries_count_as_zero():
    statuses = _by_category(evaluate_budgets({"transport": Decimal("10")}, {}))
    assert statuses["transport"].limit == Decimal("0")
    assert statuses["transport"].is_over_budget is True
    assert budget_for("travel", default_budgets()) == Decimal("0")


def test_exactly_at_limit_is_not_over_budget():
    statuses = _by_category(evaluate_budgets({"transport": Decimal("200")}, default_budgets()))
    assert statuses["transport"].percentage == Decimal("100")
    assert statuses["transport"].is_over_budget is False


def test_empty_expense_set_is_zeroed():
    statuses = evaluate_budgets(category_totals([]), default_budgets())
    assert len(statuses) == 5
    assert all(status.spent == 0 and not status.is_over_budget for status in statuses)
    assert over_budget_categories(statuses) == {}


def test_over_budget_categories():
    statuses = evaluate_budgets(category_totals(sample_expenses), default_budgets())
    assert over_budget_categories(statuses) == {"shopping": Decimal("50")}
