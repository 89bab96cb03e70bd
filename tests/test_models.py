from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_tracker.models.category import CategoryKey, category_keys, describe_category, is_known_category
from expense_tracker.models.expense import Expense, TimeWindow


def test_category_registry_order_and_labels():
    assert category_keys() == ["food", "transport", "shopping", "bills", "other"]
    assert describe_category("food").display_name == "🍔 Food"
    assert describe_category(CategoryKey.BILLS).display_name == "📝 Bills"


def test_unknown_category_gets_fallback_metadata():
    info = describe_category("travel")
    assert info.key == "travel"
    assert info.display_name == "📌 Other"
    assert describe_category(None).label == "Other"
    assert not is_known_category("travel")
    assert not is_known_category(None)


def test_expense_parses_store_record():
    expense = Expense.model_validate({
        "expense_id": "2025-11-01T12:00:00",
        "category": " Food ",
        "amount": 12.1,
        "description": "Lunch",
        "timestamp": "2025-11-01T12:00:00Z",
    })
    assert expense.id == "2025-11-01T12:00:00"
    assert expense.category == "food"
    assert expense.amount == Decimal("12.1")
    assert expense.date == date(2025, 11, 1)


def test_expense_accepts_datetime_and_mongo_style_id():
    expense = Expense.model_validate({"_id": 42, "amount": "5", "category": None, "date": datetime(2024, 3, 5, 23, 59)})
    assert expense.id == "42"
    assert expense.category == "other"
    assert expense.date == date(2024, 3, 5)


def test_expense_is_read_only():
    expense = Expense(amount=1, category="food", date=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        expense.amount = Decimal("2")


def test_expense_rejects_negative_amount():
    with pytest.raises(ValidationError):
        Expense(amount=-1, category="food", date=date(2024, 1, 1))


def test_from_records_skips_invalid_rows():
    expenses = Expense.from_records([
        {"id": "ok", "amount": 10, "category": "food", "date": "2024-01-01"},
        {"id": "negative", "amount": -10, "category": "food", "date": "2024-01-01"},
        {"id": "no-date", "amount": 10, "category": "food"},
        {"id": "bad-amount", "amount": "ten", "category": "food", "date": "2024-01-01"},
        "not a record",
        42,
        None,
    ])
    assert [exp.id for exp in expenses] == ["ok"]


def test_time_window_values():
    assert TimeWindow("6months") is TimeWindow.SIX_MONTHS
    assert TimeWindow("1year") is TimeWindow.ONE_YEAR
    assert TimeWindow("all") is TimeWindow.ALL_TIME
