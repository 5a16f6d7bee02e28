"""Expense Ledger — validation and order-preserving append/remove transforms."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from budget_planner.core.errors import BudgetValidationError
from budget_planner.core.expense_ledger import (
    append_expense, missing_expense_fields, new_expense, remove_expense,
    validate_expense_fields,
)

VALID = {
    "date": "2024-01-10",
    "category": "Food",
    "description": "Groceries",
    "amount": 42.0,
}


def test_valid_input_has_no_missing_fields():
    assert missing_expense_fields(VALID) == []


def test_zero_amount_is_accepted():
    validate_expense_fields({**VALID, "amount": 0})


def test_negative_amount_is_accepted():
    expense = new_expense({**VALID, "amount": -15.0})
    assert expense.amount == -15.0


@pytest.mark.parametrize("missing", ["date", "category", "description", "amount"])
def test_absent_field_is_rejected(missing):
    data = {k: v for k, v in VALID.items() if k != missing}
    with pytest.raises(BudgetValidationError) as exc:
        validate_expense_fields(data)
    assert exc.value.fields == [missing]
    assert exc.value.http_status == 400


def test_blank_text_field_is_rejected():
    with pytest.raises(BudgetValidationError) as exc:
        validate_expense_fields({**VALID, "description": ""})
    assert "description" in exc.value.fields


def test_none_amount_is_rejected():
    with pytest.raises(BudgetValidationError):
        new_expense({**VALID, "amount": None})


def test_new_expense_gets_fresh_id_and_timestamp():
    now = datetime(2024, 1, 10, 12, tzinfo=timezone.utc)
    first = new_expense(VALID, now=now)
    second = new_expense(VALID, now=now)
    assert first.id != second.id
    assert first.created_at == now
    assert first.category == "Food"


def test_append_puts_new_entry_last_without_mutating_input():
    existing = [new_expense(VALID), new_expense(VALID)]
    added = new_expense(VALID)
    result = append_expense(existing, added)
    assert result[-1] is added
    assert result[:2] == existing
    assert len(existing) == 2


def test_remove_preserves_order_of_remaining_entries():
    a, b, c = new_expense(VALID), new_expense(VALID), new_expense(VALID)
    assert remove_expense([a, b, c], b.id) == [a, c]


def test_remove_unknown_id_returns_none():
    assert remove_expense([new_expense(VALID)], uuid4()) is None


def test_append_then_remove_round_trips():
    before = [new_expense(VALID), new_expense(VALID)]
    added = new_expense(VALID)
    assert remove_expense(append_expense(before, added), added.id) == before
