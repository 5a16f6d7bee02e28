"""Expense Ledger — validation and order-preserving transforms of a budget's expenses.

Invariants:
    - date, category, description must be non-empty; amount must be present (0 is valid)
    - append_expense puts the new entry last; no other entry moves
    - remove_expense addresses entries by id, never by position
    - Transforms are PURE: they return a new list and never mutate their input

Design Decisions:
    - The repository applies these transforms inside its optimistic write loop,
      so a transform may run more than once for a single request
    - remove_expense returns None when the id is absent: callers cannot tell an
      absent expense from an absent budget, both are "not found"
"""

import uuid
from datetime import datetime, timezone

from budget_planner.core.budget import Expense
from budget_planner.core.domain_types import ExpenseId
from budget_planner.core.errors import BudgetValidationError

REQUIRED_TEXT_FIELDS: tuple[str, ...] = ("date", "category", "description")


def missing_expense_fields(data: dict) -> list[str]:
    """Names of required fields that are absent or blank."""
    missing = [f for f in REQUIRED_TEXT_FIELDS if not data.get(f)]
    if data.get("amount") is None:
        missing.append("amount")
    return missing


def validate_expense_fields(data: dict) -> None:
    """Raise BudgetValidationError unless every required field is present."""
    missing = missing_expense_fields(data)
    if missing:
        raise BudgetValidationError(
            f"All fields are required (missing: {', '.join(missing)})",
            fields=missing,
        )


def new_expense(data: dict, now: datetime | None = None) -> Expense:
    """Validate input and mint an expense with a fresh id and created_at."""
    validate_expense_fields(data)
    return Expense(
        id=ExpenseId(uuid.uuid4()),
        date=data["date"],
        category=data["category"],
        description=data["description"],
        amount=data["amount"],
        created_at=now or datetime.now(timezone.utc),
    )


def append_expense(expenses: list[Expense], expense: Expense) -> list[Expense]:
    return [*expenses, expense]


def remove_expense(
    expenses: list[Expense], expense_id: ExpenseId,
) -> list[Expense] | None:
    """Drop the entry with expense_id. None if no such entry exists."""
    remaining = [e for e in expenses if e.id != expense_id]
    if len(remaining) == len(expenses):
        return None
    return remaining
