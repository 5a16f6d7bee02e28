"""Budget Rules — month uniqueness checks and aggregate construction."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from budget_planner.core.budget import Budget, Category
from budget_planner.core.budget_rules import (
    build_new_budget, check_month_available, current_month_key,
    month_changes, select_update_fields,
)
from budget_planner.core.domain_types import is_month_key
from budget_planner.core.errors import BudgetValidationError, DuplicateMonthError


def _stored(month="2024-02") -> Budget:
    return Budget(month=month, name="Feb", income=100, id=uuid4())


def test_free_month_passes():
    check_month_available("2024-02", None)


def test_taken_month_raises_duplicate():
    holder = _stored()
    with pytest.raises(DuplicateMonthError) as exc:
        check_month_available("2024-02", holder)
    assert exc.value.http_status == 400
    assert exc.value.code == "DUPLICATE_MONTH"
    assert "2024-02" in exc.value.message
    assert exc.value.context.budget_id is None
    assert exc.value.context.month == "2024-02"


def test_duplicate_on_update_names_the_budget_being_moved():
    holder = _stored()
    moving = uuid4()
    with pytest.raises(DuplicateMonthError) as exc:
        check_month_available("2024-02", holder, exclude_id=moving)
    assert exc.value.context.budget_id == str(moving)


def test_budget_does_not_conflict_with_itself():
    holder = _stored()
    check_month_available("2024-02", holder, exclude_id=holder.id)


def test_month_changes_only_when_different():
    current = _stored("2024-02")
    assert month_changes(current, {"month": "2024-03"})
    assert not month_changes(current, {"month": "2024-02"})
    assert not month_changes(current, {"name": "x"})


def test_new_budget_starts_with_empty_ledger():
    now = datetime(2024, 2, 1, tzinfo=timezone.utc)
    budget = build_new_budget("2024-02", "Feb", 2500, [Category("Food", 300)], now=now)
    assert budget.expenses == []
    assert budget.created_at == now
    assert budget.updated_at is None
    assert budget.id is None
    assert budget.categories == [Category("Food", 300)]


def test_select_update_fields_drops_unknown_and_none():
    fields = select_update_fields({
        "name": "New", "income": None, "expenses": [], "id": "x",
    })
    assert fields == {"name": "New"}


def test_current_month_key_truncates_date():
    assert current_month_key(datetime(2024, 7, 31, 23, 59, tzinfo=timezone.utc)) == "2024-07"


@pytest.mark.parametrize("value,ok", [
    ("2024-01", True), ("2024-12", True), ("2024-13", False),
    ("2024-1", False), ("24-01", False), ("2024-00", False),
])
def test_month_key_format(value, ok):
    assert is_month_key(value) is ok


def test_new_budget_rejects_malformed_month():
    with pytest.raises(BudgetValidationError) as exc:
        build_new_budget("2024/02", "Feb", 10, [])
    assert exc.value.fields == ["month"]
