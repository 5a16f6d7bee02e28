"""Budget Schemas — boundary validation and camelCase serialization."""

import math

import pytest
from pydantic import ValidationError

from budget_planner.core.budget import Category
from budget_planner.core.budget_stats import BudgetStats, CategoryComparison
from budget_planner.schemas.budget import (
    BudgetCreate, BudgetStatsResponse, BudgetUpdate, ExpenseCreate,
)


def test_budget_create_defaults_categories_and_strips_name():
    body = BudgetCreate(month="2024-04", name="  April  ", income=10)
    assert body.categories == []
    assert body.name == "April"


@pytest.mark.parametrize("month", ["2024-4", "April", "2024-00", ""])
def test_budget_create_rejects_bad_month(month):
    with pytest.raises(ValidationError):
        BudgetCreate(month=month, name="x", income=1)


def test_budget_update_keeps_only_supplied_fields():
    body = BudgetUpdate.model_validate({
        "income": 300,
        "categories": [{"name": "Food", "planned": 120}],
    })
    assert body.to_fields() == {
        "income": 300,
        "categories": [Category("Food", 120)],
    }


def test_budget_update_ignores_explicit_nulls():
    assert BudgetUpdate.model_validate({"name": None}).to_fields() == {}


def test_expense_create_leaves_presence_checks_to_ledger():
    assert ExpenseCreate.model_validate({}).model_dump() == {
        "date": None, "category": None, "description": None, "amount": None,
    }


def test_stats_response_uses_camel_case_and_nulls_non_finite_rate():
    stats = BudgetStats(
        total_planned=100, total_spent=20, remaining=-20,
        savings_rate=-math.inf,
        expenses_by_category={"Food": 20},
        category_comparison=[CategoryComparison("Food", 100, 20, 80)],
    )
    dumped = BudgetStatsResponse.from_stats(stats).model_dump(by_alias=True)
    assert dumped["savingsRate"] is None
    assert dumped["totalPlanned"] == 100
    assert dumped["categoryComparison"][0]["difference"] == 80


def test_stats_response_keeps_finite_rate():
    stats = BudgetStats(
        total_planned=0, total_spent=0, remaining=50, savings_rate=100.0,
    )
    assert BudgetStatsResponse.from_stats(stats).savings_rate == 100.0


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_inputs_reject_non_finite_numbers(value):
    with pytest.raises(ValidationError):
        BudgetCreate(month="2024-04", income=value)
    with pytest.raises(ValidationError):
        BudgetCreate(
            month="2024-04", income=1,
            categories=[{"name": "Food", "planned": value}],
        )
    with pytest.raises(ValidationError):
        BudgetUpdate(income=value)
    with pytest.raises(ValidationError):
        ExpenseCreate(amount=value)
