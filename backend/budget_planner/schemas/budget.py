"""Budget Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Wire keys are camelCase (createdAt, totalPlanned); input also accepts snake_case
    - BudgetCreate.month matches YYYY-MM; income is non-negative
    - Input numbers must be finite: 1e999, Infinity and NaN are rejected with 400
    - BudgetUpdate fields are all optional: only supplied fields are replaced
    - ExpenseCreate presence rules are enforced by the expense ledger, not here,
      so direct service callers and HTTP callers get the same error
    - BudgetStatsResponse.savings_rate is null when the rate is not finite

Design Decisions:
    - alias_generator=to_camel over per-field aliases
    - from_domain() classmethods: schemas depend on core, never the reverse
"""

import math
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from budget_planner.core.budget import Budget, Category, Expense
from budget_planner.core.budget_stats import BudgetStats
from budget_planner.core.domain_types import MONTH_PATTERN


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelInput(CamelModel):
    model_config = ConfigDict(allow_inf_nan=False)


# --- Input schemas ---

class CategoryInput(CamelInput):
    name: str = Field(min_length=1, max_length=200)
    planned: float

    def to_domain(self) -> Category:
        return Category(name=self.name, planned=self.planned)


class BudgetCreate(CamelInput):
    """Budget creation — month format and non-negative income."""
    month: str = Field(pattern=MONTH_PATTERN)
    name: str = Field("", max_length=200)
    income: float = Field(ge=0)
    categories: list[CategoryInput] = []

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class BudgetUpdate(CamelInput):
    month: str | None = Field(None, pattern=MONTH_PATTERN)
    name: str | None = Field(None, max_length=200)
    income: float | None = Field(None, ge=0)
    categories: list[CategoryInput] | None = None

    def to_fields(self) -> dict:
        """Supplied fields only, categories converted to domain objects."""
        fields = self.model_dump(exclude_unset=True, exclude_none=True)
        if self.categories is not None:
            fields["categories"] = [c.to_domain() for c in self.categories]
        return fields


class ExpenseCreate(CamelInput):
    date: str | None = None
    category: str | None = None
    description: str | None = None
    amount: float | None = None


# --- Response schemas ---

class CategoryResponse(CamelModel):
    name: str
    planned: float


class ExpenseResponse(CamelModel):
    id: UUID
    date: str
    category: str
    description: str
    amount: float
    created_at: datetime

    @classmethod
    def from_domain(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            date=expense.date,
            category=expense.category,
            description=expense.description,
            amount=expense.amount,
            created_at=expense.created_at,
        )


class BudgetResponse(CamelModel):
    id: UUID
    month: str
    name: str
    income: float
    categories: list[CategoryResponse]
    expenses: list[ExpenseResponse]
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetResponse":
        return cls(
            id=budget.id,
            month=budget.month,
            name=budget.name,
            income=budget.income,
            categories=[
                CategoryResponse(name=c.name, planned=c.planned)
                for c in budget.categories
            ],
            expenses=[ExpenseResponse.from_domain(e) for e in budget.expenses],
            created_at=budget.created_at,
            updated_at=budget.updated_at,
        )


class CategoryComparisonResponse(CamelModel):
    name: str
    planned: float
    spent: float
    difference: float


class BudgetStatsResponse(CamelModel):
    total_planned: float
    total_spent: float
    remaining: float
    savings_rate: float | None
    expenses_by_category: dict[str, float]
    category_comparison: list[CategoryComparisonResponse]

    @classmethod
    def from_stats(cls, stats: BudgetStats) -> "BudgetStatsResponse":
        rate = stats.savings_rate
        return cls(
            total_planned=stats.total_planned,
            total_spent=stats.total_spent,
            remaining=stats.remaining,
            savings_rate=rate if math.isfinite(rate) else None,
            expenses_by_category=stats.expenses_by_category,
            category_comparison=[
                CategoryComparisonResponse(
                    name=row.name, planned=row.planned,
                    spent=row.spent, difference=row.difference,
                )
                for row in stats.category_comparison
            ],
        )


class MessageResponse(BaseModel):
    message: str
