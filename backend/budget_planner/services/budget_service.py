"""Budget Service — async use cases over the BudgetRepository (imperative shell).

Invariants:
    - Month uniqueness checked before insert and before any month-changing update
    - Updating a missing budget is ResourceNotFoundError, checked before uniqueness
    - Expenses are only ever created by a successful append into an existing budget
    - Missing budget and missing expense on removal are the same not-found error
    - Store errors propagate untouched (no retry here)

Design Decisions:
    - Impureim sandwich: read through the repository, decide in core, write back
    - The service depends on the BudgetRepository Protocol, not on SQLAlchemy
"""

import logging
from datetime import datetime

from budget_planner.core.budget import Budget, Category, Expense
from budget_planner.core.budget_rules import (
    build_new_budget, check_month_available, current_month_key,
    month_changes, select_update_fields, validate_month,
)
from budget_planner.core.budget_stats import BudgetStats, compute_budget_stats
from budget_planner.core.domain_types import BudgetId, ExpenseId
from budget_planner.core.errors import ErrorContext, ResourceNotFoundError
from budget_planner.core.expense_ledger import new_expense
from budget_planner.core.repository_protocols import BudgetRepository

logger = logging.getLogger(__name__)


def _budget_not_found(budget_id: BudgetId) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Budget", str(budget_id), ErrorContext(budget_id=str(budget_id)),
    )


class BudgetService:
    """Budget and expense use cases."""

    def __init__(self, repository: BudgetRepository):
        self._repo = repository

    async def list_budgets(self) -> list[Budget]:
        """All budgets, newest month first."""
        return await self._repo.list_all(newest_first=True)

    async def get_budget(self, budget_id: BudgetId) -> Budget:
        budget = await self._repo.get(budget_id)
        if budget is None:
            raise _budget_not_found(budget_id)
        return budget

    async def get_current_budget(self, now: datetime | None = None) -> Budget:
        """Budget for the current month, else the most recent one."""
        month = current_month_key(now)
        budget = await self._repo.get_by_month(month)
        if budget is None:
            budget = await self._repo.get_latest()
        if budget is None:
            raise ResourceNotFoundError(
                "Budget", f"current month {month}", ErrorContext(month=month),
            )
        return budget

    async def create_budget(
        self,
        month: str,
        name: str,
        income: float,
        categories: list[Category],
    ) -> Budget:
        draft = build_new_budget(month, name, income, categories)
        check_month_available(month, await self._repo.get_by_month(month))
        budget = await self._repo.insert(draft)
        logger.info(
            f"Budget created for {month}",
            extra={"budget_id": str(budget.id), "month": month},
        )
        return budget

    async def update_budget(self, budget_id: BudgetId, fields: dict) -> Budget:
        """Replace the supplied fields wholesale. Categories are never merged."""
        current = await self.get_budget(budget_id)
        changes = select_update_fields(fields)
        if month_changes(current, changes):
            validate_month(changes["month"])
            check_month_available(
                changes["month"],
                await self._repo.get_by_month(changes["month"]),
                exclude_id=budget_id,
            )

        updated = await self._repo.update_fields(budget_id, changes)
        if updated is None:
            raise _budget_not_found(budget_id)
        return updated

    async def delete_budget(self, budget_id: BudgetId) -> None:
        if not await self._repo.delete(budget_id):
            raise _budget_not_found(budget_id)
        logger.info("Budget deleted", extra={"budget_id": str(budget_id)})

    async def add_expense(self, budget_id: BudgetId, data: dict) -> Expense:
        """Validate, mint and append an expense. Returns the created entry."""
        expense = new_expense(data)
        if await self._repo.append_expense(budget_id, expense) is None:
            raise _budget_not_found(budget_id)
        logger.info(
            "Expense added",
            extra={"budget_id": str(budget_id), "expense_id": str(expense.id)},
        )
        return expense

    async def remove_expense(
        self, budget_id: BudgetId, expense_id: ExpenseId,
    ) -> None:
        if await self._repo.remove_expense(budget_id, expense_id) is None:
            raise ResourceNotFoundError(
                "Budget or expense", f"{budget_id}/{expense_id}",
                ErrorContext(budget_id=str(budget_id), expense_id=str(expense_id)),
            )
        logger.info(
            "Expense removed",
            extra={"budget_id": str(budget_id), "expense_id": str(expense_id)},
        )

    async def get_stats(self, budget_id: BudgetId) -> BudgetStats:
        return compute_budget_stats(await self.get_budget(budget_id))
