"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through the BudgetRepository Protocol
    - Implementations provided by shell via dependency injection
    - "Not found" is reported as None/False; callers raise ResourceNotFoundError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, core pure functions never await
"""

from typing import Protocol

from budget_planner.core.budget import Budget, Expense
from budget_planner.core.domain_types import BudgetId, ExpenseId


class BudgetRepository(Protocol):
    """Contract for budget document persistence — implemented by shell."""
    async def list_all(self, newest_first: bool = True) -> list[Budget]: ...
    async def get(self, budget_id: BudgetId) -> Budget | None: ...
    async def get_by_month(self, month: str) -> Budget | None: ...
    async def get_latest(self) -> Budget | None: ...
    async def insert(self, budget: Budget) -> Budget: ...
    async def update_fields(
        self, budget_id: BudgetId, fields: dict,
    ) -> Budget | None: ...
    async def append_expense(
        self, budget_id: BudgetId, expense: Expense,
    ) -> Budget | None: ...
    async def remove_expense(
        self, budget_id: BudgetId, expense_id: ExpenseId,
    ) -> Budget | None: ...
    async def delete(self, budget_id: BudgetId) -> bool: ...
