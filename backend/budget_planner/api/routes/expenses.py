"""Expense Routes — append to and remove from a budget's embedded expense ledger.

Invariants:
    - POST returns the created expense (201), never the whole budget
    - DELETE answers 404 for a missing budget and for a missing expense alike
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from budget_planner.api.dependencies import get_budget_service
from budget_planner.core.domain_types import BudgetId, ExpenseId
from budget_planner.schemas.budget import (
    ExpenseCreate, ExpenseResponse, MessageResponse,
)
from budget_planner.services.budget_service import BudgetService

router = APIRouter(prefix="/api/budgets", tags=["expenses"])


@router.post(
    "/{budget_id}/expenses", response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_expense(
    budget_id: UUID,
    body: ExpenseCreate,
    service: BudgetService = Depends(get_budget_service),
):
    expense = await service.add_expense(BudgetId(budget_id), body.model_dump())
    return ExpenseResponse.from_domain(expense)


@router.delete(
    "/{budget_id}/expenses/{expense_id}", response_model=MessageResponse,
)
async def remove_expense(
    budget_id: UUID,
    expense_id: UUID,
    service: BudgetService = Depends(get_budget_service),
):
    await service.remove_expense(BudgetId(budget_id), ExpenseId(expense_id))
    return MessageResponse(message="Expense deleted successfully")
