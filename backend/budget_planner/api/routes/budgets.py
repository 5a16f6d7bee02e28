"""Budget Routes — CRUD, current-month lookup and stats for budget documents.

Invariants:
    - Routes never contain business logic (delegate to BudgetService)
    - Errors are raised as BudgetPlannerError and rendered by the global handler
    - /current/month is registered before /{budget_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from budget_planner.api.dependencies import get_budget_service
from budget_planner.core.domain_types import BudgetId
from budget_planner.schemas.budget import (
    BudgetCreate, BudgetResponse, BudgetStatsResponse, BudgetUpdate,
    MessageResponse,
)
from budget_planner.services.budget_service import BudgetService

router = APIRouter(prefix="/api/budgets", tags=["budgets"])


@router.get("", response_model=list[BudgetResponse])
async def list_budgets(service: BudgetService = Depends(get_budget_service)):
    """All budgets, newest month first."""
    budgets = await service.list_budgets()
    return [BudgetResponse.from_domain(b) for b in budgets]


@router.get("/current/month", response_model=BudgetResponse)
async def get_current_budget(
    service: BudgetService = Depends(get_budget_service),
):
    """Budget for this month, falling back to the most recent one."""
    return BudgetResponse.from_domain(await service.get_current_budget())


@router.get("/{budget_id}", response_model=BudgetResponse)
async def get_budget(
    budget_id: UUID, service: BudgetService = Depends(get_budget_service),
):
    return BudgetResponse.from_domain(
        await service.get_budget(BudgetId(budget_id)),
    )


@router.post(
    "", response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_budget(
    body: BudgetCreate, service: BudgetService = Depends(get_budget_service),
):
    budget = await service.create_budget(
        month=body.month,
        name=body.name,
        income=body.income,
        categories=[c.to_domain() for c in body.categories],
    )
    return BudgetResponse.from_domain(budget)


@router.put("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: UUID,
    body: BudgetUpdate,
    service: BudgetService = Depends(get_budget_service),
):
    """Replace supplied fields. Categories are replaced as a whole array."""
    budget = await service.update_budget(BudgetId(budget_id), body.to_fields())
    return BudgetResponse.from_domain(budget)


@router.delete("/{budget_id}", response_model=MessageResponse)
async def delete_budget(
    budget_id: UUID, service: BudgetService = Depends(get_budget_service),
):
    await service.delete_budget(BudgetId(budget_id))
    return MessageResponse(message="Budget deleted successfully")


@router.get("/{budget_id}/stats", response_model=BudgetStatsResponse)
async def get_budget_stats(
    budget_id: UUID, service: BudgetService = Depends(get_budget_service),
):
    """Planned vs actual report. savingsRate is null when income is 0."""
    stats = await service.get_stats(BudgetId(budget_id))
    return BudgetStatsResponse.from_stats(stats)
