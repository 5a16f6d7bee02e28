"""Route Dependencies — wires a request-scoped BudgetService onto the DB session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from budget_planner.config import get_settings
from budget_planner.infrastructure.budget_repository import SqlBudgetRepository
from budget_planner.infrastructure.database import get_db
from budget_planner.services.budget_service import BudgetService


async def get_budget_service(
    db: AsyncSession = Depends(get_db),
) -> BudgetService:
    repository = SqlBudgetRepository(
        db, expense_write_attempts=get_settings().expense_write_attempts,
    )
    return BudgetService(repository)
