"""Budget Repository — SQLAlchemy implementation of the BudgetRepository protocol.

Invariants:
    - Each mutating method is one committed single-row write (no cross-document transaction)
    - update_fields is last-writer-wins and stamps updated_at
    - append_expense/remove_expense write only if the row version is unchanged since
      the read; a lost race re-reads and re-applies the ledger transform
    - A month unique-index violation surfaces as DuplicateMonthError, never an overwrite
    - Reads use populate_existing so rows updated via Core statements are never stale

Design Decisions:
    - Optimistic read-modify-write over dialect JSON operators: one code path for
      PostgreSQL and SQLite
    - The AsyncSession is a constructor dependency, never module state
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from budget_planner.core import expense_ledger
from budget_planner.core.budget import (
    Budget, Category, Expense, categories_to_documents, expenses_to_documents,
)
from budget_planner.core.domain_types import BudgetId, ExpenseId
from budget_planner.core.errors import (
    ConcurrencyError, DuplicateMonthError, ErrorContext,
)
from budget_planner.models.budget import BudgetModel

logger = logging.getLogger(__name__)

ExpenseTransform = Callable[[list[Expense]], list[Expense] | None]


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on read; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_domain(row: BudgetModel) -> Budget:
    """Materialize an ORM row as a Budget snapshot."""
    return Budget(
        id=BudgetId(row.id),
        month=row.month,
        name=row.name,
        income=row.income,
        categories=[Category.from_document(c) for c in row.categories or []],
        expenses=[Expense.from_document(e) for e in row.expenses or []],
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlBudgetRepository:
    """Budget documents stored one per row in the `budgets` table."""

    def __init__(self, db: AsyncSession, expense_write_attempts: int = 5):
        self._db = db
        self._attempts = max(1, expense_write_attempts)

    # ─── Reads ──────────────────────────────────────────────────

    async def list_all(self, newest_first: bool = True) -> list[Budget]:
        order = BudgetModel.month.desc() if newest_first else BudgetModel.month.asc()
        result = await self._db.execute(
            select(BudgetModel).order_by(order)
            .execution_options(populate_existing=True),
        )
        return [to_domain(row) for row in result.scalars().all()]

    async def get(self, budget_id: BudgetId) -> Budget | None:
        return await self._one(
            select(BudgetModel).where(BudgetModel.id == budget_id),
        )

    async def get_by_month(self, month: str) -> Budget | None:
        return await self._one(
            select(BudgetModel).where(BudgetModel.month == month),
        )

    async def get_latest(self) -> Budget | None:
        return await self._one(
            select(BudgetModel).order_by(BudgetModel.month.desc()).limit(1),
        )

    async def _one(self, query) -> Budget | None:
        result = await self._db.execute(
            query.execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    # ─── Writes ─────────────────────────────────────────────────

    async def insert(self, budget: Budget) -> Budget:
        row = BudgetModel(
            month=budget.month,
            name=budget.name,
            income=budget.income,
            categories=categories_to_documents(budget.categories),
            expenses=expenses_to_documents(budget.expenses),
            created_at=budget.created_at or datetime.now(timezone.utc),
            version=1,
        )
        self._db.add(row)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            logger.warning(
                "Insert rejected by month unique index",
                extra={"month": budget.month},
            )
            raise DuplicateMonthError(budget.month)
        return to_domain(row)

    async def update_fields(
        self, budget_id: BudgetId, fields: dict,
    ) -> Budget | None:
        values = dict(fields)
        if "categories" in values:
            values["categories"] = categories_to_documents(values["categories"])
        values["updated_at"] = datetime.now(timezone.utc)
        values["version"] = BudgetModel.version + 1

        try:
            result = await self._db.execute(
                update(BudgetModel)
                .where(BudgetModel.id == budget_id)
                .values(**values)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                await self._db.rollback()
                return None
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            month = fields.get("month", "")
            logger.warning(
                "Update rejected by month unique index",
                extra={"budget_id": str(budget_id), "month": month},
            )
            raise DuplicateMonthError(
                month, ErrorContext(budget_id=str(budget_id)),
            )
        return await self.get(budget_id)

    async def append_expense(
        self, budget_id: BudgetId, expense: Expense,
    ) -> Budget | None:
        return await self._write_expenses(
            budget_id,
            lambda expenses: expense_ledger.append_expense(expenses, expense),
        )

    async def remove_expense(
        self, budget_id: BudgetId, expense_id: ExpenseId,
    ) -> Budget | None:
        return await self._write_expenses(
            budget_id,
            lambda expenses: expense_ledger.remove_expense(expenses, expense_id),
        )

    async def delete(self, budget_id: BudgetId) -> bool:
        result = await self._db.execute(
            delete(BudgetModel).where(BudgetModel.id == budget_id),
        )
        await self._db.commit()
        return result.rowcount > 0

    # ─── Optimistic expense array write ─────────────────────────

    async def _load_expenses(
        self, budget_id: BudgetId,
    ) -> tuple[int, list[Expense]] | None:
        """Read (version, expenses) for one budget. None if it does not exist."""
        result = await self._db.execute(
            select(BudgetModel.version, BudgetModel.expenses)
            .where(BudgetModel.id == budget_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return row.version, [Expense.from_document(e) for e in row.expenses or []]

    async def _write_expenses(
        self, budget_id: BudgetId, transform: ExpenseTransform,
    ) -> Budget | None:
        for attempt in range(1, self._attempts + 1):
            loaded = await self._load_expenses(budget_id)
            if loaded is None:
                return None
            version, expenses = loaded
            updated = transform(expenses)
            if updated is None:
                await self._db.rollback()
                return None

            result = await self._db.execute(
                update(BudgetModel)
                .where(BudgetModel.id == budget_id, BudgetModel.version == version)
                .values(
                    expenses=expenses_to_documents(updated),
                    version=version + 1,
                )
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 1:
                await self._db.commit()
                return await self.get(budget_id)

            await self._db.rollback()
            logger.warning(
                "Expense write lost version race",
                extra={"budget_id": str(budget_id), "attempt": attempt},
            )

        raise ConcurrencyError(
            f"Budget '{budget_id}' kept changing during expense update "
            f"({self._attempts} attempts)",
            ErrorContext(budget_id=str(budget_id)),
        )
