"""Budget ORM — persists one budget document per row.

Invariants:
    - id is UUID primary key (client-side default)
    - month is unique: the index backs the service-level duplicate check
    - categories and expenses are embedded JSON arrays; expenses have no table of their own
    - version increments on every write; expense writes are conditional on it

Design Decisions:
    - JSON columns over child tables: the budget is a document, deleting the row
      deletes its expenses with it
    - updated_at nullable: only field-level updates set it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from budget_planner.db.base import Base


class BudgetModel(Base):
    """Budget document row — aggregate root storage."""
    __tablename__ = "budgets"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    month: Mapped[str] = mapped_column(
        String(7), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    income: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    categories: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    expenses: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def __repr__(self) -> str:
        return f"<BudgetModel(id={self.id}, month='{self.month}')>"
