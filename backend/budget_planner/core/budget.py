"""Budget Aggregate — the monthly budget and its embedded categories and expenses.

Invariants:
    - Budget is the aggregate root; Expense has no identity outside budget.expenses
    - expenses keeps insertion order (chronological entry, not `date` order)
    - updated_at is None until the first field-level update
    - Embedded documents round-trip through to_document()/from_document() unchanged

Design Decisions:
    - Plain dataclasses, no ORM: core never imports from infrastructure or models
    - Embedded entries stored as JSON dicts with camelCase keys (same shape as the wire)
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from budget_planner.core.domain_types import BudgetId, ExpenseId


@dataclass
class Category:
    """Named planned-spending bucket. `name` is the join key against expenses."""

    name: str
    planned: float

    def to_document(self) -> dict:
        return {"name": self.name, "planned": self.planned}

    @classmethod
    def from_document(cls, doc: dict) -> "Category":
        return cls(name=doc["name"], planned=doc["planned"])


@dataclass
class Expense:
    """Single recorded transaction. Negative amounts are refunds/corrections."""

    id: ExpenseId
    date: str
    category: str
    description: str
    amount: float
    created_at: datetime

    def to_document(self) -> dict:
        return {
            "id": str(self.id),
            "date": self.date,
            "category": self.category,
            "description": self.description,
            "amount": self.amount,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Expense":
        return cls(
            id=ExpenseId(UUID(doc["id"])),
            date=doc["date"],
            category=doc["category"],
            description=doc["description"],
            amount=doc["amount"],
            created_at=datetime.fromisoformat(doc["createdAt"]),
        )


@dataclass
class Budget:
    """Monthly budget aggregate root — pure dataclass, no IO."""

    month: str
    name: str
    income: float
    categories: list[Category] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    id: BudgetId | None = None  # assigned by the store on insert
    created_at: datetime | None = None
    updated_at: datetime | None = None


def categories_to_documents(categories: list[Category]) -> list[dict]:
    return [c.to_document() for c in categories]


def expenses_to_documents(expenses: list[Expense]) -> list[dict]:
    return [e.to_document() for e in expenses]
