"""ORM Models — SQLAlchemy declarative models for persisted documents.

Invariants:
    - All models inherit from Base (db/base.py)
    - BudgetModel is the only table; expenses live inside it

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
"""

from budget_planner.models.budget import BudgetModel  # noqa: F401
