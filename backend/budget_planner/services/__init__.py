"""Services Layer — async orchestration between the API and the pure core.

Invariants:
    - Services own no persistence details; they talk to repository Protocols
"""

from budget_planner.services.budget_service import BudgetService

__all__ = ["BudgetService"]
