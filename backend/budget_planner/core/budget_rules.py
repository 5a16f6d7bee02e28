"""Budget Rules — month uniqueness and aggregate construction, pure and deterministic.

Invariants:
    - Exactly one budget per month: check_month_available raises DuplicateMonthError
      when another budget (not the one being updated) already holds the month
    - New budgets always start with expenses == [] and created_at set once
    - Field updates replace name/income/categories wholesale (no category merge)

Design Decisions:
    - Rules receive the conflicting budget (or None) instead of a repository:
      the service does the lookup, the rule only decides
"""

from datetime import datetime, timezone

from budget_planner.core.budget import Budget, Category
from budget_planner.core.domain_types import BudgetId, is_month_key
from budget_planner.core.errors import (
    BudgetValidationError, DuplicateMonthError, ErrorContext,
)

UPDATABLE_FIELDS: frozenset[str] = frozenset({"month", "name", "income", "categories"})


def validate_month(month: str) -> None:
    if not is_month_key(month):
        raise BudgetValidationError(
            f"month must be YYYY-MM, got '{month}'", fields=["month"],
        )


def check_month_available(
    month: str, holder: Budget | None, exclude_id: BudgetId | None = None,
) -> None:
    """Raise DuplicateMonthError when `holder` already owns `month`.

    The error context names the budget being written (if any), never the holder.
    """
    if holder is None:
        return
    if exclude_id is not None and holder.id == exclude_id:
        return
    raise DuplicateMonthError(
        month, ErrorContext(budget_id=str(exclude_id) if exclude_id else None),
    )


def month_changes(current: Budget, fields: dict) -> bool:
    """True when the update moves the budget to a different month."""
    new_month = fields.get("month")
    return new_month is not None and new_month != current.month


def build_new_budget(
    month: str,
    name: str,
    income: float,
    categories: list[Category],
    now: datetime | None = None,
) -> Budget:
    """Construct a not-yet-stored budget with an empty expense ledger."""
    validate_month(month)
    return Budget(
        month=month,
        name=name,
        income=income,
        categories=list(categories),
        expenses=[],
        created_at=now or datetime.now(timezone.utc),
    )


def select_update_fields(fields: dict) -> dict:
    """Keep only the replaceable fields that were actually supplied."""
    return {
        k: v for k, v in fields.items()
        if k in UPDATABLE_FIELDS and v is not None
    }


def current_month_key(now: datetime | None = None) -> str:
    """Current date truncated to YYYY-MM (UTC)."""
    return (now or datetime.now(timezone.utc)).strftime("%Y-%m")
