"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BudgetId and ExpenseId wrap UUIDs from separate id spaces
    - Month keys are "YYYY-MM" strings matching MONTH_PATTERN

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

import re
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

BudgetId = NewType("BudgetId", UUID)
ExpenseId = NewType("ExpenseId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def is_month_key(value: str) -> bool:
    """True when value is a well-formed YYYY-MM month key."""
    return bool(_MONTH_RE.fullmatch(value))
