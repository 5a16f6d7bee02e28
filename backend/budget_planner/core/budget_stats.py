"""Budget Stats — pure planned-vs-actual computation from a Budget snapshot.

Invariants:
    - All inputs come from the Budget snapshot (no IO, no DB)
    - total_spent == sum of every expense amount, 0 for an empty ledger
    - difference == planned - spent for every comparison row
    - savings_rate never raises: income == 0 yields +inf, -inf or nan

Design Decisions:
    - Pure function, not a method on Budget: Budget holds state, stats are derived on read
    - Comparison rows look spent up by category name, so same-named categories
      both report the combined figure (aliases, kept as is)
"""

import math
from dataclasses import dataclass, field

from budget_planner.core.budget import Budget


@dataclass
class CategoryComparison:
    """Planned vs spent for one budget category."""
    name: str
    planned: float
    spent: float
    difference: float


@dataclass
class BudgetStats:
    total_planned: float
    total_spent: float
    remaining: float
    savings_rate: float
    expenses_by_category: dict[str, float] = field(default_factory=dict)
    category_comparison: list[CategoryComparison] = field(default_factory=list)


def ieee_divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE 754 results for a zero denominator."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def sum_by_category(budget: Budget) -> dict[str, float]:
    """Expense totals keyed by the literal category on each expense."""
    totals: dict[str, float] = {}
    for expense in budget.expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount
    return totals


def compute_budget_stats(budget: Budget) -> BudgetStats:
    """Compute the planned-vs-actual report. Pure, no IO."""
    total_planned = sum(c.planned for c in budget.categories)
    total_spent = sum(e.amount for e in budget.expenses)
    remaining = budget.income - total_spent
    by_category = sum_by_category(budget)

    comparison = []
    for category in budget.categories:
        spent = by_category.get(category.name, 0)
        comparison.append(CategoryComparison(
            name=category.name,
            planned=category.planned,
            spent=spent,
            difference=category.planned - spent,
        ))

    return BudgetStats(
        total_planned=total_planned,
        total_spent=total_spent,
        remaining=remaining,
        savings_rate=ieee_divide(remaining, budget.income) * 100,
        expenses_by_category=by_category,
        category_comparison=comparison,
    )
