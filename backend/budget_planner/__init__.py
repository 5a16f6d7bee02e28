"""Budget Planner Package — monthly household budgets with planned-vs-actual stats.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
