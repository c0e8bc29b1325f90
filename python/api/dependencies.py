"""
API Dependencies

Shared budget services for route handlers, configured from BUDGET_CONFIG_DIR.
"""

import os
from functools import lru_cache

from budget import BudgetPlanner, BudgetTracker, CategoryAllocator


def _config_dir() -> str | None:
    return os.getenv("BUDGET_CONFIG_DIR") or None


@lru_cache
def get_allocator() -> CategoryAllocator:
    return CategoryAllocator(_config_dir())


@lru_cache
def get_tracker() -> BudgetTracker:
    return BudgetTracker(_config_dir())


@lru_cache
def get_planner() -> BudgetPlanner:
    return BudgetPlanner(_config_dir())
