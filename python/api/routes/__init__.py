"""
API Routes Package

Contains all route modules for the budget API.
"""

from .budget import router as budget_router

__all__ = [
    "budget_router",
]
