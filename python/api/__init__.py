"""
FastAPI Backend for the Wardrobe Budget

Provides REST API endpoints over the budget tracking core.
"""

from .main import app

__all__ = ["app"]
