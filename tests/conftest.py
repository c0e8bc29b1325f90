"""
Pytest configuration and fixtures for wardrobe budget tests.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from budget import Budget, BudgetPeriod, CategoryBudget, PurchaseRecord

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_dir() -> Path:
    """Return the config directory path."""
    return PROJECT_ROOT / "config"


@pytest.fixture
def budget_config(config_dir: Path) -> dict:
    """Load the budget configuration."""
    with open(config_dir / "budget_config.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def empty_config_dir(tmp_path: Path) -> Path:
    """Config directory without a config file, so defaults apply."""
    config = tmp_path / "config"
    config.mkdir()
    return config


@pytest.fixture
def sample_budget() -> Budget:
    """Monthly budget of $1,000 split with the default weights."""
    return Budget(
        id="budget-1",
        name="Monthly Wardrobe",
        total_amount=Decimal("1000.00"),
        period=BudgetPeriod.MONTHLY,
        categories=(
            CategoryBudget("Menswear", Decimal("250.00"), Decimal("25")),
            CategoryBudget("Womenswear", Decimal("350.00"), Decimal("35")),
            CategoryBudget("Kidswear", Decimal("150.00"), Decimal("15")),
            CategoryBudget("Accessories", Decimal("150.00"), Decimal("15")),
            CategoryBudget("Shoes", Decimal("100.00"), Decimal("10")),
        ),
        alert_threshold=80,
        auto_allocate=True,
    )


@pytest.fixture
def sample_records() -> list[PurchaseRecord]:
    """Purchases spread over February and March 2024."""
    return [
        PurchaseRecord("p1", "Womenswear", Decimal("120.50"), date(2024, 2, 1)),
        PurchaseRecord("p2", "Menswear", Decimal("89.99"), date(2024, 2, 10)),
        PurchaseRecord("p3", "Womenswear", Decimal("45.00"), date(2024, 2, 29)),
        PurchaseRecord("p4", "Shoes", Decimal("60.00"), date(2024, 3, 1)),
        PurchaseRecord("p5", "Kidswear", Decimal("30.25"), date(2024, 3, 15)),
        PurchaseRecord("p6", "Menswear", Decimal("200.00"), date(2024, 1, 31)),
    ]
