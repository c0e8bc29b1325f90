"""
API Request Schemas

Pydantic models validating request bodies before they reach the budget core.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from budget import Budget, BudgetPeriod, CategoryBudget, PurchaseRecord


class CategoryIn(BaseModel):
    """Category allocation in a budget definition."""

    name: str = Field(min_length=1)
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)


class BudgetIn(BaseModel):
    """Budget definition as submitted by the budget form."""

    id: str = ""
    name: str = "Budget"
    total_amount: Decimal = Field(ge=0)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date | None = None
    end_date: date | None = None
    categories: list[CategoryIn] = Field(default_factory=list)
    alert_threshold: int = Field(default=80, ge=0, le=100)
    auto_allocate: bool = True

    def to_budget(self) -> Budget:
        return Budget(
            id=self.id,
            name=self.name,
            total_amount=self.total_amount,
            period=self.period,
            start_date=self.start_date,
            end_date=self.end_date,
            categories=tuple(
                CategoryBudget(name=c.name, amount=c.amount, percentage=c.percentage)
                for c in self.categories
            ),
            alert_threshold=self.alert_threshold,
            auto_allocate=self.auto_allocate,
        )


class PurchaseIn(BaseModel):
    """Purchase record from the wardrobe store."""

    id: str = ""
    category_name: str
    amount: Decimal = Field(ge=0)
    purchase_date: datetime | date

    def to_record(self) -> PurchaseRecord:
        return PurchaseRecord(
            id=self.id,
            category_name=self.category_name,
            amount=self.amount,
            purchase_date=self.purchase_date,
        )


class WeightIn(BaseModel):
    """Percentage weight for one category."""

    name: str = Field(min_length=1)
    percentage: Decimal = Field(ge=0)


class AllocateRequest(BaseModel):
    """Request to split a total across categories.

    Without weights, the default weight table is applied to ``categories``
    (or to every category in the table when that is empty too).
    """

    total_amount: Decimal = Field(ge=0)
    weights: list[WeightIn] | None = None
    categories: list[str] | None = None


class StatusRequest(BaseModel):
    """Request for the status of a budget in one period."""

    budget: BudgetIn
    records: list[PurchaseIn] = Field(default_factory=list)
    reference_date: date
    compare_previous: bool = True
    as_of: date | None = None


class PlanRequest(BaseModel):
    """Request to check a planned purchase against the budget."""

    total_budget: Decimal = Field(ge=0)
    current_spending: Decimal = Field(ge=0)
    estimated_cost: Decimal = Field(ge=0)
    event: str | None = None
    target_date: date | None = None


class MonthlyReportRequest(BaseModel):
    """Request for a yearly spending breakdown."""

    records: list[PurchaseIn] = Field(default_factory=list)
    year: int = Field(ge=1900, le=9999)
