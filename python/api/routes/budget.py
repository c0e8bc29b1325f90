"""
Budget API Routes

Provides endpoints for budget validation, allocation, period windows,
spending status, purchase planning and yearly breakdowns.
"""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, Query

from budget import (
    BudgetPeriod,
    BudgetPlanner,
    BudgetTracker,
    CategoryAllocator,
    monthly_breakdown,
    resolve,
    spending_overview,
)

from ..dependencies import get_allocator, get_planner, get_tracker
from ..schemas import AllocateRequest, BudgetIn, MonthlyReportRequest, PlanRequest, StatusRequest

router = APIRouter(prefix="/budget", tags=["budget"])


@router.post("/validate")
async def validate_budget(
    request: BudgetIn,
    allocator: CategoryAllocator = Depends(get_allocator),
) -> dict:
    """Validate a budget definition.

    Args:
        request: Budget definition
        allocator: Category allocator

    Returns:
        The normalized budget
    """
    budget = request.to_budget()
    allocator.validate_budget(budget)
    return {"valid": True, "budget": budget.to_dict()}


@router.post("/allocate")
async def allocate_budget(
    request: AllocateRequest,
    allocator: CategoryAllocator = Depends(get_allocator),
) -> dict:
    """Split a total budget across categories.

    Args:
        request: Total and optional weights or category names
        allocator: Category allocator

    Returns:
        Allocations with amount and percentage per category
    """
    if request.weights is not None:
        weights = [w.model_dump() for w in request.weights]
    elif request.categories:
        weights = allocator.default_weights(request.categories)
    else:
        weights = None

    allocations = allocator.allocate(request.total_amount, weights)

    return {
        "total_amount": float(request.total_amount),
        "allocations": [
            {
                "name": item["name"],
                "amount": float(item["amount"]),
                "percentage": float(
                    allocator.amount_to_percentage(item["amount"], request.total_amount)
                ),
            }
            for item in allocations
        ],
    }


@router.get("/period")
async def get_period_window(
    period: BudgetPeriod = Query(BudgetPeriod.MONTHLY),
    reference_date: date | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
) -> dict:
    """Get the inclusive date window of a budget period.

    Args:
        period: Period kind
        reference_date: Date inside the period (defaults to today, UTC)
        start_date: Custom period start
        end_date: Custom period end

    Returns:
        Window start and end dates
    """
    reference_date = reference_date or datetime.now(timezone.utc).date()
    window = resolve(period, reference_date, start_date, end_date)
    return {"period": period.value, **window.to_dict(), "days": window.days}


@router.post("/status")
async def get_budget_status(
    request: StatusRequest,
    tracker: BudgetTracker = Depends(get_tracker),
    planner: BudgetPlanner = Depends(get_planner),
) -> dict:
    """Get spending, alerts and category variances for a budget period.

    Args:
        request: Budget, purchase records and reference date
        tracker: Budget tracker
        planner: Budget planner, for projections when ``as_of`` is given

    Returns:
        Budget status
    """
    budget = request.budget.to_budget()
    status = tracker.track(
        budget,
        [r.to_record() for r in request.records],
        request.reference_date,
        compare_previous=request.compare_previous,
    )

    result = status.to_dict()
    result["alerts"] = [a.to_dict() for a in status.alerts]
    result["category_shares"] = {
        k: float(v) for k, v in status.summary.category_shares().items()
    }
    if request.as_of is not None:
        result["analytics"] = planner.analyze(budget, status.summary, request.as_of).to_dict()
    return result


@router.post("/plan")
async def plan_purchase(
    request: PlanRequest,
    planner: BudgetPlanner = Depends(get_planner),
) -> dict:
    """Check whether a planned purchase fits the remaining budget.

    Args:
        request: Budget, spending so far and estimated cost
        planner: Budget planner

    Returns:
        Purchase plan with recommendations
    """
    plan = planner.plan_purchase(
        request.total_budget, request.current_spending, request.estimated_cost
    )
    return {
        "event": request.event,
        "target_date": request.target_date.isoformat() if request.target_date else None,
        **plan.to_dict(),
    }


@router.post("/report/monthly")
async def get_monthly_report(request: MonthlyReportRequest) -> dict:
    """Get spending per month and yearly averages.

    Args:
        request: Purchase records and year

    Returns:
        Monthly breakdown and overview
    """
    records = [r.to_record() for r in request.records]
    return {
        "year": request.year,
        "monthly_breakdown": [m.to_dict() for m in monthly_breakdown(records, request.year)],
        "overview": spending_overview(records, request.year).to_dict(),
    }
