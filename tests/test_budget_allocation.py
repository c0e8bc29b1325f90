"""
Budget Allocation Tests

Tests for money helpers, category allocation, budget validation and
planned-vs-actual reconciliation.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

import pytest

from budget import (
    Budget,
    CategoryAllocator,
    CategoryBudget,
    DivisionError,
    PeriodWindow,
    SpendSummary,
    ValidationError,
)
from budget.money import (
    format_currency,
    format_percentage,
    from_cents,
    percentage_of,
    round_money,
    to_cents,
    to_decimal,
)


class TestMoney:
    """Tests for money and percentage helpers."""

    def test_round_money_half_up(self):
        """Test half-up rounding to the cent."""
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")

    def test_float_input_goes_through_string(self):
        """Test floats are converted without binary noise."""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_invalid_amount(self):
        """Test non-numeric input is rejected."""
        with pytest.raises(ValidationError):
            to_decimal("abc")
        with pytest.raises(ValidationError):
            to_decimal(None)

    def test_cents_conversion(self):
        """Test conversion to and from integer cents."""
        assert to_cents("19.99") == 1999
        assert from_cents(1999) == Decimal("19.99")
        assert from_cents(0) == Decimal("0.00")

    def test_percentage_of_zero_base(self):
        """Test percentage against a zero base raises."""
        with pytest.raises(DivisionError):
            percentage_of(10, 0)

    def test_percentage_of(self):
        """Test percentage rounding to one place."""
        assert percentage_of(1, 3) == Decimal("33.3")

    def test_format_currency(self):
        """Test currency formatting."""
        assert format_currency(Decimal("1234.5")) == "$1,234.50"
        assert format_currency(-5) == "-$5.00"
        assert format_currency(10, symbol="€") == "€10.00"

    def test_format_percentage(self):
        """Test trailing zero is dropped."""
        assert format_percentage(Decimal("85.0")) == "85"
        assert format_percentage(Decimal("85.25")) == "85.3"


class TestCategoryAllocator:
    """Tests for CategoryAllocator class."""

    @pytest.fixture
    def allocator(self, empty_config_dir: Path):
        """Create allocator with default configuration."""
        return CategoryAllocator(empty_config_dir)

    def test_default_allocation(self, allocator):
        """Test allocation with the default weight table."""
        result = allocator.allocate(Decimal("1000"))

        amounts = {item["name"]: item["amount"] for item in result}
        assert amounts == {
            "Menswear": Decimal("250.00"),
            "Womenswear": Decimal("350.00"),
            "Kidswear": Decimal("150.00"),
            "Accessories": Decimal("150.00"),
            "Shoes": Decimal("100.00"),
        }
        assert sum(amounts.values()) == Decimal("1000.00")

    def test_residual_goes_to_last_category(self, allocator):
        """Test rounding residual is absorbed by the last category."""
        weights = [
            {"name": "A", "percentage": Decimal("33.333")},
            {"name": "B", "percentage": Decimal("33.333")},
            {"name": "C", "percentage": Decimal("33.333")},
        ]

        result = allocator.allocate(Decimal("100"), weights)

        assert [item["amount"] for item in result] == [
            Decimal("33.33"),
            Decimal("33.33"),
            Decimal("33.34"),
        ]
        assert sum(item["amount"] for item in result) == Decimal("100.00")

    def test_half_up_rounding_reconciled(self, allocator):
        """Test half-cent shares are rounded up then reconciled."""
        weights = [
            {"name": "A", "percentage": 50},
            {"name": "B", "percentage": 50},
        ]

        result = allocator.allocate(Decimal("0.05"), weights)

        assert result[0]["amount"] == Decimal("0.03")
        assert result[1]["amount"] == Decimal("0.02")

    def test_partial_weights(self, allocator):
        """Test weights below 100% allocate only their share."""
        result = allocator.allocate(1000, [{"name": "A", "percentage": 30}])

        assert result == [{"name": "A", "amount": Decimal("300.00")}]
        assert abs(allocator.amount_to_percentage(result[0]["amount"], 1000) - 30) <= Decimal("0.1")

    def test_overshoot_larger_than_last_share(self, allocator):
        """Test an overshoot bigger than the last share never goes negative."""
        weights = [{"name": name, "percentage": Decimal("0.5")} for name in "ABCDE"]

        result = allocator.allocate(Decimal("1.00"), weights)

        assert [item["amount"] for item in result] == [
            Decimal("0.01"),
            Decimal("0.01"),
            Decimal("0.01"),
            Decimal("0.00"),
            Decimal("0.00"),
        ]

    @pytest.mark.parametrize("total, percentages", [
        ("1.00", ["0.5"] * 5),
        ("1.00", ["0.5"] * 200),
        ("0.01", ["50", "50"]),
        ("0.01", ["33.333", "33.333", "33.334", "0"]),
        ("100", ["33.333", "33.333", "33.333"]),
        ("10", ["50", "50.0005"]),
        ("0.07", ["0.1"] * 10 + ["99", "0", "0"]),
        ("999.99", ["12.5", "12.5", "25", "50"]),
        ("0", ["25", "75"]),
    ])
    def test_allocation_sums_to_weighted_total(self, allocator, total, percentages):
        """Test amounts are non-negative and sum to the rounded weighted total."""
        weights = [
            {"name": f"C{i}", "percentage": Decimal(pct)} for i, pct in enumerate(percentages)
        ]
        weight_sum = min(sum(Decimal(pct) for pct in percentages), Decimal("100"))
        expected = (Decimal(total) * weight_sum / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        result = allocator.allocate(Decimal(total), weights)

        amounts = [item["amount"] for item in result]
        assert len(amounts) == len(percentages)
        assert all(amount >= 0 for amount in amounts)
        assert sum(amounts) == expected
        for amount, pct in zip(amounts, percentages):
            if Decimal(pct) == 0:
                assert amount == 0

    def test_weights_over_100_rejected(self, allocator):
        """Test weights above 100% raise."""
        weights = [
            {"name": "A", "percentage": 60},
            {"name": "B", "percentage": 41},
        ]

        with pytest.raises(ValidationError):
            allocator.allocate(1000, weights)

    def test_weights_within_tolerance(self, allocator):
        """Test weights just above 100% inside tolerance are accepted."""
        weights = [
            {"name": "A", "percentage": Decimal("50")},
            {"name": "B", "percentage": Decimal("50.0005")},
        ]

        result = allocator.allocate(1000, weights)

        assert sum(item["amount"] for item in result) == Decimal("1000.00")

    def test_negative_inputs_rejected(self, allocator):
        """Test negative totals and weights raise."""
        with pytest.raises(ValidationError):
            allocator.allocate(-1, [{"name": "A", "percentage": 10}])
        with pytest.raises(ValidationError):
            allocator.allocate(100, [{"name": "A", "percentage": -10}])

    def test_duplicate_names_rejected(self, allocator):
        """Test duplicate category names raise."""
        weights = [
            {"name": "A", "percentage": 10},
            {"name": "A", "percentage": 20},
        ]

        with pytest.raises(ValidationError):
            allocator.allocate(100, weights)

    def test_zero_total(self, allocator):
        """Test allocating nothing yields zero amounts."""
        result = allocator.allocate(0)

        assert all(item["amount"] == Decimal("0.00") for item in result)

    def test_amount_to_percentage(self, allocator):
        """Test amount to percentage conversion."""
        assert allocator.amount_to_percentage(250, 1000) == Decimal("25.0")
        assert allocator.amount_to_percentage(1, 3) == Decimal("33.3")

    def test_amount_to_percentage_zero_total(self, allocator):
        """Test zero total gives 0% instead of raising."""
        assert allocator.amount_to_percentage(50, 0) == Decimal("0")

    def test_default_weights_unknown_category(self, allocator):
        """Test categories missing from the table default to 0%."""
        weights = allocator.default_weights(["Menswear", "Socks"])

        assert weights[0]["percentage"] == Decimal("25")
        assert weights[1]["percentage"] == Decimal("0")

    def test_auto_allocate(self, allocator):
        """Test auto allocation builds category budgets."""
        categories = allocator.auto_allocate(200, ["Menswear", "Womenswear"])

        assert categories == [
            CategoryBudget("Menswear", Decimal("50.00"), Decimal("25")),
            CategoryBudget("Womenswear", Decimal("70.00"), Decimal("35")),
        ]

    def test_configured_weights(self, tmp_path: Path):
        """Test default weights are read from config."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "budget_config.yaml").write_text("""
default_weights:
  Menswear: 60
  Womenswear: 40
""")

        allocator = CategoryAllocator(config_dir)
        result = allocator.allocate(100)

        assert result == [
            {"name": "Menswear", "amount": Decimal("60.00")},
            {"name": "Womenswear", "amount": Decimal("40.00")},
        ]


class TestBudgetValidation:
    """Tests for budget validation and reconciliation."""

    @pytest.fixture
    def allocator(self, empty_config_dir: Path):
        return CategoryAllocator(empty_config_dir)

    def test_valid_budget(self, allocator, sample_budget):
        """Test a consistent budget passes."""
        allocator.validate_budget(sample_budget)

    def test_amount_mismatch(self, allocator, sample_budget):
        """Test auto-allocated amounts must match the total."""
        budget = Budget(
            id="b2",
            name="Mismatch",
            total_amount=Decimal("1000"),
            categories=(
                CategoryBudget("Menswear", Decimal("300"), Decimal("30")),
                CategoryBudget("Womenswear", Decimal("300"), Decimal("30")),
            ),
        )

        with pytest.raises(ValidationError, match="don't match total budget"):
            allocator.validate_budget(budget)

    def test_mismatch_allowed_without_auto_allocate(self, allocator):
        """Test manual budgets may leave money unallocated."""
        budget = Budget(
            id="b3",
            name="Manual",
            total_amount=Decimal("1000"),
            categories=(CategoryBudget("Shoes", Decimal("100"), Decimal("10")),),
            auto_allocate=False,
        )

        allocator.validate_budget(budget)

    def test_mismatch_within_tolerance(self, allocator):
        """Test a one-cent difference is tolerated."""
        budget = Budget(
            id="b4",
            name="Close",
            total_amount=Decimal("100.00"),
            categories=(
                CategoryBudget("A", Decimal("33.33"), Decimal("33.33")),
                CategoryBudget("B", Decimal("33.33"), Decimal("33.33")),
                CategoryBudget("C", Decimal("33.33"), Decimal("33.33")),
            ),
        )

        allocator.validate_budget(budget)

    def test_percentages_over_100(self, allocator):
        """Test category percentages must not exceed 100 in total."""
        budget = Budget(
            id="b5",
            name="Over",
            total_amount=Decimal("100"),
            categories=(
                CategoryBudget("A", Decimal("50"), Decimal("60")),
                CategoryBudget("B", Decimal("50"), Decimal("60")),
            ),
        )

        with pytest.raises(ValidationError):
            allocator.validate_budget(budget)

    def test_invalid_threshold(self, allocator):
        """Test threshold outside 0..100 is rejected."""
        budget = Budget(id="b6", name="T", total_amount=Decimal("0"), alert_threshold=120)

        with pytest.raises(ValidationError):
            allocator.validate_budget(budget)

    def test_duplicate_category(self, allocator):
        """Test duplicate category names are rejected."""
        budget = Budget(
            id="b7",
            name="Dup",
            total_amount=Decimal("100"),
            categories=(
                CategoryBudget("A", Decimal("50"), Decimal("50")),
                CategoryBudget("A", Decimal("50"), Decimal("50")),
            ),
        )

        with pytest.raises(ValidationError, match="Duplicate"):
            allocator.validate_budget(budget)

    def test_reconcile(self, allocator, sample_budget):
        """Test planned vs. actual per category."""
        summary = SpendSummary(
            period_window=PeriodWindow(date(2024, 2, 1), date(2024, 2, 29)),
            total_spent=Decimal("185.50"),
            by_category={"Womenswear": Decimal("165.50"), "Hats": Decimal("20.00")},
            item_count=3,
        )

        variances = allocator.reconcile(sample_budget, summary)

        assert [v.name for v in variances] == [
            "Menswear", "Womenswear", "Kidswear", "Accessories", "Shoes", "Hats",
        ]
        womenswear = variances[1]
        assert womenswear.remaining == Decimal("184.50")
        assert womenswear.utilization_percent == Decimal("47.3")
        assert womenswear.is_over_budget is False

        hats = variances[-1]
        assert hats.planned == Decimal("0.00")
        assert hats.is_over_budget is True
        assert hats.utilization_percent == Decimal("0.0")
