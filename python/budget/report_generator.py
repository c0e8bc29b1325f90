"""
Spending Report Generator Module

Writes a budget status to an Excel workbook: a Summary sheet with totals and
alerts, and a Categories sheet with planned vs. actual per category.
"""

import logging
from datetime import datetime
from pathlib import Path

import yaml
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .tracker import BudgetStatus

logger = logging.getLogger(__name__)


class SpendingReportGenerator:
    """Builds Excel spending reports."""

    HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
    HEADER_FONT = Font(bold=True, color="FFFFFF", size=12)
    TITLE_FONT = Font(bold=True, size=14)
    OVER_FILL = PatternFill(start_color="F8CBAD", end_color="F8CBAD", fill_type="solid")
    PERCENT_FORMAT = '0.0"%"'

    THIN_BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    CATEGORY_HEADERS = ["Category", "Planned", "Actual", "Remaining", "Utilization", "Share of Spend"]

    def __init__(self, config_dir: Path | str | None = None):
        """Initialize the generator.

        Args:
            config_dir: Path to configuration directory
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).parent.parent.parent / "config"
        self._load_config()

    def _load_config(self) -> None:
        """Load the currency symbol used in number formats."""
        config_file = self.config_dir / "budget_config.yaml"
        config = {}
        if config_file.exists():
            with open(config_file) as f:
                config = yaml.safe_load(f) or {}

        self.currency_symbol = config.get("currency", {}).get("symbol", "$")
        self.currency_format = f'"{self.currency_symbol}"#,##0.00'

    def build_workbook(self, status: BudgetStatus) -> Workbook:
        """Build the report workbook.

        Args:
            status: Budget status to report

        Returns:
            openpyxl Workbook
        """
        wb = Workbook()
        summary_ws = wb.active
        summary_ws.title = "Summary"
        self._write_summary(summary_ws, status)

        categories_ws = wb.create_sheet("Categories")
        self._write_categories(categories_ws, status)

        return wb

    def save(self, status: BudgetStatus, output_path: Path | str) -> Path:
        """Build the report and save it to ``output_path``."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.build_workbook(status).save(output_path)
        logger.info(f"Saved spending report to {output_path}")
        return output_path

    def _write_summary(self, ws: Worksheet, status: BudgetStatus) -> None:
        budget = status.budget
        summary = status.summary
        window = summary.period_window

        ws["A1"] = f"Spending Report: {budget.name}"
        ws["A1"].font = self.TITLE_FONT
        ws["A2"] = f"{window.start_date.isoformat()} to {window.end_date.isoformat()}"

        rows = [
            ("Total Budget", float(budget.total_amount), self.currency_format),
            ("Total Spent", float(summary.total_spent), self.currency_format),
            ("Remaining", float(budget.total_amount - summary.total_spent), self.currency_format),
            ("Items Purchased", summary.item_count, None),
            ("Alert", status.alert.severity.value, None),
        ]
        if status.trend is not None:
            rows.append(("Change vs Previous", float(status.trend.change_amount), self.currency_format))
            if status.trend.change_percentage is not None:
                rows.append(("Change %", float(status.trend.change_percentage), self.PERCENT_FORMAT))

        row_num = 4
        for label, value, number_format in rows:
            ws.cell(row=row_num, column=1, value=label).font = Font(bold=True)
            cell = ws.cell(row=row_num, column=2, value=value)
            if number_format:
                cell.number_format = number_format
            row_num += 1

        alerts = status.alerts
        if alerts:
            row_num += 1
            ws.cell(row=row_num, column=1, value="Alerts").font = Font(bold=True)
            for alert in alerts:
                row_num += 1
                ws.cell(row=row_num, column=1, value=alert.severity.value)
                ws.cell(row=row_num, column=2, value=alert.message)

        row_num += 2
        ws.cell(row=row_num, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 48

    def _write_categories(self, ws: Worksheet, status: BudgetStatus) -> None:
        for col, header in enumerate(self.CATEGORY_HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = self.HEADER_FONT
            cell.fill = self.HEADER_FILL
            cell.alignment = Alignment(horizontal="center")
            cell.border = self.THIN_BORDER

        shares = status.summary.category_shares()

        for row_num, variance in enumerate(status.category_variances, 2):
            values = [
                (variance.name, None),
                (float(variance.planned), self.currency_format),
                (float(variance.actual), self.currency_format),
                (float(variance.remaining), self.currency_format),
                (float(variance.utilization_percent), self.PERCENT_FORMAT),
                (float(shares.get(variance.name, 0)), self.PERCENT_FORMAT),
            ]
            for col, (value, number_format) in enumerate(values, 1):
                cell = ws.cell(row=row_num, column=col, value=value)
                cell.border = self.THIN_BORDER
                if number_format:
                    cell.number_format = number_format
                if variance.is_over_budget:
                    cell.fill = self.OVER_FILL

        for col in range(1, len(self.CATEGORY_HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 16
