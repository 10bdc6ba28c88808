"""Excel export of a report summary.

Writes a fresh workbook with three sheets: Totals, By Week and By Project.
Excel formulas are NOT relied upon; all values are pre-computed in Python.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from worklog_tool.models import Contribution, ReportSummary

TOTALS_SHEET = "Totals"
WEEK_SHEET = "By Week"
PROJECT_SHEET = "By Project"

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)

HEADER_FONT = Font(name='Calibri', size=11, bold=True)
DATA_FONT = Font(name='Calibri', size=11)
TITLE_FONT = Font(name='Calibri', size=12, bold=True)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')
EURO_FORMAT = '#,##0.00 "€"'
NUMBER_FORMAT = '#,##0.00'

# (header, attribute on Contribution, number format)
FIGURE_COLUMNS = [
    ("Labor", "labor_cost", EURO_FORMAT),
    ("Materials", "materials_cost", EURO_FORMAT),
    ("Total Cost", "total_cost", EURO_FORMAT),
    ("Invoiced", "invoiced_amount", EURO_FORMAT),
    ("Income", "total_income", EURO_FORMAT),
    ("Official Hours", "official_hours", NUMBER_FORMAT),
    ("Worker Hours", "worker_hours", NUMBER_FORMAT),
    ("Extra Budget", "extra_budget", EURO_FORMAT),
    ("Extra Cost", "extra_cost", EURO_FORMAT),
    ("Reports", "count", None),
]


def _write_header(ws, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, start=1):
        c = ws.cell(row=row, column=col)
        c.value = label
        c.font = HEADER_FONT
        c.alignment = CENTER_ALIGN
        c.border = THIN_BORDER


def _write_value(ws, row: int, col: int, value, number_format: str | None = None) -> None:
    c = ws.cell(row=row, column=col)
    c.value = float(value) if isinstance(value, Decimal) else value
    c.font = DATA_FONT
    c.border = THIN_BORDER
    if number_format:
        c.number_format = number_format


def _write_figures(ws, row: int, first_col: int, figures: Contribution) -> None:
    for offset, (_, attr, fmt) in enumerate(FIGURE_COLUMNS):
        _write_value(ws, row, first_col + offset, getattr(figures, attr), fmt)


def _autosize(ws) -> None:
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        width = max(
            (len(str(ws.cell(row=r, column=col).value or "")) for r in range(1, ws.max_row + 1)),
            default=8,
        )
        ws.column_dimensions[letter].width = max(10, width + 2)


def _totals_sheet(ws, summary: ReportSummary) -> None:
    t = summary.totals
    ws.cell(row=1, column=1).value = 'Report Summary'
    ws.cell(row=1, column=1).font = TITLE_FONT

    rows = [
        ("Total Labor", t.total_labor, EURO_FORMAT),
        ("Total Materials", t.total_materials, EURO_FORMAT),
        ("Total Cost", t.total_cost, EURO_FORMAT),
        ("Total Invoiced", t.total_invoiced, EURO_FORMAT),
        ("Total Income", t.total_income, EURO_FORMAT),
        ("Official Hours", t.total_official_hours, NUMBER_FORMAT),
        ("Worker Hours", t.total_worker_hours, NUMBER_FORMAT),
        ("Total Hours", t.total_hours, NUMBER_FORMAT),
        ("Extra Budget", t.total_extra_budget, EURO_FORMAT),
        ("Extra Cost", t.total_extra_cost, EURO_FORMAT),
        ("Extra Hours", t.total_extra_hours, NUMBER_FORMAT),
        ("Grand Total", t.grand_total, EURO_FORMAT),
        ("Reports", t.report_count, None),
        ("Extra Work Reports", t.extra_work_count, None),
        ("Skipped Reports", t.skipped_count, None),
    ]
    if t.budget is not None:
        rows += [
            ("Budget", t.budget.budget_amount, EURO_FORMAT),
            ("Invoiced Against Budget", t.budget.invoiced_total, EURO_FORMAT),
            ("Remaining Budget", t.budget.remaining_budget, EURO_FORMAT),
            ("Progress %", t.budget.progress_percentage, NUMBER_FORMAT),
            ("Over Budget", "YES" if t.budget.is_over_budget else "NO", None),
        ]

    _write_header(ws, 3, ["Item", "Value"])
    for i, (label, value, fmt) in enumerate(rows, start=4):
        _write_value(ws, i, 1, label)
        _write_value(ws, i, 2, value, fmt)

    grand_row = 4 + [r[0] for r in rows].index("Grand Total")
    ws.cell(row=grand_row, column=1).font = HEADER_FONT
    ws.cell(row=grand_row, column=2).font = HEADER_FONT


def _week_sheet(ws, summary: ReportSummary) -> None:
    _write_header(ws, 1, ["Week", "Year"] + [h for h, _, _ in FIGURE_COLUMNS])
    for row, bucket in enumerate(summary.by_week, start=2):
        _write_value(ws, row, 1, bucket.week_number)
        _write_value(ws, row, 2, bucket.year)
        _write_figures(ws, row, 3, bucket.figures)


def _project_sheet(ws, summary: ReportSummary) -> None:
    _write_header(ws, 1, ["Project", "Client", "Type", "Budget"] + [h for h, _, _ in FIGURE_COLUMNS])
    for row, bucket in enumerate(summary.by_project, start=2):
        _write_value(ws, row, 1, bucket.project_id)
        _write_value(ws, row, 2, bucket.client)
        _write_value(ws, row, 3, bucket.type.value)
        _write_value(ws, row, 4, bucket.budget_amount, EURO_FORMAT)
        _write_figures(ws, row, 5, bucket.figures)


def generate_summary_workbook(
    summary: ReportSummary,
    output_path: str | Path,
) -> Path:
    """Write the summary as an .xlsx workbook and return its path."""
    output_path = Path(output_path)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = TOTALS_SHEET
    _totals_sheet(ws, summary)
    _week_sheet(wb.create_sheet(WEEK_SHEET), summary)
    _project_sheet(wb.create_sheet(PROJECT_SHEET), summary)

    for sheet in wb.worksheets:
        _autosize(sheet)

    wb.save(str(output_path))
    return output_path
