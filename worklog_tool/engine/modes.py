"""Report mode resolution and per-report cost/income.

A report's billing mode is never stored as one field: it follows from the
project type plus the report's ``is_extra_work``/``extra_work_type`` flags.
``resolve_mode`` reads those flags once so the calculators can dispatch on
a single ReportMode.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from worklog_tool.coercion import ZERO
from worklog_tool.engine.labor import calculate_labor
from worklog_tool.engine.materials import calculate_materials
from worklog_tool.models import (
    ExtraWorkType,
    Project,
    ProjectType,
    Report,
    ReportMode,
)


def resolve_mode(report: Report, project: Project) -> Optional[ReportMode]:
    """Return the report's mode, or None for extra work of unknown type."""
    if report.is_extra_work:
        if report.extra_work_type == ExtraWorkType.ADDITIONAL_BUDGET:
            return ReportMode.EXTRA_BUDGET
        if report.extra_work_type == ExtraWorkType.HOURLY:
            return ReportMode.EXTRA_HOURLY
        return None

    if project.type == ProjectType.FIXED:
        return ReportMode.FIXED_NORMAL
    return ReportMode.HOURLY_NORMAL


def calculate_report_total_cost(
    report: Optional[Report],
    project: Optional[Project],
) -> Decimal:
    """Amount shown as a report's cost in list views."""
    if report is None or project is None:
        return ZERO

    mode = resolve_mode(report, project)
    if mode in (ReportMode.HOURLY_NORMAL, ReportMode.EXTRA_HOURLY):
        labor = calculate_labor(report.labor, project)
        materials = calculate_materials(report.materials)
        return labor.total_labor_cost + materials.total_materials_cost
    if mode == ReportMode.EXTRA_BUDGET:
        return report.extra_budget_amount
    if mode == ReportMode.FIXED_NORMAL:
        return report.invoiced_amount
    return ZERO


def calculate_report_income(
    report: Optional[Report],
    project: Optional[Project],
) -> Decimal:
    """Revenue attributed to a single report.

    Hourly and extra-hourly reports earn their labor cost, extra budget
    reports their additional amount, fixed reports what was invoiced.
    """
    if report is None or project is None:
        return ZERO

    mode = resolve_mode(report, project)
    if mode in (ReportMode.HOURLY_NORMAL, ReportMode.EXTRA_HOURLY):
        return calculate_labor(report.labor, project).total_labor_cost
    if mode == ReportMode.EXTRA_BUDGET:
        return report.extra_budget_amount
    if mode == ReportMode.FIXED_NORMAL:
        return report.invoiced_amount
    return ZERO
