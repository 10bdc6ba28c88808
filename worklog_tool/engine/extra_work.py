"""Out-of-budget ("extra") work attached to fixed-price projects.

Extra work is billed one of two ways:

- additional_budget: a flat amount agreed on top of the contract.
- hourly: the report's own labor at the project rates plus its materials.

Extra work of any other type is counted but carries no money.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from worklog_tool.coercion import ZERO
from worklog_tool.engine.labor import calculate_labor
from worklog_tool.engine.materials import calculate_materials
from worklog_tool.logging_config import get_logger
from worklog_tool.models import ExtraWorkCalc, ExtraWorkType, Project, Report

logger = get_logger("engine.extra_work")


def calculate_extra_work(
    reports: Optional[Iterable[Report]],
    project: Optional[Project],
) -> ExtraWorkCalc:
    """Totals of a project's extra-work reports."""
    if reports is None or project is None:
        return ExtraWorkCalc()

    extra_reports = tuple(
        r for r in reports if r.project_id == project.id and r.is_extra_work
    )

    total_extra_budget = ZERO
    total_extra_labor_cost = ZERO
    total_extra_materials = ZERO
    total_extra_cost = ZERO

    for report in extra_reports:
        if report.extra_work_type == ExtraWorkType.ADDITIONAL_BUDGET:
            total_extra_budget += report.extra_budget_amount
        elif report.extra_work_type == ExtraWorkType.HOURLY:
            labor_cost = calculate_labor(report.labor, project).total_labor_cost
            materials_cost = calculate_materials(report.materials).total_materials_cost
            total_extra_labor_cost += labor_cost
            total_extra_materials += materials_cost
            # Some forms store a denormalised totalCost; prefer it when set.
            if report.total_cost:
                total_extra_cost += report.total_cost
            else:
                total_extra_cost += labor_cost + materials_cost
        else:
            logger.warning("extra_work_type_unrecognised", extra={
                "report_id": report.id,
                "project_id": project.id,
                "extra_work_type": report.extra_work_type_raw,
            })

    return ExtraWorkCalc(
        total_extra_budget=total_extra_budget,
        total_extra_labor_cost=total_extra_labor_cost,
        total_extra_materials=total_extra_materials,
        total_extra_cost=total_extra_cost,
        extra_work_count=len(extra_reports),
        extra_work_reports=extra_reports,
    )
