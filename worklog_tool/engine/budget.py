"""Budget consumption for fixed-price projects."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from worklog_tool.coercion import ZERO
from worklog_tool.engine.labor import calculate_labor
from worklog_tool.models import BudgetCalc, ExtraWorkType, Project, Report

_HUNDRED = Decimal("100")


def calculate_budget(
    project: Optional[Project],
    reports: Optional[Iterable[Report]],
) -> BudgetCalc:
    """Invoiced-to-date against the contracted budget.

    Only normal reports of this project count towards ``invoiced_total``;
    extra work is billed outside the contract and is reported separately
    in ``extra_work_income``. Progress is clamped to 0..100 while
    ``is_over_budget`` looks at the unclamped remainder.
    """
    if project is None or reports is None:
        return BudgetCalc()

    invoiced_total = ZERO
    extra_work_income = ZERO

    for report in reports:
        if report.project_id != project.id:
            continue
        if not report.is_extra_work:
            invoiced_total += report.invoiced_amount
        elif report.extra_work_type == ExtraWorkType.ADDITIONAL_BUDGET:
            extra_work_income += report.extra_budget_amount
        elif report.extra_work_type == ExtraWorkType.HOURLY:
            extra_work_income += calculate_labor(report.labor, project).total_labor_cost

    budget_amount = project.budget_amount
    remaining_budget = budget_amount - invoiced_total

    if budget_amount > 0:
        progress = invoiced_total / budget_amount * _HUNDRED
        progress = min(max(progress, ZERO), _HUNDRED)
        progress = progress.quantize(Decimal("0.01"), ROUND_HALF_UP)
    else:
        progress = ZERO

    return BudgetCalc(
        budget_amount=budget_amount,
        invoiced_total=invoiced_total,
        remaining_budget=remaining_budget,
        progress_percentage=progress,
        is_over_budget=remaining_budget < 0,
        extra_work_income=extra_work_income,
    )
