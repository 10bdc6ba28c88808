"""Report summary: totals, weekly and per-project breakdowns.

Every report is turned into one immutable Contribution according to its
ReportMode, then the contributions are folded into week and project maps.
Totals are the fold of the same contributions, so the buckets always add
back up to them.

Income rules:

- hourly project, normal report: labor cost is income.
- fixed project, normal report: the invoiced amount is income; labor and
  materials are still tracked as cost.
- extra work, additional budget: the amount goes to extra budget.
- extra work, hourly: labor plus materials go to extra cost.

``total_income`` covers normal reports only and
``grand_total = total_income + total_extra_budget``.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import Optional

from worklog_tool.engine.budget import calculate_budget
from worklog_tool.engine.labor import calculate_labor
from worklog_tool.engine.materials import calculate_materials
from worklog_tool.engine.modes import resolve_mode
from worklog_tool.logging_config import get_logger
from worklog_tool.models import (
    Contribution,
    Project,
    ProjectBucket,
    ProjectType,
    Report,
    ReportMode,
    ReportSummary,
    Totals,
    WeekBucket,
)

logger = get_logger("engine.summary")

WeekKey = tuple[int, int]  # (year, week_number)


def report_contribution(report: Report, project: Project) -> Contribution:
    """Money and hours one report adds to every bucket it falls into.

    Labor and materials are recomputed from the raw clock times and items;
    any stored totals on the report are ignored.
    """
    labor = calculate_labor(report.labor, project)
    materials_cost = calculate_materials(report.materials).total_materials_cost
    mode = resolve_mode(report, project)

    if mode == ReportMode.HOURLY_NORMAL:
        return Contribution(
            labor_cost=labor.total_labor_cost,
            materials_cost=materials_cost,
            total_income=labor.total_labor_cost,
            official_hours=labor.official_hours,
            worker_hours=labor.worker_hours,
            count=1,
        )
    if mode == ReportMode.FIXED_NORMAL:
        return Contribution(
            labor_cost=labor.total_labor_cost,
            materials_cost=materials_cost,
            invoiced_amount=report.invoiced_amount,
            total_income=report.invoiced_amount,
            official_hours=labor.official_hours,
            worker_hours=labor.worker_hours,
            count=1,
        )
    if mode == ReportMode.EXTRA_BUDGET:
        return Contribution(
            extra_budget=report.extra_budget_amount,
            count=1,
            extra_work_count=1,
        )
    if mode == ReportMode.EXTRA_HOURLY:
        return Contribution(
            extra_cost=labor.total_labor_cost + materials_cost,
            extra_official_hours=labor.official_hours,
            extra_worker_hours=labor.worker_hours,
            count=1,
            extra_work_count=1,
        )

    logger.warning("extra_work_type_unrecognised", extra={
        "report_id": report.id,
        "project_id": project.id,
        "extra_work_type": report.extra_work_type_raw,
    })
    return Contribution(count=1, extra_work_count=1)


def _week_key(report: Report) -> WeekKey:
    # Calendar year of the report date with the stored week number, as the
    # forms have always grouped it. Around New Year this can pair week 52/53
    # with the following calendar year.
    return (report.year, report.week_number)


def calculate_report_summary(
    reports: Optional[Iterable[Report]],
    projects: Optional[Iterable[Project]],
    selected_project_id: Optional[str] = None,
) -> ReportSummary:
    """Totals, per-week and per-project figures for a set of reports.

    When ``selected_project_id`` names a fixed-price project, its budget
    figures are attached to the totals as well.
    """
    started = time.perf_counter()
    project_index: dict[str, Project] = {p.id: p for p in (projects or ())}

    selected = [
        r for r in (reports or ())
        if not selected_project_id or r.project_id == selected_project_id
    ]

    totals = Contribution()
    by_week: dict[WeekKey, Contribution] = {}
    by_project: dict[str, Contribution] = {}
    skipped = 0

    for report in selected:
        project = project_index.get(report.project_id)
        if project is None:
            skipped += 1
            logger.warning("report_project_not_found", extra={
                "report_id": report.id,
                "project_id": report.project_id,
            })
            continue

        contribution = report_contribution(report, project)
        week_key = _week_key(report)

        totals = totals + contribution
        by_week[week_key] = by_week.get(week_key, Contribution()) + contribution
        by_project[project.id] = by_project.get(project.id, Contribution()) + contribution

    week_buckets = [
        WeekBucket(year=year, week_number=week, figures=figures)
        for (year, week), figures in sorted(by_week.items())
    ]

    project_buckets = [
        ProjectBucket(
            project_id=project_id,
            type=project_index[project_id].type,
            budget_amount=project_index[project_id].budget_amount,
            client=project_index[project_id].client,
            figures=figures,
        )
        for project_id, figures in by_project.items()
    ]
    # Stable sort: ties keep first-seen order.
    project_buckets.sort(key=lambda b: b.figures.total_income, reverse=True)

    budget = None
    selected_project = project_index.get(selected_project_id) if selected_project_id else None
    if selected_project is not None and selected_project.type == ProjectType.FIXED:
        budget = calculate_budget(selected_project, selected)

    logger.debug("report_summary_calculated", extra={
        "reports": len(selected),
        "skipped": skipped,
        "weeks": len(week_buckets),
        "projects": len(project_buckets),
        "duration_ms": round((time.perf_counter() - started) * 1000, 3),
    })

    return ReportSummary(
        totals=Totals(figures=totals, skipped_count=skipped, budget=budget),
        by_week=week_buckets,
        by_project=project_buckets,
    )
