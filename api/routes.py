"""API routes for the Report Summary service."""

from __future__ import annotations

from fastapi import APIRouter

from worklog_tool.engine import (
    calculate_budget,
    calculate_extra_work,
    calculate_report_summary,
    validate_records,
)
from worklog_tool.export import budget_to_dict, extra_work_to_dict, summary_to_dict
from worklog_tool.logging_config import get_logger
from worklog_tool.models import RecordFormatError
from worklog_tool.parsers import parse_project, parse_projects, parse_reports

from api.schemas import (
    BudgetResponse,
    BudgetSummary,
    ExtraWorkResponse,
    ExtraWorkSummary,
    ProjectReportsRequest,
    SummaryRequest,
    SummaryResponse,
)

router = APIRouter(prefix="/api/v1")
logger = get_logger("api")


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/summary", response_model=SummaryResponse)
async def summary(request: SummaryRequest):
    """Totals, weekly and per-project breakdown for the posted records.

    Data-quality warnings are returned alongside the figures; they never
    block the calculation.
    """
    try:
        projects = parse_projects(request.projects)
        reports = parse_reports(request.reports)
    except RecordFormatError as e:
        return SummaryResponse(success=False, error_type="format_error", errors=e.errors)

    warnings = validate_records(reports, projects)
    result = summary_to_dict(
        calculate_report_summary(reports, projects, request.selected_project_id)
    )
    logger.info("summary_served", extra={
        "reports": len(reports),
        "projects": len(projects),
        "warnings": len(warnings),
    })

    return SummaryResponse(
        success=True,
        totals=result["totals"],
        byWeek=result["byWeek"],
        byProject=result["byProject"],
        warnings=warnings,
    )


@router.post("/budget", response_model=BudgetResponse)
async def budget(request: ProjectReportsRequest):
    """Budget consumption of one fixed-price project."""
    try:
        project = parse_project(request.project)
        reports = parse_reports(request.reports)
    except RecordFormatError as e:
        return BudgetResponse(success=False, error_type="format_error", errors=e.errors)

    return BudgetResponse(
        success=True,
        budget=BudgetSummary(**budget_to_dict(calculate_budget(project, reports))),
    )


@router.post("/extra-work", response_model=ExtraWorkResponse)
async def extra_work(request: ProjectReportsRequest):
    """Extra-work totals of one project."""
    try:
        project = parse_project(request.project)
        reports = parse_reports(request.reports)
    except RecordFormatError as e:
        return ExtraWorkResponse(success=False, error_type="format_error", errors=e.errors)

    return ExtraWorkResponse(
        success=True,
        extra_work=ExtraWorkSummary(**extra_work_to_dict(calculate_extra_work(reports, project))),
    )
