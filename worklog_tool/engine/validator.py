"""Data-quality checks on report and project records.

The calculators tolerate every problem found here by treating it as zero.
This pass makes those problems visible. In strict mode any finding stops
processing.
"""

from __future__ import annotations

from collections.abc import Sequence

from worklog_tool.engine.time_math import iso_week_number, parse_clock
from worklog_tool.models import (
    Project,
    ProjectType,
    Report,
    StrictValidationError,
)

_CLOCK_FIELDS = ("official_entry", "official_exit", "worker_entry", "worker_exit")


def validate_records(
    reports: Sequence[Report],
    projects: Sequence[Project],
    strict: bool = False,
) -> list[str]:
    """Return a list of data-quality warnings for the given records.

    With ``strict=True`` a non-empty list raises StrictValidationError.
    """
    warnings: list[str] = []
    project_index = {p.id: p for p in projects}

    seen_ids: set[str] = set()
    for project in projects:
        if project.id in seen_ids:
            warnings.append(f"Project {project.id}: duplicate project id")
        seen_ids.add(project.id)

    for report in reports:
        prefix = f"Report {report.id}"
        project = project_index.get(report.project_id)

        if project is None:
            warnings.append(f"{prefix}: unknown project '{report.project_id}' (report is skipped)")

        if report.report_date is None:
            warnings.append(f"{prefix}: missing report date")
        elif report.week_number != iso_week_number(report.report_date):
            warnings.append(
                f"{prefix}: stored week {report.week_number} differs from ISO week "
                f"{iso_week_number(report.report_date)} of {report.report_date.isoformat()}"
            )

        if report.labor is not None:
            for attr in _CLOCK_FIELDS:
                value = getattr(report.labor, attr)
                if value and parse_clock(value) is None:
                    warnings.append(f"{prefix}: malformed {attr} '{value}' (counted as 0h)")

        if report.is_extra_work:
            if report.extra_work_type is None:
                warnings.append(
                    f"{prefix}: unrecognised extra work type "
                    f"'{report.extra_work_type_raw}' (counted, no amount)"
                )
            if project is not None and project.type == ProjectType.HOURLY:
                warnings.append(f"{prefix}: extra work on hourly project {project.id}")
            elif project is not None and not project.allow_extra_work:
                warnings.append(f"{prefix}: extra work on project {project.id} which does not allow it")

    if strict and warnings:
        raise StrictValidationError(warnings)

    return warnings
