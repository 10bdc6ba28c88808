"""Labor hours and cost for one report."""

from __future__ import annotations

from typing import Optional

from worklog_tool.coercion import to_cents
from worklog_tool.engine.time_math import hours_between
from worklog_tool.models import LaborCalc, LaborEntry, Project


def calculate_labor(
    labor: Optional[LaborEntry],
    project: Optional[Project],
) -> LaborCalc:
    """Hours per role from the clock times, priced at the project's rates.

    Reports on fixed projects usually carry no labor at all; that, or a
    missing project, simply gives an all-zero result.
    """
    if labor is None or project is None:
        return LaborCalc()

    official_hours = hours_between(labor.official_entry, labor.official_exit)
    worker_hours = hours_between(labor.worker_entry, labor.worker_exit)

    return LaborCalc(
        official_hours=official_hours,
        worker_hours=worker_hours,
        official_cost=to_cents(official_hours * project.official_price),
        worker_cost=to_cents(worker_hours * project.worker_price),
    )
