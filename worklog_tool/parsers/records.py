"""Document-store record parser.

Maps the camelCase project/report documents written by the web forms onto
the canonical model. Field values are coerced leniently; only input that
is not a list of mappings at all is rejected.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from worklog_tool.engine.time_math import iso_week_number
from worklog_tool.models import (
    LaborEntry,
    MaterialItem,
    Project,
    RecordFormatError,
    Report,
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _clock(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, a datetime, or an ISO "YYYY-MM-DD[THH:MM...]" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def parse_labor(data: Any) -> Optional[LaborEntry]:
    if not isinstance(data, Mapping):
        return None
    return LaborEntry(
        official_entry=_clock(data.get("officialEntry")),
        official_exit=_clock(data.get("officialExit")),
        worker_entry=_clock(data.get("workerEntry")),
        worker_exit=_clock(data.get("workerExit")),
    )


def parse_materials(data: Any) -> tuple[MaterialItem, ...]:
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        return ()
    items = []
    for entry in data:
        if isinstance(entry, Mapping):
            items.append(MaterialItem(
                description=_text(entry.get("description")),
                cost=entry.get("cost"),
            ))
        else:
            items.append(MaterialItem())
    return tuple(items)


def parse_project(data: Mapping) -> Project:
    """Build a Project from its stored document."""
    return Project(
        id=_text(data.get("id")),
        type=data.get("type"),
        official_price=data.get("officialPrice"),
        worker_price=data.get("workerPrice"),
        budget_amount=data.get("budgetAmount"),
        allow_extra_work=data.get("allowExtraWork", False),
        name=_text(data.get("name")),
        client=_text(data.get("client")),
    )


def parse_report(data: Mapping) -> Report:
    """Build a Report from its stored document.

    A missing ``weekNumber`` is derived from the report date the same way
    the report form does when saving.
    """
    report_date = parse_date(data.get("reportDate"))
    week_number = data.get("weekNumber")
    if (week_number is None or week_number == "") and report_date is not None:
        week_number = iso_week_number(report_date)

    raw_type = data.get("extraWorkType")
    total_cost = data.get("totalCost")

    return Report(
        id=_text(data.get("id")),
        project_id=_text(data.get("projectId")),
        report_date=report_date,
        week_number=week_number,
        labor=parse_labor(data.get("labor")),
        materials=parse_materials(data.get("materials")),
        invoiced_amount=data.get("invoicedAmount"),
        is_extra_work=data.get("isExtraWork", False),
        extra_work_type=raw_type,
        extra_budget_amount=data.get("extraBudgetAmount"),
        total_cost=None if total_cost in (None, "") else total_cost,
        extra_work_type_raw=None if raw_type is None else str(raw_type),
    )


def _parse_all(records: Any, kind: str, parse) -> list:
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise RecordFormatError([f"{kind} must be a list of records, got {type(records).__name__}"])

    errors: list[str] = []
    parsed = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            errors.append(f"{kind}[{i}] is not a record ({type(record).__name__})")
            continue
        parsed.append(parse(record))

    if errors:
        raise RecordFormatError(errors)
    return parsed


def parse_projects(records: Any) -> list[Project]:
    return _parse_all(records, "projects", parse_project)


def parse_reports(records: Any) -> list[Report]:
    return _parse_all(records, "reports", parse_report)


def load_records(path: str | Path) -> list[dict]:
    """Read a JSON export (a list of documents) from disk."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise RecordFormatError([f"{path.name}: invalid JSON ({e})"]) from e
    if isinstance(data, Mapping):
        # Keyed export: {"<doc id>": {...}, ...}
        data = [{"id": key, **value} if isinstance(value, Mapping) else value
                for key, value in data.items()]
    if not isinstance(data, list):
        raise RecordFormatError([f"{path.name}: expected a list of records"])
    return data
