"""Tests for data-quality validation."""

import pytest
from decimal import Decimal
from datetime import date

from worklog_tool.engine.validator import validate_records
from worklog_tool.models import (
    ExtraWorkType,
    LaborEntry,
    Project,
    ProjectType,
    Report,
    StrictValidationError,
)


def _make_projects() -> list[Project]:
    return [
        Project(id="hourly-1", type=ProjectType.HOURLY, official_price=Decimal("25")),
        Project(id="fixed-1", type=ProjectType.FIXED, budget_amount=Decimal("5000"),
                allow_extra_work=True),
        Project(id="fixed-2", type=ProjectType.FIXED, budget_amount=Decimal("5000")),
    ]


def _make_report(**kwargs) -> Report:
    defaults = dict(
        id="r1",
        project_id="hourly-1",
        report_date=date(2024, 3, 5),
        week_number=10,
        labor=LaborEntry("08:00", "16:00"),
    )
    defaults.update(kwargs)
    return Report(**defaults)


class TestValidator:
    def test_clean_records_pass(self):
        assert validate_records([_make_report()], _make_projects()) == []
        assert validate_records([_make_report()], _make_projects(), strict=True) == []

    def test_unknown_project(self):
        warnings = validate_records([_make_report(project_id="ghost")], _make_projects())
        assert any("unknown project 'ghost'" in w for w in warnings)

    def test_missing_date(self):
        warnings = validate_records([_make_report(report_date=None)], _make_projects())
        assert any("missing report date" in w for w in warnings)

    def test_week_mismatch(self):
        warnings = validate_records([_make_report(week_number=11)], _make_projects())
        assert any("differs from ISO week 10" in w for w in warnings)

    def test_malformed_clock(self):
        report = _make_report(labor=LaborEntry("8am", "16:00", "08:00", "25:00"))
        warnings = validate_records([report], _make_projects())
        assert len([w for w in warnings if "malformed" in w]) == 2

    def test_unrecognised_extra_type(self):
        report = _make_report(project_id="fixed-1", is_extra_work=True, extra_work_type="bonus")
        warnings = validate_records([report], _make_projects())
        assert any("unrecognised extra work type 'bonus'" in w for w in warnings)

    def test_extra_work_on_hourly_project(self):
        report = _make_report(is_extra_work=True, extra_work_type=ExtraWorkType.HOURLY)
        warnings = validate_records([report], _make_projects())
        assert any("extra work on hourly project" in w for w in warnings)

    def test_extra_work_not_allowed(self):
        report = _make_report(project_id="fixed-2", is_extra_work=True,
                              extra_work_type=ExtraWorkType.ADDITIONAL_BUDGET)
        warnings = validate_records([report], _make_projects())
        assert any("does not allow it" in w for w in warnings)

    def test_allowed_extra_work_is_clean(self):
        report = _make_report(project_id="fixed-1", is_extra_work=True,
                              extra_work_type=ExtraWorkType.ADDITIONAL_BUDGET)
        assert validate_records([report], _make_projects()) == []

    def test_duplicate_project_ids(self):
        projects = _make_projects() + [Project(id="fixed-1")]
        warnings = validate_records([], projects)
        assert warnings == ["Project fixed-1: duplicate project id"]

    def test_strict_mode_raises(self):
        with pytest.raises(StrictValidationError, match="unknown project"):
            validate_records([_make_report(project_id="ghost")], _make_projects(), strict=True)
