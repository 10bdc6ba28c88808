"""Tests for the report summary aggregator."""

import logging
import pytest
from dataclasses import replace
from decimal import Decimal
from datetime import date

from worklog_tool.engine.summary import calculate_report_summary, report_contribution
from worklog_tool.parsers import parse_projects, parse_reports
from worklog_tool.models import (
    Contribution,
    ExtraWorkType,
    LaborEntry,
    MaterialItem,
    Project,
    ProjectType,
    Report,
)

FULL_DAY = LaborEntry("08:00", "16:00", "08:00", "16:00")


def _hourly_project(project_id="hourly-1") -> Project:
    return Project(
        id=project_id,
        type=ProjectType.HOURLY,
        official_price=Decimal("25"),
        worker_price=Decimal("18"),
        client="Garcia",
    )


def _fixed_project(project_id="fixed-1") -> Project:
    return Project(
        id=project_id,
        type=ProjectType.FIXED,
        official_price=Decimal("25"),
        worker_price=Decimal("12.5"),
        budget_amount=Decimal("10000"),
        allow_extra_work=True,
        client="Lopez",
    )


def _make_report(report_id: str, project_id: str, day: date, week: int, **kwargs) -> Report:
    return Report(id=report_id, project_id=project_id, report_date=day, week_number=week, **kwargs)


def _fixed_reports() -> list[Report]:
    return [
        _make_report("f1", "fixed-1", date(2024, 3, 4), 10, invoiced_amount=Decimal("3000")),
        _make_report("f2", "fixed-1", date(2024, 3, 12), 11, invoiced_amount=Decimal("4000")),
        _make_report(
            "f3", "fixed-1", date(2024, 3, 13), 11,
            is_extra_work=True,
            extra_work_type=ExtraWorkType.ADDITIONAL_BUDGET,
            extra_budget_amount=Decimal("1500"),
        ),
        _make_report(
            "f4", "fixed-1", date(2024, 3, 14), 11,
            is_extra_work=True,
            extra_work_type=ExtraWorkType.HOURLY,
            labor=FULL_DAY,
            materials=(MaterialItem("Cable", "150"), MaterialItem("Conduit", "50")),
        ),
    ]


def _hourly_reports() -> list[Report]:
    return [
        _make_report("h1", "hourly-1", date(2024, 3, 5), 10, labor=FULL_DAY,
                     materials=(MaterialItem("Paint", "40"),)),
        _make_report("h2", "hourly-1", date(2024, 3, 19), 12,
                     labor=LaborEntry(official_entry="08:00", official_exit="12:00")),
    ]


class TestHourlyIncome:
    def test_full_day_income_is_labor(self):
        report = _make_report("h1", "hourly-1", date(2024, 3, 5), 10, labor=FULL_DAY)
        summary = calculate_report_summary([report], [_hourly_project()])
        t = summary.totals
        assert t.total_income == Decimal("344")
        assert t.total_income == t.total_labor
        assert t.total_official_hours == Decimal("8")
        assert t.total_worker_hours == Decimal("8")
        assert t.total_hours == Decimal("16")
        assert t.total_cost == Decimal("344")
        assert t.grand_total == Decimal("344")

    def test_materials_are_cost_not_income(self):
        summary = calculate_report_summary(_hourly_reports(), [_hourly_project()])
        t = summary.totals
        # 344 + 4h official at 25
        assert t.total_labor == Decimal("444")
        assert t.total_materials == Decimal("40")
        assert t.total_cost == Decimal("484")
        assert t.total_income == Decimal("444")
        assert t.total_invoiced == Decimal("0")


class TestFixedIncome:
    def test_contract_with_extras(self):
        summary = calculate_report_summary(_fixed_reports(), [_fixed_project()], "fixed-1")
        t = summary.totals
        assert t.total_invoiced == Decimal("7000")
        assert t.total_income == Decimal("7000")
        assert t.total_extra_budget == Decimal("1500")
        assert t.total_extra_cost == Decimal("500")
        # extra-hourly labor and materials stay out of the regular cost columns
        assert t.total_materials == Decimal("0")
        assert t.total_labor == Decimal("0")
        assert t.grand_total == Decimal("8500")
        assert t.total_extra_official_hours == Decimal("8")
        assert t.total_extra_worker_hours == Decimal("8")
        assert t.total_extra_hours == Decimal("16")
        assert t.extra_work_count == 2
        assert t.report_count == 4

    def test_selected_fixed_project_merges_budget(self):
        summary = calculate_report_summary(_fixed_reports(), [_fixed_project()], "fixed-1")
        budget = summary.totals.budget
        assert budget is not None
        assert budget.invoiced_total == Decimal("7000")
        assert budget.remaining_budget == Decimal("3000")
        assert budget.progress_percentage == Decimal("70")
        assert budget.is_over_budget is False

    def test_no_budget_without_selection(self):
        summary = calculate_report_summary(_fixed_reports(), [_fixed_project()])
        assert summary.totals.budget is None

    def test_no_budget_for_selected_hourly_project(self):
        summary = calculate_report_summary(_hourly_reports(), [_hourly_project()], "hourly-1")
        assert summary.totals.budget is None

    def test_labor_on_fixed_project_is_tracked_not_income(self):
        report = _make_report("f1", "fixed-1", date(2024, 3, 4), 10,
                              invoiced_amount=Decimal("1000"), labor=FULL_DAY)
        t = calculate_report_summary([report], [_fixed_project()]).totals
        assert t.total_labor == Decimal("300")
        assert t.total_income == Decimal("1000")
        assert t.total_official_hours == Decimal("8")

    def test_invoiced_amount_on_hourly_project_is_not_income(self):
        report = _make_report("h1", "hourly-1", date(2024, 3, 4), 10,
                              invoiced_amount=Decimal("999"), labor=FULL_DAY)
        t = calculate_report_summary([report], [_hourly_project()]).totals
        assert t.total_income == Decimal("344")
        assert t.total_invoiced == Decimal("0")

    def test_stored_total_cost_is_not_trusted(self):
        reports = _fixed_reports()
        reports[3] = replace(reports[3], total_cost=Decimal("9999"))
        t = calculate_report_summary(reports, [_fixed_project()]).totals
        assert t.total_extra_cost == Decimal("500")


class TestFilteringAndSkipping:
    def test_selected_project_filter(self):
        reports = _fixed_reports() + _hourly_reports()
        projects = [_fixed_project(), _hourly_project()]
        summary = calculate_report_summary(reports, projects, "hourly-1")
        assert summary.totals.total_invoiced == Decimal("0")
        assert summary.totals.total_extra_budget == Decimal("0")
        assert [b.project_id for b in summary.by_project] == ["hourly-1"]

    def test_unknown_project_is_skipped(self, caplog):
        orphan = _make_report("o1", "ghost", date(2024, 3, 5), 10,
                              labor=FULL_DAY, invoiced_amount=Decimal("50"))
        with caplog.at_level(logging.WARNING):
            summary = calculate_report_summary(_hourly_reports() + [orphan], [_hourly_project()])
        assert summary.totals.skipped_count == 1
        assert summary.totals.report_count == 2
        assert summary.totals.total_labor == Decimal("444")
        assert all(b.project_id != "ghost" for b in summary.by_project)
        assert "report_project_not_found" in caplog.text

    def test_unrecognised_extra_type_counted_without_money(self):
        odd = _make_report("u1", "fixed-1", date(2024, 3, 4), 10,
                           is_extra_work=True, extra_work_type="night_shift",
                           extra_budget_amount=Decimal("700"), labor=FULL_DAY)
        t = calculate_report_summary([odd], [_fixed_project()]).totals
        assert t.extra_work_count == 1
        assert t.report_count == 1
        assert t.total_extra_budget == Decimal("0")
        assert t.total_extra_cost == Decimal("0")
        assert t.total_income == Decimal("0")
        assert t.grand_total == Decimal("0")

    @pytest.mark.parametrize("reports,projects", [
        (None, None),
        ([], []),
        (None, [_hourly_project()]),
        (_hourly_reports(), None),
    ])
    def test_empty_inputs(self, reports, projects):
        summary = calculate_report_summary(reports, projects)
        assert summary.totals.figures == Contribution()
        assert summary.totals.grand_total == Decimal("0")
        assert summary.by_week == []
        assert summary.by_project == []


class TestWeekBuckets:
    def test_sorted_by_year_then_week(self):
        project = _hourly_project()
        reports = [
            _make_report("a", "hourly-1", date(2024, 1, 17), 3, labor=FULL_DAY),
            _make_report("b", "hourly-1", date(2023, 12, 27), 52, labor=FULL_DAY),
            _make_report("c", "hourly-1", date(2024, 1, 3), 1, labor=FULL_DAY),
            _make_report("d", "hourly-1", date(2024, 1, 18), 3, labor=FULL_DAY),
        ]
        summary = calculate_report_summary(reports, [project])
        assert [(b.year, b.week_number) for b in summary.by_week] == [(2023, 52), (2024, 1), (2024, 3)]
        assert [b.key for b in summary.by_week] == ["52-2023", "1-2024", "3-2024"]
        assert summary.by_week[2].figures.count == 2
        assert summary.by_week[2].figures.total_income == Decimal("688")

    def test_week_key_uses_calendar_year_of_report_date(self):
        # 2022-12-30 and 2023-01-01 are both in ISO week 52 of 2022, but the
        # key pairs the stored week with the calendar year of the date, so
        # they land in separate buckets.
        reports = [
            _make_report("a", "hourly-1", date(2022, 12, 30), 52, labor=FULL_DAY),
            _make_report("b", "hourly-1", date(2023, 1, 1), 52, labor=FULL_DAY),
        ]
        summary = calculate_report_summary(reports, [_hourly_project()])
        assert [b.key for b in summary.by_week] == ["52-2022", "52-2023"]

    def test_stored_week_number_used_verbatim(self):
        # Stored week disagrees with the date; grouping follows the stored value.
        report = _make_report("a", "hourly-1", date(2024, 3, 5), 42, labor=FULL_DAY)
        summary = calculate_report_summary([report], [_hourly_project()])
        assert summary.by_week[0].week_number == 42

    def test_extra_figures_per_week(self):
        summary = calculate_report_summary(_fixed_reports(), [_fixed_project()])
        week11 = next(b for b in summary.by_week if b.week_number == 11)
        assert week11.figures.invoiced_amount == Decimal("4000")
        assert week11.figures.extra_budget == Decimal("1500")
        assert week11.figures.extra_cost == Decimal("500")
        assert week11.figures.count == 3


class TestProjectBuckets:
    def test_sorted_by_income_descending(self):
        reports = _fixed_reports() + _hourly_reports()
        summary = calculate_report_summary(reports, [_hourly_project(), _fixed_project()])
        assert [b.project_id for b in summary.by_project] == ["fixed-1", "hourly-1"]
        fixed = summary.by_project[0]
        assert fixed.type == ProjectType.FIXED
        assert fixed.budget_amount == Decimal("10000")
        assert fixed.client == "Lopez"
        assert fixed.figures.total_income == Decimal("7000")
        hourly = summary.by_project[1]
        assert hourly.type == ProjectType.HOURLY
        assert hourly.figures.total_income == Decimal("444")
        assert hourly.figures.materials_cost == Decimal("40")


class TestBucketsSumToTotals:
    FIELDS = [
        "labor_cost", "materials_cost", "invoiced_amount", "total_income",
        "official_hours", "worker_hours", "extra_budget", "extra_cost",
        "extra_official_hours", "extra_worker_hours", "count", "extra_work_count",
    ]

    def test_week_and_project_buckets_add_up(self):
        reports = _fixed_reports() + _hourly_reports() + [
            _make_report("o1", "ghost", date(2024, 3, 5), 10, labor=FULL_DAY),
        ]
        summary = calculate_report_summary(reports, [_hourly_project(), _fixed_project()])
        totals = summary.totals.figures
        for name in self.FIELDS:
            by_week = sum(getattr(b.figures, name) for b in summary.by_week)
            by_project = sum(getattr(b.figures, name) for b in summary.by_project)
            assert by_week == getattr(totals, name), name
            assert by_project == getattr(totals, name), name


class TestPurity:
    def test_identical_inputs_identical_outputs(self):
        reports = _fixed_reports() + _hourly_reports()
        projects = [_hourly_project(), _fixed_project()]
        first = calculate_report_summary(reports, projects, "fixed-1")
        second = calculate_report_summary(reports, projects, "fixed-1")
        assert first == second

    def test_inputs_not_mutated(self):
        reports = _fixed_reports()
        before = list(reports)
        calculate_report_summary(reports, [_fixed_project()], "fixed-1")
        assert reports == before


class TestReportContribution:
    def test_extra_budget_contribution(self):
        report = _fixed_reports()[2]
        contribution = report_contribution(report, _fixed_project())
        assert contribution == Contribution(
            extra_budget=Decimal("1500"), count=1, extra_work_count=1,
        )

    def test_contributions_add(self):
        a = Contribution(labor_cost=Decimal("10"), count=1)
        b = Contribution(labor_cost=Decimal("5"), materials_cost=Decimal("2"), count=1)
        total = a + b
        assert total.labor_cost == Decimal("15")
        assert total.total_cost == Decimal("17")
        assert total.count == 2


class TestOversizedFigures:
    def test_stored_garbage_does_not_raise(self):
        projects = parse_projects([
            {"id": "hourly-1", "type": "hourly", "officialPrice": "1e27", "workerPrice": 18},
        ])
        reports = parse_reports([{
            "id": "h1",
            "projectId": "hourly-1",
            "reportDate": "2024-03-05",
            "weekNumber": "1e999999999",
            "labor": {"officialEntry": "08:00", "officialExit": "16:00",
                      "workerEntry": "08:00", "workerExit": "16:00"},
            "materials": [{"description": "Paint", "cost": "1e1000000"}],
        }])
        t = calculate_report_summary(reports, projects).totals
        assert t.total_labor == Decimal("144.00")
        assert t.total_materials == Decimal("0")
        assert t.total_income == Decimal("144.00")
