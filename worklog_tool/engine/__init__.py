"""Calculation engine and data-quality validation."""
from worklog_tool.engine.labor import calculate_labor
from worklog_tool.engine.materials import calculate_materials
from worklog_tool.engine.budget import calculate_budget
from worklog_tool.engine.extra_work import calculate_extra_work
from worklog_tool.engine.summary import calculate_report_summary
from worklog_tool.engine.modes import calculate_report_income, calculate_report_total_cost
from worklog_tool.engine.time_math import hours_between
from worklog_tool.engine.validator import validate_records

__all__ = [
    "calculate_labor",
    "calculate_materials",
    "calculate_budget",
    "calculate_extra_work",
    "calculate_report_summary",
    "calculate_report_income",
    "calculate_report_total_cost",
    "hours_between",
    "validate_records",
]
