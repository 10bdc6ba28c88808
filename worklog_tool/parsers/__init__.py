"""Record parsing layer."""
from worklog_tool.parsers.records import (
    load_records,
    parse_project,
    parse_projects,
    parse_report,
    parse_reports,
)

__all__ = ["load_records", "parse_project", "parse_projects", "parse_report", "parse_reports"]
