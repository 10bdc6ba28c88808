"""Excel export."""
from worklog_tool.excel.generator import generate_summary_workbook

__all__ = ["generate_summary_workbook"]
