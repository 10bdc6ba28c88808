"""Summary export to JSON-ready dicts for the dashboard, API and files."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from worklog_tool.models import (
    BudgetCalc,
    Contribution,
    ExtraWorkCalc,
    ProjectBucket,
    ReportSummary,
    WeekBucket,
)


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal values."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


def _figures_dict(figures: Contribution) -> dict:
    return {
        "laborCost": float(figures.labor_cost),
        "materialsCost": float(figures.materials_cost),
        "totalCost": float(figures.total_cost),
        "invoicedAmount": float(figures.invoiced_amount),
        "totalIncome": float(figures.total_income),
        "officialHours": float(figures.official_hours),
        "workerHours": float(figures.worker_hours),
        "extraBudget": float(figures.extra_budget),
        "extraCost": float(figures.extra_cost),
        "count": figures.count,
    }


def budget_to_dict(budget: BudgetCalc) -> dict:
    return {
        "budgetAmount": float(budget.budget_amount),
        "invoicedTotal": float(budget.invoiced_total),
        "remainingBudget": float(budget.remaining_budget),
        "progressPercentage": float(budget.progress_percentage),
        "isOverBudget": budget.is_over_budget,
        "totalExtraWorkIncome": float(budget.extra_work_income),
        "totalBudgetWithExtras": float(budget.total_budget_with_extras),
    }


def extra_work_to_dict(extra: ExtraWorkCalc) -> dict:
    return {
        "totalExtraBudget": float(extra.total_extra_budget),
        "totalExtraLaborCost": float(extra.total_extra_labor_cost),
        "totalExtraMaterials": float(extra.total_extra_materials),
        "totalExtraCost": float(extra.total_extra_cost),
        "totalExtra": float(extra.total_extra),
        "extraWorkCount": extra.extra_work_count,
        "extraWorkReportIds": [r.id for r in extra.extra_work_reports],
    }


def week_to_dict(bucket: WeekBucket) -> dict:
    return {
        "key": bucket.key,
        "weekNumber": bucket.week_number,
        "year": bucket.year,
        "weekLabel": bucket.label,
        **_figures_dict(bucket.figures),
    }


def project_to_dict(bucket: ProjectBucket) -> dict:
    return {
        "projectId": bucket.project_id,
        "type": bucket.type.value,
        "client": bucket.client,
        "budgetAmount": float(bucket.budget_amount),
        **_figures_dict(bucket.figures),
    }


def summary_to_dict(summary: ReportSummary) -> dict:
    """Build the summary dictionary (no file I/O).

    Budget figures of a selected fixed-price project are merged into
    ``totals`` alongside the regular totals.
    """
    t = summary.totals
    totals = {
        "totalLabor": float(t.total_labor),
        "totalMaterials": float(t.total_materials),
        "totalInvoiced": float(t.total_invoiced),
        "totalIncome": float(t.total_income),
        "totalCost": float(t.total_cost),
        "totalOfficialHours": float(t.total_official_hours),
        "totalWorkerHours": float(t.total_worker_hours),
        "totalHours": float(t.total_hours),
        "totalExtraBudget": float(t.total_extra_budget),
        "totalExtraCost": float(t.total_extra_cost),
        "totalExtraOfficialHours": float(t.total_extra_official_hours),
        "totalExtraWorkerHours": float(t.total_extra_worker_hours),
        "totalExtraHours": float(t.total_extra_hours),
        "grandTotal": float(t.grand_total),
        "reportCount": t.report_count,
        "extraWorkCount": t.extra_work_count,
        "skippedCount": t.skipped_count,
    }
    if t.budget is not None:
        totals.update(budget_to_dict(t.budget))

    return {
        "totals": totals,
        "byWeek": [week_to_dict(b) for b in summary.by_week],
        "byProject": [project_to_dict(b) for b in summary.by_project],
    }


def write_summary_json(summary: ReportSummary, output_path: str | Path) -> Path:
    """Write the summary dictionary to a JSON file."""
    output_path = Path(output_path)
    data = summary_to_dict(summary)
    output_path.write_text(json.dumps(data, indent=2, cls=DecimalEncoder), encoding='utf-8')
    return output_path
