"""CLI entry point.

Usage:
    python -m worklog_tool \
        --reports "reports.json" \
        --projects "projects.json" \
        --project "project-id" \
        --out "Summary.json" \
        --excel-out "Summary.xlsx" \
        --strict
"""

from __future__ import annotations

import typer

from worklog_tool.models import RecordFormatError, StrictValidationError


def generate(
    reports: str = typer.Option(..., "--reports", help="JSON export of report documents"),
    projects: str = typer.Option(..., "--projects", help="JSON export of project documents"),
    project: str = typer.Option(None, "--project", help="Only summarise this project id"),
    out: str = typer.Option(None, "--out", help="Output summary JSON file path"),
    excel_out: str = typer.Option(None, "--excel-out", help="Output Excel workbook path"),
    strict: bool = typer.Option(False, "--strict/--no-strict", help="Fail on data-quality warnings"),
    log_level: str = typer.Option(None, "--log-level", help="Log level (default: $WORKLOG_LOG_LEVEL or WARNING)"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Summarise work reports: totals, weekly and per-project figures."""
    from worklog_tool.engine import calculate_report_summary, validate_records
    from worklog_tool.excel import generate_summary_workbook
    from worklog_tool.export import write_summary_json
    from worklog_tool.logging_config import configure_logging
    from worklog_tool.parsers import load_records, parse_projects, parse_reports

    configure_logging(log_level, json_format=json_logs)

    typer.echo(f"Reports: {reports}")
    typer.echo(f"Projects: {projects}")
    if project:
        typer.echo(f"Project filter: {project}")
    typer.echo(f"Strict mode: {strict}")
    typer.echo("")

    try:
        # Step 1: Load and parse records
        typer.echo("Loading records...")
        project_list = parse_projects(load_records(projects))
        report_list = parse_reports(load_records(reports))
        typer.echo(f"  {len(project_list)} projects, {len(report_list)} reports")

        # Step 2: Data-quality checks
        typer.echo("\nChecking data quality...")
        warnings = validate_records(report_list, project_list, strict=strict)
        for warning in warnings:
            typer.echo(f"  WARNING: {warning}", err=True)
        if not warnings:
            typer.echo("  No issues found")

        # Step 3: Calculate
        typer.echo("\nCalculating summary...")
        summary = calculate_report_summary(report_list, project_list, project or None)
        t = summary.totals

        typer.echo(f"  Labor:        {t.total_labor:,.2f}")
        typer.echo(f"  Materials:    {t.total_materials:,.2f}")
        typer.echo(f"  Invoiced:     {t.total_invoiced:,.2f}")
        typer.echo(f"  Income:       {t.total_income:,.2f}")
        typer.echo(f"  Extra budget: {t.total_extra_budget:,.2f}")
        typer.echo(f"  Extra cost:   {t.total_extra_cost:,.2f}")
        typer.echo(f"  Hours:        {t.total_hours:,.2f} (+{t.total_extra_hours:,.2f} extra)")
        if t.skipped_count:
            typer.echo(f"  Skipped {t.skipped_count} report(s) with unknown project")

        if t.budget is not None:
            b = t.budget
            typer.echo(f"\n  Budget:    {b.budget_amount:,.2f}")
            typer.echo(f"  Remaining: {b.remaining_budget:,.2f} ({b.progress_percentage}% used)")
            if b.is_over_budget:
                typer.echo("  OVER BUDGET")

        typer.echo(f"\n  GRAND TOTAL: {t.grand_total:,.2f}")

        for bucket in summary.by_week:
            typer.echo(f"    {bucket.label}: income {bucket.figures.total_income:,.2f}, "
                       f"cost {bucket.figures.total_cost:,.2f}")

        # Step 4: Outputs
        if out:
            typer.echo(f"\nWriting summary JSON: {out}...")
            write_summary_json(summary, out)
        if excel_out:
            typer.echo(f"\nWriting Excel workbook: {excel_out}...")
            generate_summary_workbook(summary, excel_out)

        typer.echo("\nSUCCESS: Summary generated.")

    except StrictValidationError as e:
        typer.echo(f"\nSTRICT VALIDATION FAILED:", err=True)
        for error in e.errors:
            typer.echo(f"  ERROR: {error}", err=True)
        typer.echo("\nSummary NOT generated (strict mode).", err=True)
        raise typer.Exit(1)

    except RecordFormatError as e:
        typer.echo(f"\nUNUSABLE INPUT:", err=True)
        for error in e.errors:
            typer.echo(f"  ERROR: {error}", err=True)
        raise typer.Exit(1)

    except OSError as e:
        typer.echo(f"\nFATAL ERROR: {e}", err=True)
        raise typer.Exit(1)


def main() -> None:
    typer.run(generate)


if __name__ == "__main__":
    main()
