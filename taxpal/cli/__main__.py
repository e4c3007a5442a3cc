"""TaxPal CLI - Command-line interface for income tracking and tax estimates."""

import click

from taxpal import __version__
from taxpal.sdk import (
    annual_report_for_year,
    build_estimate,
    compare_scenario,
    dashboard_for_year,
    estimate_for_year,
    quarterly_for_year,
    scenario_for_year,
    tax_deadlines,
    year_over_year_for_year,
)

from .common import emit, format_option, resolve_format, resolve_year, sdk_errors, year_option
from .records_commands import expenses as expenses_group
from .records_commands import income as income_group
from .renderers.tax_renderer import (
    render_annual_report,
    render_dashboard,
    render_deadlines,
    render_estimate,
    render_quarterly,
    render_scenario,
    render_year_over_year,
)
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="taxpal")
def cli():
    """TaxPal - Income tracking and self-employment tax estimates.

    Record income and expenses, then get federal and self-employment
    tax estimates, what-if scenarios and quarterly payment schedules.

    Settings are loaded from (in order):

    \b
    1. TAXPAL_CONFIG_PATH environment variable (directory)
    2. ~/.config/taxpal/settings.json (XDG default)

    Run 'taxpal settings show' to see where records are stored.
    """
    pass


cli.add_command(income_group)
cli.add_command(expenses_group)
cli.add_command(settings_group)


@cli.command("estimate")
@year_option
@click.option("--income", "total_income", type=click.FloatRange(min=0), default=None,
              help="Total income (skips stored records)")
@click.option("--expenses", "total_expenses", type=click.FloatRange(min=0), default=None,
              help="Total expenses (with --income; default: same as --deductible)")
@click.option("--deductible", "deductible_expenses", type=click.FloatRange(min=0), default=None,
              help="Deductible expenses (with --income; default 0)")
@format_option
def estimate(year, total_income, total_expenses, deductible_expenses, output_format):
    """Estimate federal and self-employment tax for a year.

    Uses the stored income and expense records for the year, or the totals
    given with --income/--expenses/--deductible.

    Examples:
        taxpal estimate --year 2024
        taxpal estimate --income 80000 --deductible 10000 --format json
    """
    year = resolve_year(year)

    if total_income is None:
        if total_expenses is not None or deductible_expenses is not None:
            raise click.UsageError("--expenses and --deductible require --income")
        with sdk_errors():
            result = estimate_for_year(year)
    else:
        deductible = deductible_expenses or 0.0
        expenses_total = deductible if total_expenses is None else total_expenses
        if deductible > expenses_total:
            raise click.BadParameter("cannot exceed --expenses", param_hint="--deductible")
        with sdk_errors():
            result = build_estimate(total_income, expenses_total, deductible, year)

    emit(result, resolve_format(output_format), render_estimate)


@cli.command("scenario")
@year_option
@click.option("--additional-income", type=click.FloatRange(min=0), default=0, show_default=True)
@click.option("--additional-expenses", type=click.FloatRange(min=0), default=0, show_default=True,
              help="Additional deductible expenses")
@click.option("--retirement", "retirement_contribution", type=click.FloatRange(min=0), default=0,
              show_default=True, help="Retirement contribution (SEP-IRA, Solo 401k)")
@click.option("--income", "current_income", type=click.FloatRange(min=0), default=None,
              help="Current income (skips stored records)")
@click.option("--deductible", "current_deductible", type=click.FloatRange(min=0), default=None,
              help="Current deductible expenses (with --income; default 0)")
@format_option
def scenario(year, additional_income, additional_expenses, retirement_contribution,
             current_income, current_deductible, output_format):
    """Compare current taxes with a what-if scenario.

    Examples:
        taxpal scenario --retirement 6000
        taxpal scenario --income 80000 --deductible 10000 --additional-income 15000
    """
    year = resolve_year(year)

    with sdk_errors():
        if current_income is None:
            if current_deductible is not None:
                raise click.UsageError("--deductible requires --income")
            result = scenario_for_year(
                year,
                additional_income=additional_income,
                additional_expenses=additional_expenses,
                retirement_contribution=retirement_contribution,
            )
        else:
            result = compare_scenario(
                current_income,
                current_deductible or 0.0,
                additional_income=additional_income,
                additional_expenses=additional_expenses,
                retirement_contribution=retirement_contribution,
                year=year,
            )
            result["year"] = year

    emit(result, resolve_format(output_format), render_scenario)


@cli.command("quarterly")
@year_option
@format_option
def quarterly(year, output_format):
    """Show the quarterly estimated payment schedule for a year."""
    year = resolve_year(year)
    with sdk_errors():
        result = quarterly_for_year(year)
    emit(result, resolve_format(output_format), render_quarterly)


@cli.command("deadlines")
@year_option
@format_option
def deadlines(year, output_format):
    """List important tax dates for a year."""
    year = resolve_year(year)
    result = {"year": year, "deadlines": tax_deadlines(year)}
    emit(result, resolve_format(output_format),
         lambda console, data: render_deadlines(console, data["year"], data["deadlines"]))


@cli.group()
def report():
    """Annual, year-over-year and dashboard reports."""
    pass


@report.command("annual")
@year_option
@format_option
def report_annual(year, output_format):
    """Annual report with category and monthly breakdowns."""
    year = resolve_year(year)
    with sdk_errors():
        result = annual_report_for_year(year)
    emit(result, resolve_format(output_format), render_annual_report)


@report.command("summary")
@year_option
@format_option
def report_summary(year, output_format):
    """Compare a year's totals with the year before."""
    year = resolve_year(year)
    with sdk_errors():
        result = year_over_year_for_year(year)
    emit(result, resolve_format(output_format), render_year_over_year)


@report.command("dashboard")
@year_option
@format_option
def report_dashboard(year, output_format):
    """Headline numbers: totals, estimated tax, deduction coverage."""
    year = resolve_year(year)
    with sdk_errors():
        result = dashboard_for_year(year)
    emit(result, resolve_format(output_format), render_dashboard)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
