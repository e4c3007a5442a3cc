"""Rich renderers for tax estimates, scenarios, schedules and reports.

Transforms SDK dict output into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"


def _pct(rate: float | None) -> str:
    if rate is None:
        return "-"
    return f"{rate:.2f}%"


def render_estimate(console: Console, estimate: dict) -> None:
    """Render a tax estimate with its recommendations."""
    table = Table(title=f"Tax Estimate {estimate['year']}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("Amount", justify="right", min_width=14)

    table.add_row("[bold]INCOME[/bold]", "")
    table.add_row("  Total Income", _fmt(estimate["totalIncome"]))
    table.add_row("  Total Expenses", _fmt(estimate["totalExpenses"]))
    table.add_row("  Deductible Expenses", _fmt(estimate["deductibleExpenses"]))
    table.add_row("  Taxable Income", _fmt(estimate["taxableIncome"]))
    table.add_row("  [dim]Standard Deduction[/dim]", f"[dim]{_fmt(estimate['standardDeduction'])}[/dim]")
    table.add_row("  [dim]After Standard Deduction[/dim]", f"[dim]{_fmt(estimate['federalTaxableIncome'])}[/dim]")
    table.add_row("", "")

    table.add_row("[bold]TAXES[/bold]", "")
    table.add_row("  Federal Income Tax", _fmt(estimate["federalTax"]))
    table.add_row("  Self-Employment Tax", _fmt(estimate["selfEmploymentTax"]))
    table.add_row("[bold green]TOTAL TAX[/bold green]", f"[bold green]{_fmt(estimate['totalTax'])}[/bold green]")
    table.add_row("", "")

    table.add_row("Effective Rate", _pct(estimate["effectiveRate"]))
    table.add_row("Marginal Rate", _pct(estimate["marginalRate"]))
    table.add_row("Quarterly Payment", _fmt(estimate["quarterlyPayment"]))

    console.print(table)
    render_recommendations(console, estimate.get("recommendations", []))


def render_recommendations(console: Console, recommendations: list[str]) -> None:
    if not recommendations:
        return
    body = "\n".join(f"- {message}" for message in recommendations)
    console.print(Panel(body, title="Recommendations", border_style="cyan"))


def render_scenario(console: Console, result: dict) -> None:
    """Render current vs. what-if taxes side by side."""
    current = result["current"]
    scenario = result["scenario"]
    difference = result["difference"]

    title = "What-If Scenario"
    if "year" in result:
        title += f" {result['year']}"

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Current", justify="right", min_width=14)
    table.add_column("Scenario", justify="right", min_width=14)

    rows = [
        ("Total Income", "totalIncome"),
        ("Deductible Expenses", "deductibleExpenses"),
        ("Taxable Income", "taxableIncome"),
        ("Federal Tax", "federalTax"),
        ("Self-Employment Tax", "selfEmploymentTax"),
        ("Total Tax", "totalTax"),
    ]
    for label, key in rows:
        table.add_row(label, _fmt(current[key]), _fmt(scenario[key]))
    table.add_row("Effective Rate", _pct(current["effectiveRate"]), _pct(scenario["effectiveRate"]))
    console.print(table)

    savings = difference["taxSavings"]
    style = "green" if savings >= 0 else "red"
    console.print(f"Tax savings: [{style}]{_fmt(savings)}[/{style}]")
    console.print(f"Net impact:  {_fmt(difference['netImpact'])}")


def render_quarterly(console: Console, data: dict) -> None:
    """Render the quarterly payment schedule."""
    table = Table(title=f"Quarterly Estimated Payments {data['year']}", box=box.ROUNDED)
    table.add_column("Quarter", style="bold")
    table.add_column("Period")
    table.add_column("Due", style="cyan")
    table.add_column("Amount", justify="right")

    for payment in data["schedule"]:
        table.add_row(payment["quarter"], payment["period"], payment["dueDate"], _fmt(payment["amount"]))

    console.print(table)
    console.print(f"Total estimated tax: {_fmt(data['totalEstimatedTax'])}")


def render_deadlines(console: Console, year: int, deadlines: list[dict]) -> None:
    table = Table(title=f"Tax Deadlines {year}", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("Deadline", style="bold")
    table.add_column("Type", style="dim")

    for deadline in deadlines:
        table.add_row(deadline["date"], deadline["title"], deadline["type"])

    console.print(table)


def render_annual_report(console: Console, report: dict) -> None:
    """Render summary, category breakdowns and monthly totals."""
    summary = report["summary"]

    table = Table(title=f"Annual Report {report['year']}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Amount", justify="right", min_width=14)
    table.add_row("Total Income", _fmt(summary["totalIncome"]))
    if summary.get("nonTaxableIncome"):
        table.add_row("Non-Taxable Income", _fmt(summary["nonTaxableIncome"]))
    table.add_row("Total Expenses", _fmt(summary["totalExpenses"]))
    table.add_row("Deductible Expenses", _fmt(summary["deductibleExpenses"]))
    table.add_row("Taxable Income", _fmt(summary["taxableIncome"]))
    table.add_row("Estimated Tax", _fmt(summary["estimatedTax"]))
    table.add_row("Net Income", _fmt(summary["netIncome"]))
    table.add_row("Effective Rate", _pct(summary["effectiveRate"]))
    console.print(table)

    breakdown = report["breakdown"]
    for title, key in (("Income by Category", "incomeByCategory"), ("Expenses by Category", "expensesByCategory")):
        groups = breakdown[key]
        if not groups:
            continue
        cat_table = Table(title=title, box=box.SIMPLE)
        cat_table.add_column("Category")
        cat_table.add_column("Count", justify="right")
        cat_table.add_column("Amount", justify="right")
        cat_table.add_column("Share", justify="right")
        for group in groups:
            cat_table.add_row(group["category"], str(group["count"]), _fmt(group["amount"]), _pct(group["percentage"]))
        console.print(cat_table)

    render_monthly(console, breakdown["monthlyBreakdown"])


def render_monthly(console: Console, months: list[dict]) -> None:
    table = Table(title="Monthly Breakdown", box=box.SIMPLE)
    table.add_column("Month")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Entries", justify="right", style="dim")
    for month in months:
        table.add_row(
            month["month"],
            _fmt(month["income"]),
            _fmt(month["expenses"]),
            _fmt(month["netIncome"]),
            f"{month['incomeCount']} / {month['expenseCount']}",
        )
    console.print(table)


def render_year_over_year(console: Console, summary: dict) -> None:
    current_year = summary["currentYear"]
    table = Table(title=f"{current_year} vs {current_year - 1}", box=box.ROUNDED)
    table.add_column("", style="bold")
    table.add_column(str(current_year), justify="right")
    table.add_column(str(current_year - 1), justify="right")
    table.add_column("Change", justify="right")

    changes = summary["changes"]
    rows = [
        ("Income", "totalIncome", changes["income"]),
        ("Expenses", "totalExpenses", changes["expenses"]),
        ("Deductible", "deductibleExpenses", changes["deductibleExpenses"]),
        ("Net Income", "netIncome", changes["netIncome"]),
    ]
    for label, key, change in rows:
        table.add_row(label, _fmt(summary["current"][key]), _fmt(summary["previous"][key]), _pct(change))
    console.print(table)
    render_recommendations(console, summary.get("recommendations", []))


def render_dashboard(console: Console, overview: dict) -> None:
    table = Table(title=f"Dashboard {overview['year']}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Value", justify="right", min_width=14)
    table.add_row("Total Income", _fmt(overview["totalIncome"]))
    table.add_row("Total Expenses", _fmt(overview["totalExpenses"]))
    table.add_row("Deductible Expenses", _fmt(overview["deductibleExpenses"]))
    table.add_row("Deduction Coverage", _pct(overview["deductionCoverage"]))
    table.add_row("Estimated Tax", _fmt(overview["estimatedTax"]))
    table.add_row("Quarterly Tax", _fmt(overview["quarterlyTax"]))
    table.add_row("Entries", f"{overview['incomeEntries']} income / {overview['expenseEntries']} expense")
    console.print(table)


def render_records(console: Console, records: list[dict], record_type: str) -> None:
    """Render a list of income or expense records."""
    if not records:
        console.print(f"No {record_type} records found.", style="dim")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("ID", style="cyan")
    table.add_column("Date")
    table.add_column("Category")
    table.add_column("Description")
    table.add_column("Amount", justify="right")
    table.add_column("Flag", style="dim")

    total = 0.0
    for record in records:
        data = record.get("data") or {}
        if record_type == "income":
            flag = "" if data.get("taxable", True) else "non-taxable"
        else:
            flag = "deductible" if data.get("is_deductible", True) else ""
        table.add_row(
            record["id"],
            data.get("date", "?"),
            data.get("category", "?"),
            data.get("description", ""),
            _fmt(data.get("amount")),
            flag,
        )
        total += data.get("amount") or 0

    console.print(table)
    console.print(f"{len(records)} record(s), total {_fmt(total)}")
