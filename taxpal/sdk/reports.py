"""Annual report, year-over-year summary and dashboard overview.

All tax figures come from build_estimate, so the report, the dashboard and
the estimate command always agree.
"""

import calendar
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional

from .estimate import build_estimate, percent_of
from .recommendations import generate_summary_recommendations
from .records import load_entries, totals_from_entries
from .schedule import quarterly_schedule, tax_deadlines
from .schemas import ExpenseRecord, IncomeRecord, YearTotals
from .taxes import TaxRules


def _by_category(entries: Iterable, total: float, deductible: bool = False) -> list[dict]:
    """Group entries by category, sorted by amount descending."""
    groups: dict[str, dict] = {}
    for entry in entries:
        group = groups.setdefault(entry.category, {"category": entry.category, "amount": 0.0, "count": 0})
        group["amount"] += entry.amount
        group["count"] += 1
        if deductible:
            group.setdefault("deductibleAmount", 0.0)
            if entry.is_deductible:
                group["deductibleAmount"] += entry.amount

    for group in groups.values():
        group["percentage"] = percent_of(group["amount"], total)

    return sorted(groups.values(), key=lambda g: g["amount"], reverse=True)


def monthly_breakdown(year: int, incomes: Iterable[IncomeRecord], expenses: Iterable[ExpenseRecord]) -> list[dict]:
    """Income, expenses, net income (profit) and entry counts for each month of the year."""
    income_by_month = defaultdict(float)
    expenses_by_month = defaultdict(float)
    income_counts = defaultdict(int)
    expense_counts = defaultdict(int)
    for entry in incomes:
        if entry.year == year:
            income_by_month[entry.date.month] += entry.amount
            income_counts[entry.date.month] += 1
    for entry in expenses:
        if entry.year == year:
            expenses_by_month[entry.date.month] += entry.amount
            expense_counts[entry.date.month] += 1

    return [
        {
            "month": calendar.month_abbr[month],
            "monthNumber": month,
            "income": income_by_month[month],
            "expenses": expenses_by_month[month],
            "netIncome": income_by_month[month] - expenses_by_month[month],
            "incomeCount": income_counts[month],
            "expenseCount": expense_counts[month],
        }
        for month in range(1, 13)
    ]


def annual_report(
    incomes: list[IncomeRecord],
    expenses: list[ExpenseRecord],
    year: int,
    rules: Optional[TaxRules] = None,
) -> dict:
    """Build the annual tax report from a year's entries.

    Entries outside `year` are ignored.
    """
    year = int(year)
    incomes = [e for e in incomes if e.year == year]
    expenses = [e for e in expenses if e.year == year]
    totals = totals_from_entries(year, incomes, expenses)
    estimate = build_estimate(totals.total_income, totals.total_expenses, totals.deductible_expenses, year, rules=rules)

    quarterly = quarterly_schedule(estimate["totalTax"], year)
    for payment in quarterly:
        payment["paid"] = False

    all_income = totals.total_income + totals.non_taxable_income

    return {
        "year": year,
        "generatedAt": datetime.now().isoformat(timespec="seconds"),
        "summary": {
            "totalIncome": totals.total_income,
            "nonTaxableIncome": totals.non_taxable_income,
            "totalExpenses": totals.total_expenses,
            "deductibleExpenses": totals.deductible_expenses,
            "taxableIncome": estimate["taxableIncome"],
            "estimatedTax": estimate["totalTax"],
            "netIncome": totals.net_income,
            "effectiveRate": estimate["effectiveRate"],
        },
        "breakdown": {
            "incomeByCategory": _by_category(incomes, all_income),
            "expensesByCategory": _by_category(expenses, totals.total_expenses, deductible=True),
            "monthlyBreakdown": monthly_breakdown(year, incomes, expenses),
        },
        "tax": {
            "quarterlyPayments": quarterly,
            "deadlines": [
                {"description": d["title"], "date": d["date"]}
                for d in tax_deadlines(year)
                if d["type"] != "informational"
            ],
        },
        "details": {
            "incomeEntries": totals.income_entries,
            "expenseEntries": totals.expense_entries,
            "avgMonthlyIncome": all_income / 12,
            "avgMonthlyExpenses": totals.total_expenses / 12,
        },
    }


def _totals_block(totals: YearTotals) -> dict:
    return {
        "totalIncome": totals.total_income,
        "totalExpenses": totals.total_expenses,
        "deductibleExpenses": totals.deductible_expenses,
        "netIncome": totals.net_income,
        "entryCount": totals.income_entries + totals.expense_entries,
    }


def year_over_year(current: YearTotals, previous: YearTotals) -> dict:
    """Compare two years' totals.

    Changes are percentages of the previous year, 0 when the previous figure
    is zero or negative. Recommendations come from SUMMARY_RULES.
    """

    def change(cur: float, prev: float) -> float:
        return percent_of(cur - prev, prev) if prev > 0 else 0.0

    changes = {
        "income": change(current.total_income, previous.total_income),
        "expenses": change(current.total_expenses, previous.total_expenses),
        "deductibleExpenses": change(current.deductible_expenses, previous.deductible_expenses),
        "netIncome": change(current.net_income, previous.net_income),
    }

    return {
        "currentYear": current.year,
        "current": _totals_block(current),
        "previous": _totals_block(previous),
        "changes": changes,
        "recommendations": generate_summary_recommendations(
            changes["income"],
            changes["expenses"],
            current.total_income,
            current.deductible_expenses,
        ),
    }


def dashboard_overview(
    incomes: list[IncomeRecord],
    expenses: list[ExpenseRecord],
    year: int,
    rules: Optional[TaxRules] = None,
) -> dict:
    """Headline numbers for the dashboard."""
    year = int(year)
    totals = totals_from_entries(year, incomes, expenses)
    estimate = build_estimate(totals.total_income, totals.total_expenses, totals.deductible_expenses, year, rules=rules)

    return {
        "year": year,
        "totalIncome": totals.total_income,
        "totalExpenses": totals.total_expenses,
        "deductibleExpenses": totals.deductible_expenses,
        "estimatedTax": estimate["totalTax"],
        "quarterlyTax": estimate["quarterlyPayment"],
        "incomeEntries": totals.income_entries,
        "expenseEntries": totals.expense_entries,
        "deductionCoverage": percent_of(totals.deductible_expenses, totals.total_expenses),
        "monthlyBreakdown": monthly_breakdown(year, incomes, expenses),
    }


# --- Stored-records wrappers ---

def annual_report_for_year(year: int, rules: Optional[TaxRules] = None) -> dict:
    return annual_report(load_entries(year, "income"), load_entries(year, "expense"), year, rules=rules)


def dashboard_for_year(year: int, rules: Optional[TaxRules] = None) -> dict:
    return dashboard_overview(load_entries(year, "income"), load_entries(year, "expense"), year, rules=rules)


def year_over_year_for_year(year: int) -> dict:
    current = totals_from_entries(year, load_entries(year, "income"), load_entries(year, "expense"))
    prev_year = int(year) - 1
    previous = totals_from_entries(prev_year, load_entries(prev_year, "income"), load_entries(prev_year, "expense"))
    return year_over_year(current, previous)
