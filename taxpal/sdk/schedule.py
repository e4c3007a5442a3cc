"""Quarterly estimated payment schedule and tax calendar.

Due dates are fixed calendar constants (not derived from IRS weekend and
holiday rules) and are the same for every year.
"""

from typing import Optional

from .estimate import calculate_tax_figures
from .records import year_totals
from .taxes import TaxRules, load_tax_rules


# (quarter, period label, month-day due, due in following year)
QUARTERS = (
    ("Q1", "Jan 1 - Mar 31", "04-15", False),
    ("Q2", "Apr 1 - May 31", "06-17", False),
    ("Q3", "Jun 1 - Aug 31", "09-16", False),
    ("Q4", "Sep 1 - Dec 31", "01-15", True),
)

ORDINALS = {"Q1": "First", "Q2": "Second", "Q3": "Third", "Q4": "Fourth"}


def _due_date(year: int, month_day: str, next_year: bool) -> str:
    return f"{year + 1 if next_year else year}-{month_day}"


def quarterly_schedule(total_tax: float, year: int) -> list[dict]:
    """Split the annual tax into four equal payments.

    Returns:
        List of {quarter, period, dueDate, amount} in quarter order
    """
    year = int(year)
    amount = max(0.0, total_tax) / 4
    return [
        {
            "quarter": quarter,
            "period": f"{period}, {year}",
            "dueDate": _due_date(year, month_day, next_year),
            "amount": amount,
        }
        for quarter, period, month_day, next_year in QUARTERS
    ]


def quarterly_for_year(year: int, rules: Optional[TaxRules] = None) -> dict:
    """Quarterly schedule for the taxes estimated from a year's stored records."""
    if rules is None:
        rules = load_tax_rules(year)

    totals = year_totals(year)
    figures = calculate_tax_figures(totals.total_income, totals.deductible_expenses, rules)
    schedule = quarterly_schedule(figures["totalTax"], year)

    return {
        "year": int(year),
        "totalEstimatedTax": figures["totalTax"],
        "quarterlyAmount": schedule[0]["amount"],
        "schedule": schedule,
    }


def tax_deadlines(year: int) -> list[dict]:
    """Important tax dates for a year, sorted by date.

    Returns:
        List of {title, date, description, type} where type is
        'quarterly', 'annual' or 'informational'
    """
    year = int(year)
    deadlines = [
        {
            "title": f"{quarter} Quarterly Payment",
            "date": _due_date(year, month_day, next_year),
            "description": f"{ORDINALS[quarter]} quarter estimated tax payment due",
            "type": "quarterly",
        }
        for quarter, _, month_day, next_year in QUARTERS
    ]
    deadlines.append({
        "title": "Annual Tax Return",
        "date": f"{year + 1}-04-15",
        "description": f"{year} tax return filing deadline",
        "type": "annual",
    })
    deadlines.append({
        "title": "1099 Forms Available",
        "date": f"{year + 1}-01-31",
        "description": "Clients must provide 1099-NEC forms",
        "type": "informational",
    })

    # ISO dates sort chronologically as strings
    return sorted(deadlines, key=lambda d: d["date"])
