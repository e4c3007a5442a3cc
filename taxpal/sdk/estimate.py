"""Tax estimate assembly.

Turns yearly income/expense totals into the full estimate: taxable income,
self-employment tax, federal tax, rates, quarterly payment and
recommendations. Pure arithmetic over the supplied totals; negative inputs
are treated as zero.
"""

import logging
from typing import Optional

from .recommendations import generate_recommendations
from .records import year_totals
from .taxes import (
    TaxRules,
    apply_standard_deduction,
    calculate_federal_tax,
    get_marginal_tax_rate,
    load_tax_rules,
)

logger = logging.getLogger(__name__)


def percent_of(part: float, whole: float) -> float:
    """part / whole as a percentage, 0 when whole is 0."""
    if not whole:
        return 0.0
    return part / whole * 100


def _non_negative(amount: float) -> float:
    return max(0.0, float(amount))


def calculate_tax_figures(total_income: float, deductible_expenses: float, rules: TaxRules) -> dict:
    """Core tax figures shared by estimates and scenarios.

    Returns:
        Dict with totalIncome, deductibleExpenses, taxableIncome,
        federalTax, selfEmploymentTax, totalTax, effectiveRate
    """
    total_income = _non_negative(total_income)
    deductible_expenses = _non_negative(deductible_expenses)

    taxable_income = max(0.0, total_income - deductible_expenses)
    self_employment_tax = total_income * rules.self_employment_tax_rate
    federal_tax = calculate_federal_tax(taxable_income, rules)
    total_tax = federal_tax + self_employment_tax

    return {
        "totalIncome": total_income,
        "deductibleExpenses": deductible_expenses,
        "taxableIncome": taxable_income,
        "federalTax": federal_tax,
        "selfEmploymentTax": self_employment_tax,
        "totalTax": total_tax,
        "effectiveRate": percent_of(total_tax, total_income),
    }


def build_estimate(
    total_income: float,
    total_expenses: float,
    deductible_expenses: float,
    year: int,
    rules: Optional[TaxRules] = None,
) -> dict:
    """Build a full tax estimate for a year.

    Args:
        total_income: Taxable income received during the year
        total_expenses: All business expenses
        deductible_expenses: Deductible subset of total_expenses
        year: Tax year (selects the rules when `rules` is omitted)
        rules: Tax rules to apply instead of the year's packaged rules

    Returns:
        Estimate dict with camelCase keys: year, totals, taxableIncome,
        federalTaxableIncome, federalTax, selfEmploymentTax, totalTax,
        effectiveRate, marginalRate, quarterlyPayment, standardDeduction,
        recommendations
    """
    if rules is None:
        rules = load_tax_rules(year)

    total_expenses = _non_negative(total_expenses)
    figures = calculate_tax_figures(total_income, deductible_expenses, rules)

    estimate = {
        "year": int(year),
        "totalIncome": figures["totalIncome"],
        "totalExpenses": total_expenses,
        "deductibleExpenses": figures["deductibleExpenses"],
        "taxableIncome": figures["taxableIncome"],
        "federalTaxableIncome": apply_standard_deduction(figures["taxableIncome"], rules),
        "federalTax": figures["federalTax"],
        "selfEmploymentTax": figures["selfEmploymentTax"],
        "totalTax": figures["totalTax"],
        "effectiveRate": figures["effectiveRate"],
        "marginalRate": get_marginal_tax_rate(figures["taxableIncome"], rules),
        "quarterlyPayment": figures["totalTax"] / 4,
        "standardDeduction": rules.standard_deduction,
        "recommendations": generate_recommendations(
            figures["totalIncome"],
            figures["deductibleExpenses"],
            total_expenses,
            figures["effectiveRate"],
        ),
    }

    logger.debug(
        f"estimate {year}: income={estimate['totalIncome']:.2f} "
        f"taxable={estimate['taxableIncome']:.2f} total_tax={estimate['totalTax']:.2f}"
    )
    return estimate


def estimate_for_year(year: int, rules: Optional[TaxRules] = None) -> dict:
    """Build an estimate from the income and expense records stored for a year."""
    totals = year_totals(year)
    return build_estimate(
        totals.total_income,
        totals.total_expenses,
        totals.deductible_expenses,
        year,
        rules=rules,
    )
