"""Progressive federal income tax.

`taxable_income` here is income minus deductible business expenses. The
standard deduction is subtracted exactly once, inside these functions;
callers must not pre-subtract it.
"""

from .schemas import TaxRules


def apply_standard_deduction(taxable_income: float, rules: TaxRules) -> float:
    """Income left for the bracket walk after the standard deduction (never negative)."""
    return max(0.0, taxable_income - rules.standard_deduction)


def calculate_federal_tax(taxable_income: float, rules: TaxRules) -> float:
    """Calculate federal income tax by walking the brackets in ascending order.

    Each bracket taxes the lesser of the remaining income and the bracket
    width at its rate.

    Args:
        taxable_income: Income minus deductible expenses (before standard deduction)
        rules: Tax rules for the year

    Returns:
        Federal income tax, >= 0
    """
    tax_owed = 0.0
    remaining_income = apply_standard_deduction(taxable_income, rules)

    for bracket in rules.brackets:
        if remaining_income <= 0:
            break

        taxed_here = min(remaining_income, bracket.width)
        tax_owed += taxed_here * bracket.rate
        remaining_income -= taxed_here

    return tax_owed


def get_marginal_tax_rate(taxable_income: float, rules: TaxRules) -> float:
    """Rate (as a percentage) applied to the next dollar of income."""
    adjusted_income = apply_standard_deduction(taxable_income, rules)

    for bracket in rules.brackets:
        if adjusted_income <= bracket.max:
            return bracket.rate * 100

    return rules.top_rate * 100
