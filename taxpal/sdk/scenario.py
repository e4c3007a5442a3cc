"""What-if scenario comparison.

Projects the current year's taxes against a hypothetical with extra
income, extra deductible expenses and a retirement contribution.
"""

from typing import Optional

from .estimate import calculate_tax_figures
from .records import year_totals
from .taxes import TaxRules, get_available_years, load_tax_rules


def compare_scenario(
    current_income: float,
    current_deductible: float,
    additional_income: float = 0,
    additional_expenses: float = 0,
    retirement_contribution: float = 0,
    rules: Optional[TaxRules] = None,
    year: Optional[int] = None,
) -> dict:
    """Compare current taxes with a what-if scenario.

    The retirement contribution is treated as a deductible expense.
    `rules` defaults to the rules for `year` (or the latest rules year when
    `year` is also omitted).

    Returns:
        Dict with 'current' and 'scenario' tax figures and a 'difference'
        block: income, expenses, retirementContribution, taxSavings
        (positive = scenario pays less) and netImpact (extra income kept
        after the change in tax).
    """
    if rules is None:
        rules = load_tax_rules(year) if year is not None else _latest_rules()

    scenario_income = current_income + additional_income
    scenario_deductible = current_deductible + additional_expenses + retirement_contribution

    current = calculate_tax_figures(current_income, current_deductible, rules)
    scenario = calculate_tax_figures(scenario_income, scenario_deductible, rules)

    return {
        "current": current,
        "scenario": scenario,
        "difference": {
            "income": additional_income,
            "expenses": additional_expenses,
            "retirementContribution": retirement_contribution,
            "taxSavings": current["totalTax"] - scenario["totalTax"],
            "netImpact": additional_income - (scenario["totalTax"] - current["totalTax"]),
        },
    }


def _latest_rules() -> TaxRules:
    return load_tax_rules(get_available_years()[0])


def scenario_for_year(
    year: int,
    additional_income: float = 0,
    additional_expenses: float = 0,
    retirement_contribution: float = 0,
    rules: Optional[TaxRules] = None,
) -> dict:
    """Run compare_scenario against the income and expense records stored for a year."""
    totals = year_totals(year)
    result = compare_scenario(
        totals.total_income,
        totals.deductible_expenses,
        additional_income=additional_income,
        additional_expenses=additional_expenses,
        retirement_contribution=retirement_contribution,
        rules=rules,
        year=year,
    )
    result["year"] = int(year)
    return result
