"""taxes - Federal bracket rules and calculations.

Scope:
- Tax rules schema and loading (tax_rules/{year}.yaml)
- Progressive federal income tax and marginal rate

Constraints:
- Pure calculation - no records access, receives numbers and returns numbers
- Rules are passed in explicitly; load them with load_tax_rules(year)

Usage:
    from taxpal.sdk.taxes import load_tax_rules, calculate_federal_tax

    rules = load_tax_rules(2024)
    tax = calculate_federal_tax(70000, rules)
"""

from .schemas import TaxBracket, TaxRules

from .rules import (
    TaxRulesNotFoundError,
    get_available_years,
    load_tax_rules,
    resolve_rules_year,
)

from .federal import (
    apply_standard_deduction,
    calculate_federal_tax,
    get_marginal_tax_rate,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "TaxRules",
    # Rules
    "TaxRulesNotFoundError",
    "get_available_years",
    "load_tax_rules",
    "resolve_rules_year",
    # Calculations
    "apply_standard_deduction",
    "calculate_federal_tax",
    "get_marginal_tax_rate",
]
