"""Heuristic tax recommendations.

Rules are evaluated in table order and every matching rule contributes its
message, so output order is stable for the same inputs. Add a rule by
appending a Rule to RULES (estimates) or SUMMARY_RULES (year-over-year
summary).
"""

from typing import Any, Callable, NamedTuple


class RuleInputs(NamedTuple):
    total_income: float
    deductible_expenses: float
    total_expenses: float
    effective_rate: float


class Rule(NamedTuple):
    name: str
    applies: Callable[[Any], bool]
    message: str


RULES: tuple[Rule, ...] = (
    Rule(
        "missing_deductions",
        lambda r: r.deductible_expenses < r.total_income * 0.15,
        "Consider tracking more business expenses - you may be missing valuable deductions",
    ),
    Rule(
        "high_tax_rate",
        lambda r: r.effective_rate > 25,
        "Your effective tax rate is high - consider maximizing retirement contributions (SEP-IRA, Solo 401k)",
    ),
    Rule(
        "non_deductible_expenses",
        lambda r: r.total_expenses - r.deductible_expenses > r.total_income * 0.10,
        "You have significant non-deductible expenses - review your business spending strategy",
    ),
    Rule(
        "low_deductions_for_income",
        lambda r: r.total_income > 50000 and r.deductible_expenses < 5000,
        "With your income level, you should have more business deductions - "
        "track home office, equipment, and professional expenses",
    ),
    Rule(
        "quarterly_payments",
        lambda r: r.total_income > 30000,
        "Consider making quarterly estimated tax payments to avoid penalties",
    ),
    Rule(
        "section_179",
        lambda r: r.total_income > 40000 and r.deductible_expenses < r.total_income * 0.20,
        "Look into Section 179 deductions for business equipment purchases",
    ),
)

WELL_OPTIMIZED = "Your tax situation looks well-optimized! Keep tracking expenses consistently."


def generate_recommendations(
    total_income: float,
    deductible_expenses: float,
    total_expenses: float,
    effective_rate: float,
    rules: tuple[Rule, ...] = RULES,
) -> list[str]:
    """Return messages for every matching rule, or a single positive message if none match."""
    inputs = RuleInputs(total_income, deductible_expenses, total_expenses, effective_rate)
    messages = [rule.message for rule in rules if rule.applies(inputs)]
    return messages or [WELL_OPTIMIZED]


# --- Year-over-year summary ---

class SummaryInputs(NamedTuple):
    income_change: float
    expense_change: float
    total_income: float
    deductible_expenses: float


SUMMARY_RULES: tuple[Rule, ...] = (
    Rule(
        "income_decline",
        lambda s: s.income_change < -10,
        "Income has decreased significantly - consider diversifying income sources",
    ),
    Rule(
        "expense_growth",
        lambda s: s.expense_change > 20,
        "Expenses have increased substantially - review spending categories",
    ),
    Rule(
        "missing_deductions",
        lambda s: s.deductible_expenses < s.total_income * 0.15,
        "You may be missing tax deductions - track more business expenses",
    ),
)


def generate_summary_recommendations(
    income_change: float,
    expense_change: float,
    total_income: float,
    deductible_expenses: float,
    rules: tuple[Rule, ...] = SUMMARY_RULES,
) -> list[str]:
    """Messages for a year-over-year summary. Empty when no rule matches."""
    inputs = SummaryInputs(income_change, expense_change, total_income, deductible_expenses)
    return [rule.message for rule in rules if rule.applies(inputs)]
