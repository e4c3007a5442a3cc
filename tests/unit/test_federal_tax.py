"""Unit tests for the progressive federal tax calculation and marginal rate.

All figures use the packaged 2024 single-filer rules:
standard deduction $13,850; brackets 10/12/22/24/32/35/37%.
"""

import pytest

from taxpal.sdk.taxes import (
    apply_standard_deduction,
    calculate_federal_tax,
    get_marginal_tax_rate,
)

STANDARD_DEDUCTION = 13850


class TestCalculateFederalTax:

    def test_zero_income(self, rules_2024):
        assert calculate_federal_tax(0, rules_2024) == 0

    @pytest.mark.parametrize("income", [1, 5000, 13849.99, STANDARD_DEDUCTION])
    def test_income_within_standard_deduction_is_untaxed(self, rules_2024, income):
        assert calculate_federal_tax(income, rules_2024) == 0

    def test_top_of_first_bracket(self, rules_2024):
        """Exactly fills the 10% bracket after the standard deduction."""
        assert calculate_federal_tax(STANDARD_DEDUCTION + 11000, rules_2024) == pytest.approx(11000 * 0.10)

    def test_spans_three_brackets(self, rules_2024):
        """70,000 - 13,850 = 56,150 → 10% of 11,000 + 12% of 33,725 + 22% of 11,425."""
        expected = 1100 + 33725 * 0.12 + 11425 * 0.22
        assert calculate_federal_tax(70000, rules_2024) == pytest.approx(expected)
        assert calculate_federal_tax(70000, rules_2024) == pytest.approx(7660.5)

    def test_standard_deduction_subtracted_once(self, rules_2024):
        """Passing income minus expenses must not have the deduction applied twice.

        Subtracting 13,850 twice from 70,000 would tax only 42,300 (= 4,856).
        """
        assert calculate_federal_tax(70000, rules_2024) != pytest.approx(4856)

    def test_top_bracket(self, rules_2024):
        income = 1_000_000
        adjusted = income - STANDARD_DEDUCTION
        expected = (
            11000 * 0.10
            + (44725 - 11000) * 0.12
            + (95375 - 44725) * 0.22
            + (182050 - 95375) * 0.24
            + (231250 - 182050) * 0.32
            + (578125 - 231250) * 0.35
            + (adjusted - 578125) * 0.37
        )
        assert calculate_federal_tax(income, rules_2024) == pytest.approx(expected)

    def test_negative_income_is_zero(self, rules_2024):
        assert calculate_federal_tax(-5000, rules_2024) == 0

    def test_never_negative_and_monotonic(self, rules_2024):
        previous = 0.0
        for income in range(0, 700_001, 2_500):
            tax = calculate_federal_tax(income, rules_2024)
            assert tax >= 0
            assert tax >= previous
            previous = tax


class TestMarginalTaxRate:

    @pytest.mark.parametrize("income,expected", [
        (0, 10.0),
        (STANDARD_DEDUCTION, 10.0),
        (STANDARD_DEDUCTION + 11000, 10.0),
        (STANDARD_DEDUCTION + 11001, 12.0),
        (70000, 22.0),
        (STANDARD_DEDUCTION + 100000, 24.0),
        (STANDARD_DEDUCTION + 200000, 32.0),
        (STANDARD_DEDUCTION + 300000, 35.0),
        (5_000_000, 37.0),
    ])
    def test_rate_for_income(self, rules_2024, income, expected):
        assert get_marginal_tax_rate(income, rules_2024) == pytest.approx(expected)

    def test_always_a_bracket_rate_and_non_decreasing(self, rules_2024):
        bracket_rates = {round(b.rate * 100, 6) for b in rules_2024.brackets}
        previous = 0.0
        for income in range(0, 800_001, 5_000):
            rate = get_marginal_tax_rate(income, rules_2024)
            assert round(rate, 6) in bracket_rates
            assert rate >= previous
            previous = rate


def test_apply_standard_deduction_floors_at_zero(rules_2024):
    assert apply_standard_deduction(1000, rules_2024) == 0
    assert apply_standard_deduction(70000, rules_2024) == 56150
