"""Unit tests for build_estimate.

Golden case: $80,000 income with $10,000 deductible expenses (2024 rules).

    taxable income          80,000 - 10,000         = 70,000
    after std deduction     70,000 - 13,850         = 56,150
    federal tax             1,100 + 4,047 + 2,513.50 = 7,660.50
    self-employment tax     80,000 * 0.1413         = 11,304
    total tax                                       = 18,964.50
"""

import pytest

from taxpal.sdk import build_estimate, percent_of
from taxpal.sdk.recommendations import WELL_OPTIMIZED


class TestGoldenEstimate:

    @pytest.fixture
    def estimate(self, rules_2024):
        return build_estimate(80000, 10000, 10000, 2024, rules=rules_2024)

    def test_taxable_income(self, estimate):
        assert estimate["taxableIncome"] == 70000
        assert estimate["federalTaxableIncome"] == 56150
        assert estimate["standardDeduction"] == 13850

    def test_taxes(self, estimate):
        assert estimate["federalTax"] == pytest.approx(7660.5)
        assert estimate["selfEmploymentTax"] == pytest.approx(11304)
        assert estimate["totalTax"] == pytest.approx(18964.5)

    def test_rates_and_payment(self, estimate):
        assert estimate["effectiveRate"] == pytest.approx(18964.5 / 80000 * 100)
        assert estimate["marginalRate"] == pytest.approx(22.0)
        assert estimate["quarterlyPayment"] == pytest.approx(18964.5 / 4)

    def test_recommendations(self, estimate):
        assert estimate["recommendations"] == [
            "Consider tracking more business expenses - you may be missing valuable deductions",
            "Consider making quarterly estimated tax payments to avoid penalties",
            "Look into Section 179 deductions for business equipment purchases",
        ]

    def test_echoes_inputs(self, estimate):
        assert estimate["year"] == 2024
        assert estimate["totalIncome"] == 80000
        assert estimate["totalExpenses"] == 10000
        assert estimate["deductibleExpenses"] == 10000


def test_zero_income(rules_2024):
    estimate = build_estimate(0, 0, 0, 2024, rules=rules_2024)

    assert estimate["taxableIncome"] == 0
    assert estimate["selfEmploymentTax"] == 0
    assert estimate["federalTax"] == 0
    assert estimate["totalTax"] == 0
    assert estimate["effectiveRate"] == 0
    assert estimate["quarterlyPayment"] == 0
    assert estimate["recommendations"] == [WELL_OPTIMIZED]


def test_expenses_exceeding_income_floor_taxable_at_zero(rules_2024):
    estimate = build_estimate(5000, 9000, 9000, 2024, rules=rules_2024)

    assert estimate["taxableIncome"] == 0
    assert estimate["federalTax"] == 0
    assert estimate["selfEmploymentTax"] == pytest.approx(5000 * 0.1413)


def test_negative_inputs_are_clamped(rules_2024):
    estimate = build_estimate(-1000, -50, -50, 2024, rules=rules_2024)

    assert estimate["totalIncome"] == 0
    assert estimate["totalExpenses"] == 0
    assert estimate["totalTax"] == 0
    assert estimate["effectiveRate"] == 0


def test_loads_rules_for_year():
    """Without explicit rules, the year's packaged rules are used."""
    estimate = build_estimate(80000, 10000, 10000, 2024)
    assert estimate["totalTax"] == pytest.approx(18964.5)


def test_all_tax_figures_non_negative(rules_2024):
    for income in (0, 1, 13850, 30000, 250000):
        for deductible in (0, 5000, 400000):
            estimate = build_estimate(income, deductible, deductible, 2024, rules=rules_2024)
            for key in ("taxableIncome", "federalTax", "selfEmploymentTax", "totalTax", "effectiveRate"):
                assert estimate[key] >= 0, (income, deductible, key)


class TestPercentOf:

    def test_zero_denominator(self):
        assert percent_of(100, 0) == 0

    def test_ratio(self):
        assert percent_of(25, 200) == pytest.approx(12.5)
