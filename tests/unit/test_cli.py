"""Tests for the taxpal CLI.

Runs commands through click's CliRunner against isolated directories.
"""

import json

import pytest
from click.testing import CliRunner

from taxpal.cli.__main__ import cli


@pytest.fixture
def runner():
    return CliRunner()


def _json(result):
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["success"] is True
    return payload["data"]


def _add_golden_records(runner):
    result = runner.invoke(cli, [
        "income", "add", "-a", "80000", "-s", "Acme Corp", "-d", "Annual retainer", "--date", "2024-05-01",
    ])
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli, [
        "expenses", "add", "-a", "10000", "-d", "Workstation", "-c", "equipment", "--date", "2024-06-01",
    ])
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli, [
        "expenses", "add", "-a", "500", "-d", "Client dinner", "-c", "meals", "--date", "2024-06-02",
        "--non-deductible",
    ])
    assert result.exit_code == 0, result.output


class TestEstimate:

    def test_from_totals_json(self, runner, isolated_env):
        result = runner.invoke(cli, [
            "estimate", "--year", "2024", "--income", "80000", "--deductible", "10000", "--format", "json",
        ])
        data = _json(result)

        assert data["taxableIncome"] == 70000
        assert data["totalTax"] == pytest.approx(18964.5)
        assert data["marginalRate"] == pytest.approx(22)

    def test_from_records(self, runner, isolated_env):
        _add_golden_records(runner)

        data = _json(runner.invoke(cli, ["estimate", "--year", "2024", "--format", "json"]))

        assert data["totalIncome"] == 80000
        assert data["totalExpenses"] == 10500
        assert data["deductibleExpenses"] == 10000
        assert data["totalTax"] == pytest.approx(18964.5)

    def test_text_output(self, runner, isolated_env):
        result = runner.invoke(cli, ["estimate", "--year", "2024", "--income", "80000", "--deductible", "10000"])

        assert result.exit_code == 0, result.output
        assert "Tax Estimate 2024" in result.output
        assert "$18,964.50" in result.output
        assert "Recommendations" in result.output

    def test_deductible_cannot_exceed_expenses(self, runner, isolated_env):
        result = runner.invoke(cli, [
            "estimate", "--year", "2024", "--income", "1000", "--expenses", "10", "--deductible", "20",
        ])
        assert result.exit_code != 0

    def test_negative_income_rejected(self, runner, isolated_env):
        result = runner.invoke(cli, ["estimate", "--year", "2024", "--income", "-5"])
        assert result.exit_code != 0

    def test_default_output_format_setting(self, runner, isolated_env):
        runner.invoke(cli, ["settings", "set", "default_output_format", "json"])

        result = runner.invoke(cli, ["estimate", "--year", "2024", "--income", "0"])
        assert _json(result)["totalTax"] == 0


class TestScenario:

    def test_from_totals(self, runner, isolated_env):
        result = runner.invoke(cli, [
            "scenario", "--year", "2024", "--income", "80000", "--deductible", "10000",
            "--retirement", "6000", "--format", "json",
        ])
        data = _json(result)

        assert data["year"] == 2024
        assert data["difference"]["taxSavings"] == pytest.approx(1320)

    def test_from_records(self, runner, isolated_env):
        _add_golden_records(runner)

        data = _json(runner.invoke(cli, [
            "scenario", "--year", "2024", "--additional-income", "10000", "--format", "json",
        ]))

        assert data["current"]["totalTax"] == pytest.approx(18964.5)
        assert data["difference"]["netImpact"] == pytest.approx(6387)


class TestSchedule:

    def test_quarterly(self, runner, isolated_env):
        _add_golden_records(runner)

        data = _json(runner.invoke(cli, ["quarterly", "--year", "2024", "--format", "json"]))

        assert data["totalEstimatedTax"] == pytest.approx(18964.5)
        assert data["quarterlyAmount"] == pytest.approx(18964.5 / 4)
        assert [p["dueDate"] for p in data["schedule"]] == [
            "2024-04-15", "2024-06-17", "2024-09-16", "2025-01-15",
        ]

    def test_deadlines_text(self, runner, isolated_env):
        result = runner.invoke(cli, ["deadlines", "--year", "2024"])

        assert result.exit_code == 0, result.output
        assert "2025-01-31" in result.output


class TestRecordsCommands:

    def test_add_list_remove_income(self, runner, isolated_env):
        result = runner.invoke(cli, [
            "income", "add", "-a", "1200", "-s", "Beta LLC", "-d", "Logo", "--date", "2024-02-02",
        ])
        assert result.exit_code == 0, result.output
        assert "$1,200.00" in result.output

        listed = _json(runner.invoke(cli, ["income", "list", "--year", "2024", "--format", "json"]))
        assert len(listed) == 1
        record_id = listed[0]["id"]

        result = runner.invoke(cli, ["income", "remove", record_id])
        assert result.exit_code == 0, result.output
        assert _json(runner.invoke(cli, ["income", "list", "--format", "json"])) == []

    def test_remove_wrong_type(self, runner, isolated_env):
        runner.invoke(cli, ["expenses", "add", "-a", "10", "-d", "Pens", "--date", "2024-01-01"])
        listed = _json(runner.invoke(cli, ["expenses", "list", "--format", "json"]))

        result = runner.invoke(cli, ["income", "remove", listed[0]["id"]])
        assert result.exit_code != 0
        assert "No income record" in result.output

    def test_remove_rejects_wildcard_id(self, runner, isolated_env):
        runner.invoke(cli, ["income", "add", "-a", "10", "-s", "X", "-d", "Y", "--date", "2024-01-01"])

        result = runner.invoke(cli, ["income", "remove", "*"])

        assert result.exit_code != 0
        assert "No income record" in result.output
        assert len(_json(runner.invoke(cli, ["income", "list", "--format", "json"]))) == 1

    def test_update_income(self, runner, isolated_env):
        runner.invoke(cli, ["income", "add", "-a", "100", "-s", "X", "-d", "Y", "--date", "2024-01-01"])
        record_id = _json(runner.invoke(cli, ["income", "list", "--format", "json"]))[0]["id"]

        result = runner.invoke(cli, ["income", "update", record_id, "-a", "250", "--non-taxable"])
        assert result.exit_code == 0, result.output
        assert "$250.00" in result.output

        data = _json(runner.invoke(cli, ["income", "list", "--format", "json"]))[0]["data"]
        assert data["amount"] == 250
        assert data["taxable"] is False
        assert data["source"] == "X"

    def test_update_expense_into_next_year(self, runner, isolated_env):
        runner.invoke(cli, ["expenses", "add", "-a", "10", "-d", "Pens", "--date", "2024-12-31"])
        record_id = _json(runner.invoke(cli, ["expenses", "list", "--format", "json"]))[0]["id"]

        result = runner.invoke(cli, ["expenses", "update", record_id, "--date", "2025-01-01", "--non-deductible"])
        assert result.exit_code == 0, result.output

        assert _json(runner.invoke(cli, ["expenses", "list", "--year", "2024", "--format", "json"])) == []
        moved = _json(runner.invoke(cli, ["expenses", "list", "--year", "2025", "--format", "json"]))
        assert moved[0]["data"]["is_deductible"] is False

    def test_update_requires_an_option(self, runner, isolated_env):
        runner.invoke(cli, ["expenses", "add", "-a", "10", "-d", "Pens", "--date", "2024-01-01"])
        record_id = _json(runner.invoke(cli, ["expenses", "list", "--format", "json"]))[0]["id"]

        result = runner.invoke(cli, ["expenses", "update", record_id])
        assert result.exit_code != 0

    def test_update_wrong_type(self, runner, isolated_env):
        runner.invoke(cli, ["expenses", "add", "-a", "10", "-d", "Pens", "--date", "2024-01-01"])
        record_id = _json(runner.invoke(cli, ["expenses", "list", "--format", "json"]))[0]["id"]

        result = runner.invoke(cli, ["income", "update", record_id, "-a", "5"])
        assert result.exit_code != 0
        assert "No income record" in result.output

    def test_list_filters(self, runner, isolated_env):
        _add_golden_records(runner)

        non_deductible = _json(runner.invoke(cli, ["expenses", "list", "--non-deductible", "--format", "json"]))
        assert [r["data"]["description"] for r in non_deductible] == ["Client dinner"]

        by_category = _json(runner.invoke(cli, ["expenses", "list", "-c", "equipment", "--format", "json"]))
        assert [r["data"]["amount"] for r in by_category] == [10000]

        in_range = _json(runner.invoke(cli, [
            "expenses", "list", "--from", "2024-06-02", "--to", "2024-06-30", "--format", "json",
        ]))
        assert [r["data"]["date"] for r in in_range] == ["2024-06-02"]

        by_amount = _json(runner.invoke(cli, ["expenses", "list", "--sort", "amount", "--desc", "--format", "json"]))
        assert [r["data"]["amount"] for r in by_amount] == [10000, 500]

        found = _json(runner.invoke(cli, ["income", "list", "--search", "acme", "--format", "json"]))
        assert len(found) == 1

    def test_invalid_date_reported(self, runner, isolated_env):
        result = runner.invoke(cli, [
            "income", "add", "-a", "10", "-s", "X", "-d", "Y", "--date", "not-a-date",
        ])
        assert result.exit_code != 0
        assert "Invalid record" in result.output

    def test_list_text_empty(self, runner, isolated_env):
        result = runner.invoke(cli, ["expenses", "list"])
        assert result.exit_code == 0, result.output
        assert "No expense records found" in result.output


class TestReports:

    def test_annual(self, runner, isolated_env):
        _add_golden_records(runner)
        data = _json(runner.invoke(cli, ["report", "annual", "--year", "2024", "--format", "json"]))

        assert data["summary"]["estimatedTax"] == pytest.approx(18964.5)
        assert data["breakdown"]["monthlyBreakdown"][4]["income"] == 80000

    def test_summary_without_previous_year(self, runner, isolated_env):
        _add_golden_records(runner)
        data = _json(runner.invoke(cli, ["report", "summary", "--year", "2024", "--format", "json"]))

        assert data["changes"]["income"] == 0
        assert data["current"]["totalIncome"] == 80000

    def test_dashboard(self, runner, isolated_env):
        _add_golden_records(runner)
        data = _json(runner.invoke(cli, ["report", "dashboard", "--year", "2024", "--format", "json"]))

        assert data["deductionCoverage"] == pytest.approx(10000 / 10500 * 100)


class TestSettings:

    def test_default_year(self, runner, isolated_env):
        result = runner.invoke(cli, ["settings", "set", "default_year", "2024"])
        assert result.exit_code == 0, result.output

        data = _json(runner.invoke(cli, ["deadlines", "--format", "json"]))
        assert data["year"] == 2024

    def test_invalid_year(self, runner, isolated_env):
        result = runner.invoke(cli, ["settings", "set", "default_year", "24"])
        assert result.exit_code != 0

    def test_unset(self, runner, isolated_env):
        runner.invoke(cli, ["settings", "set", "default_output_format", "json"])
        result = runner.invoke(cli, ["settings", "unset", "default_output_format"])
        assert result.exit_code == 0
        assert "Cleared" in result.output

    def test_show(self, runner, isolated_env):
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 0
        assert str(isolated_env["data_dir"]) in result.output
