"""TaxPal MCP Server - FastMCP implementation for tax estimate tools.

Every tool returns {"success": true, "data": ...} or
{"success": false, "error": "..."}.
"""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from taxpal.sdk import (
    annual_report_for_year,
    build_estimate,
    compare_scenario,
    estimate_for_year,
    get_default_year,
    quarterly_for_year,
    scenario_for_year,
    tax_deadlines,
)
from taxpal.sdk import records as sdk_records

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("taxpal")


def _ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def _fail(tool: str, e: Exception) -> dict[str, Any]:
    logger.error(f"Error in {tool}: {e}")
    return {"success": False, "error": str(e)}


# --- Tools ---

@mcp.tool()
async def tax_estimate(
    year: int | None = Field(default=None, description="Tax year (default: configured or current year)"),
    total_income: float | None = Field(default=None, ge=0, description="Total income; omit to use stored records"),
    total_expenses: float | None = Field(
        default=None, ge=0, description="Total expenses (with total_income; default: deductible_expenses)",
    ),
    deductible_expenses: float = Field(default=0, ge=0, description="Deductible expenses (with total_income)"),
) -> dict[str, Any]:
    """Estimate federal income tax, self-employment tax, rates, quarterly payment and recommendations."""
    try:
        year = year or get_default_year()
        if total_income is None:
            return _ok(estimate_for_year(year))
        if total_expenses is None:
            total_expenses = deductible_expenses
        if deductible_expenses > total_expenses:
            raise ValueError("deductible_expenses cannot exceed total_expenses")
        return _ok(build_estimate(total_income, total_expenses, deductible_expenses, year))
    except Exception as e:
        return _fail("tax_estimate", e)


@mcp.tool()
async def tax_scenario(
    year: int | None = Field(default=None, description="Tax year (default: configured or current year)"),
    additional_income: float = Field(default=0, ge=0, description="Hypothetical extra income"),
    additional_expenses: float = Field(default=0, ge=0, description="Hypothetical extra deductible expenses"),
    retirement_contribution: float = Field(default=0, ge=0, description="Hypothetical retirement contribution"),
    current_income: float | None = Field(default=None, ge=0, description="Current income; omit to use stored records"),
    current_deductible: float = Field(default=0, ge=0, description="Current deductible expenses (with current_income)"),
) -> dict[str, Any]:
    """Compare current taxes with a what-if scenario. Returns current, scenario and difference."""
    try:
        year = year or get_default_year()
        if current_income is None:
            result = scenario_for_year(
                year,
                additional_income=additional_income,
                additional_expenses=additional_expenses,
                retirement_contribution=retirement_contribution,
            )
        else:
            result = compare_scenario(
                current_income,
                current_deductible,
                additional_income=additional_income,
                additional_expenses=additional_expenses,
                retirement_contribution=retirement_contribution,
                year=year,
            )
        return _ok(result)
    except Exception as e:
        return _fail("tax_scenario", e)


@mcp.tool()
async def quarterly_schedule(
    year: int | None = Field(default=None, description="Tax year (default: configured or current year)"),
) -> dict[str, Any]:
    """Quarterly estimated payment schedule (four equal payments with due dates) from stored records."""
    try:
        return _ok(quarterly_for_year(year or get_default_year()))
    except Exception as e:
        return _fail("quarterly_schedule", e)


@mcp.tool()
async def deadlines(
    year: int | None = Field(default=None, description="Tax year (default: configured or current year)"),
) -> dict[str, Any]:
    """Important tax dates for the year, sorted by date."""
    try:
        year = year or get_default_year()
        return _ok({"year": year, "deadlines": tax_deadlines(year)})
    except Exception as e:
        return _fail("deadlines", e)


@mcp.tool()
async def annual_report(
    year: int | None = Field(default=None, description="Tax year (default: configured or current year)"),
) -> dict[str, Any]:
    """Annual report: summary, income/expense breakdown by category and month, payments and deadlines."""
    try:
        return _ok(annual_report_for_year(year or get_default_year()))
    except Exception as e:
        return _fail("annual_report", e)


# --- Resources (optional, for browsing) ---

@mcp.resource("taxpal://records/years")
async def list_years_resource() -> str:
    """List years with income/expense record counts."""
    try:
        counts: dict[str, dict[str, int]] = {}
        for record in sdk_records.list_records():
            meta = record.get("meta", {})
            year_counts = counts.setdefault(str(meta.get("year")), {"income": 0, "expense": 0})
            if meta.get("type") in year_counts:
                year_counts[meta["type"]] += 1
        return json.dumps({"years": counts}, indent=2)
    except Exception as e:
        return json.dumps({"error": str(e)})


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
