"""TaxPal SDK - Core functionality for income tracking and tax estimates."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_data_path,
    get_default_year,
    get_default_output_format,
    ConfigNotFoundError,
    KNOWN_SETTINGS,
    OUTPUT_FORMATS,
)

from .taxes import (
    TaxBracket,
    TaxRules,
    TaxRulesNotFoundError,
    load_tax_rules,
    calculate_federal_tax,
    get_marginal_tax_rate,
)

from .estimate import (
    build_estimate,
    estimate_for_year,
    calculate_tax_figures,
    percent_of,
)

from .recommendations import (
    generate_recommendations,
    generate_summary_recommendations,
    RULES as RECOMMENDATION_RULES,
    SUMMARY_RULES,
)

from .scenario import compare_scenario, scenario_for_year

from .schedule import quarterly_schedule, quarterly_for_year, tax_deadlines

from .reports import (
    annual_report,
    annual_report_for_year,
    dashboard_overview,
    dashboard_for_year,
    year_over_year,
    year_over_year_for_year,
)

from .schemas import IncomeRecord, ExpenseRecord, YearTotals

from .records import (
    ValidationError,
    add_income,
    add_expense,
    list_records,
    get_record,
    update_record,
    remove_record,
    year_totals,
)

from . import records

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_data_path",
    "get_default_year",
    "get_default_output_format",
    "ConfigNotFoundError",
    "KNOWN_SETTINGS",
    "OUTPUT_FORMATS",
    # Tax rules and brackets
    "TaxBracket",
    "TaxRules",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "calculate_federal_tax",
    "get_marginal_tax_rate",
    # Estimate
    "build_estimate",
    "estimate_for_year",
    "calculate_tax_figures",
    "percent_of",
    "generate_recommendations",
    "RECOMMENDATION_RULES",
    "generate_summary_recommendations",
    "SUMMARY_RULES",
    # Scenario
    "compare_scenario",
    "scenario_for_year",
    # Schedule
    "quarterly_schedule",
    "quarterly_for_year",
    "tax_deadlines",
    # Reports
    "annual_report",
    "annual_report_for_year",
    "dashboard_overview",
    "dashboard_for_year",
    "year_over_year",
    "year_over_year_for_year",
    # Records
    "IncomeRecord",
    "ExpenseRecord",
    "YearTotals",
    "ValidationError",
    "add_income",
    "add_expense",
    "list_records",
    "get_record",
    "update_record",
    "remove_record",
    "year_totals",
    "records",
]
