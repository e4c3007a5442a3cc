"""Tax rules loading.

Rules are stored as taxpal/tax_rules/YYYY.yaml and loaded once per year.
A request for a year without its own file falls back to the latest
earlier year that has one.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no tax rules file can serve the requested year."""
    pass


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> taxpal


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def resolve_rules_year(year: int) -> int:
    """Pick the rules year serving `year`.

    Uses the latest available year <= `year`. If every file is newer than
    `year`, the oldest available file is used.

    Raises:
        TaxRulesNotFoundError: If there are no rules files at all
    """
    available_years = get_available_years()
    if not available_years:
        raise TaxRulesNotFoundError(f"No tax rules found in {_get_tax_rules_dir()}")

    candidate_years = [y for y in available_years if y <= int(year)]
    if candidate_years:
        return candidate_years[0]
    return available_years[-1]


@lru_cache(maxsize=None)
def _load_rules_file(rules_year: int) -> TaxRules:
    config_file = _get_tax_rules_dir() / f"{rules_year}.yaml"
    logger.debug(f"Loading tax rules from {config_file}")
    with open(config_file, "r") as f:
        return TaxRules.model_validate(yaml.safe_load(f))


def load_tax_rules(year: int) -> TaxRules:
    """Load tax rules for a year.

    Args:
        year: Tax year (e.g., 2024)

    Returns:
        Frozen TaxRules; the same instance is returned on every call for a year

    Raises:
        TaxRulesNotFoundError: If no rules file exists
        pydantic.ValidationError: If the rules file is malformed
    """
    rules_year = resolve_rules_year(int(year))
    if rules_year != int(year):
        logger.debug(f"No tax rules for {year}, using {rules_year}")
    return _load_rules_file(rules_year)
