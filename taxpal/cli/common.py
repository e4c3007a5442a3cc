"""Options and output helpers shared by CLI commands."""

import json
from contextlib import contextmanager
from typing import Callable, Optional

import click
from rich.console import Console

from taxpal.sdk import (
    ConfigNotFoundError,
    OUTPUT_FORMATS,
    TaxRulesNotFoundError,
    ValidationError,
    get_default_output_format,
    get_default_year,
)


def year_option(func):
    return click.option(
        "--year", "-y", type=click.IntRange(1900, 2100), default=None,
        help="Tax year (default: settings default_year, else current year)",
    )(func)


def format_option(func):
    return click.option(
        "--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
        help="Output format (default: settings default_output_format, else text)",
    )(func)


def resolve_year(year: Optional[int]) -> int:
    if year is not None:
        return year
    with sdk_errors():
        return get_default_year()


def resolve_format(output_format: Optional[str]) -> str:
    if output_format:
        return output_format
    with sdk_errors():
        return get_default_output_format()


def emit(data, output_format: str, render: Callable[[Console, object], None]) -> None:
    """Print SDK output as a {success, data} JSON envelope or as rich tables."""
    if output_format == "json":
        click.echo(json.dumps({"success": True, "data": data}, indent=2))
    else:
        render(Console(), data)


@contextmanager
def sdk_errors():
    """Turn SDK errors into ClickExceptions."""
    try:
        yield
    except ValidationError as e:
        raise click.ClickException("\n".join(["Invalid record:"] + [f"  {err}" for err in e.errors]))
    except (ConfigNotFoundError, TaxRulesNotFoundError) as e:
        raise click.ClickException(str(e))
