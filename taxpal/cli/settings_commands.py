"""Settings CLI commands for TaxPal.

Manages settings.json - data directory, default year, output format.
"""

from pathlib import Path

import click

from taxpal.sdk import (
    KNOWN_SETTINGS,
    OUTPUT_FORMATS,
    get_data_path,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)

from .common import sdk_errors


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - data_dir: custom directory for income/expense records
    - default_year: tax year used when --year is omitted
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    with sdk_errors():
        current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  data_dir: {get_data_path()}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    Examples:
        taxpal settings set default_year 2024
        taxpal settings set default_output_format json
        taxpal settings set data_dir ~/taxpal-data
    """
    if key == "default_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.", param_hint="value")
        stored = int(value)
    elif key == "default_output_format":
        if value not in OUTPUT_FORMATS:
            raise click.BadParameter(f"Must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="value")
        stored = value
    else:
        data_path = Path(value).expanduser().resolve()
        if data_path.exists() and not data_path.is_dir():
            raise click.ClickException(f"Path exists but is not a directory: {data_path}")
        stored = str(data_path)

    with sdk_errors():
        saved_to = set_setting(key, stored)
    click.echo(f"Set {key}: {stored}")
    click.echo(f"Saved to: {saved_to}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key):
    """Clear a setting, reverting to its default."""
    with sdk_errors():
        removed = unset_setting(key)
    if removed:
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
