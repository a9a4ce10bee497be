"""Settings CLI commands for Salary Calc.

Manages settings.json - default jurisdiction, manual rate, data tables.
"""

import click

from salarycalc.sdk import (
    ConfigError,
    Settings,
    get_defaults,
    get_settings_path,
    load_settings,
    save_settings,
    set_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - default_region: region used when --region is omitted
    - default_municipality: municipality used when --municipality is omitted
    - manual_municipal_rate: municipal rate (percent) for manual mode
    - jurisdictions_dir: directory with custom jurisdiction YAML tables
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    try:
        current = load_settings()
        effective = get_defaults()
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo("Effective settings:")
    for key, value in effective.model_dump().items():
        source = "" if key in current else " (default)"
        click.echo(f"  {key}: {value}{source}")


@settings.command("set")
@click.argument("key", type=click.Choice(list(Settings.model_fields)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE in settings.json.

    Examples:
        salary-calc settings set default_region PUGLIA
        salary-calc settings set manual_municipal_rate 0.9
    """
    parsed = value
    if key == "manual_municipal_rate":
        try:
            parsed = float(value)
        except ValueError:
            raise click.BadParameter(f"'{value}' is not a number", param_hint="VALUE")

    try:
        path = set_setting(key, parsed)
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key} = {parsed} in {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(list(Settings.model_fields)))
def settings_unset(key):
    """Remove KEY from settings.json, reverting to the default."""
    try:
        current = load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))

    if key not in current:
        click.echo(f"{key} was not set.")
        return

    del current[key]
    save_settings(current)
    click.echo(f"Cleared {key}.")
