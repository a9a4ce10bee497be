"""Salary Calc CLI - Command-line interface for net pay and employer cost."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console

from salarycalc import __version__
from salarycalc.sdk import (
    ConfigError,
    EmployeeProfile,
    IncentiveType,
    JurisdictionDataError,
    calculate_employer_cost,
    calculate_salary,
    default_registry,
    get_defaults,
    load_registry,
)

from .renderers.result_renderer import render_employer_cost, render_salary
from .settings_commands import settings as settings_group


INCENTIVE_CHOICES = [t.value for t in IncentiveType]


@click.group()
@click.version_option(version=__version__, prog_name="salary-calc")
@click.option("--debug", is_flag=True, help="Log calculation details to stderr.")
def cli(debug):
    """Salary Calc - Italian net pay and employer cost simulator (2025 rules).

    Defaults for region, municipality and manual municipal rate are read
    from settings.json in the config directory:

    \b
    1. SALARY_CALC_CONFIG_PATH environment variable
    2. ~/.config/salary-calc/ (XDG default)

    Run 'salary-calc settings show' to see effective values.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


cli.add_command(settings_group)


def _load_defaults():
    try:
        return get_defaults()
    except ConfigError as e:
        raise click.ClickException(str(e))


def _registry(defaults=None):
    """Packaged tables, or the jurisdictions_dir from settings when set."""
    try:
        defaults = defaults or get_defaults()
        if defaults.jurisdictions_dir:
            return load_registry(str(Path(defaults.jurisdictions_dir).expanduser()))
        return default_registry()
    except (ConfigError, JurisdictionDataError) as e:
        raise click.ClickException(str(e))


@cli.command("net")
@click.argument("gross", type=float)
@click.option("--incentive", "-i", type=click.Choice(INCENTIVE_CHOICES, case_sensitive=False),
              default="NONE", show_default=True, help="Employer incentive to apply.")
@click.option("--region", "-r", help="Region name (default from settings).")
@click.option("--municipality", "-m", help="Municipality name (default from settings).")
@click.option("--manual-rate", type=float,
              help="Municipal surtax rate in percent; implies no municipality.")
@click.option("--dependents", type=click.IntRange(min=0), default=0, show_default=True,
              help="Dependent children (regional credits).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True)
def net(gross, incentive, region, municipality, manual_rate, dependents, output_format):
    """Calculate net pay and employer cost for a gross annual salary (RAL).

    \b
    Examples:
      salary-calc net 30000
      salary-calc net 30000 -r LAZIO -m ROMA -i UNDER_36
      salary-calc net 24000 -r MARCHE --manual-rate 0.5
    """
    defaults = _load_defaults()

    if manual_rate is not None and municipality:
        raise click.BadParameter("use either --municipality or --manual-rate, not both")

    if manual_rate is not None:
        municipality = None
    else:
        municipality = municipality or defaults.default_municipality
        manual_rate = defaults.manual_municipal_rate

    result = calculate_salary(
        max(0.0, gross),
        IncentiveType(incentive.upper()),
        region or defaults.default_region,
        municipality,
        manual_rate,
        dependents=dependents,
        registry=_registry(defaults),
    )

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_salary(Console(), result)


@cli.command("cost")
@click.argument("gross", type=float)
@click.option("--age", type=click.IntRange(min=0), required=True)
@click.option("--sex", type=click.Choice(["M", "F"], case_sensitive=False), default="M", show_default=True)
@click.option("--disability-pct", type=click.FloatRange(0, 100), default=0, show_default=True)
@click.option("--unemployment-months", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--region", "-r", default="", help="Region name or 'Sud'.")
@click.option("--permanent", is_flag=True, help="Worker already had a permanent contract.")
@click.option("--apprenticeship", is_flag=True, help="Hired with an apprenticeship contract.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True)
def cost(gross, age, sex, disability_pct, unemployment_months, region, permanent,
         apprenticeship, output_format):
    """Employer cost with the best incentive for a worker profile.

    Every incentive the profile is eligible for is evaluated and the
    largest saving is applied.

    \b
    Examples:
      salary-calc cost 30000 --age 28 --sex F --unemployment-months 13
      salary-calc cost 25000 --age 55 --unemployment-months 24 -r PUGLIA
    """
    profile = EmployeeProfile(
        age=age,
        sex=sex.upper(),
        disability_pct=disability_pct,
        unemployment_months=unemployment_months,
        region=region,
        has_had_permanent_contract=permanent,
        is_apprenticeship=apprenticeship,
    )
    result = calculate_employer_cost(max(0.0, gross), profile)

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_employer_cost(Console(), result)


@cli.command("regions")
def regions():
    """List regions with a dedicated regional surtax schedule."""
    registry = _registry()
    for name in registry.regions():
        click.echo(name)
    click.echo(click.style("Other regions use the DEFAULT schedule.", dim=True))


@cli.command("provinces")
@click.argument("region")
def provinces(region):
    """List province capitals of REGION (e.g. 'Emilia-Romagna')."""
    capitals = _registry().provinces_by_region(region)
    if not capitals:
        raise click.ClickException(f"No provinces found for region '{region}'")
    for capital in capitals:
        click.echo(f"{capital.code}  {capital.name}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
