"""Main CLI interface"""

from fractions import Fraction
from typing import Any, Dict, Tuple

import click

from .. import __version__
from ..config.units_config import UnitsConfiguration
from ..core.exceptions import UnitsError, UnknownUnit, create_error_summary
from ..core.formatting import format_quantity
from ..core.units.definitions import as_rational
from ..dimensions import default_registry
from ..infrastructure.logging.units_logger import setup_logging


def _parse_amount(text: str) -> Fraction:
    try:
        return as_rational(text)
    except ValueError:
        raise click.BadParameter(f"'{text}' is not a number", param_hint='AMOUNT') from None


def _parse_filters(filters: Tuple[str, ...]) -> Dict[str, Any]:
    parsed = {}
    for item in filters:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"'{item}' is not key=value", param_hint='--filter')
        lowered = value.lower()
        if lowered in ('true', 'false'):
            parsed[key] = lowered == 'true'
        else:
            parsed[key] = value
    return parsed


@click.group()
@click.version_option(version=__version__)
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (JSON)')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """unitsmith - convert and decompose units of measure"""

    try:
        config_obj = UnitsConfiguration.from_file(config) if config else UnitsConfiguration()
        config_obj.validate()
    except UnitsError as e:
        raise click.ClickException(str(e))

    logger = setup_logging(config_obj.log_file, verbose=verbose, level=config_obj.log_level)
    ctx.call_on_close(logger.flush)
    ctx.obj = config_obj


@cli.command()
@click.argument('amount')
@click.argument('unit')
@click.argument('target')
@click.pass_obj
def convert(config, amount, unit, target):
    """Convert AMOUNT of UNIT into TARGET"""
    try:
        result = default_registry.quantity(_parse_amount(amount), unit).convert_to(target)
    except UnitsError as e:
        raise click.ClickException(str(e))

    click.echo(format_quantity(result, config))


@cli.command()
@click.argument('amount')
@click.argument('unit')
@click.option('--filter', '-f', 'filters', multiple=True, help='Required unit tag, key=value')
@click.pass_obj
def normalize(config, amount, unit, filters):
    """Express AMOUNT of UNIT in its best-fitting unit"""
    try:
        result = default_registry.quantity(_parse_amount(amount), unit).normalize(
            _parse_filters(filters), precision=config.normalize_precision)
    except UnitsError as e:
        raise click.ClickException(str(e))

    click.echo(format_quantity(result, config))


@cli.command()
@click.argument('amount')
@click.argument('unit')
@click.option('--filter', '-f', 'filters', multiple=True, help='Required unit tag, key=value')
@click.pass_obj
def expand(config, amount, unit, filters):
    """Split AMOUNT of UNIT into whole amounts of decreasing units"""
    try:
        parts = default_registry.quantity(_parse_amount(amount), unit).expand(_parse_filters(filters))
    except UnitsError as e:
        raise click.ClickException(str(e))

    click.echo(', '.join(format_quantity(part, config) for part in parts))


@cli.command()
@click.argument('dimension', required=False)
def units(dimension):
    """List dimensions, or the units of DIMENSION"""
    if dimension is None:
        for name in default_registry.names:
            click.echo(name)
        return

    try:
        found = default_registry.get(dimension)
    except UnknownUnit as e:
        raise click.ClickException(str(e))

    for name in found.unit_names():
        click.echo(name)


@cli.command()
@click.argument('names', nargs=-1, required=True)
def check(names):
    """Validate unit NAMES against the known units and aliases"""
    errors = []
    for name in names:
        try:
            dimension, canonical = default_registry.lookup(name)
            click.echo(f"{name}: {dimension.name}:{canonical}")
        except UnknownUnit as e:
            errors.append(e)

    if errors:
        summary = create_error_summary(errors)
        for detail in summary['error_details']:
            click.echo(f"{detail['details']['unit']}: unknown", err=True)
        raise click.ClickException(f"{summary['total_errors']} unknown unit(s)")


if __name__ == '__main__':
    cli()
