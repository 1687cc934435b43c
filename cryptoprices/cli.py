"""
Command-line front end for the price list.

Usage:
    cryptoprices list
    cryptoprices list --eur --search bit
    cryptoprices detail 1 --eur
    cryptoprices flags --set supportEUR=true
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .app import get_default_container
from .config import PricesConfig, parse_bool
from .container import Container
from .exceptions import PricesError
from .flags import FeatureFlag
from .presentation import CryptoListViewModel, DetailViewModel, DisplayItem, SettingViewModel
from .services import FEATURE_FLAGS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S"
)

logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    click.echo(click.style(f"✗ Error: {message}", fg="red"))
    sys.exit(1)


def apply_eur(container: Container, eur: Optional[bool]) -> None:
    if eur is not None:
        SettingViewModel(container).support_eur = eur


def load_items(container: Container, search: Optional[str] = None) -> list[DisplayItem]:
    view_model = CryptoListViewModel(container)
    try:
        asyncio.run(view_model.load())
        if view_model.error_message:
            fail(view_model.error_message)
        if search:
            view_model.search_text = search
        return view_model.items
    finally:
        view_model.close()


def print_item(item: DisplayItem) -> None:
    symbol = click.style(f"{item.symbol:<4}", fg="yellow")
    prices = item.usd_price
    if item.show_eur and item.eur_price:
        prices = f"{prices:>16}  {item.eur_price:>16}"
    else:
        prices = f"{prices:>16}"
    tags = ", ".join(item.tags)
    click.echo(f"{item.id:>3}  {symbol} {item.name:<12} {prices}  {tags}")


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="YAML configuration file")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[Path], debug: bool):
    """Crypto Prices - bundled price list with EUR support"""
    ctx.ensure_object(dict)

    try:
        config = PricesConfig.from_file(config_path)
    except PricesError as e:
        fail(e.message)

    logging.getLogger().setLevel(config.log_level.upper())
    if config.source_logging:
        logging.getLogger("cryptoprices.data").setLevel(logging.DEBUG)
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        ctx.obj["container"] = get_default_container(config)
    except PricesError as e:
        fail(e.message)


@cli.command("list")
@click.option("--search", "-s", default=None, help="Filter by name, symbol or tag")
@click.option("--eur/--no-eur", default=None, help="Show EUR prices")
@click.pass_context
def list_prices(ctx, search: Optional[str], eur: Optional[bool]):
    """List all prices."""
    container = ctx.obj["container"]

    try:
        apply_eur(container, eur)
        items = load_items(container, search)
    except PricesError as e:
        fail(e.message)

    if not items:
        click.echo("No prices found.")
        return

    for item in items:
        print_item(item)


@cli.command()
@click.argument("item_id", type=int)
@click.option("--eur/--no-eur", default=None, help="Show EUR price")
@click.pass_context
def detail(ctx, item_id: int, eur: Optional[bool]):
    """Show one token's prices."""
    container = ctx.obj["container"]

    try:
        apply_eur(container, eur)
        items = load_items(container)
    except PricesError as e:
        fail(e.message)

    item = next((i for i in items if i.id == item_id), None)
    if item is None:
        fail(f"No token with id {item_id}")

    view_model = DetailViewModel(item, container)
    try:
        click.echo(click.style(view_model.token_name, bold=True))
        click.echo(view_model.formatted_prices)
    finally:
        view_model.close()


@cli.command()
@click.option("--set", "assignments", multiple=True, metavar="NAME=BOOL",
              help="Set a flag for this run")
@click.pass_context
def flags(ctx, assignments: tuple[str, ...]):
    """Show feature flags."""
    container = ctx.obj["container"]

    try:
        provider = container.require(FEATURE_FLAGS)
        for assignment in assignments:
            name, sep, value = assignment.partition("=")
            if not sep:
                fail(f"Expected NAME=BOOL, got {assignment!r}")
            provider.update(FeatureFlag.parse(name), parse_bool(value))
    except ValueError as e:
        fail(str(e))
    except PricesError as e:
        fail(e.message)

    for flag in FeatureFlag:
        value = provider.get_value(flag)
        state = click.style("on", fg="green") if value else click.style("off", fg="red")
        click.echo(f"{flag.value}: {state}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
