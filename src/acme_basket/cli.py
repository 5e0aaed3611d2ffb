import json
import logging
import sys

import click

from . import __version__ as VERSION
from .config import Config, PricingSetup, build_pricing, refresh_config
from .errors import BasketError
from .money import format_money
from .types import BasketSummary

logger = logging.getLogger(__name__)

RULE_WIDTH = 60

DEMO_BASKETS = [
    (["B01", "G01"], "Test Case 1: B01, G01", "$37.85"),
    (["R01", "R01"], "Test Case 2: R01, R01", "$54.37"),
    (["R01", "G01"], "Test Case 3: R01, G01", "$60.85"),
    (["B01", "B01", "R01", "R01", "R01"], "Test Case 4: B01, B01, R01, R01, R01", "$98.27"),
]


def _emit_structured_error(exc: BasketError, *, as_json: bool = False, exit_code: int = 2):
    if as_json:
        payload = {
            "ok": False,
            "error": {"code": exc.error_code, "category": exc.category, "message": exc.explanation},
        }
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        click.echo(f"Error [{exc.category}:{exc.error_code}]: {exc.explanation}", err=True)
    sys.exit(exit_code)


def _load_pricing(ctx, as_json: bool = False) -> PricingSetup:
    try:
        return build_pricing(ctx.obj["config"])
    except BasketError as exc:
        _emit_structured_error(exc, as_json=as_json)


def _money(config: Config, amount) -> str:
    return format_money(amount, symbol=config.currency_symbol, rounding=config.rounding)


def _print_summary(config: Config, summary: BasketSummary) -> None:
    click.echo("-" * RULE_WIDTH)
    click.echo(f"Subtotal: {_money(config, summary.subtotal)}")
    if summary.discount:
        click.echo(f"Discount: -{_money(config, summary.discount)}")
    click.echo(f"Delivery: {_money(config, summary.delivery)}")
    click.echo(f"TOTAL: {_money(config, summary.total)}")


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--version", is_flag=True, help="Show the version and exit.")
def main(ctx, version):
    """Acme Widget Co basket calculator."""
    try:
        config = refresh_config()
    except BasketError as exc:
        _emit_structured_error(exc)
    logging.basicConfig(level=getattr(logging, config.log_level), format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"config": config}

    if version:
        click.echo(f"acme-basket version {VERSION}")
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command(name="help")
@click.pass_context
def help_command(ctx):
    """Show this message and exit."""
    click.echo(ctx.parent.get_help())


@main.command()
@click.option("--json", "json_output", is_flag=True, help="Emit the catalog as JSON")
@click.pass_context
def catalog(ctx, json_output):
    """List the products in the configured catalog."""
    config = ctx.obj["config"]
    pricing = _load_pricing(ctx, as_json=json_output)
    if json_output:
        click.echo(json.dumps([product.to_dict() for product in pricing.catalog], indent=2))
        return
    for product in pricing.catalog:
        click.echo(f"{product.code}  {product.name:<20} {_money(config, product.price)}")


@main.command()
@click.argument("codes", nargs=-1, required=True)
@click.option("--json", "json_output", is_flag=True, help="Emit the basket summary as JSON")
@click.pass_context
def price(ctx, codes, json_output):
    """Price a basket built from product CODES."""
    config = ctx.obj["config"]
    pricing = _load_pricing(ctx, as_json=json_output)
    basket = pricing.new_basket()
    try:
        for code in codes:
            product = basket.add(code)
            if not json_output:
                click.echo(f"Added: {product.name} ({product.code}) - {_money(config, product.price)}")
        summary = basket.summary()
    except BasketError as exc:
        _emit_structured_error(exc, as_json=json_output)

    if json_output:
        payload = summary.to_dict()
        payload["display_total"] = _money(config, summary.total)
        click.echo(json.dumps(payload, indent=2))
        return
    _print_summary(config, summary)


@main.command()
@click.pass_context
def demo(ctx):
    """Price the reference Acme baskets."""
    config = ctx.obj["config"]
    pricing = _load_pricing(ctx)
    # published totals only hold for the stock Acme configuration
    reference = config == Config(log_level=config.log_level)
    for codes, description, expected in DEMO_BASKETS:
        if reference:
            description = f"{description} (Expected: {expected})"
        basket = pricing.new_basket()
        click.echo()
        click.echo("=" * RULE_WIDTH)
        click.echo(description)
        click.echo("=" * RULE_WIDTH)
        try:
            for code in codes:
                product = basket.add(code)
                click.echo(f"Added: {product.name} ({product.code}) - {_money(config, product.price)}")
        except BasketError as exc:
            _emit_structured_error(exc)
        _print_summary(config, basket.summary())
        click.echo("=" * RULE_WIDTH)


if __name__ == "__main__":
    main()
