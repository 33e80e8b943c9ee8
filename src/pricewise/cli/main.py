"""
CLI: quote an order, list market rule sets, run the example scenarios.
Policy defaults come from PRICEWISE_* environment variables; options override them.
"""
from __future__ import annotations

import json
from typing import List, Optional

import typer

from pricewise.application.pricing import ListMarkets, QuotePrice, list_markets_handler
from pricewise.core.config import Settings
from pricewise.core.logging_utils import configure_logging
from pricewise.core.registry import RuleRegistry
from pricewise.domain.errors import InvalidPolicyError, InvalidRequestError
from pricewise.domain.models import AggregationPolicy, Coupon, CouponKind, Market, MemberTier, PricingContext
from pricewise.engine.facade import PricingFacade, Quote
from pricewise.providers.market import MarketRuleProvider
from pricewise.providers.named import NamedRuleProvider, default_registry
from pricewise.rules.builtin import BulkRateRule, CouponDiscountRule, TierDiscountRule

app = typer.Typer(help="pricewise: discount aggregation for unit price x quantity orders.")


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except InvalidPolicyError as e:
        raise typer.BadParameter(str(e), param_hint="PRICEWISE_* environment") from e


def _echo_quote(quote: Quote, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(quote.to_dict(), ensure_ascii=False))
        return
    result = quote.result
    typer.echo(f"Subtotal: {result.subtotal}")
    typer.echo("Discounts:")
    if not result.discounts:
        typer.echo("  (none)")
    for line in result.discounts:
        typer.echo(f"  - {line.label} (-{line.amount})")
    typer.echo(f"Total: {result.total}")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override PRICEWISE_LOG_LEVEL"),
) -> None:
    configure_logging(log_level or _load_settings().log_level)


@app.command()
def quote(
    price: str = typer.Option(..., "--price", "-p", help="Unit price"),
    quantity: str = typer.Option(..., "--quantity", "-q", help="Quantity"),
    tier: Optional[str] = typer.Option(None, "--tier", help="Member tier (NEW, SILVER, GOLD, ...)"),
    coupon_kind: Optional[str] = typer.Option(None, "--coupon-kind", help="FIXED_AMOUNT or PERCENTAGE"),
    coupon_value: Optional[str] = typer.Option(None, "--coupon-value", help="Coupon amount or percent"),
    coupon_code: Optional[str] = typer.Option(None, "--coupon-code"),
    market: Optional[str] = typer.Option(None, "--market", help="KR or GLOBAL"),
    stock: Optional[str] = typer.Option(None, "--stock", help="Units in stock"),
    max_rate: Optional[float] = typer.Option(None, "--max-rate", help="Discount cap as a fraction of subtotal"),
    best_one: bool = typer.Option(False, "--best-one", help="Apply only the largest discount"),
    exclusive: Optional[List[str]] = typer.Option(None, "--exclusive", "-x", help="Exclusive group (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    """Price one order through the validation pipeline and the market rule set."""
    settings = _load_settings()
    cmd = QuotePrice(
        unit_price=price,
        quantity=quantity,
        member_tier=tier,
        coupon_kind=coupon_kind,
        coupon_value=coupon_value,
        coupon_code=coupon_code,
        market=market,
        stock=stock,
    )
    try:
        context = cmd.to_context()
        policy = AggregationPolicy.of(
            max_discount_rate=max_rate if max_rate is not None else settings.max_discount_rate,
            only_best_one=best_one or settings.only_best_one,
            exclusive_groups=exclusive or settings.exclusive_groups,
        )
    except (InvalidRequestError, InvalidPolicyError) as e:
        raise typer.BadParameter(str(e)) from e
    facade = PricingFacade(MarketRuleProvider(default_market=settings.default_market), policy)
    _echo_quote(facade.quote(context), as_json)


@app.command()
def markets() -> None:
    """List the rules each market applies, in evaluation order."""
    for market, rules in list_markets_handler(ListMarkets())["markets"].items():
        typer.echo(f"{market}: {', '.join(rules)}")


def _pipeline_registry() -> RuleRegistry:
    return (
        RuleRegistry()
        .register("tier", TierDiscountRule())
        .register("bulkRate", BulkRateRule(10, 0.08))
        .register("coupon", CouponDiscountRule())
        .freeze()
    )


@app.command()
def demo() -> None:
    """Run the example scenarios: named registry, market rule sets, validation pipeline."""
    typer.echo("== Registry: newMember, tier, coupon, bulk; cap 30%")
    facade = PricingFacade(NamedRuleProvider(default_registry()), AggregationPolicy(max_discount_rate=0.3))
    ctx = PricingContext(12000, 12, MemberTier.GOLD, Coupon(CouponKind.PERCENTAGE, 10))
    _echo_quote(Quote(facade.price(ctx)), as_json=False)

    policy = AggregationPolicy.of(max_discount_rate=0.3, exclusive_groups=["membership"])
    by_market = PricingFacade(MarketRuleProvider(), policy)
    for label, ctx in [
        ("KR: NEW + coupon 10% + bulk", PricingContext(12000, 12, MemberTier.NEW, Coupon(CouponKind.PERCENTAGE, 10), Market.KR)),
        ("GLOBAL: GOLD + coupon 15% + bulk", PricingContext(20000, 15, MemberTier.GOLD, Coupon(CouponKind.PERCENTAGE, 15), Market.GLOBAL)),
    ]:
        typer.echo(f"== Market {label}")
        _echo_quote(Quote(by_market.price(ctx)), as_json=False)

    registry = _pipeline_registry()
    for label, ctx, rate in [
        ("in stock", PricingContext(20000, 12, MemberTier.GOLD, Coupon(CouponKind.PERCENTAGE, 10, "TENOFF"), Market.KR, stock=50), 0.3),
        ("short on stock", PricingContext(15000, 3, MemberTier.NEW, Coupon(CouponKind.FIXED_AMOUNT, 2000), Market.GLOBAL, stock=2), 0.25),
        ("no coupon, no cap", PricingContext(10000, 1, MemberTier.SILVER, market=Market.KR), None),
    ]:
        typer.echo(f"== Pipeline: {label}")
        checked = PricingFacade(NamedRuleProvider(registry, registry.keys()), AggregationPolicy(max_discount_rate=rate))
        result = checked.quote(ctx)
        _echo_quote(result, as_json=False)
        typer.echo(f"Trail: {' > '.join(result.trail)}")


def main() -> None:
    """Entry point for the pricewise console command."""
    app()


if __name__ == "__main__":
    main()
