"""Market-keyed rule sets. Adding a market means adding a builder to MARKET_RULE_SETS."""
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from pricewise.domain.errors import InvalidPolicyError
from pricewise.domain.models import Market, PricingContext
from pricewise.rules.builtin import (
    BulkPurchaseRule,
    CouponDiscountRule,
    NewMemberDiscountRule,
    TierDiscountRule,
)
from pricewise.rules.protocol import DiscountRule

RuleSetBuilder = Callable[[], list[DiscountRule]]


def korea_rules() -> list[DiscountRule]:
    return [NewMemberDiscountRule(0.05), CouponDiscountRule(), BulkPurchaseRule(10, 100)]


def global_rules() -> list[DiscountRule]:
    """Tier + coupon + bulk; no new-member rate."""
    return [TierDiscountRule(), CouponDiscountRule(), BulkPurchaseRule(10, 150)]


MARKET_RULE_SETS: Mapping[Market, RuleSetBuilder] = MappingProxyType({
    Market.KR: korea_rules,
    Market.GLOBAL: global_rules,
})


class MarketRuleProvider:
    """
    Resolves rules by context.market. A missing or unknown market falls back
    to default_market (GLOBAL unless configured otherwise).
    """

    def __init__(
        self,
        rule_sets: Mapping[Market, RuleSetBuilder] = MARKET_RULE_SETS,
        default_market: Market = Market.GLOBAL,
    ) -> None:
        if default_market not in rule_sets:
            raise InvalidPolicyError(f"No rule set for default market {default_market!r}")
        self._rule_sets = rule_sets
        self._default_market = default_market

    def market_for(self, context: PricingContext) -> Market:
        market = context.market
        if market is None or market not in self._rule_sets:
            return self._default_market
        return market

    def rules_for(self, context: PricingContext) -> list[DiscountRule]:
        return self._rule_sets[self.market_for(context)]()

    def markets(self) -> list[Market]:
        return list(self._rule_sets)
