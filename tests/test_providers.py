import pytest

from pricewise.core.registry import RuleRegistry
from pricewise.domain.errors import InvalidPolicyError, PricingError, RuleNotFoundError
from pricewise.domain.models import Market, PricingContext
from pricewise.providers import MarketRuleProvider, NamedRuleProvider, RuleProvider, default_registry
from pricewise.rules import (
    BulkPurchaseRule,
    CouponDiscountRule,
    NewMemberDiscountRule,
    TierDiscountRule,
)


def rule_types(rules):
    return [type(r) for r in rules]


class TestMarketRuleProvider:
    def test_satisfies_protocol(self):
        assert isinstance(MarketRuleProvider(), RuleProvider)

    def test_korea(self):
        rules = MarketRuleProvider().rules_for(PricingContext(100, 1, market=Market.KR))
        assert rule_types(rules) == [NewMemberDiscountRule, CouponDiscountRule, BulkPurchaseRule]
        assert rules[2].amount_off_per_item == 100

    def test_global(self):
        rules = MarketRuleProvider().rules_for(PricingContext(100, 1, market=Market.GLOBAL))
        assert rule_types(rules) == [TierDiscountRule, CouponDiscountRule, BulkPurchaseRule]
        assert rules[2].amount_off_per_item == 150

    def test_missing_market_falls_back_to_global(self):
        provider = MarketRuleProvider()
        context = PricingContext(100, 1)
        assert provider.market_for(context) is Market.GLOBAL
        assert rule_types(provider.rules_for(context))[0] is TierDiscountRule

    def test_unlisted_market_falls_back_to_default(self):
        provider = MarketRuleProvider(rule_sets={Market.KR: lambda: [TierDiscountRule()]}, default_market=Market.KR)
        assert provider.market_for(PricingContext(100, 1, market=Market.GLOBAL)) is Market.KR

    def test_default_market_must_have_rules(self):
        with pytest.raises(InvalidPolicyError):
            MarketRuleProvider(rule_sets={Market.KR: list}, default_market=Market.GLOBAL)

    def test_default_market_error_is_a_pricing_error(self):
        with pytest.raises(PricingError):
            MarketRuleProvider(rule_sets={}, default_market=Market.KR)

    def test_markets(self):
        assert MarketRuleProvider().markets() == [Market.KR, Market.GLOBAL]


class TestNamedRuleProvider:
    def test_resolves_keys_in_order(self):
        provider = NamedRuleProvider(default_registry(), ["tier", "coupon"])
        assert rule_types(provider.rules_for(PricingContext(100, 1))) == [TierDiscountRule, CouponDiscountRule]

    def test_default_keys(self):
        provider = NamedRuleProvider(default_registry())
        assert rule_types(provider.rules_for(PricingContext(100, 1))) == [
            NewMemberDiscountRule,
            TierDiscountRule,
            CouponDiscountRule,
            BulkPurchaseRule,
        ]

    def test_unknown_key(self):
        provider = NamedRuleProvider(RuleRegistry(), ["seasonal"])
        with pytest.raises(RuleNotFoundError):
            provider.rules_for(PricingContext(100, 1))
