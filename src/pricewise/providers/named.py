"""Registry-backed provider: an explicit, ordered list of rule keys."""
from __future__ import annotations

from pricewise.core.registry import RuleRegistry
from pricewise.domain.models import PricingContext
from pricewise.rules.builtin import (
    BulkPurchaseRule,
    CouponDiscountRule,
    NewMemberDiscountRule,
    NoDiscountRule,
    TierDiscountRule,
)
from pricewise.rules.protocol import DiscountRule

DEFAULT_KEYS = ("newMember", "tier", "coupon", "bulk")


def default_registry() -> RuleRegistry:
    """Frozen registry with the built-in rules under their usual keys."""
    return (
        RuleRegistry()
        .register("coupon", CouponDiscountRule())
        .register("newMember", NewMemberDiscountRule(0.1))
        .register("tier", TierDiscountRule())
        .register("bulk", BulkPurchaseRule(10, 100))
        .register("none", NoDiscountRule())
        .freeze()
    )


class NamedRuleProvider:
    """Same rules for every context, looked up by key. Unknown keys raise RuleNotFoundError."""

    def __init__(self, registry: RuleRegistry, keys: tuple[str, ...] | list[str] = DEFAULT_KEYS) -> None:
        self._registry = registry
        self._keys = tuple(keys)

    def rules_for(self, context: PricingContext) -> list[DiscountRule]:
        return self._registry.get_many(self._keys)
