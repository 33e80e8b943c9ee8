"""Built-in discount rules: member tier, new member, coupon, bulk purchase, no-op."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pricewise.domain.models import (
    CouponKind,
    DiscountCandidate,
    MemberTier,
    Number,
    PricingContext,
    floor_int,
    floor_share,
)

MEMBERSHIP = "membership"
COUPON = "coupon"
BULK = "bulk"

TIER_RATES: Mapping[MemberTier, float] = MappingProxyType({
    MemberTier.NEW: 0.0,
    MemberTier.IRON: 0.01,
    MemberTier.BRONZE: 0.02,
    MemberTier.SILVER: 0.05,
    MemberTier.GOLD: 0.07,
    MemberTier.PLATINUM: 0.1,
    MemberTier.VIP: 0.15,
})


def _percent(rate: Number) -> int:
    return floor_share(rate, 100)


def _candidate(label: str, amount: int, group: str | None, **metadata) -> DiscountCandidate | None:
    if amount <= 0:
        return None
    return DiscountCandidate(label=label, amount=amount, group=group, metadata=metadata)


class NoDiscountRule:
    """Never applies."""

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        return None


class TierDiscountRule:
    """Rate off the subtotal by member tier."""

    def __init__(self, rates: Mapping[MemberTier, float] = TIER_RATES) -> None:
        self._rates = rates

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        tier = context.member_tier
        if tier is None:
            return None
        rate = self._rates.get(tier, 0)
        if rate <= 0:
            return None
        amount = floor_share(context.subtotal, rate)
        return _candidate(f"Tier {tier.value} {_percent(rate)}% off", amount, MEMBERSHIP, rate=rate)


class NewMemberDiscountRule:
    """Rate off the subtotal for NEW members only."""

    def __init__(self, rate: float = 0.1) -> None:
        self._rate = rate

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        if context.member_tier is not MemberTier.NEW:
            return None
        amount = floor_share(context.subtotal, self._rate)
        return _candidate(f"New member {_percent(self._rate)}% off", amount, MEMBERSHIP, rate=self._rate)


class CouponDiscountRule:
    """Fixed-amount or percentage coupon."""

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        coupon = context.coupon
        if coupon is None:
            return None
        if coupon.kind is CouponKind.FIXED_AMOUNT:
            amount = max(0, floor_int(coupon.value))
            label = f"Coupon {amount} off"
        elif coupon.kind is CouponKind.PERCENTAGE:
            amount = floor_share(context.subtotal, coupon.value) // 100
            label = f"Coupon {coupon.value}% off"
        else:
            return None
        return _candidate(label, amount, COUPON, coupon=coupon)


class BulkPurchaseRule:
    """Fixed amount off per item once quantity reaches min_qty."""

    def __init__(self, min_qty: int = 10, amount_off_per_item: int = 100) -> None:
        self.min_qty = min_qty
        self.amount_off_per_item = amount_off_per_item

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        if context.quantity < self.min_qty:
            return None
        amount = context.quantity * self.amount_off_per_item
        return _candidate(
            f"Bulk {self.min_qty}+ items, {self.amount_off_per_item} off each",
            amount,
            BULK,
            min_qty=self.min_qty,
            amount_off_per_item=self.amount_off_per_item,
        )


class BulkRateRule:
    """Rate off the subtotal once quantity reaches threshold."""

    def __init__(self, threshold: int = 10, rate: float = 0.05) -> None:
        self.threshold = threshold
        self.rate = rate

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        if context.quantity < self.threshold:
            return None
        amount = floor_share(context.subtotal, self.rate)
        return _candidate(f"Bulk {self.threshold}+ items {_percent(self.rate)}% off", amount, BULK, rate=self.rate)
