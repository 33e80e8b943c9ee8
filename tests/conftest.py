import pytest

from pricewise.domain.models import Coupon, CouponKind, DiscountCandidate, MemberTier, PricingContext


def line(amount: int, label: str | None = None, group: str | None = None) -> DiscountCandidate:
    return DiscountCandidate(label=label or f"line {amount}", amount=amount, group=group)


@pytest.fixture
def gold_order() -> PricingContext:
    """12000 x 12 = 144000, GOLD tier (7%), 10% coupon."""
    return PricingContext(
        unit_price=12000,
        quantity=12,
        member_tier=MemberTier.GOLD,
        coupon=Coupon(CouponKind.PERCENTAGE, 10),
    )
