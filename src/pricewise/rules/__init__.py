from pricewise.rules.builtin import (
    BULK,
    COUPON,
    MEMBERSHIP,
    TIER_RATES,
    BulkPurchaseRule,
    BulkRateRule,
    CouponDiscountRule,
    NewMemberDiscountRule,
    NoDiscountRule,
    TierDiscountRule,
)
from pricewise.rules.protocol import DiscountRule, rule_name

__all__ = [
    "BULK",
    "COUPON",
    "MEMBERSHIP",
    "TIER_RATES",
    "BulkPurchaseRule",
    "BulkRateRule",
    "CouponDiscountRule",
    "DiscountRule",
    "NewMemberDiscountRule",
    "NoDiscountRule",
    "TierDiscountRule",
    "rule_name",
]
