"""Domain layer: value objects and error types."""
from pricewise.domain.errors import (
    DuplicateRuleError,
    InvalidPolicyError,
    InvalidRequestError,
    PricingError,
    RegistryFrozenError,
    RuleNotFoundError,
)
from pricewise.domain.models import (
    AggregationPolicy,
    Coupon,
    CouponKind,
    DiscountCandidate,
    Market,
    MemberTier,
    PricingContext,
    PricingResult,
    floor_int,
    floor_share,
)
from pricewise.domain.value_object import ValueObject

__all__ = [
    "AggregationPolicy",
    "Coupon",
    "CouponKind",
    "DiscountCandidate",
    "DuplicateRuleError",
    "InvalidPolicyError",
    "InvalidRequestError",
    "Market",
    "MemberTier",
    "PricingContext",
    "PricingError",
    "PricingResult",
    "RegistryFrozenError",
    "RuleNotFoundError",
    "ValueObject",
    "floor_int",
    "floor_share",
]
