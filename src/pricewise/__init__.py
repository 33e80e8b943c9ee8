"""
pricewise — discount aggregation for unit price x quantity orders.
Rules propose discounts, a provider picks the rules, the aggregator combines them.
"""
__version__ = "0.1.0"

from pricewise.core import Config, RuleRegistry, Settings
from pricewise.domain import (
    AggregationPolicy,
    Coupon,
    CouponKind,
    DiscountCandidate,
    DuplicateRuleError,
    InvalidPolicyError,
    InvalidRequestError,
    Market,
    MemberTier,
    PricingContext,
    PricingError,
    PricingResult,
    RegistryFrozenError,
    RuleNotFoundError,
)
from pricewise.engine import DiscountAggregator, PricingFacade, Quote, run_pipeline
from pricewise.providers import MarketRuleProvider, NamedRuleProvider, RuleProvider, default_registry
from pricewise.rules import DiscountRule

__all__ = [
    "AggregationPolicy",
    "Config",
    "Coupon",
    "CouponKind",
    "DiscountAggregator",
    "DiscountCandidate",
    "DiscountRule",
    "DuplicateRuleError",
    "InvalidPolicyError",
    "InvalidRequestError",
    "Market",
    "MarketRuleProvider",
    "MemberTier",
    "NamedRuleProvider",
    "PricingContext",
    "PricingError",
    "PricingFacade",
    "PricingResult",
    "Quote",
    "RegistryFrozenError",
    "RuleNotFoundError",
    "RuleProvider",
    "RuleRegistry",
    "Settings",
    "default_registry",
    "run_pipeline",
]
