from pricewise.engine.aggregator import (
    DiscountAggregator,
    discount_cap,
    filter_exclusive_groups,
    redistribute,
    select_best_one,
)
from pricewise.engine.facade import PricingFacade, Quote, evaluate_rules
from pricewise.engine.pipeline import (
    DEFAULT_STEPS,
    PipelineState,
    check_coupon,
    check_input,
    check_member,
    check_stock,
    run_pipeline,
)

__all__ = [
    "DEFAULT_STEPS",
    "DiscountAggregator",
    "PipelineState",
    "PricingFacade",
    "Quote",
    "check_coupon",
    "check_input",
    "check_member",
    "check_stock",
    "discount_cap",
    "evaluate_rules",
    "filter_exclusive_groups",
    "redistribute",
    "run_pipeline",
    "select_best_one",
]
