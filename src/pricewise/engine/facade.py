"""PricingFacade — subtotal, rule resolution, rule evaluation, aggregation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from pricewise.core.logging_utils import get_logger
from pricewise.domain.models import AggregationPolicy, DiscountCandidate, PricingContext, PricingResult
from pricewise.domain.value_object import ValueObject
from pricewise.engine.aggregator import DiscountAggregator
from pricewise.engine.pipeline import DEFAULT_STEPS, Step, run_pipeline
from pricewise.providers.market import MarketRuleProvider
from pricewise.providers.protocol import RuleProvider
from pricewise.rules.protocol import DiscountRule

logger = get_logger("facade")


@dataclass(frozen=True)
class Quote(ValueObject):
    """Priced result plus the validation steps that ran before it."""

    result: PricingResult
    trail: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {**self.result.to_dict(), "trail": list(self.trail)}


def evaluate_rules(rules: Iterable[DiscountRule], context: PricingContext) -> list[DiscountCandidate]:
    """Apply each rule independently; keep only real savings, in rule order."""
    candidates = []
    for rule in rules:
        candidate = rule.apply(context)
        if candidate is not None and candidate.amount > 0:
            candidates.append(candidate)
    return candidates


class PricingFacade:
    def __init__(
        self,
        provider: RuleProvider | None = None,
        policy: AggregationPolicy | None = None,
        steps: Sequence[Step] = DEFAULT_STEPS,
    ) -> None:
        self.provider = provider or MarketRuleProvider()
        self.policy = policy or AggregationPolicy()
        self.steps = tuple(steps)

    def price(self, context: PricingContext, policy: AggregationPolicy | None = None) -> PricingResult:
        """Price one order. Never raises for a non-positive price or quantity: the order is simply free."""
        if not context.is_priceable:
            return PricingResult.empty()
        subtotal = context.subtotal
        candidates = evaluate_rules(self.provider.rules_for(context), context)
        result = DiscountAggregator(policy or self.policy).aggregate(subtotal, candidates)
        logger.debug(
            "Priced subtotal=%d discounts=%d total=%d",
            result.subtotal, len(result.discounts), result.total,
            extra={"operation": "price"},
        )
        return result

    def quote(self, context: PricingContext, policy: AggregationPolicy | None = None) -> Quote:
        """Validation pipeline first, then price(). A halted pipeline prices to zero."""
        state = run_pipeline(context, self.steps)
        if state.halted:
            return Quote(result=PricingResult.empty(), trail=state.trail)
        return Quote(result=self.price(state.context, policy), trail=state.trail)
