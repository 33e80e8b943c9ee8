"""
DiscountAggregator — combines candidate discounts into a PricingResult.

Steps, in order:
1. exclusive groups: per configured tag, only the largest candidate survives
2. best-one: only the single largest candidate survives
3. raw total of survivors
4. cap = floor(subtotal * max_discount_rate), unbounded when no rate is set
5. effective total = min(raw, cap)
6. when capped, each line becomes floor(amount * effective / raw)
7. total = max(0, subtotal - sum of final lines)

Ties always go to the candidate seen first. Lines are floored independently
and no remainder is added back, so a capped discount can land a few units
below the cap (never above it).
"""
from __future__ import annotations

from typing import Iterable, Sequence

from pricewise.core.logging_utils import get_logger
from pricewise.domain.models import AggregationPolicy, DiscountCandidate, PricingResult, floor_share

logger = get_logger("aggregator")


def filter_exclusive_groups(
    candidates: Sequence[DiscountCandidate], groups: Iterable[str]
) -> list[DiscountCandidate]:
    """Keep the first largest candidate of each configured group; others pass through in order."""
    groups = frozenset(groups)
    if not groups:
        return list(candidates)
    winners: dict[str, int] = {}
    for index, candidate in enumerate(candidates):
        tag = candidate.group
        if tag not in groups:
            continue
        best = winners.get(tag)
        if best is None or candidate.amount > candidates[best].amount:
            winners[tag] = index
    return [
        c for i, c in enumerate(candidates)
        if c.group not in groups or winners[c.group] == i
    ]


def select_best_one(candidates: Sequence[DiscountCandidate]) -> list[DiscountCandidate]:
    if not candidates:
        return []
    # max() keeps the first of equal maxima
    return [max(candidates, key=lambda c: c.amount)]


def discount_cap(subtotal: int, max_discount_rate: float | None) -> int | None:
    """None means unbounded."""
    if max_discount_rate is None:
        return None
    return floor_share(subtotal, max_discount_rate)


def redistribute(
    candidates: Sequence[DiscountCandidate], raw_total: int, effective_total: int
) -> list[DiscountCandidate]:
    """Proportional shrink; each line floors on its own."""
    return [
        c.evolve(amount=c.amount * effective_total // raw_total)
        for c in candidates
    ]


class DiscountAggregator:
    def __init__(self, policy: AggregationPolicy | None = None) -> None:
        self.policy = policy or AggregationPolicy()

    def select(self, candidates: Sequence[DiscountCandidate]) -> list[DiscountCandidate]:
        """Steps 1 and 2: exclusive-group filtering, then best-one selection."""
        selected = filter_exclusive_groups(candidates, self.policy.exclusive_groups)
        if self.policy.only_best_one:
            selected = select_best_one(selected)
        return selected

    def aggregate(self, subtotal: int, candidates: Sequence[DiscountCandidate]) -> PricingResult:
        selected = self.select(candidates)
        raw_total = sum(c.amount for c in selected)
        cap = discount_cap(subtotal, self.policy.max_discount_rate)
        effective_total = raw_total if cap is None else min(raw_total, cap)

        if raw_total > 0 and effective_total < raw_total:
            discounts = redistribute(selected, raw_total, effective_total)
            logger.debug(
                "Discount capped: raw=%d cap=%d applied=%d",
                raw_total,
                effective_total,
                sum(c.amount for c in discounts),
                extra={"operation": "cap"},
            )
        else:
            discounts = list(selected)

        total = max(0, subtotal - sum(c.amount for c in discounts))
        return PricingResult(subtotal=subtotal, discounts=tuple(discounts), total=total)
