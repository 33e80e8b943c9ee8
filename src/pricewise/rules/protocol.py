"""Discount rule protocol: one candidate or None per context."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pricewise.domain.models import DiscountCandidate, PricingContext


@runtime_checkable
class DiscountRule(Protocol):
    """
    Pure function of the context. Returns None when the rule does not apply,
    including when the computed amount would be zero or negative.
    """

    def apply(self, context: PricingContext) -> DiscountCandidate | None:
        ...


def rule_name(rule: DiscountRule) -> str:
    return type(rule).__name__
