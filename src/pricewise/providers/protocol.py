"""Rule provider protocol: ordered rules for a context."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pricewise.domain.models import PricingContext
from pricewise.rules.protocol import DiscountRule


@runtime_checkable
class RuleProvider(Protocol):
    def rules_for(self, context: PricingContext) -> list[DiscountRule]:
        ...
