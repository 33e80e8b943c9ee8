"""
Pre-pricing validation as a linear pipeline of pure steps.

Each step takes a PipelineState and returns a new one; the context inside is
only ever replaced, never mutated. run_pipeline stops after the first step
that halts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from pricewise.core.logging_utils import get_logger
from pricewise.domain.models import CouponKind, PricingContext
from pricewise.domain.value_object import ValueObject

logger = get_logger("pipeline")


@dataclass(frozen=True)
class PipelineState(ValueObject):
    context: PricingContext
    halted: bool = False
    trail: tuple[str, ...] = ()

    def visit(self, step: str, **changes) -> PipelineState:
        return self.evolve(trail=self.trail + (step,), **changes)


Step = Callable[[PipelineState], PipelineState]


def check_input(state: PipelineState) -> PipelineState:
    """Non-positive price or quantity halts with nothing to price."""
    if not state.context.is_priceable:
        return state.visit("check_input", halted=True)
    return state.visit("check_input")


def check_member(state: PipelineState) -> PipelineState:
    return state.visit("check_member")


def check_coupon(state: PipelineState) -> PipelineState:
    """Drops a coupon whose value cannot be applied."""
    coupon = state.context.coupon
    if coupon is None:
        return state.visit("check_coupon")
    invalid = coupon.value <= 0 or (coupon.kind is CouponKind.PERCENTAGE and coupon.value >= 100)
    if invalid:
        logger.info("Dropping invalid coupon %s=%s", coupon.kind.value, coupon.value, extra={"operation": "check_coupon"})
        return state.visit("check_coupon", context=state.context.evolve(coupon=None))
    return state.visit("check_coupon")


def check_stock(state: PipelineState) -> PipelineState:
    """Halts when more items are ordered than are in stock."""
    context = state.context
    if context.stock is not None and context.quantity > context.stock:
        logger.info(
            "Insufficient stock: quantity=%d stock=%d", context.quantity, context.stock,
            extra={"operation": "check_stock"},
        )
        return state.visit("check_stock", halted=True)
    return state.visit("check_stock")


DEFAULT_STEPS: tuple[Step, ...] = (check_input, check_member, check_coupon, check_stock)


def run_pipeline(context: PricingContext, steps: Sequence[Step] = DEFAULT_STEPS) -> PipelineState:
    state = PipelineState(context=context)
    for step in steps:
        state = step(state)
        if state.halted:
            break
    return state
