"""Pricing: CQRS-style commands, queries and their handlers for the outer surfaces."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from pricewise.domain.errors import InvalidRequestError
from pricewise.domain.models import (
    AggregationPolicy,
    Coupon,
    CouponKind,
    Market,
    MemberTier,
    Number,
    PricingContext,
)
from pricewise.engine.facade import PricingFacade, Quote
from pricewise.providers.market import MARKET_RULE_SETS
from pricewise.rules.protocol import rule_name

E = TypeVar("E", bound=Enum)

# Request numbers (prices, quantities, coupon values, stock) stay below this magnitude
MAX_REQUEST_NUMBER = 10**15


@dataclass
class Command:
    """Intent to act. One handler per command type."""


@dataclass
class Query:
    """Intent to read. One handler per query type."""


# Names used by older clients
_COUPON_ALIASES = {"AMOUNT": CouponKind.FIXED_AMOUNT, "RATE": CouponKind.PERCENTAGE}


def _enum(enum_type: type[E], value: Any, field_name: str) -> E | None:
    if value is None or value == "":
        return None
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        raise InvalidRequestError(f"{field_name} must be one of {allowed}; got {value!r}") from None


def _number(value: Any, field_name: str) -> Number:
    if isinstance(value, bool):
        raise InvalidRequestError(f"{field_name} must be a number")
    if isinstance(value, int):
        if abs(value) >= MAX_REQUEST_NUMBER:
            raise InvalidRequestError(f"{field_name} is out of range; got {value!r}")
        return value
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, TypeError):
        raise InvalidRequestError(f"{field_name} must be a number; got {value!r}") from None
    if not parsed.is_finite():
        raise InvalidRequestError(f"{field_name} must be finite; got {value!r}")
    if parsed.copy_abs() >= MAX_REQUEST_NUMBER:
        raise InvalidRequestError(f"{field_name} is out of range; got {value!r}")
    if isinstance(value, float):
        return value
    return int(parsed) if parsed == parsed.to_integral_value() else parsed


def _integer(value: Any, field_name: str) -> int:
    number = _number(value, field_name)
    if int(number) != number:
        raise InvalidRequestError(f"{field_name} must be a whole number; got {value!r}")
    return int(number)


@dataclass
class QuotePrice(Command):
    unit_price: float
    quantity: int
    member_tier: str | None = None
    coupon_kind: str | None = None
    coupon_value: float | None = None
    coupon_code: str | None = None
    market: str | None = None
    stock: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> QuotePrice:
        if not isinstance(payload, dict):
            raise InvalidRequestError("request body must be a JSON object")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise InvalidRequestError(f"unknown fields: {', '.join(unknown)}")
        missing = [name for name in ("unit_price", "quantity") if payload.get(name) is None]
        if missing:
            raise InvalidRequestError(f"missing fields: {', '.join(missing)}")
        return cls(**payload)

    def _coupon(self) -> Coupon | None:
        if self.coupon_kind is None and self.coupon_value is None:
            return None
        if self.coupon_kind is None or self.coupon_value is None:
            raise InvalidRequestError("coupon_kind and coupon_value go together")
        kind_name = str(self.coupon_kind).strip().upper()
        kind = _COUPON_ALIASES.get(kind_name) or _enum(CouponKind, kind_name, "coupon_kind")
        return Coupon(kind=kind, value=_number(self.coupon_value, "coupon_value"), code=self.coupon_code)

    def to_context(self, now: datetime | None = None) -> PricingContext:
        return PricingContext(
            unit_price=_number(self.unit_price, "unit_price"),
            quantity=_integer(self.quantity, "quantity"),
            member_tier=_enum(MemberTier, self.member_tier, "member_tier"),
            coupon=self._coupon(),
            market=_enum(Market, self.market, "market"),
            evaluated_at=now,
            stock=None if self.stock is None else _integer(self.stock, "stock"),
        )


@dataclass
class ListMarkets(Query):
    pass


class QuotePriceHandler:
    def __init__(self, facade: PricingFacade | None = None, policy: AggregationPolicy | None = None):
        self._facade = facade or PricingFacade()
        self._policy = policy

    def __call__(self, cmd: QuotePrice) -> Quote:
        return self._facade.quote(cmd.to_context(now=datetime.now()), self._policy)


def list_markets_handler(query: ListMarkets) -> dict:
    return {
        "markets": {
            market.value: [rule_name(rule) for rule in build()]
            for market, build in MARKET_RULE_SETS.items()
        }
    }
