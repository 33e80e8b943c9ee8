"""Pricing value objects: context, coupon, candidate, policy, result."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Union

from pricewise.domain.errors import InvalidPolicyError
from pricewise.domain.value_object import ValueObject

Number = Union[int, float, Decimal]


class MemberTier(str, Enum):
    NEW = "NEW"
    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    VIP = "VIP"


class Market(str, Enum):
    KR = "KR"
    GLOBAL = "GLOBAL"


class CouponKind(str, Enum):
    FIXED_AMOUNT = "FIXED_AMOUNT"
    PERCENTAGE = "PERCENTAGE"


def to_decimal(value: Number) -> Decimal:
    """Decimal from int/float/Decimal. Floats go through their shortest repr (0.07 -> Decimal('0.07'))."""
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got bool {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def floor_int(value: Number) -> int:
    """Floor to integer currency units."""
    numerator, denominator = to_decimal(value).as_integer_ratio()
    return numerator // denominator


def floor_share(amount: Number, rate: Number) -> int:
    """floor(amount * rate) in exact integer arithmetic; no decimal context limits apply."""
    amount_num, amount_den = to_decimal(amount).as_integer_ratio()
    rate_num, rate_den = to_decimal(rate).as_integer_ratio()
    return (amount_num * rate_num) // (amount_den * rate_den)


@dataclass(frozen=True)
class Coupon(ValueObject):
    kind: CouponKind
    value: Number
    code: str | None = None


@dataclass(frozen=True)
class PricingContext(ValueObject):
    """Immutable pricing input. Optional fields default to absent."""

    unit_price: Number
    quantity: int
    member_tier: MemberTier | None = None
    coupon: Coupon | None = None
    market: Market | None = None
    evaluated_at: datetime | None = None
    stock: int | None = None

    def __post_init__(self) -> None:
        for name in ("unit_price", "quantity"):
            if isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a number, not bool")

    @property
    def is_priceable(self) -> bool:
        return self.unit_price > 0 and self.quantity > 0

    @property
    def subtotal(self) -> int:
        """unit_price * quantity, floored; 0 for a non-positive price or quantity."""
        if not self.is_priceable:
            return 0
        return floor_share(self.unit_price, self.quantity)


@dataclass(frozen=True)
class DiscountCandidate(ValueObject):
    """One discount line proposed by a rule."""

    label: str
    amount: int
    group: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"label": self.label, "amount": self.amount}
        if self.group is not None:
            data["group"] = self.group
        if self.metadata:
            data["metadata"] = {k: _jsonable(v) for k, v in self.metadata.items()}
        return data


@dataclass(frozen=True)
class AggregationPolicy(ValueObject):
    """How candidates combine. max_discount_rate=None means no cap."""

    max_discount_rate: float | None = None
    only_best_one: bool = False
    exclusive_groups: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        rate = self.max_discount_rate
        if isinstance(rate, bool):
            raise InvalidPolicyError(f"max_discount_rate must be a number, got {rate!r}")
        if rate is not None and not 0 <= rate <= 1:
            raise InvalidPolicyError(f"max_discount_rate must be within [0, 1], got {rate!r}")
        if not isinstance(self.exclusive_groups, frozenset):
            object.__setattr__(self, "exclusive_groups", frozenset(self.exclusive_groups))

    @classmethod
    def of(
        cls,
        max_discount_rate: float | None = None,
        only_best_one: bool = False,
        exclusive_groups: Iterable[str] = (),
    ) -> AggregationPolicy:
        return cls(max_discount_rate, only_best_one, frozenset(exclusive_groups))


@dataclass(frozen=True)
class PricingResult(ValueObject):
    subtotal: int
    discounts: tuple[DiscountCandidate, ...]
    total: int

    @classmethod
    def empty(cls) -> PricingResult:
        return cls(subtotal=0, discounts=(), total=0)

    @property
    def discount_total(self) -> int:
        return sum(d.amount for d in self.discounts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": self.subtotal,
            "discounts": [d.to_dict() for d in self.discounts],
            "total": self.total,
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Coupon):
        return {k: _jsonable(v) for k, v in value.as_dict().items() if v is not None}
    return value
