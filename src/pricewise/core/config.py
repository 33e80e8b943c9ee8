"""Settings from the environment: aggregation policy, default market, log level."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from pricewise.domain.errors import InvalidPolicyError
from pricewise.domain.models import AggregationPolicy, Market

ENV_PREFIX = "PRICEWISE_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class Config:
    """Raw config loading. Typed settings are built on top of it by Settings."""

    @classmethod
    def load_from_env(cls, prefix: str = ENV_PREFIX, **defaults: Any) -> dict[str, Any]:
        """Load from os.environ with prefix and defaults. PRICEWISE_MAX_DISCOUNT_RATE -> max_discount_rate."""
        result = dict(defaults)
        for key, value in os.environ.items():
            if key.startswith(prefix):
                name = key[len(prefix):].lower()
                result[name] = value
        return result


def _parse_rate(value: Any) -> float | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPolicyError(f"max_discount_rate is not a number: {value!r}") from e


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InvalidPolicyError(f"not a boolean: {value!r}")


def _parse_groups(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset(part.strip() for part in value.split(",") if part.strip())
    return frozenset(value or ())


def _parse_market(value: Any) -> Market:
    if isinstance(value, Market):
        return value
    try:
        return Market(str(value).strip().upper())
    except ValueError as e:
        raise InvalidPolicyError(f"unknown market: {value!r}") from e


@dataclass(frozen=True)
class Settings:
    max_discount_rate: float | None = None
    only_best_one: bool = False
    exclusive_groups: frozenset[str] = frozenset()
    default_market: Market = Market.GLOBAL
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> Settings:
        settings = cls(
            max_discount_rate=_parse_rate(raw.get("max_discount_rate")),
            only_best_one=_parse_bool(raw.get("only_best_one", False)),
            exclusive_groups=_parse_groups(raw.get("exclusive_groups")),
            default_market=_parse_market(raw.get("default_market", Market.GLOBAL)),
            log_level=str(raw.get("log_level", "WARNING")).upper(),
        )
        settings.policy()
        return settings

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **defaults: Any) -> Settings:
        return cls.from_mapping(Config.load_from_env(prefix, **defaults))

    def policy(self) -> AggregationPolicy:
        """Policy for the aggregator; raises InvalidPolicyError for an out-of-range rate."""
        return AggregationPolicy(
            max_discount_rate=self.max_discount_rate,
            only_best_one=self.only_best_one,
            exclusive_groups=self.exclusive_groups,
        )
