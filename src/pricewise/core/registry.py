"""Named rule registry: register during setup, freeze, then read-only lookups."""
from __future__ import annotations

from typing import Callable

from pricewise.core.logging_utils import get_logger
from pricewise.domain.errors import DuplicateRuleError, RegistryFrozenError, RuleNotFoundError
from pricewise.rules.protocol import DiscountRule

logger = get_logger("registry")


class RuleRegistry:
    """
    Register by key (instance or factory) and resolve by key.
    Factories are called once, on first resolve. After freeze() the registry
    only serves lookups, so a frozen registry can be shared across threads.
    """

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], DiscountRule]] = {}
        self._instances: dict[str, DiscountRule] = {}
        self._frozen = False

    def _check_key(self, key: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(key)
        if key in self._factories:
            raise DuplicateRuleError(key)

    def register(self, key: str, rule: DiscountRule) -> RuleRegistry:
        """Register a ready-made rule. Returns self for chaining."""
        self._check_key(key)
        self._factories[key] = lambda: rule
        self._instances[key] = rule
        logger.debug("Registered rule %s -> %s", key, type(rule).__name__, extra={"operation": "register"})
        return self

    def register_factory(self, key: str, factory: Callable[[], DiscountRule]) -> RuleRegistry:
        """Register a factory; the rule is built on first get()."""
        self._check_key(key)
        self._factories[key] = factory
        logger.debug("Registered rule factory %s", key, extra={"operation": "register"})
        return self

    def get(self, key: str) -> DiscountRule:
        if key not in self._factories:
            raise RuleNotFoundError(key)
        if key not in self._instances:
            self._instances[key] = self._factories[key]()
        return self._instances[key]

    def get_many(self, keys: list[str] | tuple[str, ...]) -> list[DiscountRule]:
        return [self.get(key) for key in keys]

    def keys(self) -> list[str]:
        """Keys in registration order."""
        return list(self._factories)

    def freeze(self) -> RuleRegistry:
        """End of setup: build pending factories and reject further registration."""
        for key in self._factories:
            self.get(key)
        self._frozen = True
        logger.debug("Registry frozen with %d rules", len(self._factories), extra={"operation": "freeze"})
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)
