"""Error types. Raised at setup and lookup time, never by per-request arithmetic."""


class PricingError(Exception):
    """Base class for pricewise errors."""


class DuplicateRuleError(PricingError, ValueError):
    """A rule key was registered twice."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate rule key: {key!r}")


class RuleNotFoundError(PricingError, KeyError):
    """Lookup by key missed."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Rule not found: {key!r}")

    def __str__(self) -> str:
        return self.args[0]


class RegistryFrozenError(PricingError, RuntimeError):
    """Registration attempted after the registry was frozen."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Registry is frozen; cannot register {key!r}")


class InvalidPolicyError(PricingError, ValueError):
    """Aggregation policy or settings out of range."""


class InvalidRequestError(PricingError, ValueError):
    """Malformed quote request at the HTTP or CLI boundary."""
