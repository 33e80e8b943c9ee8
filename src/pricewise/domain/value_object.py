"""ValueObject — immutable value without identity; equality by fields."""
from dataclasses import dataclass, fields, replace
from typing import Any


@dataclass(frozen=True)
class ValueObject:
    """Value object: equality by all fields, changes produce a new instance."""

    def evolve(self, **changes: Any) -> "ValueObject":
        """Copy with the given fields replaced. The original is left untouched."""
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
