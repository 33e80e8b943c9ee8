"""
Logging utilities for pricewise.

Every component logs through one adapter under the ``pricewise`` namespace:
- component prefix on each message
- optional operation tag via ``extra={"operation": ...}``
- newlines stripped from messages and arguments
"""
from __future__ import annotations

import logging
from typing import Any

LOG_NAMESPACE = "pricewise"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _sanitize_log_input(value: Any) -> Any:
    if isinstance(value, str):
        return value.replace("\n", " ").replace("\r", " ")
    return value


class PricingLogger(logging.LoggerAdapter):
    """
    Logger adapter with a component prefix.

    Example:
        logger = PricingLogger("aggregator")
        logger.debug("Cap applied", extra={"operation": "cap"})
        # [pricewise][component=aggregator][op=cap] Cap applied
    """

    def __init__(self, component: str, extra: dict[str, Any] | None = None) -> None:
        merged_extra = {"component": component}
        if extra:
            merged_extra.update(extra)
        super().__init__(logging.getLogger(f"{LOG_NAMESPACE}.{component}"), merged_extra)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.pop("extra", {}) or {}
        component = _sanitize_log_input(self.extra.get("component", LOG_NAMESPACE))
        operation = extra.get("operation") or self.extra.get("operation")
        prefix = f"[{LOG_NAMESPACE}][component={component}]"
        if operation:
            prefix += f"[op={_sanitize_log_input(operation)}]"
        kwargs["extra"] = {**self.extra, **extra}
        return f"{prefix} {_sanitize_log_input(msg)}", kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        msg, kwargs = self.process(msg, kwargs)
        clean_args = tuple(_sanitize_log_input(arg) for arg in args)
        self.logger.log(level, msg, *clean_args, **kwargs)


def get_logger(component: str, extra: dict[str, Any] | None = None) -> PricingLogger:
    return PricingLogger(component, extra)


def configure_logging(level: str | int = "WARNING") -> None:
    """Root logging setup for the CLI and the HTTP entry point."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(LOG_NAMESPACE).setLevel(level)
