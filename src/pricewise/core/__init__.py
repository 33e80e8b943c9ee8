from pricewise.core.config import Config, Settings
from pricewise.core.logging_utils import PricingLogger, configure_logging, get_logger
from pricewise.core.registry import RuleRegistry

__all__ = [
    "Config",
    "PricingLogger",
    "RuleRegistry",
    "Settings",
    "configure_logging",
    "get_logger",
]
