from pricewise.providers.market import MARKET_RULE_SETS, MarketRuleProvider, global_rules, korea_rules
from pricewise.providers.named import DEFAULT_KEYS, NamedRuleProvider, default_registry
from pricewise.providers.protocol import RuleProvider

__all__ = [
    "DEFAULT_KEYS",
    "MARKET_RULE_SETS",
    "MarketRuleProvider",
    "NamedRuleProvider",
    "RuleProvider",
    "default_registry",
    "global_rules",
    "korea_rules",
]
