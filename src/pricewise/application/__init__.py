from pricewise.application.pricing import (
    Command,
    ListMarkets,
    Query,
    QuotePrice,
    QuotePriceHandler,
    list_markets_handler,
)

__all__ = [
    "Command",
    "ListMarkets",
    "Query",
    "QuotePrice",
    "QuotePriceHandler",
    "list_markets_handler",
]
