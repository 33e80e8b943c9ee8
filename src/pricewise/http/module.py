"""
Pricing HTTP module: QuotePrice command and ListMarkets query over JSON.
Build with create_app(); routes follow /{name}/commands/... and /{name}/queries/...
"""
from __future__ import annotations

import re
from typing import Any, Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from pricewise import __version__
from pricewise.application.pricing import ListMarkets, QuotePrice, QuotePriceHandler, list_markets_handler
from pricewise.core.logging_utils import get_logger
from pricewise.domain.errors import InvalidRequestError
from pricewise.http.openapi import build_openapi_spec, schema_from_dataclass

logger = get_logger("http")


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class PricingHttpModule:
    """
    One object = the pricing context over HTTP.
    routes() gives Starlette routes; mount them with create_app() or into an existing app.
    """

    def __init__(
        self,
        handler: Callable[[QuotePrice], Any] | None = None,
        name: str = "pricing",
        prefix: str | None = None,
    ) -> None:
        self.name = name
        self.prefix = (prefix or f"/{name}").rstrip("/")
        self._handler = handler or QuotePriceHandler()

    @property
    def command_path(self) -> str:
        return f"{self.prefix}/commands/{_snake(QuotePrice.__name__)}"

    @property
    def query_path(self) -> str:
        return f"{self.prefix}/queries/{_snake(ListMarkets.__name__)}"

    def routes(self) -> list[Route]:
        return [
            Route(self.command_path, self._quote_endpoint, methods=["POST"]),
            Route(self.query_path, self._markets_endpoint, methods=["GET"]),
        ]

    async def _quote_endpoint(self, request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"ok": False, "error": "request body is not valid JSON"}, status_code=422)
        try:
            cmd = QuotePrice.from_payload(body)
            quote = self._handler(cmd)
        except InvalidRequestError as e:
            logger.info("Rejected quote request: %s", e, extra={"operation": "quote"})
            return JSONResponse({"ok": False, "error": str(e)}, status_code=422)
        return JSONResponse({"ok": True, "result": quote.result.to_dict(), "trail": list(quote.trail)})

    async def _markets_endpoint(self, request: Request) -> Response:
        return JSONResponse(list_markets_handler(ListMarkets()))


def create_app(handler: Callable[[QuotePrice], Any] | None = None, *, debug: bool = False) -> Starlette:
    """Starlette app with the pricing module and GET /openapi.json."""
    module = PricingHttpModule(handler)
    routes = module.routes()
    spec = build_openapi_spec(
        routes,
        version=__version__,
        body_schemas={module.command_path: schema_from_dataclass(QuotePrice)},
        tags=[module.name],
    )

    async def openapi_endpoint(request: Request) -> Response:
        return JSONResponse(spec)

    routes.append(Route("/openapi.json", openapi_endpoint, methods=["GET"], include_in_schema=False))
    return Starlette(debug=debug, routes=routes)
