"""Minimal OpenAPI 3.0 document for the pricing routes."""
from __future__ import annotations

import dataclasses
import typing
from typing import Any

from starlette.routing import BaseRoute, Route


def _py_type_to_json_type(t: Any) -> str:
    if t is int:
        return "integer"
    if t is float:
        return "number"
    if t is bool:
        return "boolean"
    if t is dict:
        return "object"
    if t is list:
        return "array"
    return "string"


def _unwrap_optional(t: Any) -> Any:
    args = [a for a in typing.get_args(t) if a is not type(None)]
    return args[0] if args else t


def schema_from_dataclass(cls: type) -> dict[str, Any]:
    """JSON schema from a dataclass: field types and required fields."""
    if not dataclasses.is_dataclass(cls):
        return {"type": "object"}
    hints = typing.get_type_hints(cls)
    props: dict[str, Any] = {}
    required: list[str] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        t = _unwrap_optional(hints.get(f.name, str))
        props[f.name] = {"type": _py_type_to_json_type(t), "description": f.name.replace("_", " ")}
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            required.append(f.name)
    return {"type": "object", "properties": props, "required": required}


def build_openapi_spec(
    routes: list[BaseRoute],
    *,
    title: str = "pricewise",
    version: str = "0.1.0",
    body_schemas: dict[str, dict[str, Any]] | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """One operation per (route, method); POST bodies from body_schemas keyed by path."""
    body_schemas = body_schemas or {}
    paths: dict[str, Any] = {}
    for route in routes:
        if not isinstance(route, Route) or not route.include_in_schema:
            continue
        for method in sorted(route.methods or {"GET"}):
            if method == "HEAD":
                continue
            op: dict[str, Any] = {
                "summary": f"{method} {route.path}",
                "tags": tags or ["default"],
                "responses": {
                    "200": {"description": "OK", "content": {"application/json": {"schema": {"type": "object"}}}},
                },
            }
            if method == "POST" and route.path in body_schemas:
                op["requestBody"] = {
                    "required": True,
                    "content": {"application/json": {"schema": body_schemas[route.path]}},
                }
                op["responses"]["422"] = {"description": "Invalid request"}
            paths.setdefault(route.path, {})[method.lower()] = op
    return {
        "openapi": "3.0.0",
        "info": {"title": title, "version": version},
        "paths": paths,
    }
