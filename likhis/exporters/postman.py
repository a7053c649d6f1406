"""Postman v2.1 collection exporter."""

from __future__ import annotations

import json
from typing import Any, Sequence

from likhis.exporters.common import (
    build_url,
    example_body,
    example_value,
    has_body,
    route_name,
    substitute_placeholders,
)
from likhis.extractors.base import Route

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


def generate_postman_collection(
    routes: Sequence[Route], base_path: str, environment: str
) -> dict[str, Any]:
    """Build a Postman collection with one request per route.

    The base path is stored in the collection variable ``baseUrl`` so the
    collection can be pointed at another host from inside Postman.
    """
    items = [_item(route) for route in routes]
    return {
        "info": {
            "name": f"likhis - {environment}" if environment else "likhis",
            "description": f"Routes extracted by likhis ({environment or 'default'})",
            "schema": POSTMAN_SCHEMA,
        },
        "item": items,
        "variable": [{"key": "baseUrl", "value": base_path}],
    }


def render_postman(routes: Sequence[Route], base_path: str, environment: str) -> str:
    collection = generate_postman_collection(routes, base_path, environment)
    return json.dumps(collection, indent=2) + "\n"


def _item(route: Route) -> dict[str, Any]:
    path = substitute_placeholders(route.path)
    request: dict[str, Any] = {
        "method": route.method,
        "header": [],
        "url": {
            "raw": build_url("{{baseUrl}}", route),
            "host": ["{{baseUrl}}"],
            "path": [segment for segment in path.split("/") if segment],
            "query": [{"key": q, "value": example_value(q)} for q in route.query],
        },
    }

    if has_body(route):
        request["header"].append({"key": "Content-Type", "value": "application/json"})
        request["body"] = {
            "mode": "raw",
            "raw": json.dumps(example_body(route), indent=2),
            "options": {"raw": {"language": "json"}},
        }

    return {"name": route_name(route), "request": request}
