"""HTTPie collection exporter."""

from __future__ import annotations

import json
from typing import Any, Sequence

from likhis.exporters.common import build_url, example_body, has_body, route_name
from likhis.extractors.base import Route


def generate_httpie_export(
    routes: Sequence[Route], base_path: str, environment: str
) -> dict[str, Any]:
    """Build an HTTPie desktop collection with one request per route."""
    requests = []
    for route in routes:
        request: dict[str, Any] = {
            "name": route_name(route),
            "method": route.method,
            "url": build_url(base_path, route),
            "headers": [],
            "body": {"type": "none"},
        }
        if has_body(route):
            request["headers"].append(
                {"name": "Content-Type", "value": "application/json", "enabled": True}
            )
            request["body"] = {
                "type": "text",
                "text": {
                    "format": "application/json",
                    "value": json.dumps(example_body(route), indent=2),
                },
            }
        requests.append(request)

    return {
        "meta": {"format": "httpie", "version": "1.0.0", "generator": "likhis"},
        "entry": {
            "name": f"likhis - {environment}" if environment else "likhis",
            "requests": requests,
        },
    }


def render_httpie(routes: Sequence[Route], base_path: str, environment: str) -> str:
    export = generate_httpie_export(routes, base_path, environment)
    return json.dumps(export, indent=2) + "\n"
