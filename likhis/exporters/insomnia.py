"""Insomnia v4 export exporter."""

from __future__ import annotations

import json
from typing import Any, Sequence

from likhis.exporters.common import build_url, example_body, has_body, route_name
from likhis.extractors.base import Route

WORKSPACE_ID = "wrk_likhis"
ENVIRONMENT_ID = "env_likhis"


def generate_insomnia_export(
    routes: Sequence[Route], base_path: str, environment: str
) -> dict[str, Any]:
    """Build an Insomnia export: workspace, environment, one request per route."""
    resources: list[dict[str, Any]] = [
        {
            "_id": WORKSPACE_ID,
            "_type": "workspace",
            "parentId": None,
            "name": "likhis",
        },
        {
            "_id": ENVIRONMENT_ID,
            "_type": "environment",
            "parentId": WORKSPACE_ID,
            "name": environment or "default",
            "data": {"base_url": base_path},
        },
    ]

    for index, route in enumerate(routes, start=1):
        resource: dict[str, Any] = {
            "_id": f"req_likhis_{index}",
            "_type": "request",
            "parentId": WORKSPACE_ID,
            "name": route_name(route),
            "method": route.method,
            "url": build_url("{{ _.base_url }}", route),
            "headers": [],
            "body": {},
        }
        if has_body(route):
            resource["headers"].append(
                {"name": "Content-Type", "value": "application/json"}
            )
            resource["body"] = {
                "mimeType": "application/json",
                "text": json.dumps(example_body(route), indent=2),
            }
        resources.append(resource)

    return {
        "_type": "export",
        "__export_format": 4,
        "__export_source": "likhis",
        "resources": resources,
    }


def render_insomnia(routes: Sequence[Route], base_path: str, environment: str) -> str:
    export = generate_insomnia_export(routes, base_path, environment)
    return json.dumps(export, indent=2) + "\n"
