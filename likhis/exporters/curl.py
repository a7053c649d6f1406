"""cURL shell script and Markdown exporters."""

from __future__ import annotations

import json
import shlex
from typing import Sequence

from likhis.exporters.common import build_url, example_body, has_body, route_name
from likhis.extractors.base import Route


def curl_command(route: Route, base_path: str, shell_base: str = "") -> str:
    """Single-line curl invocation for a route.

    With shell_base (e.g. '"${BASE_URL}"') the host part is left to the
    shell and only the path is quoted.
    """
    if shell_base:
        url = shell_base + shlex.quote(build_url("/", route))
    else:
        url = shlex.quote(build_url(base_path, route))

    parts = ["curl", "-X", route.method, url]
    if has_body(route):
        parts += [
            "-H",
            shlex.quote("Content-Type: application/json"),
            "-d",
            shlex.quote(json.dumps(example_body(route))),
        ]
    return " ".join(parts)


def generate_curl_script(
    routes: Sequence[Route], base_path: str, environment: str
) -> str:
    """POSIX shell script issuing one curl call per route.

    BASE_URL can be overridden from the environment when the script runs.
    """
    lines = [
        "#!/bin/sh",
        f"# Generated by likhis ({environment or 'default'})",
        f"BASE_URL=${{BASE_URL:-{shlex.quote(base_path.rstrip('/'))}}}",
        "",
    ]
    for route in routes:
        lines.append(f"# {route_name(route)}")
        lines.append(curl_command(route, base_path, shell_base='"${BASE_URL}"'))
        lines.append("")
    return "\n".join(lines)


def generate_curl_markdown(routes: Sequence[Route], base_path: str) -> str:
    """Markdown document with a heading and a curl block per route."""
    lines = ["# API Routes", ""]
    if not routes:
        lines.append("_No routes found._")
        lines.append("")

    for route in routes:
        lines.append(f"## {route_name(route)}")
        lines.append("")
        if route.params:
            lines.append("Path parameters: " + ", ".join(f"`{p}`" for p in route.params))
            lines.append("")
        if route.query:
            lines.append("Query parameters: " + ", ".join(f"`{q}`" for q in route.query))
            lines.append("")
        if has_body(route) and route.body:
            lines.append("Body fields: " + ", ".join(f"`{b}`" for b in route.body))
            lines.append("")
        lines.append("```bash")
        lines.append(curl_command(route, base_path))
        lines.append("```")
        lines.append("")
    return "\n".join(lines)


def render_curl_markdown(
    routes: Sequence[Route], base_path: str, environment: str
) -> str:
    return generate_curl_markdown(routes, base_path)
