"""Shared helpers for exporters: URLs, example values, request bodies."""

from __future__ import annotations

import re
from typing import Any

from likhis.config import BODY_METHODS
from likhis.extractors.base import Route

# (?P<id>...), :id, :id?, {id}, {id:int}, {id?}, <id>, <int:id>
PLACEHOLDER_REGEX = re.compile(
    r"\(\?P<(?P<group>\w+)>(?:[^()]|\([^()]*\))*\)"
    r"|:(?P<colon>\w+)\??|\{(?P<brace>\w+)(?::[^}]*)?\??\}|<(?:[^:<>]+:)?(?P<angle>\w+)>"
)


def example_value(name: str) -> str:
    """Example token for a placeholder, query key or body field."""
    if name.lower().endswith("id"):
        return "1"
    return "example"


def substitute_placeholders(path: str) -> str:
    """Replace every placeholder in a route path with an example token.

    TEST VECTORS:
    -------------
    "/users/:id"                -> "/users/1"
    "/users/{user_id}/posts"    -> "/users/1/posts"
    "/items/<string:item_name>" -> "/items/example"
    "archive/(?P<year>[0-9]{4})/" -> "archive/example/"
    """

    def replace(m: re.Match[str]) -> str:
        name = m.group("group") or m.group("colon") or m.group("brace") or m.group("angle")
        return example_value(name)

    return PLACEHOLDER_REGEX.sub(replace, path)


def build_url(base_path: str, route: Route, with_query: bool = True) -> str:
    """base_path + substituted route path (+ example query string)."""
    path = substitute_placeholders(route.path)
    if base_path.endswith("/") and path.startswith("/"):
        url = base_path[:-1] + path
    elif base_path and path and not base_path.endswith("/") and not path.startswith("/"):
        url = base_path + "/" + path
    else:
        url = base_path + path

    if with_query and route.query:
        url += "?" + "&".join(f"{q}={example_value(q)}" for q in route.query)
    return url


def has_body(route: Route) -> bool:
    """True for methods that conventionally carry a request body."""
    return route.method in BODY_METHODS


def example_body(route: Route) -> dict[str, Any]:
    """Synthesized JSON payload from the route's Body field list."""
    return {name: example_value(name) for name in route.body}


def route_name(route: Route) -> str:
    return f"{route.method} {route.path}"
