"""Route Normalizer: raw occurrences -> canonical Route records.

Framework quirks only enter through plugin metadata (prefix, query and
body idioms). Paths are never rewritten beyond base-path concatenation.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from likhis.config import HTTP_METHODS
from likhis.extractors.base import RawOccurrence, Route
from likhis.plugins.models import Plugin

logger = logging.getLogger(__name__)

# Leading identifier of one destructuring segment: "name", "...rest", "id: userId"
NAME_REGEX = re.compile(r"^(?:\.\.\.)?\s*([A-Za-z_$][\w$-]*)")


def normalize(occurrence: RawOccurrence, plugin: Plugin) -> Route | None:
    """Convert a raw occurrence into a Route.

    Returns:
        Route, or None when the verb is not canonical or the path is
        empty. Unknown verbs are discarded, never defaulted.
    """
    method = occurrence.method.strip().upper()
    if method not in HTTP_METHODS:
        logger.debug(
            "occurrence_discarded reason=method method=%r file=%s line=%d",
            occurrence.method,
            occurrence.source_file,
            occurrence.line_number,
        )
        return None

    path = join_path(occurrence.prefix, occurrence.path_fragment)
    if not path:
        logger.debug(
            "occurrence_discarded reason=empty_path file=%s line=%d",
            occurrence.source_file,
            occurrence.line_number,
        )
        return None

    return Route(
        path=path,
        method=method,
        params=list(occurrence.raw_param_tokens),
        query=scan_names(plugin.query_patterns, occurrence.window),
        body=scan_names(plugin.body_patterns, occurrence.window),
        source_file=occurrence.source_file,
        line_number=occurrence.line_number,
        plugin=plugin.name,
    )


def join_path(base: str, sub: str) -> str:
    """Concatenate a base path and a route fragment with a single slash.

    TEST VECTORS:
    -------------
    join_path("/api/users", "/")     -> "/api/users/"
    join_path("/api/users", "{id}")  -> "/api/users/{id}"
    join_path("", "users/")          -> "users/"
    """
    if not base:
        return sub
    if not sub:
        return base
    if base.endswith("/") and sub.startswith("/"):
        return base[:-1] + sub
    if not base.endswith("/") and not sub.startswith("/"):
        return base + "/" + sub
    return base + sub


def scan_names(patterns: Iterable[re.Pattern[str]], window: str) -> list[str]:
    """Names captured by group 1 of each idiom, in pattern then text order.

    A capture holding a destructuring list ("name, email") contributes
    each of its names. No match yields an empty list.
    """
    names: list[str] = []
    if not window:
        return names

    for regex in patterns:
        for m in regex.finditer(window):
            captured = m.group(1)
            if not captured:
                continue
            for segment in captured.split(","):
                name_match = NAME_REGEX.match(segment.strip())
                if name_match and name_match.group(1) not in names:
                    names.append(name_match.group(1))
    return names
