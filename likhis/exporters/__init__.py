"""Exporters: render a route list into API-client artifacts.

Each renderer takes (routes, base_path, environment) and returns text.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Sequence

from likhis.exporters.curl import (
    generate_curl_markdown,
    generate_curl_script,
    render_curl_markdown,
)
from likhis.exporters.httpie import generate_httpie_export, render_httpie
from likhis.exporters.insomnia import generate_insomnia_export, render_insomnia
from likhis.exporters.postman import generate_postman_collection, render_postman
from likhis.extractors.base import Route


class Exporter(NamedTuple):
    render: Callable[[Sequence[Route], str, str], str]
    suffix: str


EXPORTERS: dict[str, Exporter] = {
    "postman": Exporter(render_postman, ".postman_collection.json"),
    "insomnia": Exporter(render_insomnia, ".insomnia.json"),
    "httpie": Exporter(render_httpie, ".httpie.json"),
    "curl": Exporter(generate_curl_script, ".sh"),
    "markdown": Exporter(render_curl_markdown, ".md"),
}

__all__ = [
    "EXPORTERS",
    "Exporter",
    "generate_curl_markdown",
    "generate_curl_script",
    "generate_httpie_export",
    "generate_insomnia_export",
    "generate_postman_collection",
]
