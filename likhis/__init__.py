"""Likhis: multi-framework HTTP route extraction.

Walks a source tree, applies declarative YAML plugins to every candidate
file and returns a normalized route list for the exporters.
"""

from likhis.extractors import Route, extract_routes
from likhis.plugins import PluginRegistry, get_plugin, load_plugins

__version__ = "0.3.0"

__all__ = [
    "Route",
    "PluginRegistry",
    "extract_routes",
    "get_plugin",
    "load_plugins",
]
