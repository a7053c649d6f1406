"""Plugin Definition Store.

Plugins are YAML rule sets loaded once per run into an immutable
PluginRegistry and passed explicitly to the extractors.
"""

from likhis.plugins.loader import (
    build_plugin,
    default_search_paths,
    get_plugin,
    load_plugin_file,
    load_plugins,
)
from likhis.plugins.models import Pattern, Plugin, PluginRegistry

__all__ = [
    "Pattern",
    "Plugin",
    "PluginRegistry",
    "build_plugin",
    "default_search_paths",
    "get_plugin",
    "load_plugin_file",
    "load_plugins",
]
