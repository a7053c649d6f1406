"""Extraction Orchestrator: one pass over a project tree.

root -> walk_source_files -> plugin selection -> match_content
     -> normalize -> ordered list of Route
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from likhis.config import AUTO_FRAMEWORK
from likhis.extractors.base import Route
from likhis.extractors.matcher import match_content
from likhis.extractors.normalizer import normalize
from likhis.plugins.loader import get_plugin
from likhis.plugins.models import Plugin, PluginRegistry
from likhis.traversal import walk_source_files

logger = logging.getLogger(__name__)


def extract_routes(
    root: Path | str,
    registry: PluginRegistry,
    framework: str = AUTO_FRAMEWORK,
    workers: int = 1,
) -> list[Route]:
    """Extract every route declared under root.

    Args:
        root: Project directory (or a single source file)
        registry: Loaded plugins, shared read-only
        framework: Plugin name, or "auto" to select plugins per file by
            extension. An explicit plugin is applied to every traversed
            file regardless of its extension.
        workers: Files matched concurrently. Output order is always the
            traversal order.

    Returns:
        Routes in file order, then pattern/occurrence order. Duplicates
        are kept.

    Raises:
        PluginNotFoundError: explicit framework is not registered
        TraversalError: root does not exist or cannot be read
    """
    explicit: Plugin | None = None
    if framework.strip().lower() != AUTO_FRAMEWORK:
        explicit = get_plugin(registry, framework)

    files = list(walk_source_files(root, registry.extensions))

    def process(file_path: Path) -> list[Route]:
        plugins = [explicit] if explicit else registry.for_file(file_path.name)
        return extract_file(file_path, plugins)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            per_file = list(executor.map(process, files))
    else:
        per_file = [process(f) for f in files]

    routes = [route for file_routes in per_file for route in file_routes]
    logger.info(
        "extraction_complete root=%s framework=%s files=%d routes=%d",
        root,
        framework,
        len(files),
        len(routes),
    )
    return routes


def extract_file(file_path: Path, plugins: list[Plugin]) -> list[Route]:
    """Apply plugins to a single file, in order.

    A read failure is logged and yields no routes.
    """
    if not plugins:
        return []

    try:
        content = file_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        logger.warning("file_unreadable path=%s reason=%s", file_path, e)
        return []

    routes: list[Route] = []
    for plugin in plugins:
        for occurrence in match_content(content, plugin, str(file_path)):
            route = normalize(occurrence, plugin)
            if route is not None:
                routes.append(route)
    return routes
