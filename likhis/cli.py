"""Likhis CLI: extract routes from a project and render one artifact.

Entry point registered as ``likhis`` in ``pyproject.toml``::

    [project.scripts]
    likhis = "likhis.cli:main"

Exit codes: 0 success, 1 unreadable root, 2 unknown framework,
3 unknown output format.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from likhis.config import AUTO_FRAMEWORK
from likhis.core.errors import PluginNotFoundError, TraversalError
from likhis.exporters import EXPORTERS
from likhis.extractors import extract_routes
from likhis.plugins import PluginRegistry, default_search_paths, load_plugins

EXIT_OK = 0
EXIT_BAD_ROOT = 1
EXIT_UNKNOWN_FRAMEWORK = 2
EXIT_UNKNOWN_FORMAT = 3

logger = logging.getLogger("likhis")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="likhis",
        description="Extract HTTP routes from a source tree into API-client artifacts.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Project directory")
    parser.add_argument(
        "-f",
        "--framework",
        default=AUTO_FRAMEWORK,
        help="Plugin name, or 'auto' to select plugins by file extension",
    )
    parser.add_argument(
        "-o",
        "--format",
        default="postman",
        help=f"Output format ({', '.join(EXPORTERS)})",
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:3000",
        help="Base URL prepended to every route",
    )
    parser.add_argument("--env", default="dev", help="Environment label")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the artifact to this file (or into this directory) instead of stdout",
    )
    parser.add_argument(
        "--plugins-dir",
        type=Path,
        action="append",
        default=[],
        help="Extra plugin directory (repeatable, searched first)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Files matched concurrently",
    )
    parser.add_argument(
        "--list-plugins",
        action="store_true",
        help="List loaded plugins and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the ``likhis`` command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.path)
    registry, loaded_dirs = load_plugins(
        [*args.plugins_dir, *default_search_paths(root)]
    )
    logger.debug("plugin_dirs %s", ", ".join(str(d) for d in loaded_dirs))

    if args.list_plugins:
        _print_plugins(registry)
        return EXIT_OK

    exporter = EXPORTERS.get(args.format.lower())
    if exporter is None:
        print(
            f"Unknown output format: {args.format} (choose from {', '.join(EXPORTERS)})",
            file=sys.stderr,
        )
        return EXIT_UNKNOWN_FORMAT

    try:
        routes = extract_routes(root, registry, args.framework, workers=args.workers)
    except PluginNotFoundError as e:
        print(f"{e} (available: {', '.join(registry) or 'none'})", file=sys.stderr)
        return EXIT_UNKNOWN_FRAMEWORK
    except TraversalError as e:
        print(str(e), file=sys.stderr)
        return EXIT_BAD_ROOT

    artifact = exporter.render(routes, args.base_url, args.env)

    if args.output is None:
        sys.stdout.write(artifact)
    else:
        target = args.output
        if target.is_dir():
            target = target / f"{root.resolve().name or 'routes'}{exporter.suffix}"
        target.write_text(artifact, encoding="utf-8")
        print(f"Wrote {len(routes)} routes to {target}", file=sys.stderr)

    return EXIT_OK


def _print_plugins(registry: PluginRegistry) -> None:
    for name, plugin in registry.items():
        print(f"{name:<12} {' '.join(plugin.extensions):<24} {plugin.description}")


if __name__ == "__main__":
    sys.exit(main())
