"""Configuration constants for route extraction.

These values are shared by the plugin loader, the traversal engine and
the extractors.
"""

from pathlib import Path

# Canonical HTTP verbs a Route may carry
HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"}
)

# Verbs that conventionally carry a request body
BODY_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH"})

# Directories pruned during traversal, at any depth
SKIP_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".idea",
        ".vscode",
        "node_modules",
        "bower_components",
        "vendor",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".pytest_cache",
        ".mypy_cache",
        "dist",
        "build",
        "out",
        "target",
        "bin",
        "obj",
        ".next",
        ".nuxt",
        "coverage",
    }
)

# Plugin configuration files
PLUGIN_FILE_SUFFIXES: tuple[str, ...] = (".yml", ".yaml")

# Plugins shipped with the package
BUILTIN_PLUGINS_DIR: Path = Path(__file__).parent / "plugins" / "builtin"

# Override directories, relative to the project root and to the home dir
PROJECT_PLUGIN_DIRS: tuple[str, ...] = (".likhis/plugins", "plugins")
USER_PLUGINS_DIR: str = ".likhis/plugins"
PLUGINS_DIR_ENV: str = "LIKHIS_PLUGINS_DIR"

# Lines scanned after a route match for query/body idioms
DEFAULT_WINDOW_LINES: int = 25

# Framework selector that picks plugins by file extension
AUTO_FRAMEWORK: str = "auto"
