"""Plugin Definition Store: load and validate YAML plugin files.

A bad file, plugin or pattern is skipped with a warning. Loading as a
whole never fails because of one malformed definition.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Iterable

import yaml

from likhis.config import (
    BUILTIN_PLUGINS_DIR,
    DEFAULT_WINDOW_LINES,
    PLUGIN_FILE_SUFFIXES,
    PLUGINS_DIR_ENV,
    PROJECT_PLUGIN_DIRS,
    USER_PLUGINS_DIR,
)
from likhis.core.errors import (
    PatternCompileError,
    PluginConfigError,
    PluginNotFoundError,
    PluginValidationError,
)
from likhis.plugins.models import Pattern, Plugin, PluginRegistry

logger = logging.getLogger(__name__)


def default_search_paths(project_root: Path | str | None = None) -> list[Path]:
    """Plugin directories in precedence order (first wins on name clash).

    Args:
        project_root: Project being scanned; its override directories are
            searched before the user and built-in directories.

    Returns:
        Candidate directories. Missing ones are skipped by load_plugins.
    """
    paths: list[Path] = []

    env_dir = os.environ.get(PLUGINS_DIR_ENV)
    if env_dir:
        paths.append(Path(env_dir).expanduser())

    if project_root is not None:
        root = Path(project_root)
        paths.extend(root / rel for rel in PROJECT_PLUGIN_DIRS)

    paths.append(Path.home() / USER_PLUGINS_DIR)
    paths.append(BUILTIN_PLUGINS_DIR)
    return paths


def load_plugins(
    search_paths: Iterable[Path | str],
) -> tuple[PluginRegistry, list[Path]]:
    """Build the plugin registry from every plugin file in search_paths.

    Args:
        search_paths: Directories holding *.yml / *.yaml plugin files.
            Files are read in sorted order within each directory.

    Returns:
        Tuple of (registry, directories that contributed a valid plugin)
    """
    plugins: dict[str, Plugin] = {}
    loaded_dirs: list[Path] = []

    for directory in (Path(p) for p in search_paths):
        if not directory.is_dir():
            continue

        contributed = False
        for file_path in _plugin_files(directory):
            try:
                plugin = load_plugin_file(file_path)
            except PluginConfigError as e:
                logger.warning("plugin_file_skipped path=%s reason=%s", e.path, e.reason)
                continue
            except PluginValidationError as e:
                logger.warning(
                    "plugin_invalid plugin=%s path=%s reason=%s",
                    e.source,
                    file_path,
                    e.reason,
                )
                continue

            if plugin.name in plugins:
                logger.warning(
                    "plugin_duplicate plugin=%s path=%s kept=first",
                    plugin.name,
                    file_path,
                )
                continue

            plugins[plugin.name] = plugin
            contributed = True

        if contributed and directory not in loaded_dirs:
            loaded_dirs.append(directory)

    logger.info(
        "plugins_loaded count=%d dirs=%s",
        len(plugins),
        ",".join(str(d) for d in loaded_dirs),
    )
    return PluginRegistry(plugins), loaded_dirs


def get_plugin(registry: PluginRegistry, name: str) -> Plugin:
    """Look up a plugin by name.

    Raises:
        PluginNotFoundError: name is empty or not registered
    """
    key = (name or "").strip().lower()
    if not key or key not in registry:
        raise PluginNotFoundError(name)
    return registry[key]


def load_plugin_file(file_path: Path) -> Plugin:
    """Parse and validate a single plugin file.

    Raises:
        PluginConfigError: unreadable file, YAML syntax error, bad top level
        PluginValidationError: plugin breaks a structural invariant
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PluginConfigError(file_path, str(e)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PluginConfigError(file_path, f"YAML syntax error: {e}") from e

    if not isinstance(data, dict):
        raise PluginConfigError(file_path, "top level must be a mapping")

    return build_plugin(data, source=str(file_path))


def build_plugin(data: dict[str, Any], source: str = "<memory>") -> Plugin:
    """Validate a parsed plugin mapping and compile its expressions.

    Args:
        data: Mapping with name, description, extensions, patterns, ...
        source: Where the mapping came from, used in error messages

    Raises:
        PluginValidationError: plugin breaks a structural invariant
    """
    name = str(data.get("name") or "").strip().lower()
    if not name:
        raise PluginValidationError(source, "missing name")

    extensions = _normalize_extensions(data.get("extensions"))
    if not extensions:
        raise PluginValidationError(name, "extensions must be a non-empty list")

    raw_patterns = data.get("patterns")
    if not isinstance(raw_patterns, list) or not raw_patterns:
        raise PluginValidationError(name, "patterns must be a non-empty list")

    patterns: list[Pattern] = []
    for raw in raw_patterns:
        try:
            patterns.append(_build_pattern(name, raw))
        except PatternCompileError as e:
            logger.warning(
                "pattern_dropped plugin=%s regex=%r reason=%s",
                e.plugin,
                e.expression,
                e.reason,
            )

    if not patterns:
        raise PluginValidationError(name, "no valid patterns")

    window = data.get("window_lines", DEFAULT_WINDOW_LINES)
    if not isinstance(window, int) or isinstance(window, bool) or window < 1:
        logger.warning("window_lines_ignored plugin=%s value=%r", name, window)
        window = DEFAULT_WINDOW_LINES

    prefix_regex = None
    if data.get("prefix_regex"):
        try:
            prefix_regex = _compile(name, data["prefix_regex"], min_groups=1)
        except PatternCompileError as e:
            logger.warning("prefix_regex_dropped plugin=%s reason=%s", name, e.reason)

    return Plugin(
        name=name,
        description=str(data.get("description") or ""),
        extensions=extensions,
        patterns=tuple(patterns),
        prefix_regex=prefix_regex,
        query_patterns=_compile_hints(name, data.get("query_regex")),
        body_patterns=_compile_hints(name, data.get("body_regex")),
        window_lines=window,
    )


def _plugin_files(directory: Path) -> list[Path]:
    """Plugin files directly inside a directory, sorted by name."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.warning("plugin_dir_unreadable path=%s reason=%s", directory, e)
        return []
    return [
        entry
        for entry in entries
        if entry.is_file() and entry.suffix.lower() in PLUGIN_FILE_SUFFIXES
    ]


def _normalize_extensions(value: Any) -> tuple[str, ...]:
    """Lower-case, dot-prefixed, de-duplicated suffixes."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()

    result: list[str] = []
    for item in value:
        ext = str(item or "").strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return tuple(result)


def _build_pattern(plugin: str, raw: Any) -> Pattern:
    """Compile one pattern entry and resolve its capture groups."""
    if not isinstance(raw, dict):
        raise PatternCompileError(plugin, repr(raw), "pattern must be a mapping")

    expression = raw.get("route_regex")
    if not isinstance(expression, str) or not expression:
        raise PatternCompileError(plugin, repr(expression), "missing route_regex")

    method = str(raw.get("method") or "").strip().upper()
    route_regex = _compile(plugin, expression, min_groups=1)
    groups = route_regex.groups

    method_group = raw.get("method_group")
    if method:
        method_group = None
    elif method_group is None:
        method_group = 1

    path_group = raw.get("path_group")
    if path_group is None:
        path_group = groups

    for label, index in (("method_group", method_group), ("path_group", path_group)):
        if index is None:
            continue
        if not isinstance(index, int) or isinstance(index, bool):
            raise PatternCompileError(plugin, expression, f"{label} must be an integer")
        if not 1 <= index <= groups:
            raise PatternCompileError(
                plugin, expression, f"{label} {index} outside 1..{groups}"
            )

    if method_group is not None and method_group == path_group:
        raise PatternCompileError(
            plugin, expression, "dynamic method needs separate method and path groups"
        )

    param_regex = None
    if raw.get("param_regex"):
        param_regex = _compile(plugin, raw["param_regex"], min_groups=1)

    return Pattern(
        route_regex=route_regex,
        method=method,
        param_regex=param_regex,
        method_group=method_group,
        path_group=path_group,
        default_method=str(raw.get("default_method") or "").strip().upper(),
    )


def _compile_hints(plugin: str, value: Any) -> tuple[re.Pattern[str], ...]:
    """Compile query/body idioms, dropping the ones that fail."""
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        logger.warning("hint_regex_ignored plugin=%s value=%r", plugin, value)
        return ()

    compiled: list[re.Pattern[str]] = []
    for expression in value:
        try:
            compiled.append(_compile(plugin, expression, min_groups=1))
        except PatternCompileError as e:
            logger.warning(
                "hint_regex_dropped plugin=%s regex=%r reason=%s",
                plugin,
                e.expression,
                e.reason,
            )
    return tuple(compiled)


def _compile(plugin: str, expression: Any, min_groups: int = 0) -> re.Pattern[str]:
    """Compile an expression with the capture-group count it must have."""
    if not isinstance(expression, str):
        raise PatternCompileError(plugin, repr(expression), "expression must be a string")
    try:
        compiled = re.compile(expression)
    except re.error as e:
        raise PatternCompileError(plugin, expression, str(e)) from e

    if compiled.groups < min_groups:
        raise PatternCompileError(
            plugin, expression, f"needs at least {min_groups} capture group(s)"
        )
    return compiled
