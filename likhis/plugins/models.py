"""Plugin and Pattern records plus the immutable plugin registry.

A framework is described entirely as data: a Plugin lists the file
suffixes it applies to and an ordered list of Patterns. The matcher only
interprets the capture-group convention of each Pattern.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from likhis.config import DEFAULT_WINDOW_LINES


@dataclass(frozen=True)
class Pattern:
    """One regex-based extraction rule.

    Capture group convention:
        method empty  -> method_group (default 1) holds the verb
        path_group    -> defaults to the last capture group

    TEST VECTORS:
    -------------
    Pattern(method="", route_regex=r"router\\.(get|post)\\('([^']+)'")
    router.get('/users')
    -> method token "get", path fragment "/users"
    """

    route_regex: re.Pattern[str]
    method: str = ""
    param_regex: re.Pattern[str] | None = None
    method_group: int | None = None
    path_group: int = 1
    default_method: str = ""

    @property
    def is_dynamic(self) -> bool:
        """True when the verb comes from a capture group."""
        return not self.method


@dataclass(frozen=True)
class Plugin:
    """Declarative rule set for one source ecosystem."""

    name: str
    extensions: tuple[str, ...]
    patterns: tuple[Pattern, ...]
    description: str = ""
    prefix_regex: re.Pattern[str] | None = None
    query_patterns: tuple[re.Pattern[str], ...] = ()
    body_patterns: tuple[re.Pattern[str], ...] = ()
    window_lines: int = DEFAULT_WINDOW_LINES

    def applies_to(self, file_name: str) -> bool:
        """Check whether a file name ends with one of the plugin's suffixes."""
        lower = file_name.lower()
        return any(lower.endswith(ext) for ext in self.extensions)


@dataclass(frozen=True)
class PluginRegistry(Mapping[str, Plugin]):
    """Read-only name -> Plugin mapping built once per run.

    Iteration follows load order, which is also the order plugins are
    applied in auto mode.
    """

    _plugins: dict[str, Plugin] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Plugin:
        return self._plugins[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    @property
    def extensions(self) -> frozenset[str]:
        """Union of every registered plugin's suffixes."""
        return frozenset(ext for p in self._plugins.values() for ext in p.extensions)

    def for_file(self, file_name: str) -> list[Plugin]:
        """All plugins whose suffixes claim the file, in load order."""
        return [p for p in self._plugins.values() if p.applies_to(file_name)]
