"""Pattern Matcher: apply a plugin's rules to file content.

Matching is purely textual. There is no comment or string-literal
awareness, so declarations inside comments are reported too. This is
heuristic extraction with no soundness or completeness guarantee.
"""

from __future__ import annotations

import bisect
import re

from likhis.extractors.base import RawOccurrence
from likhis.plugins.models import Pattern, Plugin

# Alphabetic runs inside a captured method expression: "get", "'GET', 'POST'"
METHOD_TOKEN_REGEX = re.compile(r"[A-Za-z]+")
NEWLINE_REGEX = re.compile(r"\n")


def match_content(
    content: str, plugin: Plugin, source_file: str = ""
) -> list[RawOccurrence]:
    """Extract raw route occurrences from one file's content.

    Every pattern is scanned globally for non-overlapping matches.
    Results are ordered by pattern, then by position within the file.

    Args:
        content: Decoded file text
        plugin: Plugin whose patterns are applied
        source_file: Path recorded on each occurrence

    Returns:
        List of RawOccurrence. Empty if nothing matched.
    """
    hits = [
        (pattern, m)
        for pattern in plugin.patterns
        for m in pattern.route_regex.finditer(content)
    ]
    if not hits:
        return []

    starts = sorted({m.start() for _, m in hits})
    newlines = [nl.start() for nl in NEWLINE_REGEX.finditer(content)]
    prefixes = _find_prefixes(content, plugin)
    prefix_starts = [start for start, _ in prefixes]

    occurrences: list[RawOccurrence] = []
    for pattern, m in hits:
        # An optional path group that did not take part leaves only the base path
        fragment = m.group(pattern.path_group) or ""

        prefix = ""
        idx = bisect.bisect_left(prefix_starts, m.start())
        if idx:
            prefix = prefixes[idx - 1][1]

        params = extract_params(pattern, prefix, fragment)
        line_index = bisect.bisect_left(newlines, m.start())
        window_end = _window_end(
            m.start(), line_index, starts, newlines, plugin, len(content)
        )
        window = content[m.start() : window_end]

        for method in _method_tokens(pattern, m):
            occurrences.append(
                RawOccurrence(
                    method=method,
                    path_fragment=fragment,
                    raw_param_tokens=params,
                    prefix=prefix,
                    window=window,
                    line_number=line_index + 1,
                    source_file=source_file,
                )
            )

    return occurrences


def extract_params(pattern: Pattern, *fragments: str) -> tuple[str, ...]:
    """Placeholder names from capture group 1, left to right, de-duplicated.

    TEST VECTORS:
    -------------
    param_regex ":(\\w+)", "/users/:id/posts/:postId" -> ("id", "postId")
    param_regex "\\{(\\w+)\\}", "/a/{id}/b/{id}" -> ("id",)
    """
    if pattern.param_regex is None:
        return ()

    names: list[str] = []
    for fragment in fragments:
        for m in pattern.param_regex.finditer(fragment):
            name = m.group(1)
            if name and name not in names:
                names.append(name)
    return tuple(names)


def _method_tokens(pattern: Pattern, m: re.Match[str]) -> list[str]:
    """Verb tokens for a match. An empty token is left for the normalizer to reject."""
    if pattern.method:
        return [pattern.method]

    text = m.group(pattern.method_group) if pattern.method_group else None
    tokens = METHOD_TOKEN_REGEX.findall(text) if text else []
    if not tokens and pattern.default_method:
        tokens = [pattern.default_method]
    return tokens or [""]


def _find_prefixes(content: str, plugin: Plugin) -> list[tuple[int, str]]:
    """(position, base path) for each base-path declaration, in file order."""
    if plugin.prefix_regex is None:
        return []
    return [(m.start(), m.group(1) or "") for m in plugin.prefix_regex.finditer(content)]


def _window_end(
    start: int,
    line_index: int,
    starts: list[int],
    newlines: list[int],
    plugin: Plugin,
    length: int,
) -> int:
    """End of the query/body window: the next route match or window_lines lines."""
    end = length
    last_line = line_index + plugin.window_lines - 1
    if last_line < len(newlines):
        end = newlines[last_line]

    idx = bisect.bisect_right(starts, start)
    if idx < len(starts):
        end = min(end, starts[idx])
    return end
