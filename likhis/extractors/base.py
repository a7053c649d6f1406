"""Base types for route extraction.

RawOccurrence (matcher output) -> Route (normalizer output) -> exporters
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawOccurrence:
    """Unnormalized route match produced by the pattern matcher."""

    method: str  # verb token as written in source ("get", "Post", ...)
    path_fragment: str  # captured path template
    raw_param_tokens: tuple[str, ...] = ()  # placeholder names, prefix first
    prefix: str = ""  # base path declared earlier in the file
    window: str = ""  # source text scanned for query/body idioms
    line_number: int = 0
    source_file: str = ""


@dataclass
class Route:
    """A normalized route declaration.

    Path keeps placeholders verbatim (/users/:id, /users/{id},
    /users/<int:id>) so exporters can reproduce the original form.
    """

    path: str
    method: str  # GET, POST, PUT, PATCH, DELETE, OPTIONS, HEAD
    params: list[str] = field(default_factory=list)
    query: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)

    # Informational, ignored by exporters
    source_file: str = ""
    line_number: int = 0
    plugin: str = ""
