"""Route extraction engine.

Pattern matching, normalization and the orchestrating pass over a tree.
"""

from likhis.extractors.base import RawOccurrence, Route
from likhis.extractors.matcher import extract_params, match_content
from likhis.extractors.normalizer import join_path, normalize, scan_names
from likhis.extractors.orchestrator import extract_file, extract_routes

__all__ = [
    "RawOccurrence",
    "Route",
    "extract_file",
    "extract_params",
    "extract_routes",
    "join_path",
    "match_content",
    "normalize",
    "scan_names",
]
