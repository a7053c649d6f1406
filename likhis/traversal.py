"""Traversal Engine: breadth-first walk yielding candidate source files.

Directories in SKIP_DIRS are pruned before descent, so nothing below
them is ever visited. Only files whose name ends with one of the given
suffixes are yielded.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path
from typing import Iterable, Iterator

from likhis.config import SKIP_DIRS
from likhis.core.errors import TraversalError

logger = logging.getLogger(__name__)


def walk_source_files(
    root: Path | str,
    extensions: Iterable[str],
    skip_dirs: Iterable[str] = SKIP_DIRS,
) -> Iterator[Path]:
    """Walk root breadth-first and yield matching files.

    Order: files of a directory (sorted by name) before any file of its
    subdirectories; subdirectories are visited level by level, sorted by
    name within each parent.

    Args:
        root: Directory to walk. A single file is yielded if it matches.
        extensions: File suffixes to keep (".js", ".blade.php", ...)
        skip_dirs: Directory names pruned at any depth

    Raises:
        TraversalError: root does not exist or cannot be listed. Raised
            eagerly, before the first file is yielded.
    """
    root = Path(root)
    suffixes = tuple(ext.lower() for ext in extensions)
    pruned = frozenset(skip_dirs)

    if not root.exists():
        raise TraversalError(root, "no such file or directory")

    if root.is_file():
        return iter([root] if _matches(root.name, suffixes) else [])

    if not os.access(root, os.R_OK | os.X_OK):
        raise TraversalError(root, "permission denied")

    return _walk_bfs(root, suffixes, pruned)


def _walk_bfs(
    root: Path, suffixes: tuple[str, ...], pruned: frozenset[str]
) -> Iterator[Path]:
    queue: deque[Path] = deque([root])

    while queue:
        directory = queue.popleft()
        try:
            entries = sorted(directory.iterdir(), key=lambda e: e.name)
        except OSError as e:
            if directory == root:
                raise TraversalError(root, str(e)) from e
            logger.warning("directory_unreadable path=%s reason=%s", directory, e)
            continue

        for entry in entries:
            if entry.is_dir():
                # Symlinked directories are not followed
                if entry.name not in pruned and not entry.is_symlink():
                    queue.append(entry)
            elif entry.is_file() and _matches(entry.name, suffixes):
                yield entry


def _matches(file_name: str, suffixes: tuple[str, ...]) -> bool:
    return bool(suffixes) and file_name.lower().endswith(suffixes)
