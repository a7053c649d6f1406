"""Error hierarchy for route extraction.

Errors local to one plugin file or one source file are absorbed by the
caller and logged. PluginNotFoundError and TraversalError make the
requested extraction meaningless and propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path


class LikhisError(Exception):
    """Base error for likhis.

    All likhis-specific errors inherit from this.
    """

    pass


# =============================================================================
# Plugin Errors
# =============================================================================


class PluginConfigError(LikhisError):
    """Plugin configuration file could not be read or parsed.

    Attributes:
        path: The configuration file
        reason: Human-readable error description

    Handling: the file is skipped, loading continues.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid plugin file {self.path}: {reason}")


class PluginValidationError(LikhisError):
    """Plugin definition breaks a structural invariant.

    Attributes:
        source: Plugin name, or the file path when the name is missing
        reason: Human-readable error description

    Handling: the plugin is skipped, loading continues.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid plugin {source}: {reason}")


class PatternCompileError(LikhisError):
    """A pattern's expression does not compile or has unusable groups.

    Attributes:
        plugin: Name of the plugin declaring the pattern
        expression: The offending regular expression
        reason: Human-readable error description

    Handling: the pattern is dropped. The plugin is dropped only when
    no pattern survives.
    """

    def __init__(self, plugin: str, expression: str, reason: str) -> None:
        self.plugin = plugin
        self.expression = expression
        self.reason = reason
        super().__init__(f"Bad pattern in plugin {plugin} ({expression!r}): {reason}")


class PluginNotFoundError(LikhisError, LookupError):
    """Requested plugin name is empty or not registered.

    Attributes:
        name: The requested plugin name

    Handling: fatal to the extraction that asked for it.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        if name:
            message = f"Plugin not found: {name}"
        else:
            message = "Plugin not found: empty plugin name"
        super().__init__(message)


# =============================================================================
# Traversal Errors
# =============================================================================


class TraversalError(LikhisError):
    """Root directory does not exist or cannot be read.

    Attributes:
        root: The requested root path
        reason: Human-readable error description

    Handling: fatal to the whole walk.
    """

    def __init__(self, root: Path | str, reason: str) -> None:
        self.root = Path(root)
        self.reason = reason
        super().__init__(f"Cannot traverse {self.root}: {reason}")
