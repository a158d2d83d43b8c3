"""Error types raised by flsorter.

Every fatal condition derives from FlSorterError so the CLI can report it
with one handler. Skips (empty groups, plugins that aren't installed) are
not errors; they are recorded on the sort/unsort results instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class FlSorterError(Exception):
    """Base class for flsorter errors."""
    pass


class ValidationError(FlSorterError):
    """The plugin database directory layout is invalid."""

    def __init__(self, base_path: Path, missing: List[Path]):
        self.base_path = base_path
        self.missing = list(missing)
        lines = [f"plugin database structure is invalid: {base_path}"]
        lines.extend(f"  missing: {p}" for p in self.missing)
        super().__init__("\n".join(lines))


class ParseError(FlSorterError):
    """A plugin group definition file could not be read or parsed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"failed to parse {path.name}: {message}"
        super().__init__(message)


class FileOperationError(FlSorterError):
    """A filesystem operation failed while reading or writing plugin files."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class ConfigError(FlSorterError):
    """The user configuration file is unreadable or malformed."""
    pass
