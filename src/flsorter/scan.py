"""Discovery of plugin binaries used when generating groups from a folder."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import FileOperationError
from .models import PLUGIN_BINARY_SUFFIXES


def is_plugin_binary(path: Path) -> bool:
    """Whether ``path`` looks like a VST plugin (.vst3 or .dll)."""
    return Path(path).suffix.lower() in PLUGIN_BINARY_SUFFIXES


def find_plugin_names(folder: Path, recurse: bool = False) -> List[str]:
    """Collect plugin names (file stems) from ``folder``.

    With ``recurse`` set, subdirectories are searched too; otherwise a
    directory only counts when it is itself a plugin bundle (``*.vst3``).
    """
    folder = Path(folder)
    names: List[str] = []
    _collect(folder, recurse, names)
    return names


def _collect(folder: Path, recurse: bool, names: List[str]) -> None:
    try:
        entries = sorted(folder.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise FileOperationError(f"failed to read {folder} ({exc})", folder) from exc

    for path in entries:
        if path.is_dir() and recurse:
            _collect(path, recurse, names)
            continue

        if is_plugin_binary(path):
            names.append(path.stem)


def split_plugins(names: List[str], effect_indexes: Iterable[int]) -> Tuple[List[str], List[str]]:
    """Split ``names`` into (effects, generators) by the selected indexes."""
    chosen = set(effect_indexes)
    effects = [n for i, n in enumerate(names) if i in chosen]
    generators = [n for i, n in enumerate(names) if i not in chosen]
    return effects, generators
