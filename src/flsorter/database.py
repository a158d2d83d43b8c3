"""FL Studio plugin database layout.

The plugin database is expected to look like::

    <base>/Effects/
    <base>/Generators/
    <base>/Installed/Effects/{VST3,VST}/
    <base>/Installed/Generators/{VST3,VST}/

Installed plugins are represented by ``.fst`` files; sorted groups are
folders of copies of those files under ``Effects`` or ``Generators``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .errors import FileOperationError, ValidationError
from .models import (
    INSTALLED_DIR,
    LEGACY_ROOT,
    NEWER_ROOT,
    GroupCategory,
    PluginGroup,
    category_info,
    shim_file_name,
)


@dataclass(frozen=True)
class InstalledPluginIndex:
    """Looks up installed plugins by name.

    VST3 installs shadow VST installs of the same name.
    """
    newer_root: Path
    legacy_root: Path

    @classmethod
    def from_folder(cls, folder: Path) -> "InstalledPluginIndex":
        folder = Path(folder)
        return cls(newer_root=folder / NEWER_ROOT, legacy_root=folder / LEGACY_ROOT)

    def resolve(self, plugin_name: str) -> Optional[Path]:
        """Return the installed .fst file for ``plugin_name``, or None."""
        file_name = shim_file_name(plugin_name)
        for root in (self.newer_root, self.legacy_root):
            candidate = root / file_name
            if candidate.exists():
                return candidate
        return None


@dataclass(frozen=True)
class DatabaseCategory:
    """Installed plugins and sorted-group folder for one category."""
    category: GroupCategory
    destination: Path
    installed: InstalledPluginIndex


@dataclass(frozen=True)
class PluginDatabase:
    base_path: Path
    effects: DatabaseCategory
    generators: DatabaseCategory

    @staticmethod
    def required_paths(base_path: Path) -> List[Path]:
        """Every directory that must exist for ``base_path`` to be valid."""
        base_path = Path(base_path)
        paths = []
        for category in GroupCategory:
            paths.append(base_path / category_info(category).database_dir)
        for category in GroupCategory:
            installed = base_path / INSTALLED_DIR / category_info(category).database_dir
            paths.append(installed)
            paths.append(installed / NEWER_ROOT)
            paths.append(installed / LEGACY_ROOT)
        return paths

    @classmethod
    def from_path(cls, base_path: Path) -> "PluginDatabase":
        """Validate the layout under ``base_path`` and build the database.

        All required directories are checked before failing so the error
        lists everything that is missing.
        """
        base_path = Path(base_path)
        missing = [p for p in cls.required_paths(base_path) if not p.is_dir()]
        if missing:
            raise ValidationError(base_path, missing)

        categories: Dict[GroupCategory, DatabaseCategory] = {}
        for category in GroupCategory:
            segment = category_info(category).database_dir
            categories[category] = DatabaseCategory(
                category=category,
                destination=base_path / segment,
                installed=InstalledPluginIndex.from_folder(base_path / INSTALLED_DIR / segment),
            )

        return cls(
            base_path=base_path,
            effects=categories[GroupCategory.EFFECT],
            generators=categories[GroupCategory.GENERATOR],
        )

    def category(self, category: GroupCategory) -> DatabaseCategory:
        if GroupCategory(category) is GroupCategory.EFFECT:
            return self.effects
        return self.generators

    def destination_path(self, group: PluginGroup, category: GroupCategory) -> Path:
        """Folder a group is sorted into.

        Raises FileOperationError unless the folder is a direct child of the
        category root.
        """
        root = self.category(category).destination
        path = root / group.name
        if group.name in (".", "..") or path.parent != root or path.name != group.name:
            raise FileOperationError(
                f"plugin group name '{group.name}' does not map to a folder inside {root}", path
            )
        return path
