"""Sort and unsort engines.

Sorting copies the installed ``.fst`` file of every plugin in a group into
``<database>/<Effects|Generators>/<group name>/``. Unsorting removes the
files a group's current definition points at and deletes the group folder
once nothing else is left in it.

Neither engine prints anything; results are returned for the command layer
to display.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List

from .database import PluginDatabase
from .errors import FileOperationError
from .models import GroupCategory, category_info, shim_file_name
from .registry import GroupRegistry

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingPlugin:
    """A plugin referenced by a group that isn't installed."""
    group: str
    plugin: str


@dataclass
class SortResult:
    category: GroupCategory
    ran: bool = False
    plugin_count: int = 0
    folder_count: int = 0
    skipped_groups: List[str] = field(default_factory=list)
    missing: List[MissingPlugin] = field(default_factory=list)


class UnsortStatus(str, Enum):
    NO_GROUPS = "no_groups"
    NOTHING_REMOVED = "nothing_removed"
    REMOVED = "removed"


@dataclass
class UnsortResult:
    category: GroupCategory
    has_groups: bool = False
    removed_count: int = 0
    removed_folders: int = 0
    skipped_groups: List[str] = field(default_factory=list)

    @property
    def status(self) -> UnsortStatus:
        if not self.has_groups:
            return UnsortStatus.NO_GROUPS
        if self.removed_count == 0:
            return UnsortStatus.NOTHING_REMOVED
        return UnsortStatus.REMOVED


def sort_category(registry: GroupRegistry, database: PluginDatabase) -> SortResult:
    """Copy the plugins of every group in ``registry`` into the database.

    A plugin that appears in several groups is copied once per group.
    Filesystem errors abort with FileOperationError.
    """
    category = registry.category
    result = SortResult(category=category)
    if registry.is_empty():
        return result

    result.ran = True
    installed = database.category(category).installed

    for group in registry:
        if group.is_empty():
            logger.debug("Skipping '%s' because no plugins are defined", group.name)
            result.skipped_groups.append(group.name)
            continue

        group_dir = database.destination_path(group, category)
        try:
            group_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileOperationError(
                f"failed to create group directory {group_dir} for '{group.name}' ({exc})",
                group_dir,
            ) from exc

        for plugin_name in group.plugins:
            source = installed.resolve(plugin_name)
            if source is None:
                logger.debug("Skipping '%s' because it is not installed", plugin_name)
                result.missing.append(MissingPlugin(group.name, plugin_name))
                continue

            destination = group_dir / shim_file_name(plugin_name)
            try:
                shutil.copyfile(source, destination)
            except OSError as exc:
                raise FileOperationError(
                    f"failed to copy '{plugin_name}' into '{group.name}' ({exc})",
                    destination,
                ) from exc

            logger.debug("Copied %s -> %s", source, destination)
            result.plugin_count += 1

        result.folder_count += 1

    return result


def _is_dir_empty(path: Path) -> bool:
    return next(path.iterdir(), None) is None


def unsort_category(registry: GroupRegistry, database: PluginDatabase) -> UnsortResult:
    """Remove the sorted files of every group in ``registry``.

    Only ``<plugin>.fst`` files named by the current group definitions are
    removed. A group folder is deleted only when it ends up empty.
    """
    category = registry.category
    result = UnsortResult(category=category, has_groups=not registry.is_empty())
    if not result.has_groups:
        logger.debug("Skipped %ss because there are no plugin groups", category_info(category).display_name)
        return result

    for group in registry:
        group_dir = database.destination_path(group, category)
        if not group_dir.is_dir():
            result.skipped_groups.append(group.name)
            continue

        for plugin_name in group.plugins:
            plugin_path = group_dir / shim_file_name(plugin_name)
            if not plugin_path.is_file():
                continue

            try:
                plugin_path.unlink()
            except OSError as exc:
                raise FileOperationError(f"failed to remove {plugin_path} ({exc})", plugin_path) from exc

            logger.debug("Removed %s", plugin_path)
            result.removed_count += 1

        try:
            if _is_dir_empty(group_dir):
                group_dir.rmdir()
                result.removed_folders += 1
                logger.debug("Removed empty folder %s", group_dir)
        except OSError as exc:
            raise FileOperationError(f"failed to remove folder {group_dir} ({exc})", group_dir) from exc

    return result


def sort_all(config: "Config") -> List[SortResult]:
    """Sort effects, then generators."""
    return [sort_category(config.registry(c), config.database) for c in GroupCategory]


def unsort_all(config: "Config") -> List[UnsortResult]:
    """Unsort effects, then generators."""
    return [unsort_category(config.registry(c), config.database) for c in GroupCategory]
