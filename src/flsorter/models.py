"""Plugin group models.

Defines the two group categories, the static table describing where each
category lives on disk, and the PluginGroup record stored in definition
files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, List

from .errors import ParseError

DEFINITION_SUFFIX = ".json"
SHIM_EXTENSION = "fst"
PLUGIN_BINARY_SUFFIXES = (".vst3", ".dll")

NEWER_ROOT = "VST3"
LEGACY_ROOT = "VST"
INSTALLED_DIR = "Installed"


class GroupCategory(str, Enum):
    """Kinds of plugin groups."""
    EFFECT = "effect"
    GENERATOR = "generator"


@dataclass(frozen=True)
class CategoryInfo:
    display_name: str
    database_dir: str       # Folder under the plugin database base path
    definitions_dir: str    # Folder under the config dir holding group files


CATEGORY_INFO: Dict[GroupCategory, CategoryInfo] = {
    GroupCategory.EFFECT: CategoryInfo("effect", "Effects", "effect"),
    GroupCategory.GENERATOR: CategoryInfo("generator", "Generators", "generator"),
}


def category_info(category: GroupCategory) -> CategoryInfo:
    return CATEGORY_INFO[GroupCategory(category)]


def validate_group_name(name: str) -> None:
    """Raise ParseError unless ``name`` can be used as a single folder name."""
    if not isinstance(name, str) or not name:
        raise ParseError("'name' must be a non-empty string")
    if name in (".", "..") or "/" in name or "\\" in name or PurePath(name).is_absolute():
        raise ParseError(f"'name' must be a single folder name, got {name!r}")


def shim_file_name(plugin_name: str) -> str:
    """Name of the .fst reference file for a plugin."""
    return f"{plugin_name}.{SHIM_EXTENSION}"


@dataclass
class PluginGroup:
    """A named group of plugins that should be sorted into one folder.

    Plugin names may repeat and keep their order.
    """
    name: str
    plugins: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "plugins": list(self.plugins),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PluginGroup":
        if not isinstance(data, dict):
            raise ParseError("expected an object with 'name' and 'plugins'")

        name = data.get("name")
        validate_group_name(name)

        plugins = data.get("plugins")
        if not isinstance(plugins, list) or not all(isinstance(p, str) for p in plugins):
            raise ParseError("'plugins' must be a list of strings")

        return cls(name=name, plugins=list(plugins))

    def is_empty(self) -> bool:
        return not self.plugins
