from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .database import PluginDatabase
from .errors import ConfigError, FileOperationError
from .models import GroupCategory, category_info
from .registry import GroupRegistry

APP = "flsorter"

DATABASE_SUBPATH = ("Image-Line", "FL Studio", "Presets", "Plugin database")


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - $FLSORTER_CONFIG_DIR if set
      - Windows: %APPDATA%\\flsorter
      - macOS/Linux: $XDG_CONFIG_HOME/flsorter or ~/.config/flsorter
    """
    override = os.environ.get("FLSORTER_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path(directory: Optional[Path] = None) -> Path:
    return (directory or config_dir()) / "config.json"


def documents_dir() -> Path:
    if os.name == "nt":
        base = os.environ.get("USERPROFILE") or str(Path.home())
        return Path(base) / "Documents"
    return Path(os.environ.get("XDG_DOCUMENTS_DIR", str(Path.home() / "Documents")))


def default_database_path() -> Path:
    return documents_dir().joinpath(*DATABASE_SUBPATH)


@dataclass
class UserConfig:
    plugin_database_path: Path = field(default_factory=default_database_path)

    @staticmethod
    def load(path: Optional[Path] = None) -> "UserConfig":
        """Read the config file, writing the default one on first run."""
        path = path or config_path()

        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise ConfigError(f"failed to parse {path} ({exc})") from exc

            raw = data.get("plugin_database_path") if isinstance(data, dict) else None
            if not isinstance(raw, str) or not raw:
                raise ConfigError(f"{path} is missing 'plugin_database_path'")
            cfg = UserConfig(plugin_database_path=Path(raw))
        else:
            cfg = UserConfig()
            cfg.save(path)

        # Environment override (not written back)
        override = os.environ.get("FLSORTER_DATABASE_PATH")
        if override:
            cfg.plugin_database_path = Path(override)

        return cfg

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        payload = {"plugin_database_path": str(self.plugin_database_path)}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise FileOperationError(f"failed to write {path} ({exc})", path) from exc
        return path


def _create_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(f"failed to create {path} ({exc})", path) from exc


@dataclass
class Config:
    """Everything a command needs, built once per invocation."""
    config_dir: Path
    user: UserConfig
    database: PluginDatabase
    registries: Dict[GroupCategory, GroupRegistry]

    @classmethod
    def load(cls, directory: Optional[Path] = None) -> "Config":
        """Load user config, validate the plugin database and load all groups.

        Raises ValidationError if the database layout is invalid and
        ParseError if any group definition is malformed.
        """
        directory = Path(directory) if directory else config_dir()
        _create_directory(directory)

        user = UserConfig.load(config_path(directory))
        database = PluginDatabase.from_path(user.plugin_database_path)

        registries: Dict[GroupCategory, GroupRegistry] = {}
        for category in GroupCategory:
            groups_dir = directory / category_info(category).definitions_dir
            _create_directory(groups_dir)
            registries[category] = GroupRegistry.load(category, groups_dir)

        return cls(config_dir=directory, user=user, database=database, registries=registries)

    def registry(self, category: GroupCategory) -> GroupRegistry:
        return self.registries[GroupCategory(category)]

    @property
    def effects(self) -> GroupRegistry:
        return self.registry(GroupCategory.EFFECT)

    @property
    def generators(self) -> GroupRegistry:
        return self.registry(GroupCategory.GENERATOR)
