"""Shared fixtures: a plugin database layout and a config directory."""

from pathlib import Path

import pytest

from flsorter.database import PluginDatabase


def make_database(base: Path) -> Path:
    for category in ("Effects", "Generators"):
        (base / category).mkdir(parents=True, exist_ok=True)
        for root in ("VST3", "VST"):
            (base / "Installed" / category / root).mkdir(parents=True, exist_ok=True)
    return base


def install(base: Path, category: str, root: str, plugin: str, content: str = "") -> Path:
    path = base / "Installed" / category / root / f"{plugin}.fst"
    path.write_text(content or f"{plugin} ({root})", encoding="utf-8")
    return path


@pytest.fixture
def database_dir(tmp_path):
    return make_database(tmp_path / "Plugin database")


@pytest.fixture
def database(database_dir):
    return PluginDatabase.from_path(database_dir)


@pytest.fixture
def installer(database_dir):
    """Returns install(category, root, plugin) bound to the test database."""
    def _install(category: str, root: str, plugin: str, content: str = "") -> Path:
        return install(database_dir, category, root, plugin, content)
    return _install
