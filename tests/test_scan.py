"""Tests for plugin discovery."""

import pytest

from flsorter.errors import FileOperationError
from flsorter.scan import find_plugin_names, is_plugin_binary, split_plugins


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


class TestIsPluginBinary:

    @pytest.mark.parametrize("name,expected", [
        ("Serum.dll", True),
        ("Serum.vst3", True),
        ("Serum.DLL", True),
        ("Serum.fst", False),
        ("readme.txt", False),
        ("Serum", False),
    ])
    def test_extensions(self, tmp_path, name, expected):
        assert is_plugin_binary(tmp_path / name) is expected


class TestFindPluginNames:
    """Tests for find_plugin_names."""

    def test_flat(self, tmp_path):
        touch(tmp_path / "Vital.vst3")
        touch(tmp_path / "Serum.dll")
        touch(tmp_path / "manual.pdf")
        touch(tmp_path / "Sub" / "Nested.dll")

        assert find_plugin_names(tmp_path) == ["Serum", "Vital"]

    def test_recurse(self, tmp_path):
        touch(tmp_path / "Serum.dll")
        touch(tmp_path / "Sub" / "Nested.dll")
        touch(tmp_path / "Sub" / "Deeper" / "Deepest.vst3")

        assert find_plugin_names(tmp_path, recurse=True) == ["Serum", "Deepest", "Nested"]

    def test_vst3_bundle_without_recurse(self, tmp_path):
        (tmp_path / "Pro-Q 3.vst3" / "Contents").mkdir(parents=True)

        assert find_plugin_names(tmp_path) == ["Pro-Q 3"]

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileOperationError):
            find_plugin_names(tmp_path / "missing")


def test_split_plugins():
    names = ["ProQ", "Serum", "Valhalla", "Vital"]
    effects, generators = split_plugins(names, [0, 2])
    assert effects == ["ProQ", "Valhalla"]
    assert generators == ["Serum", "Vital"]


def test_split_plugins_none_selected():
    effects, generators = split_plugins(["Serum"], [])
    assert effects == []
    assert generators == ["Serum"]
