"""Tests for the group registry."""

import json
import logging

import pytest

from flsorter.errors import ParseError
from flsorter.models import GroupCategory, PluginGroup
from flsorter.registry import GroupRegistry, default_identifier


def write_group(directory, identifier, data):
    path = directory / f"{identifier}.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoad:
    """Tests for GroupRegistry.load."""

    def test_empty_directory(self, tmp_path):
        registry = GroupRegistry.load(GroupCategory.EFFECT, tmp_path)
        assert registry.is_empty()
        assert len(registry) == 0
        assert registry.category == GroupCategory.EFFECT

    def test_loads_in_identifier_order(self, tmp_path):
        write_group(tmp_path, "zeta", {"name": "Zeta", "plugins": ["A"]})
        write_group(tmp_path, "alpha", {"name": "Alpha", "plugins": ["B"]})
        write_group(tmp_path, "mid", {"name": "Mid", "plugins": []})

        registry = GroupRegistry.load(GroupCategory.EFFECT, tmp_path)

        assert registry.identifiers() == ["alpha", "mid", "zeta"]
        assert [g.name for g in registry] == ["Alpha", "Mid", "Zeta"]

    def test_ignores_other_files_and_subdirectories(self, tmp_path):
        write_group(tmp_path, "delay", {"name": "Delay", "plugins": ["EchoBoy"]})
        (tmp_path / "notes.txt").write_text("not a group", encoding="utf-8")
        nested = tmp_path / "nested"
        nested.mkdir()
        write_group(nested, "hidden", {"name": "Hidden", "plugins": []})
        (tmp_path / "folder.json").mkdir()

        registry = GroupRegistry.load(GroupCategory.EFFECT, tmp_path)

        assert registry.identifiers() == ["delay"]

    def test_malformed_file_aborts_load(self, tmp_path):
        write_group(tmp_path, "good", {"name": "Good", "plugins": []})
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ParseError) as exc_info:
            GroupRegistry.load(GroupCategory.EFFECT, tmp_path)

        assert exc_info.value.path == tmp_path / "bad.json"
        assert "bad.json" in str(exc_info.value)

    def test_wrong_shape_aborts_load(self, tmp_path):
        write_group(tmp_path, "bad", {"name": "Bad", "plugins": "Serum"})

        with pytest.raises(ParseError):
            GroupRegistry.load(GroupCategory.GENERATOR, tmp_path)

    def test_duplicate_names_keep_later_file(self, tmp_path, caplog):
        write_group(tmp_path, "delay_a", {"name": "Delay", "plugins": ["EchoBoy"]})
        write_group(tmp_path, "delay_b", {"name": "Delay", "plugins": ["H-Delay", "Timeless"]})

        with caplog.at_level(logging.WARNING, logger="flsorter"):
            registry = GroupRegistry.load(GroupCategory.EFFECT, tmp_path)

        assert len(registry) == 1
        group = registry.get("delay_b")
        assert group == PluginGroup("Delay", ["H-Delay", "Timeless"])
        assert registry.get("delay_a") is None

        assert len(registry.duplicates) == 1
        dup = registry.duplicates[0]
        assert dup.name == "Delay"
        assert dup.kept_identifier == "delay_b"
        assert dup.dropped_identifier == "delay_a"
        assert any("Delay" in r.getMessage() for r in caplog.records)


class TestSave:
    """Tests for GroupRegistry.save and exists."""

    def test_round_trip(self, tmp_path):
        registry = GroupRegistry(GroupCategory.EFFECT, tmp_path)
        group = PluginGroup("Reverb Rack", ["ValhallaRoom", "FabFilterProQ", "ValhallaRoom"])

        registry.save("reverb_rack", group)
        reloaded = GroupRegistry.load(GroupCategory.EFFECT, tmp_path)

        assert reloaded.get("reverb_rack") == group

    def test_identifier_independent_of_name(self, tmp_path):
        registry = GroupRegistry(GroupCategory.EFFECT, tmp_path)
        path = registry.save("custom-file", PluginGroup("Display Name", ["A"]))

        assert path == tmp_path / "custom-file.json"
        assert registry.exists("custom-file")
        assert not registry.exists("display_name")
        assert registry.get("custom-file").name == "Display Name"

    def test_overwrites_existing(self, tmp_path):
        registry = GroupRegistry(GroupCategory.GENERATOR, tmp_path)
        registry.save("synths", PluginGroup("Synths", ["Serum"]))
        registry.save("synths", PluginGroup("Synths", ["Vital", "Sylenth1"]))

        data = json.loads((tmp_path / "synths.json").read_text(encoding="utf-8"))
        assert data == {"name": "Synths", "plugins": ["Vital", "Sylenth1"]}
        assert len(registry) == 1

    @pytest.mark.parametrize("name", [".", "..", "a/b", "a\\b"])
    def test_rejects_name_that_is_not_a_folder(self, tmp_path, name):
        registry = GroupRegistry(GroupCategory.EFFECT, tmp_path)

        with pytest.raises(ParseError):
            registry.save("bad", PluginGroup(name, ["ProQ"]))

        assert not registry.exists("bad")
        assert registry.is_empty()

    def test_creates_directory(self, tmp_path):
        directory = tmp_path / "missing" / "effect"
        registry = GroupRegistry(GroupCategory.EFFECT, directory)
        registry.save("eq", PluginGroup("EQ", []))
        assert registry.exists("eq")

    def test_save_keeps_one_group_per_name(self, tmp_path):
        registry = GroupRegistry(GroupCategory.EFFECT, tmp_path)
        registry.save("delay_a", PluginGroup("Delay", ["EchoBoy"]))
        registry.save("delay_b", PluginGroup("Delay", ["Timeless"]))

        assert registry.identifiers() == ["delay_b"]

    def test_exists_false_for_directory(self, tmp_path):
        (tmp_path / "group.json").mkdir()
        registry = GroupRegistry(GroupCategory.EFFECT, tmp_path)
        assert not registry.exists("group")


@pytest.mark.parametrize("name,expected", [
    ("Reverb Rack", "reverb_rack"),
    ("Delay", "delay"),
    ("My  Synths", "my__synths"),
])
def test_default_identifier(name, expected):
    assert default_identifier(name) == expected
