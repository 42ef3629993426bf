"""Tests for prototype table lookups."""

import pytest
import yaml

from miniloader.templates import MissingExternalRecordError, PrototypeTables


def test_vanilla_belt_speeds():
    tables = PrototypeTables.vanilla()
    assert tables.belt_speed("transport-belt") == 0.03125
    assert tables.belt_speed("fast-transport-belt") == 0.0625
    assert tables.belt_speed("express-transport-belt") == 0.09375
    assert tables.belt_speed("turbo-transport-belt") == 0.125


def test_missing_record_raises():
    tables = PrototypeTables.vanilla()
    with pytest.raises(MissingExternalRecordError) as exc_info:
        tables.belt_speed("ultra-fast-transport-belt")
    assert exc_info.value.category == "transport-belt"
    assert "ultra-fast-transport-belt" in str(exc_info.value)


def test_missing_record_is_also_a_key_error():
    with pytest.raises(KeyError):
        PrototypeTables().get("transport-belt", "transport-belt")


def test_missing_field_raises():
    tables = PrototypeTables({"transport-belt": {"odd-belt": {}}})
    with pytest.raises(MissingExternalRecordError, match="odd-belt.speed"):
        tables.belt_speed("odd-belt")


def test_merged_layers_records():
    base = PrototypeTables({"transport-belt": {"a": {"speed": 1}, "b": {"speed": 2}}})
    top = PrototypeTables({"transport-belt": {"b": {"speed": 3}}, "inserter": {"i": {}}})
    merged = base.merged(top)
    assert merged.belt_speed("a") == 1
    assert merged.belt_speed("b") == 3
    assert merged.has("inserter", "i")
    # originals untouched
    assert base.belt_speed("b") == 2
    assert not base.has("inserter", "i")


def test_from_yaml(tmp_path):
    path = tmp_path / "tables.yaml"
    path.write_text(yaml.dump({"transport-belt": {"x-transport-belt": {"speed": 0.5}}}))
    assert PrototypeTables.from_yaml(path).belt_speed("x-transport-belt") == 0.5


def test_from_yaml_rejects_non_mapping(tmp_path):
    path = tmp_path / "tables.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        PrototypeTables.from_yaml(path)


def test_to_dict_is_a_copy():
    tables = PrototypeTables({"transport-belt": {"a": {"speed": 1}}})
    data = tables.to_dict()
    data["transport-belt"]["a"]["speed"] = 99
    assert tables.belt_speed("a") == 1


def test_from_yaml_rejects_invalid_yaml(tmp_path):
    path = tmp_path / "tables.yaml"
    path.write_text("a: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        PrototypeTables.from_yaml(path)


def test_non_mapping_category_rejected():
    with pytest.raises(ValueError, match="transport-belt"):
        PrototypeTables({"transport-belt": ["transport-belt"]})


def test_non_mapping_record_rejected():
    with pytest.raises(ValueError, match="transport-belt/x"):
        PrototypeTables({"transport-belt": {"x": 1}})
