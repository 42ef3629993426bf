"""Tests for entity naming helpers."""

import pytest

from miniloader.templates import BASE_NAME, key_from_name, name_from_key, scope_from_key


@pytest.mark.parametrize(
    "key,name",
    [
        ("", "miniloader"),
        ("fast", "fast-miniloader"),
        ("se-deep-space", "se-deep-space-miniloader"),
    ],
)
def test_name_from_key(key, name):
    assert name_from_key(key) == name


def test_scope_from_key():
    assert scope_from_key("") == ""
    assert scope_from_key("fast") == "fast-"
    assert scope_from_key("fast") + "transport-belt" == "fast-transport-belt"


def test_key_from_name_inverts_name_from_key():
    for key in ["", "fast", "kr-advanced", "bob-basic"]:
        assert key_from_name(name_from_key(key)) == key


def test_key_from_name_rejects_other_names():
    assert key_from_name("transport-belt") is None
    assert key_from_name("-" + BASE_NAME) is None
