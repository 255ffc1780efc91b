"""Tests for the read-only property bag."""

from __future__ import annotations

import pytest

from sqlbind import PropertyBag


def test_values_are_strings_in_order() -> None:
    bag = PropertyBag([("b", 1), ("a", True), ("c", False), ("d", "x")])

    assert list(bag) == ["b", "a", "c", "d"]
    assert bag["b"] == "1"
    assert bag["a"] == "true"
    assert bag["c"] == "false"
    assert len(bag) == 4


def test_bag_is_read_only() -> None:
    bag = PropertyBag({"a": "1"})

    with pytest.raises(TypeError):
        bag["a"] = "2"  # type: ignore[index]

    with pytest.raises(TypeError):
        del bag["a"]  # type: ignore[attr-defined]

    assert bag["a"] == "1"


def test_bag_copies_its_input() -> None:
    source = {"a": "1"}
    bag = PropertyBag(source)

    source["a"] = "2"
    bag.to_dict()["a"] = "3"

    assert bag["a"] == "1"


def test_bag_compares_to_mappings() -> None:
    assert PropertyBag({"a": 1}) == {"a": "1"}
    assert PropertyBag({"a": 1}) == PropertyBag({"a": "1"})
    assert PropertyBag({"a": 1}) != {"a": 1}
