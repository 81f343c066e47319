"""Unit tests for featureserver.utils.merge.

The defined-only merge must skip ``None`` values instead of writing them,
merge nested mappings, and leave both inputs untouched.
"""

from featureserver.utils import merge


def test_none_does_not_overwrite() -> None:
    """A None override keeps the existing value."""
    result = merge.merge_defined(
        {"minScale": 0, "maxScale": 0},
        {"minScale": 5000, "maxScale": None},
    )
    assert result == {"minScale": 5000, "maxScale": 0}


def test_new_keys_added_and_none_keys_not_created() -> None:
    result = merge.merge_defined({"a": 1}, {"b": 2, "c": None})
    assert result == {"a": 1, "b": 2}
    assert "c" not in result


def test_nested_mappings_merge() -> None:
    """Nested dicts are merged key by key."""
    result = merge.merge_defined(
        {"drawingInfo": {"renderer": {}, "transparency": 0}},
        {"drawingInfo": {"transparency": 50, "renderer": None}},
    )
    assert result == {"drawingInfo": {"renderer": {}, "transparency": 50}}


def test_falsy_values_are_defined() -> None:
    """Zero, False and empty strings are real values."""
    result = merge.merge_defined(
        {"minScale": 100, "flag": True, "name": "x"},
        {"minScale": 0, "flag": False, "name": ""},
    )
    assert result == {"minScale": 0, "flag": False, "name": ""}


def test_inputs_not_mutated() -> None:
    target = {"nested": {"a": 1}}
    source = {"nested": {"b": 2}}
    merge.merge_defined(target, source)
    assert target == {"nested": {"a": 1}}
    assert source == {"nested": {"b": 2}}
