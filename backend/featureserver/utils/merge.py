"""Merge helpers that distinguish "unset" from "set".

A plain ``dict.update`` overwrites a value with ``None``; descriptors need
the opposite: an option passed as ``None`` means "not provided" and must
leave whatever default is already in place.

Example:
    >>> from featureserver.utils.merge import merge_defined
    >>> merge_defined({"minScale": 0, "maxScale": 0}, {"minScale": 5000,
    ...                                              "maxScale": None})
    {'minScale': 5000, 'maxScale': 0}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


def merge_defined(
    target: Mapping[str, Any],
    source: Mapping[str, Any],
) -> dict[str, Any]:
    """Return ``target`` updated with the defined values of ``source``.

    Values that are ``None`` in ``source`` are skipped. When both sides hold
    a mapping for the same key they are merged recursively; any other value
    replaces the target value. Neither argument is mutated.

    Args:
        target: Mapping holding the current (default) values.
        source: Mapping holding overrides, possibly with ``None`` entries.

    Returns:
        A new dictionary with the merged result.
    """
    merged = dict(target)
    for key, value in source.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_defined(current, value)
        else:
            merged[key] = value
    return merged
