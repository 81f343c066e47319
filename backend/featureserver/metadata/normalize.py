"""Input normalization shared by table and feature layer builders.

Callers hand over whatever GeoJSON they have: a bare geometry, a single
``Feature`` or a ``FeatureCollection``. Everything downstream works on a
``FeatureCollection``, so this module wraps the first two forms and folds
the document-level ``metadata`` and ``capabilities`` members into the
options bag. Explicit options always win over document metadata.

Example:
    >>> from featureserver.metadata.normalize import normalize_input
    >>> geojson, options = normalize_input(
    ...     {"type": "Point", "coordinates": [1, 2]},
    ...     {"name": "sites"},
    ... )
    >>> geojson["type"], len(geojson["features"])
    ('FeatureCollection', 1)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from featureserver.metadata import models

# Document members that survive wrapping into a FeatureCollection.
_CARRIED_MEMBERS = ("metadata", "crs", "capabilities", "bbox")


class GeoJSONError(ValueError):
    """Raised when the GeoJSON document or options have an unusable shape.

    Example:
        >>> try:
        ...     normalize_input({"type": "Banana"}, {})
        ... except GeoJSONError as e:
        ...     print(e)
        Unsupported GeoJSON type: 'Banana'
    """


def _feature_collection(
    document: Mapping[str, Any],
    features: list[Any],
) -> models.GeoJSON:
    collection: models.GeoJSON = {
        "type": "FeatureCollection",
        "features": features,
    }
    for member in _CARRIED_MEMBERS:
        if member in document:
            collection[member] = document[member]
    return collection


def _normalize_geojson(geojson: Any) -> models.GeoJSON:
    if geojson is None:
        return {"type": "FeatureCollection", "features": []}

    if not isinstance(geojson, Mapping):
        raise GeoJSONError(
            f"GeoJSON must be an object, got {type(geojson).__name__}"
        )

    geojson_type = geojson.get("type")
    if geojson_type == "FeatureCollection" or (
        geojson_type is None and "features" in geojson
    ):
        features = geojson.get("features")
        if features is None:
            features = []
        if not isinstance(features, list):
            raise GeoJSONError("FeatureCollection 'features' must be a list")
        return {**geojson, "type": "FeatureCollection", "features": features}

    if geojson_type == "Feature":
        return _feature_collection(geojson, [dict(geojson)])

    if geojson_type in models.GEOMETRY_TYPES:
        feature = {"type": "Feature", "geometry": dict(geojson), "properties": {}}
        return _feature_collection(geojson, [feature])

    if geojson_type is None and not geojson:
        return {"type": "FeatureCollection", "features": []}

    raise GeoJSONError(f"Unsupported GeoJSON type: {geojson_type!r}")


def _normalize_options(
    geojson: Mapping[str, Any],
    options: Any,
) -> models.Options:
    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise GeoJSONError(
            f"Options must be an object, got {type(options).__name__}"
        )

    metadata = geojson.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise GeoJSONError("GeoJSON 'metadata' must be an object")

    from_document = {
        **metadata,
        "capabilities": geojson.get("capabilities"),
    }
    normalized = {
        key: value for key, value in from_document.items() if value is not None
    }
    normalized.update(options)
    return normalized


def normalize_input(geojson: Any, options: Any = None) -> models.NormalizedInput:
    """Normalize a GeoJSON document and its options bag.

    The result is a ``FeatureCollection`` and a flat options dictionary.
    Geometry coordinates are passed through untouched and neither argument
    is mutated. Running the function on its own output returns an equal
    result.

    Args:
        geojson: Bare geometry, ``Feature``, ``FeatureCollection`` or None.
        options: Options bag or None.

    Returns:
        NormalizedInput holding the wrapped document and merged options.

    Raises:
        GeoJSONError: If the document or options have an unusable shape.
    """
    normalized_geojson = _normalize_geojson(geojson)
    normalized_options = _normalize_options(normalized_geojson, options)
    return models.NormalizedInput(normalized_geojson, normalized_options)
