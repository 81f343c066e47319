"""Geometry type inference for feature layers.

Maps GeoJSON geometry names onto the Esri geometry taxonomy used by layer
descriptors. Mixed collections resolve to the type of the first feature
that carries a geometry; an explicit ``geometryType`` always wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from featureserver.metadata import models

GEOJSON_TO_ESRI: dict[str, models.EsriGeometryType] = {
    "point": models.POINT,
    "multipoint": models.MULTIPOINT,
    "linestring": models.POLYLINE,
    "multilinestring": models.POLYLINE,
    "polygon": models.POLYGON,
    "multipolygon": models.POLYGON,
}

ESRI_GEOMETRY_TYPES = frozenset(GEOJSON_TO_ESRI.values())


def to_esri_geometry_type(value: Any) -> models.EsriGeometryType | None:
    """Translate a GeoJSON or Esri geometry name to the Esri enum value.

    Args:
        value: ``"Polygon"``, ``"esriGeometryPolygon"``, etc.

    Returns:
        The Esri geometry type, or None when the name is not recognised.
    """
    if not isinstance(value, str):
        return None
    if value in ESRI_GEOMETRY_TYPES:
        return value  # type: ignore[return-value]
    return GEOJSON_TO_ESRI.get(value.lower())


def _first_feature_type(features: Any) -> models.EsriGeometryType | None:
    if not isinstance(features, list):
        return None
    for feature in features:
        if not isinstance(feature, Mapping):
            continue
        geometry = feature.get("geometry")
        if isinstance(geometry, Mapping) and geometry.get("type"):
            return to_esri_geometry_type(geometry["type"])
    return None


def resolve_geometry_type(
    merged: Mapping[str, Any],
) -> models.EsriGeometryType | None:
    """Infer the layer geometry type from a merged document/options view.

    Lookup order: ``geometryType``, ``metadata.geometryType``, the
    document's own ``type`` when it names a geometry, then the first
    feature with a geometry. Nothing here raises; an unknown type comes
    back as None.

    Args:
        merged: ``{**geojson, **options}``.

    Returns:
        Esri geometry type or None.
    """
    explicit = to_esri_geometry_type(merged.get("geometryType"))
    if explicit:
        return explicit

    metadata = merged.get("metadata")
    if isinstance(metadata, Mapping):
        from_metadata = to_esri_geometry_type(metadata.get("geometryType"))
        if from_metadata:
            return from_metadata

    document_type = merged.get("type")
    if document_type not in ("FeatureCollection", "Feature"):
        from_document = to_esri_geometry_type(document_type)
        if from_document:
            return from_document

    return _first_feature_type(merged.get("features"))
