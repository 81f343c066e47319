"""Feature layer descriptor assembly.

A feature layer descriptor is a table layer descriptor extended with the
fields that only make sense for geometry: geometry type, extent, drawing
info, scale range and coordinate quantization support. The table-level
part is built first by ``featureserver.metadata.table``; this module then
overlays ``defaults.feature_layer_defaults()`` and the computed fields.

Field ownership of the extension step:

- ``type``, ``hasZ``, ``hasM``, ``hasLabels``, ``allowGeometryUpdates``:
  feature defaults.
- ``geometryType``: ``geometry_type.resolve_geometry_type``.
- ``supportsCoordinatesQuantization``: ``capabilities.quantization`` option.
- ``extent``: ``extent.compute_extent``, only when it produced a value.
- ``drawingInfo.renderer``: ``renderers.select_renderer``.
- ``drawingInfo.labelingInfo``: ``labelingInfo`` option, only when given.
- ``minScale``, ``maxScale``: defined-only merge of the options.

Example:
    Build a descriptor for two points:
        >>> from featureserver.metadata.feature import (
        ...     build_feature_layer_metadata,
        ... )
        >>> descriptor = build_feature_layer_metadata({
        ...     "type": "FeatureCollection",
        ...     "features": [
        ...         {"type": "Feature",
        ...          "geometry": {"type": "Point", "coordinates": [1, 2]}},
        ...         {"type": "Feature",
        ...          "geometry": {"type": "Point", "coordinates": [3, 4]}},
        ...     ],
        ... })
        >>> descriptor["geometryType"]
        'esriGeometryPoint'
        >>> descriptor["extent"]["xmax"], descriptor["extent"]["ymax"]
        (3.0, 4.0)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from featureserver.metadata import (
    defaults,
    extent,
    geometry_type,
    models,
    normalize,
    renderers,
    table,
)
from featureserver.utils import merge


def _extent_patch(
    geojson: Mapping[str, Any],
    options: Mapping[str, Any],
) -> dict[str, Any]:
    """Return an ``extent`` entry, or nothing when none was computed."""
    layer_extent = extent.compute_extent(geojson, options)
    if layer_extent is None:
        return {}
    return {"extent": layer_extent}


def _drawing_info_patch(
    drawing_info: Mapping[str, Any],
    geometry: str | None,
    options: Mapping[str, Any],
) -> dict[str, Any]:
    """Return ``drawingInfo`` with the selected renderer and labeling."""
    patched = dict(drawing_info)
    patched["renderer"] = renderers.select_renderer(
        options.get("renderer"), geometry
    )
    labeling_info = options.get("labelingInfo")
    if labeling_info is not None:
        patched["labelingInfo"] = labeling_info
    return {"drawingInfo": patched}


def _quantization_supported(options: Mapping[str, Any]) -> bool:
    """Tell whether the ``quantization`` capability is switched on."""
    capabilities = options.get("capabilities") or {}
    if not isinstance(capabilities, Mapping):
        return False
    return bool(capabilities.get("quantization"))


def extend_feature_layer_metadata(
    descriptor: Mapping[str, Any],
    geojson: Mapping[str, Any],
    options: Mapping[str, Any],
) -> models.Descriptor:
    """Layer the feature-specific fields onto a table descriptor.

    Args:
        descriptor: Table-level descriptor for the same input.
        geojson: Normalized ``FeatureCollection``.
        options: Normalized options bag.

    Returns:
        A new feature layer descriptor. None of the arguments is mutated.
    """
    result = {**descriptor, **defaults.feature_layer_defaults()}

    result["geometryType"] = geometry_type.resolve_geometry_type(
        {**geojson, **options}
    )
    result["supportsCoordinatesQuantization"] = _quantization_supported(
        options
    )
    result.update(_extent_patch(geojson, options))
    result.update(
        _drawing_info_patch(
            result["drawingInfo"], result["geometryType"], options
        )
    )

    return merge.merge_defined(
        result,
        {
            "minScale": options.get("minScale"),
            "maxScale": options.get("maxScale"),
        },
    )


def build_feature_layer_metadata(
    geojson: Any,
    options: Any = None,
) -> models.Descriptor:
    """Build the metadata descriptor of a feature layer.

    Input is normalized once and shared by the table and feature steps.

    Args:
        geojson: Bare geometry, ``Feature`` or ``FeatureCollection``.
        options: Options bag or None. See the package docs for the
            recognised keys.

    Returns:
        Feature layer descriptor, ready for JSON serialization.

    Raises:
        GeoJSONError: If the input has an unusable shape.
        ExtentError: If an ``extent`` override is malformed.
        pyproj.exceptions.CRSError: If ``inputCrs``/``sourceSR`` cannot be
            parsed.
        SpatialReferenceError: If a CRS value has an unsupported shape.
    """
    normalized = normalize.normalize_input(geojson, options)
    base = table.mixin_table_overrides(
        defaults.table_layer_defaults(),
        normalized.geojson,
        normalized.options,
    )
    return extend_feature_layer_metadata(
        base, normalized.geojson, normalized.options
    )
