"""Layer extent calculation.

An explicit ``extent`` option always wins and is only normalized. Without
one, the extent is the envelope of all feature geometries. If that
envelope cannot be computed, or any of its bounds is not finite, the
extent is dropped for the whole layer and a debug message is logged; a
bad extent never stops the descriptor from being built.

Example:
    Normalize an override given as corner pairs:
        >>> from featureserver.metadata.extent import normalize_extent
        >>> normalize_extent([[0, 0], [10, 5]], {"wkid": 4326})
        {'xmin': 0.0, 'ymin': 0.0, 'xmax': 10.0, 'ymax': 5.0, 'spatialReference': {'wkid': 4326}}
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from featureserver.metadata import envelope, models, spatial_reference

logger = logging.getLogger(__name__)

_BOUNDS = ("xmin", "ymin", "xmax", "ymax")


class ExtentError(ValueError):
    """Raised when an extent override cannot be interpreted."""


def _to_extent(
    bounds: Sequence[Any],
    sr: models.SpatialReference,
) -> models.Extent:
    """Convert four bounds to floats and attach the spatial reference."""
    try:
        xmin, ymin, xmax, ymax = (float(value) for value in bounds)
    except (TypeError, ValueError) as e:
        raise ExtentError(f"Received invalid extent: {bounds!r}") from e
    return models.Extent(
        xmin=xmin,
        ymin=ymin,
        xmax=xmax,
        ymax=ymax,
        spatialReference=sr,
    )


def normalize_extent(
    extent: Any,
    sr: models.SpatialReference,
) -> models.Extent:
    """Normalize an extent override.

    Accepts an Esri-style object with ``xmin``/``ymin``/``xmax``/``ymax``
    (and optionally its own ``spatialReference``), a flat
    ``[xmin, ymin, xmax, ymax]`` sequence, or corner pairs
    ``[[xmin, ymin], [xmax, ymax]]``.

    Args:
        extent: The override as supplied by the caller.
        sr: Spatial reference resolved for the layer, used unless the
            override carries one.

    Returns:
        Extent with float bounds.

    Raises:
        ExtentError: If the override has none of the supported shapes.
    """
    if isinstance(extent, Mapping):
        if any(extent.get(key) is None for key in _BOUNDS):
            raise ExtentError(f"Received invalid extent: {extent!r}")
        own_sr = extent.get("spatialReference")
        if own_sr:
            sr = spatial_reference.normalize_spatial_reference(own_sr)
        return _to_extent([extent[key] for key in _BOUNDS], sr)

    if isinstance(extent, Sequence) and not isinstance(extent, str):
        if len(extent) == 4:
            return _to_extent(extent, sr)
        if (
            len(extent) == 2
            and all(
                isinstance(corner, Sequence) and len(corner) == 2
                for corner in extent
            )
        ):
            (xmin, ymin), (xmax, ymax) = extent
            return _to_extent((xmin, ymin, xmax, ymax), sr)

    raise ExtentError(f"Received invalid extent: {extent!r}")


def _extent_from_features(
    geojson: Mapping[str, Any],
    sr: models.SpatialReference,
) -> models.Extent | None:
    """Return the envelope of the features, or None if it is unusable."""
    if not geojson.get("features"):
        return None

    try:
        bbox = envelope.envelope_of(geojson)
        if not all(math.isfinite(coordinate) for coordinate in bbox):
            raise ValueError("Feature does not contain valid geometry")
        return _to_extent(bbox, sr)
    except Exception as e:  # noqa: BLE001
        logger.debug("Could not calculate extent from data: %s", e)
        return None


def compute_extent(
    geojson: Mapping[str, Any],
    options: Mapping[str, Any],
) -> models.Extent | None:
    """Compute the extent of a layer.

    Args:
        geojson: Normalized ``FeatureCollection``.
        options: Options bag; ``extent``, ``inputCrs`` and ``sourceSR`` are
            read.

    Returns:
        The normalized override when ``extent`` is given, otherwise the
        envelope of the features. None for an empty collection or when the
        envelope is unusable.

    Raises:
        ExtentError: If the ``extent`` override is malformed.
        pyproj.exceptions.CRSError: If a CRS string cannot be parsed.
        SpatialReferenceError: If a CRS value has an unsupported shape.
    """
    sr = spatial_reference.resolve_spatial_reference(geojson, options)

    override = options.get("extent")
    if override is not None:
        return normalize_extent(override, sr)

    return _extent_from_features(geojson, sr)
