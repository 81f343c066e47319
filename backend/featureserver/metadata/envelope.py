"""Envelope (bounding box) computation over GeoJSON features.

Walks every coordinate of every feature geometry and keeps the running
minimum and maximum per axis. Features with a ``null`` geometry are
skipped. A non-finite coordinate is carried into the matching bound
instead of being silently ignored, so callers can tell that the data was
bad. Malformed geometries raise the error Python raises while walking them
(``TypeError``, ``ValueError``, ``KeyError``, ``IndexError``).

Example:
    >>> from featureserver.metadata.envelope import envelope_of
    >>> envelope_of({
    ...     "type": "FeatureCollection",
    ...     "features": [
    ...         {"type": "Feature",
    ...          "geometry": {"type": "Point", "coordinates": [1, 2]}},
    ...         {"type": "Feature",
    ...          "geometry": {"type": "Point", "coordinates": [3, 4]}},
    ...     ],
    ... })
    (1.0, 2.0, 3.0, 4.0)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from featureserver.metadata import models

# Nesting depth of "coordinates" per geometry type.
_COORDINATE_DEPTH = {
    "Point": 0,
    "MultiPoint": 1,
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}


def _positions(coordinates: Any, depth: int) -> Iterator[Any]:
    """Yield the positions nested ``depth`` levels below ``coordinates``."""
    if depth == 0:
        yield coordinates
        return
    for part in coordinates:
        yield from _positions(part, depth - 1)


def iter_positions(geometry: Mapping[str, Any]) -> Iterator[tuple[float, float]]:
    """Yield the ``(x, y)`` pair of every position in a geometry.

    Args:
        geometry: GeoJSON geometry object.

    Yields:
        x and y as floats; extra ordinates (z, m) are ignored.

    Raises:
        ValueError: If the geometry type is unknown.
    """
    geometry_type = geometry["type"]
    if geometry_type == "GeometryCollection":
        for member in geometry["geometries"]:
            yield from iter_positions(member)
        return

    if geometry_type not in _COORDINATE_DEPTH:
        raise ValueError(f"Unknown geometry type: {geometry_type!r}")

    for position in _positions(
        geometry["coordinates"], _COORDINATE_DEPTH[geometry_type]
    ):
        yield float(position[0]), float(position[1])


def _lower(current: float, value: float) -> float:
    """Return the smaller value, or NaN if either side is NaN."""
    if math.isnan(current) or math.isnan(value):
        return math.nan
    return min(current, value)


def _upper(current: float, value: float) -> float:
    """Return the larger value, or NaN if either side is NaN."""
    if math.isnan(current) or math.isnan(value):
        return math.nan
    return max(current, value)


def envelope_of(geojson: Mapping[str, Any]) -> models.BBox:
    """Compute the bounding box of all feature geometries.

    Args:
        geojson: Normalized ``FeatureCollection``.

    Returns:
        ``(xmin, ymin, xmax, ymax)``. Without any geometry the bounds stay
        at ``inf``/``-inf``; a NaN coordinate makes its bounds NaN.
    """
    xmin = ymin = math.inf
    xmax = ymax = -math.inf
    for feature in geojson["features"]:
        geometry = feature.get("geometry")
        if geometry is None:
            continue
        for x, y in iter_positions(geometry):
            xmin, xmax = _lower(xmin, x), _upper(xmax, x)
            ymin, ymax = _lower(ymin, y), _upper(ymax, y)
    return xmin, ymin, xmax, ymax
