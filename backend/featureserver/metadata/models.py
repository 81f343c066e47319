"""Data models shared by the metadata derivation pipeline.

Descriptors are JSON-ready dictionaries, so the models here are typed
aliases and ``TypedDict``/``NamedTuple`` shapes rather than classes with
behaviour. All bounding boxes are ordered ``(xmin, ymin, xmax, ymax)``.

Example:
    An extent as attached to a feature layer descriptor:
        >>> from featureserver.metadata.models import Extent
        >>> extent: Extent = {
        ...     "xmin": -180.0,
        ...     "ymin": -90.0,
        ...     "xmax": 180.0,
        ...     "ymax": 90.0,
        ...     "spatialReference": {"wkid": 4326, "latestWkid": 4326},
        ... }
"""

from __future__ import annotations

from typing import Any, Literal, NamedTuple, TypedDict

BBox = tuple[float, float, float, float]
GeoJSON = dict[str, Any]
Options = dict[str, Any]
Descriptor = dict[str, Any]
SpatialReference = dict[str, Any]
Renderer = dict[str, Any]

EsriGeometryType = Literal[
    "esriGeometryPoint",
    "esriGeometryMultipoint",
    "esriGeometryPolyline",
    "esriGeometryPolygon",
]

POINT: EsriGeometryType = "esriGeometryPoint"
MULTIPOINT: EsriGeometryType = "esriGeometryMultipoint"
POLYLINE: EsriGeometryType = "esriGeometryPolyline"
POLYGON: EsriGeometryType = "esriGeometryPolygon"

GEOMETRY_TYPES = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)


class Extent(TypedDict):
    """Spatial extent of a layer.

    All four bounds are present together; a layer without a usable extent
    simply has no ``extent`` key.

    Attributes:
        xmin: Minimum x coordinate.
        ymin: Minimum y coordinate.
        xmax: Maximum x coordinate.
        ymax: Maximum y coordinate.
        spatialReference: Coordinate system of the bounds.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float
    spatialReference: SpatialReference


class NormalizedInput(NamedTuple):
    geojson: GeoJSON
    options: Options
