"""Spatial reference resolution for layer extents.

Resolves the coordinate system of a layer from, in order, the ``inputCrs``
option, the ``sourceSR`` option, the GeoJSON ``crs`` member and finally the
configured default WKID. Values may be integers, digit strings, Esri-style
``{"wkid": ...}``/``{"wkt": ...}`` objects, ``EPSG:xxxx`` codes, OGC URNs or
WKT strings. Anything that is not a plain WKID goes through pyproj.

Parse failures raise ``pyproj.exceptions.CRSError`` (unparseable strings) or
``SpatialReferenceError`` (unsupported shapes); neither is caught here.

Example:
    >>> from featureserver.metadata.spatial_reference import (
    ...     resolve_spatial_reference,
    ... )
    >>> resolve_spatial_reference({}, {"inputCrs": 102100})
    {'wkid': 102100, 'latestWkid': 3857}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pyproj

from featureserver.core import config
from featureserver.metadata import models

# Esri and legacy aliases of EPSG:3857.
LATEST_WKID: dict[int, int] = {
    102100: 3857,
    102113: 3857,
    900913: 3857,
}


class SpatialReferenceError(ValueError):
    """Raised when a spatial reference value has an unsupported shape."""


_CRS84_NAMES = frozenset(
    {
        "crs84",
        "ogc:crs84",
        "urn:ogc:def:crs:ogc:1.3:crs84",
        "urn:ogc:def:crs:ogc::crs84",
        "http://www.opengis.net/def/crs/ogc/1.3/crs84",
    }
)


def from_wkid(wkid: int) -> models.SpatialReference:
    """Build a spatial reference for a well-known ID."""
    return {"wkid": wkid, "latestWkid": LATEST_WKID.get(wkid, wkid)}


def _from_user_input(value: str) -> models.SpatialReference:
    """Parse a CRS string with pyproj, preferring an EPSG code over WKT."""
    crs = pyproj.CRS.from_user_input(value)
    epsg = crs.to_epsg()
    if epsg is not None:
        return from_wkid(epsg)
    return {"wkt": crs.to_wkt()}


def normalize_spatial_reference(value: Any) -> models.SpatialReference:
    """Normalize any supported CRS representation.

    Args:
        value: WKID, CRS string or Esri spatial reference object.

    Returns:
        ``{"wkid", "latestWkid"}`` or ``{"wkt"}``.

    Raises:
        pyproj.exceptions.CRSError: If a CRS string cannot be parsed.
        SpatialReferenceError: If the value has an unsupported shape.
    """
    if isinstance(value, bool):
        raise SpatialReferenceError("Spatial reference cannot be a boolean")

    if isinstance(value, int):
        return from_wkid(value)

    if isinstance(value, Mapping):
        wkid = value.get("wkid") or value.get("latestWkid")
        if wkid is not None:
            try:
                return from_wkid(int(wkid))
            except (TypeError, ValueError) as e:
                raise SpatialReferenceError(
                    f"Received invalid wkid: {wkid!r}"
                ) from e
        if value.get("wkt"):
            return _from_user_input(str(value["wkt"]))
        raise SpatialReferenceError(
            f"Unsupported spatial reference object: {value!r}"
        )

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return from_wkid(int(text))
        if text.lower() in _CRS84_NAMES:
            return from_wkid(4326)
        return _from_user_input(text)

    raise SpatialReferenceError(
        f"Unsupported spatial reference type: {type(value).__name__}"
    )


def _crs_from_geojson(geojson: Mapping[str, Any]) -> Any:
    crs = geojson.get("crs")
    if not isinstance(crs, Mapping):
        return None
    properties = crs.get("properties")
    if not isinstance(properties, Mapping):
        return None
    return properties.get("name")


def resolve_spatial_reference(
    geojson: Mapping[str, Any],
    options: Mapping[str, Any],
) -> models.SpatialReference:
    """Resolve the spatial reference of a layer.

    Args:
        geojson: Normalized GeoJSON document.
        options: Options bag, read for ``inputCrs`` and ``sourceSR``.

    Returns:
        Normalized spatial reference. Falls back to the configured
        ``default_wkid`` when nothing names a coordinate system.
    """
    source = (
        options.get("inputCrs")
        or options.get("sourceSR")
        or _crs_from_geojson(geojson)
    )
    if source is None:
        return from_wkid(config.get_settings().default_wkid)
    return normalize_spatial_reference(source)
