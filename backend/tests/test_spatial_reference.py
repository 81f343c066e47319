"""Unit tests for spatial reference resolution.

pyproj is exercised for EPSG codes and rejected strings; plain WKIDs never
reach pyproj.
"""

from __future__ import annotations

import pyproj.exceptions
import pytest

from featureserver.metadata import spatial_reference

EMPTY = {"type": "FeatureCollection", "features": []}


def test_default_is_wgs84() -> None:
    assert spatial_reference.resolve_spatial_reference(EMPTY, {}) == {
        "wkid": 4326,
        "latestWkid": 4326,
    }


def test_input_crs_takes_precedence() -> None:
    sr = spatial_reference.resolve_spatial_reference(
        EMPTY, {"inputCrs": 3857, "sourceSR": 4269}
    )
    assert sr == {"wkid": 3857, "latestWkid": 3857}


def test_source_sr_object() -> None:
    sr = spatial_reference.resolve_spatial_reference(
        EMPTY, {"sourceSR": {"wkid": 102100, "latestWkid": 3857}}
    )
    assert sr == {"wkid": 102100, "latestWkid": 3857}


def test_geojson_crs_member() -> None:
    geojson = {
        **EMPTY,
        "crs": {
            "type": "name",
            "properties": {"name": "urn:ogc:def:crs:EPSG::3857"},
        },
    }
    sr = spatial_reference.resolve_spatial_reference(geojson, {})
    assert sr == {"wkid": 3857, "latestWkid": 3857}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (4326, {"wkid": 4326, "latestWkid": 4326}),
        ("2154", {"wkid": 2154, "latestWkid": 2154}),
        (900913, {"wkid": 900913, "latestWkid": 3857}),
        ("EPSG:3857", {"wkid": 3857, "latestWkid": 3857}),
        ("urn:ogc:def:crs:OGC:1.3:CRS84", {"wkid": 4326, "latestWkid": 4326}),
        ({"latestWkid": 3857}, {"wkid": 3857, "latestWkid": 3857}),
    ],
)
def test_normalize_spatial_reference(value: object, expected: dict) -> None:
    assert spatial_reference.normalize_spatial_reference(value) == expected


def test_unparseable_crs_propagates() -> None:
    with pytest.raises(pyproj.exceptions.CRSError):
        spatial_reference.resolve_spatial_reference(
            EMPTY, {"inputCrs": "not a crs"}
        )


@pytest.mark.parametrize(
    "value", [True, 1.5, {"name": "x"}, {"wkid": "abc"}, {"latestWkid": [1]}]
)
def test_unsupported_types_raise(value: object) -> None:
    with pytest.raises(spatial_reference.SpatialReferenceError):
        spatial_reference.normalize_spatial_reference(value)
