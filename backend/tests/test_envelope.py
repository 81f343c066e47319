"""Unit tests for envelope computation over GeoJSON features."""

from __future__ import annotations

import math

import pytest

from featureserver.metadata import envelope


def _collection(*geometries: dict | None) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": geometry, "properties": {}}
            for geometry in geometries
        ],
    }


def test_mixed_geometries() -> None:
    """Bounds cover every position of every geometry type."""
    geojson = _collection(
        {"type": "Point", "coordinates": [5, 5]},
        {"type": "LineString", "coordinates": [[-1, 2], [3, 8]]},
        {
            "type": "MultiPolygon",
            "coordinates": [[[[0, -4], [2, -4], [2, 0], [0, -4]]]],
        },
        {
            "type": "GeometryCollection",
            "geometries": [{"type": "Point", "coordinates": [10, 1, 99]}],
        },
    )
    assert envelope.envelope_of(geojson) == (-1.0, -4.0, 10.0, 8.0)


def test_null_geometries_are_skipped() -> None:
    geojson = _collection(None, {"type": "Point", "coordinates": [1, 2]})
    assert envelope.envelope_of(geojson) == (1.0, 2.0, 1.0, 2.0)


def test_no_geometry_leaves_infinite_bounds() -> None:
    xmin, ymin, xmax, ymax = envelope.envelope_of(_collection(None))
    assert xmin == ymin == math.inf
    assert xmax == ymax == -math.inf


def test_nan_coordinate_propagates() -> None:
    """A NaN anywhere poisons its axis, whatever the feature order."""
    geojson = _collection(
        {"type": "Point", "coordinates": [1, 2]},
        {"type": "Point", "coordinates": [math.nan, 4]},
        {"type": "Point", "coordinates": [3, 0]},
    )
    xmin, ymin, xmax, ymax = envelope.envelope_of(geojson)
    assert math.isnan(xmin)
    assert math.isnan(xmax)
    assert (ymin, ymax) == (0.0, 4.0)


@pytest.mark.parametrize(
    "geometry",
    [
        {"type": "Point", "coordinates": []},
        {"type": "Point", "coordinates": ["a", "b"]},
        {"type": "LineString", "coordinates": 5},
        {"type": "Curve", "coordinates": [0, 0]},
        {"coordinates": [0, 0]},
    ],
)
def test_malformed_geometry_raises(geometry: dict) -> None:
    with pytest.raises((TypeError, ValueError, KeyError, IndexError)):
        envelope.envelope_of(_collection(geometry))
