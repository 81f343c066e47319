"""Unit tests for layer extent calculation.

Covers explicit overrides (which must never trigger an envelope scan),
envelope-based extents, and the degrade-to-no-extent policy for empty and
invalid data, including the single debug diagnostic it emits.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import pytest

from featureserver.metadata import envelope, extent

WGS84 = {"wkid": 4326, "latestWkid": 4326}


def _collection(*geometries: dict | None) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": geometry, "properties": {}}
            for geometry in geometries
        ],
    }


def _extent_records(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [
        record.getMessage()
        for record in caplog.records
        if record.name == extent.logger.name
    ]


def test_extent_from_features() -> None:
    geojson = _collection(
        {"type": "Point", "coordinates": [1, 2]},
        {"type": "Point", "coordinates": [3, 4]},
    )
    assert extent.compute_extent(geojson, {}) == {
        "xmin": 1.0,
        "ymin": 2.0,
        "xmax": 3.0,
        "ymax": 4.0,
        "spatialReference": WGS84,
    }


def test_extent_uses_resolved_spatial_reference() -> None:
    geojson = _collection({"type": "Point", "coordinates": [1, 2]})
    result = extent.compute_extent(geojson, {"inputCrs": 102100})
    assert result is not None
    assert result["spatialReference"] == {"wkid": 102100, "latestWkid": 3857}


def test_empty_collection_has_no_extent(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger=extent.logger.name)
    assert extent.compute_extent(_collection(), {}) is None
    assert _extent_records(caplog) == []


def test_nan_coordinate_drops_extent(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger=extent.logger.name)
    geojson = _collection(
        {"type": "Point", "coordinates": [1, 2]},
        {"type": "Point", "coordinates": [math.nan, 4]},
    )
    assert extent.compute_extent(geojson, {}) is None
    messages = _extent_records(caplog)
    assert len(messages) == 1
    assert messages[0].startswith("Could not calculate extent from data")


def test_only_null_geometries_drop_extent(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger=extent.logger.name)
    assert extent.compute_extent(_collection(None, None), {}) is None
    assert len(_extent_records(caplog)) == 1


def test_envelope_exception_is_absorbed(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger=extent.logger.name)
    geojson = _collection({"type": "Point", "coordinates": "oops"})
    assert extent.compute_extent(geojson, {}) is None
    assert len(_extent_records(caplog)) == 1


def test_override_skips_envelope(monkeypatch: pytest.MonkeyPatch) -> None:
    """An explicit extent is normalized and features are never scanned."""

    def fail_envelope(geojson: Any) -> None:
        raise AssertionError("envelope_of must not be called")

    monkeypatch.setattr(envelope, "envelope_of", fail_envelope)
    geojson = _collection({"type": "Point", "coordinates": [100, 100]})
    result = extent.compute_extent(
        geojson, {"extent": [-10, -5, 10, 5], "inputCrs": 3857}
    )
    assert result == {
        "xmin": -10.0,
        "ymin": -5.0,
        "xmax": 10.0,
        "ymax": 5.0,
        "spatialReference": {"wkid": 3857, "latestWkid": 3857},
    }


@pytest.mark.parametrize(
    "override",
    [
        {"xmin": 0, "ymin": 1, "xmax": 2, "ymax": 3},
        [0, 1, 2, 3],
        [[0, 1], [2, 3]],
        ("0", "1", "2", "3"),
    ],
)
def test_normalize_extent_shapes(override: Any) -> None:
    assert extent.normalize_extent(override, WGS84) == {
        "xmin": 0.0,
        "ymin": 1.0,
        "xmax": 2.0,
        "ymax": 3.0,
        "spatialReference": WGS84,
    }


def test_normalize_extent_keeps_own_spatial_reference() -> None:
    result = extent.normalize_extent(
        {
            "xmin": 0,
            "ymin": 0,
            "xmax": 1,
            "ymax": 1,
            "spatialReference": {"wkid": 102100},
        },
        WGS84,
    )
    assert result["spatialReference"] == {"wkid": 102100, "latestWkid": 3857}


@pytest.mark.parametrize(
    "override",
    [
        {"xmin": 0, "ymin": 1, "xmax": 2},
        [0, 1, 2],
        "0,1,2,3",
        [0, 1, "two", 3],
        {},
    ],
)
def test_invalid_override_raises(override: Any) -> None:
    with pytest.raises(extent.ExtentError):
        extent.compute_extent(_collection(), {"extent": override})
