"""Layer metadata derivation API endpoints.

This module exposes the metadata pipeline over HTTP. Clients post a GeoJSON
document with an options bag and receive the layer descriptor that a map
client needs to render and query the layer.

Example:
    Derive a feature layer descriptor:
        >>> response = client.post(
        ...     "/api/layers/metadata",
        ...     json={
        ...         "geojson": {"type": "Point", "coordinates": [1, 2]},
        ...         "options": {"name": "sites", "minScale": 50000},
        ...     },
        ... )
        >>> descriptor = response.json()
        >>> # Returns: {"type": "Feature Layer",
        >>> #           "geometryType": "esriGeometryPoint", ...}

    Derive a table descriptor instead:
        >>> response = client.post(
        ...     "/api/layers/metadata",
        ...     params={"kind": "table"},
        ...     json={"geojson": {"type": "FeatureCollection", "features": []}},
        ... )
"""

from __future__ import annotations

import logging
from typing import Any, Literal

import fastapi
import pydantic
import pyproj.exceptions

from featureserver.metadata import (
    extent,
    feature,
    normalize,
    spatial_reference,
    table,
)

logger = logging.getLogger(__name__)

router = fastapi.APIRouter(prefix="/api/layers", tags=["layers"])


class LayerOptions(pydantic.BaseModel):
    """Options bag accepted alongside the GeoJSON document.

    Only the keys the pipeline reads with a fixed type are declared; any
    other key is accepted and passed through untouched.
    """

    model_config = pydantic.ConfigDict(extra="allow", populate_by_name=True)

    renderer: dict[str, Any] | None = None
    labeling_info: list[Any] | dict[str, Any] | None = pydantic.Field(
        default=None, alias="labelingInfo"
    )
    extent: dict[str, Any] | list[Any] | None = None
    input_crs: int | str | dict[str, Any] | None = pydantic.Field(
        default=None, alias="inputCrs"
    )
    source_sr: int | str | dict[str, Any] | None = pydantic.Field(
        default=None, alias="sourceSR"
    )
    capabilities: dict[str, bool] | None = None
    min_scale: float | None = pydantic.Field(default=None, alias="minScale")
    max_scale: float | None = pydantic.Field(default=None, alias="maxScale")
    geometry_type: str | None = pydantic.Field(
        default=None, alias="geometryType"
    )


class LayerMetadataRequest(pydantic.BaseModel):
    geojson: dict[str, Any] | None = None
    options: LayerOptions = pydantic.Field(default_factory=LayerOptions)


def _options_bag(options: LayerOptions) -> dict[str, Any]:
    """Dump options back to the camelCase bag, keeping only sent keys."""
    return options.model_dump(by_alias=True, exclude_unset=True)


@router.post("/metadata")
async def describe_layer(
    request: LayerMetadataRequest,
    kind: Literal["feature", "table"] = "feature",
) -> dict[str, Any]:
    """Derive a layer descriptor from a GeoJSON document.

    Args:
        request: GeoJSON document and options bag.
        kind: ``"feature"`` for layers with geometry (default) or
            ``"table"`` for attribute-only layers.

    Returns:
        The layer descriptor as a JSON object.

    Raises:
        HTTPException: If the document, an extent override or a spatial
            reference cannot be interpreted (400 status code).

    Example:
        >>> response = client.post(
        ...     "/api/layers/metadata",
        ...     json={"geojson": {"type": "FeatureCollection", "features": [
        ...         {"type": "Feature",
        ...          "geometry": {"type": "Point", "coordinates": [1, 2]}},
        ...     ]}},
        ... )
        >>> response.json()["extent"]
        >>> # Returns: {"xmin": 1.0, "ymin": 2.0, "xmax": 1.0, "ymax": 2.0,
        >>> #           "spatialReference": {"wkid": 4326, "latestWkid": 4326}}
    """
    options = _options_bag(request.options)
    builder = (
        feature.build_feature_layer_metadata
        if kind == "feature"
        else table.build_table_layer_metadata
    )
    try:
        return builder(request.geojson, options)
    except (
        normalize.GeoJSONError,
        extent.ExtentError,
        spatial_reference.SpatialReferenceError,
        pyproj.exceptions.CRSError,
    ) as e:
        logger.info("Rejected %s metadata request: %s", kind, e)
        raise fastapi.HTTPException(status_code=400, detail=str(e)) from e
