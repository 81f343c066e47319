"""Default drawing styles for feature layers.

Each factory returns a fresh Esri "simple" renderer so that descriptors
never share mutable renderer state.
"""

from __future__ import annotations

from typing import Any

from featureserver.metadata import models


def _outline(color: list[int], width: float = 0.5) -> dict[str, Any]:
    return {
        "type": "esriSLS",
        "style": "esriSLSSolid",
        "color": color,
        "width": width,
    }


def _simple(symbol: dict[str, Any]) -> models.Renderer:
    return {
        "type": "simple",
        "symbol": symbol,
        "label": "",
        "description": "",
    }


def point_renderer() -> models.Renderer:
    """Simple marker renderer: translucent green circles."""
    return _simple(
        {
            "type": "esriSMS",
            "style": "esriSMSCircle",
            "color": [45, 172, 128, 161],
            "size": 7.5,
            "angle": 0,
            "xoffset": 0,
            "yoffset": 0,
            "outline": _outline([190, 190, 190, 105]),
        }
    )


def line_renderer() -> models.Renderer:
    """Simple line renderer: solid orange lines."""
    return _simple(
        {
            "type": "esriSLS",
            "style": "esriSLSSolid",
            "color": [247, 150, 70, 204],
            "width": 7,
        }
    )


def polygon_renderer() -> models.Renderer:
    """Simple fill renderer: translucent blue fill with grey outline."""
    return _simple(
        {
            "type": "esriSFS",
            "style": "esriSFSSolid",
            "color": [75, 172, 198, 161],
            "outline": _outline([150, 150, 150, 155]),
        }
    )


def select_renderer(explicit: Any, geometry_type: str | None) -> Any:
    """Pick the renderer for a layer.

    A caller-supplied renderer is returned as is, without inspecting its
    shape. Otherwise the default follows the geometry type; points,
    multipoints and unknown types all get the point style.

    Args:
        explicit: Renderer from the options bag, or None.
        geometry_type: Resolved Esri geometry type, or None.

    Returns:
        The renderer to attach to ``drawingInfo``.
    """
    if explicit is not None:
        return explicit
    if geometry_type == models.POLYGON:
        return polygon_renderer()
    if geometry_type == models.POLYLINE:
        return line_renderer()
    return point_renderer()
