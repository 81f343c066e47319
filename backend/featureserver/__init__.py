"""Feature server package deriving layer metadata from GeoJSON.

This package turns arbitrary GeoJSON payloads and a loosely typed options
bag into the layer descriptors a map client needs to render and query a
vector layer: geometry type, spatial extent, drawing info, scale range and
capability flags.

- Normalizes bare geometries and single features into feature collections
- Infers geometry types and attribute fields from the data
- Computes extents, dropping them instead of failing on bad coordinates
- Picks a default renderer per geometry type unless one is supplied
- Exposes the pipeline through a small FastAPI service

See README and module sub-docstrings for details on architecture and usage.
"""
