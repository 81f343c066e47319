"""Layer metadata derivation pipeline.

Re-exports the two builders so callers have one stable import location.

Example:
    Build descriptors for a layer:
        >>> from featureserver.metadata import (
        ...     build_feature_layer_metadata,
        ...     build_table_layer_metadata,
        ... )
        >>> descriptor = build_feature_layer_metadata(geojson, {"minScale": 0})
"""

from featureserver.metadata.feature import build_feature_layer_metadata
from featureserver.metadata.table import build_table_layer_metadata

__all__ = ["build_feature_layer_metadata", "build_table_layer_metadata"]
