"""Structural defaults for table and feature layer descriptors.

Both functions build a new dictionary on every call; callers are free to
modify the result. Values that depend on deployment (service version,
record limits) come from settings.
"""

from __future__ import annotations

from featureserver.core import config
from featureserver.metadata import models

OBJECT_ID_FIELD = "OBJECTID"


def table_layer_defaults() -> models.Descriptor:
    """Defaults shared by every layer, tables included."""
    settings = config.get_settings()
    return {
        "currentVersion": settings.current_version,
        "id": 0,
        "name": "Not Set",
        "type": "Table",
        "description": "",
        "copyrightText": "",
        "parentLayer": None,
        "subLayers": None,
        "defaultVisibility": True,
        "hasAttachments": False,
        "htmlPopupType": "esriServerHTMLPopupTypeNone",
        "displayField": OBJECT_ID_FIELD,
        "typeIdField": None,
        "fields": [],
        "relationships": [],
        "canModifyLayer": False,
        "canScaleSymbols": False,
        "hasStaticData": False,
        "isDataVersioned": False,
        "supportsRollbackOnFailureParameter": False,
        "supportsStatistics": True,
        "supportsAdvancedQueries": True,
        "supportsValidateSQL": False,
        "supportsCalculate": False,
        "objectIdField": OBJECT_ID_FIELD,
        "uniqueIdField": {"name": OBJECT_ID_FIELD, "isSystemMaintained": True},
        "globalIdField": "",
        "types": [],
        "templates": [],
        "capabilities": "Query",
        "maxRecordCount": settings.max_record_count,
        "standardMaxRecordCount": settings.max_record_count,
        "supportedQueryFormats": "JSON",
        "useStandardizedQueries": True,
        "advancedQueryCapabilities": {
            "useStandardizedQueries": True,
            "supportsStatistics": True,
            "supportsOrderBy": True,
            "supportsDistinct": True,
            "supportsPagination": True,
            "supportsTrueCurve": False,
            "supportsReturningQueryExtent": True,
            "supportsQueryWithDistance": True,
        },
        "dateFieldsTimeReference": None,
        "ownershipBasedAccessControlForFeatures": None,
    }


def feature_layer_defaults() -> models.Descriptor:
    """Defaults owned by feature layers, merged over the table defaults."""
    return {
        "type": "Feature Layer",
        "geometryType": None,
        "minScale": 0,
        "maxScale": 0,
        "hasZ": False,
        "hasM": False,
        "hasLabels": False,
        "allowGeometryUpdates": False,
        "supportsCoordinatesQuantization": False,
        "drawingInfo": {
            "renderer": {},
            "labelingInfo": None,
            "transparency": 0,
        },
    }
