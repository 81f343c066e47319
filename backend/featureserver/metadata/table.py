"""Table-level layer descriptor builder.

Produces the descriptor fields every layer has, whether or not it carries
geometry: identity, attribute fields, object ID handling, capabilities and
paging limits. Feature layers start from this descriptor and add their own
fields on top (see ``featureserver.metadata.feature``).

Field ownership:
    ``id``, ``name``, ``description``, ``copyrightText``, ``fields``,
    ``objectIdField``, ``uniqueIdField``, ``displayField``,
    ``capabilities``, ``hasStaticData``, ``maxRecordCount`` and the rest of
    ``defaults.table_layer_defaults()``.

Example:
    >>> from featureserver.metadata.table import build_table_layer_metadata
    >>> descriptor = build_table_layer_metadata(
    ...     {"type": "FeatureCollection", "features": [
    ...         {"type": "Feature", "geometry": None,
    ...          "properties": {"name": "Oslo", "population": 709037}},
    ...     ]},
    ...     {"name": "cities", "layerId": 1},
    ... )
    >>> [field["name"] for field in descriptor["fields"]]
    ['OBJECTID', 'name', 'population']
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any

from featureserver.metadata import defaults, models, normalize
from featureserver.utils import merge

FIELD_TYPES: dict[str, str] = {
    "string": "esriFieldTypeString",
    "integer": "esriFieldTypeInteger",
    "double": "esriFieldTypeDouble",
    "date": "esriFieldTypeDate",
    "boolean": "esriFieldTypeSmallInteger",
    "oid": "esriFieldTypeOID",
}

STRING_FIELD_LENGTH = 128


def _is_date(value: str) -> bool:
    if "-" not in value:
        return False
    try:
        datetime.datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def infer_field_type(value: Any) -> str:
    """Map a property value to an Esri field type."""
    if isinstance(value, bool):
        return FIELD_TYPES["boolean"]
    if isinstance(value, int):
        return FIELD_TYPES["integer"]
    if isinstance(value, float):
        return FIELD_TYPES["double"]
    if isinstance(value, str) and _is_date(value):
        return FIELD_TYPES["date"]
    return FIELD_TYPES["string"]


def _field(name: str, field_type: str, alias: str | None = None) -> dict[str, Any]:
    field: dict[str, Any] = {
        "name": name,
        "type": field_type,
        "alias": alias or name,
        "sqlType": "sqlTypeOther",
        "domain": None,
        "defaultValue": None,
        "editable": False,
        "nullable": True,
    }
    if field_type == FIELD_TYPES["string"]:
        field["length"] = STRING_FIELD_LENGTH
    return field


def _object_id_field(name: str) -> dict[str, Any]:
    field = _field(name, FIELD_TYPES["oid"])
    field.update(sqlType="sqlTypeInteger", nullable=False)
    return field


def _explicit_field_type(field_type: Any) -> str:
    if isinstance(field_type, str):
        if field_type.startswith("esriFieldType"):
            return field_type
        return FIELD_TYPES.get(field_type.lower(), FIELD_TYPES["string"])
    return FIELD_TYPES["string"]


def _fields_from_options(fields: list[Any], id_field: str) -> list[dict[str, Any]]:
    result = [_object_id_field(id_field)]
    for definition in fields:
        if not isinstance(definition, Mapping) or not definition.get("name"):
            raise normalize.GeoJSONError(
                f"Field definitions need a name: {definition!r}"
            )
        if definition["name"] == id_field:
            continue
        result.append(
            _field(
                str(definition["name"]),
                _explicit_field_type(definition.get("type")),
                definition.get("alias"),
            )
        )
    return result


def _fields_from_features(
    features: list[Any],
    id_field: str,
) -> list[dict[str, Any]]:
    result = [_object_id_field(id_field)]
    if not features or not isinstance(features[0], Mapping):
        return result

    names = [
        name for name in (features[0].get("properties") or {}) if name != id_field
    ]
    for name in names:
        sample = next(
            (
                feature["properties"][name]
                for feature in features
                if isinstance(feature, Mapping)
                and isinstance(feature.get("properties"), Mapping)
                and feature["properties"].get(name) is not None
            ),
            None,
        )
        result.append(_field(name, infer_field_type(sample)))
    return result


def _capabilities(capabilities: Any) -> str:
    names = ["Query"]
    if isinstance(capabilities, Mapping) and capabilities.get("extract"):
        names.append("Extract")
    return ",".join(names)


def mixin_table_overrides(
    descriptor: Mapping[str, Any],
    geojson: Mapping[str, Any],
    options: Mapping[str, Any],
) -> models.Descriptor:
    """Apply table-level overrides derived from the data and options.

    Args:
        descriptor: Descriptor to start from (normally the table defaults).
        geojson: Normalized ``FeatureCollection``.
        options: Normalized options bag.

    Returns:
        A new descriptor; ``descriptor`` itself is left untouched.

    Raises:
        GeoJSONError: If an explicit field definition has no name or
            ``layerId`` is not an integer.
    """
    result = dict(descriptor)
    id_field = options.get("idField") or defaults.OBJECT_ID_FIELD

    if options.get("layerId") is not None:
        try:
            result["id"] = int(options["layerId"])
        except (TypeError, ValueError) as e:
            raise normalize.GeoJSONError(
                f"Received invalid layerId: {options['layerId']!r}"
            ) from e

    explicit_fields = options.get("fields")
    if explicit_fields:
        result["fields"] = _fields_from_options(list(explicit_fields), id_field)
    else:
        result["fields"] = _fields_from_features(geojson["features"], id_field)

    result["objectIdField"] = id_field
    result["uniqueIdField"] = {"name": id_field, "isSystemMaintained": True}
    result["displayField"] = options.get("displayField") or id_field
    result["hasStaticData"] = bool(options.get("hasStaticData"))
    result["capabilities"] = _capabilities(options.get("capabilities"))

    return _set_direct_overrides(result, options)


def _set_direct_overrides(
    descriptor: models.Descriptor,
    options: Mapping[str, Any],
) -> models.Descriptor:
    return merge.merge_defined(
        descriptor,
        {
            "name": options.get("name"),
            "description": options.get("description"),
            "copyrightText": options.get("copyrightText"),
            "maxRecordCount": options.get("maxRecordCount"),
        },
    )


def build_table_layer_metadata(
    geojson: Any,
    options: Any = None,
) -> models.Descriptor:
    """Build the descriptor of a layer without geometry.

    Args:
        geojson: Any GeoJSON form accepted by ``normalize_input``.
        options: Options bag or None.

    Returns:
        Table layer descriptor.
    """
    normalized = normalize.normalize_input(geojson, options)
    return mixin_table_overrides(
        defaults.table_layer_defaults(),
        normalized.geojson,
        normalized.options,
    )
