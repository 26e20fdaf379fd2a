"""
app/domain/site_schema.py

Static field registry for GIS site uploads.
"""

from __future__ import annotations

from dataclasses import dataclass


class FieldKind:
    STRING = "string"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    ENUM = "enum"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class FieldDefinition:
    """
    One column accepted in a site upload.
    """

    name: str
    required: bool
    kind: str = FieldKind.STRING
    allowed_values: tuple[str, ...] = ()

    def accepts(self, raw: str) -> bool:
        """
        True when an enumerated value matches one of the allowed spellings
        exactly. No case folding or trimming is applied.
        """

        return raw in self.allowed_values


RISK_STATUS_VALUES: tuple[str, ...] = ("High", "Low")

TEMPLATE_FILENAME = "gis_sites_template.csv"

_FIELDS: tuple[FieldDefinition, ...] = (
    FieldDefinition("site_name", required=True),
    FieldDefinition("latitude", required=True, kind=FieldKind.LATITUDE),
    FieldDefinition("longitude", required=True, kind=FieldKind.LONGITUDE),
    FieldDefinition(
        "risk_status",
        required=False,
        kind=FieldKind.ENUM,
        allowed_values=RISK_STATUS_VALUES,
    ),
    FieldDefinition("site_type", required=False),
    FieldDefinition("authority", required=False),
    FieldDefinition("summer_capacity", required=False, kind=FieldKind.NUMERIC),
    FieldDefinition("winter_capacity", required=False, kind=FieldKind.NUMERIC),
    FieldDefinition("functional_location", required=False),
    FieldDefinition("licence_area", required=False),
    FieldDefinition("power_transformers", required=False),
    FieldDefinition("site_voltage", required=False),
    FieldDefinition("what3words", required=False),
    FieldDefinition("type", required=False),
    FieldDefinition("voltage_transformer_ratings", required=False),
    FieldDefinition("connection_queue", required=False),
)

# One illustrative row for the downloadable template, aligned with _FIELDS.
_TEMPLATE_EXAMPLE_ROW: tuple[str, ...] = (
    "Sample Site",
    "51.5074",
    "-0.1278",
    "High",
    "Substation",
    "Authority A",
    "100",
    "80",
    "FL001",
    "Area1",
    "T001",
    "400kV",
    "w3w.example",
    "Type1",
    "33kV",
    "Queue1",
)


class SiteSchemaRegistry:
    """
    Read-only view over the fixed site field definitions.
    """

    def __init__(self, fields: tuple[FieldDefinition, ...] = _FIELDS) -> None:
        self._fields = fields
        self._by_name = {definition.name: definition for definition in fields}

    @property
    def fields(self) -> tuple[FieldDefinition, ...]:
        return self._fields

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields if f.required)

    @property
    def optional_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields if not f.required)

    @property
    def all_fields(self) -> tuple[str, ...]:
        """Required then optional field names, in registry order."""
        return self.required_fields + self.optional_fields

    def get(self, name: str) -> FieldDefinition | None:
        return self._by_name.get(name)

    def allowed_values(self, name: str) -> tuple[str, ...] | None:
        """
        Return the enumerated constraint for a field, or None when the field
        is free-form or unknown.
        """

        definition = self._by_name.get(name)
        if definition is None or definition.kind != FieldKind.ENUM:
            return None
        return definition.allowed_values

    def template_example_row(self) -> dict[str, str]:
        return dict(zip(self.all_fields, _TEMPLATE_EXAMPLE_ROW))


DEFAULT_SITE_SCHEMA = SiteSchemaRegistry()
