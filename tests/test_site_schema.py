"""
tests/test_site_schema.py

Unit tests for the static site field registry.
"""

from __future__ import annotations

import pytest

from app.domain.site_schema import DEFAULT_SITE_SCHEMA, TEMPLATE_FILENAME, FieldKind


class TestSiteSchemaRegistry:
    def test_required_fields_in_order(self) -> None:
        assert DEFAULT_SITE_SCHEMA.required_fields == ("site_name", "latitude", "longitude")

    def test_optional_fields_in_order(self) -> None:
        assert DEFAULT_SITE_SCHEMA.optional_fields == (
            "risk_status",
            "site_type",
            "authority",
            "summer_capacity",
            "winter_capacity",
            "functional_location",
            "licence_area",
            "power_transformers",
            "site_voltage",
            "what3words",
            "type",
            "voltage_transformer_ratings",
            "connection_queue",
        )

    def test_all_fields_lists_required_then_optional(self) -> None:
        all_fields = DEFAULT_SITE_SCHEMA.all_fields
        assert len(all_fields) == 16
        assert all_fields[:3] == DEFAULT_SITE_SCHEMA.required_fields

    def test_risk_status_is_enumerated(self) -> None:
        assert DEFAULT_SITE_SCHEMA.allowed_values("risk_status") == ("High", "Low")

    @pytest.mark.parametrize("name", ["site_name", "summer_capacity", "unknown"])
    def test_non_enumerated_fields_have_no_constraint(self, name: str) -> None:
        assert DEFAULT_SITE_SCHEMA.allowed_values(name) is None

    def test_capacities_are_numeric(self) -> None:
        assert DEFAULT_SITE_SCHEMA.get("summer_capacity").kind == FieldKind.NUMERIC
        assert DEFAULT_SITE_SCHEMA.get("winter_capacity").kind == FieldKind.NUMERIC

    def test_enum_match_is_exact(self) -> None:
        risk = DEFAULT_SITE_SCHEMA.get("risk_status")
        assert risk.accepts("High")
        assert risk.accepts("Low")
        assert not risk.accepts("high")
        assert not risk.accepts(" High ")
        assert not risk.accepts("Medium")

    def test_template_example_row_covers_every_field(self) -> None:
        example = DEFAULT_SITE_SCHEMA.template_example_row()
        assert tuple(example) == DEFAULT_SITE_SCHEMA.all_fields
        assert example["site_name"] == "Sample Site"

    def test_template_filename(self) -> None:
        assert TEMPLATE_FILENAME == "gis_sites_template.csv"
