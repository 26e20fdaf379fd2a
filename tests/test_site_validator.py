"""
tests/test_site_validator.py

Unit tests for SiteRowValidator.

Coverage
--------
- Empty file
- Missing required columns (file-level) and missing values (row-level)
- Latitude / longitude range and parse errors
- risk_status and capacity warnings that do not disqualify a row
- Finding order and report invariants
- Re-validation of the same rows
"""

from __future__ import annotations

import pytest

from app.domain.site_ingestion import FindingSeverity, RawRow
from app.validators.site_validator import SiteRowValidator
from tests.site_factories import parse_text


@pytest.fixture()
def validator() -> SiteRowValidator:
    return SiteRowValidator()


def _messages(findings) -> list[str]:
    return [finding.describe() for finding in findings]


class TestEmptyFile:
    def test_empty_file_is_invalid(self, validator: SiteRowValidator) -> None:
        report = validator.validate(())

        assert report.row_count == 0
        assert report.valid_row_count == 0
        assert not report.is_valid
        assert _messages(report.errors) == ["CSV file is empty"]
        assert report.errors[0].row_number is None

    def test_header_only_file_is_invalid(self, validator: SiteRowValidator) -> None:
        report = validator.validate(parse_text("site_name,latitude,longitude\n"))

        assert report.row_count == 0
        assert not report.is_valid


class TestScenarios:
    def test_out_of_range_latitude_excludes_row(self, validator: SiteRowValidator) -> None:
        report = validator.validate(parse_text("site_name,latitude,longitude\nA,91,10\nB,45,45"))

        assert report.row_count == 2
        assert report.valid_row_count == 1
        assert len(report.errors) == 1
        assert not report.is_valid
        assert _messages(report.errors) == ["Row 2: Invalid latitude (91)"]
        assert report.valid_row_numbers == frozenset({3})

    def test_unknown_risk_status_is_only_a_warning(self, validator: SiteRowValidator) -> None:
        report = validator.validate(
            parse_text("site_name,latitude,longitude,risk_status\nA,10,10,Medium")
        )

        assert report.valid_row_count == 1
        assert report.errors == ()
        assert len(report.warnings) == 1
        assert report.is_valid
        assert _messages(report.warnings) == [
            "Row 2: Invalid risk_status (Medium). Should be 'High' or 'Low'"
        ]


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["site_name", "latitude", "longitude"])
    def test_one_error_per_missing_value(self, validator: SiteRowValidator, field: str) -> None:
        values = {"site_name": "A", "latitude": "10", "longitude": "20"}
        values[field] = "   "
        report = validator.validate((RawRow(row_number=2, values=values),))

        assert _messages(report.errors) == [f"Row 2: Missing {field}"]
        assert report.errors[0].field == field
        assert report.valid_row_count == 0

    def test_all_required_values_missing(self, validator: SiteRowValidator) -> None:
        report = validator.validate(parse_text("site_name,latitude,longitude\n,,"))

        assert [f.field for f in report.errors] == ["site_name", "latitude", "longitude"]

    def test_missing_column_reported_once_at_header(self, validator: SiteRowValidator) -> None:
        report = validator.validate(parse_text("site_name,latitude\nA,10\nB,20"))

        assert report.missing_columns == ("longitude",)
        file_level = [f for f in report.errors if f.row_number == 1]
        assert _messages(file_level) == ["Row 1: Missing required column: longitude"]
        # every row is still examined so counts stay meaningful
        assert report.row_count == 2
        assert report.valid_row_count == 0
        assert len(report.errors) == 3

    def test_missing_columns_keep_registry_order(self, validator: SiteRowValidator) -> None:
        report = validator.validate(parse_text("site_type\nSubstation"))

        assert report.missing_columns == ("site_name", "latitude", "longitude")


class TestCoordinates:
    @pytest.mark.parametrize("value", ["-90", "90", "0", " 51.5074 ", "-0.0"])
    def test_latitude_bounds_inclusive(self, validator: SiteRowValidator, value: str) -> None:
        row = RawRow(2, {"site_name": "A", "latitude": value, "longitude": "0"})

        assert validator.validate_row(row) == []

    @pytest.mark.parametrize("value", ["-90.0001", "90.5", "abc", "nan", "inf", "12abc"])
    def test_invalid_latitude(self, validator: SiteRowValidator, value: str) -> None:
        row = RawRow(2, {"site_name": "A", "latitude": value, "longitude": "0"})

        findings = validator.validate_row(row)
        assert [f.message for f in findings] == [f"Invalid latitude ({value})"]
        assert findings[0].severity == FindingSeverity.ERROR

    @pytest.mark.parametrize("value", ["-180", "180", "-0.1278"])
    def test_longitude_bounds_inclusive(self, validator: SiteRowValidator, value: str) -> None:
        row = RawRow(2, {"site_name": "A", "latitude": "0", "longitude": value})

        assert validator.validate_row(row) == []

    @pytest.mark.parametrize("value", ["180.01", "-181", "east"])
    def test_invalid_longitude(self, validator: SiteRowValidator, value: str) -> None:
        row = RawRow(2, {"site_name": "A", "latitude": "0", "longitude": value})

        assert [f.message for f in validator.validate_row(row)] == [f"Invalid longitude ({value})"]


class TestWarnings:
    @pytest.mark.parametrize("value", ["High", "Low"])
    def test_accepted_risk_status(self, validator: SiteRowValidator, value: str) -> None:
        row = RawRow(2, {"site_name": "A", "latitude": "0", "longitude": "0", "risk_status": value})

        assert validator.validate_row(row) == []

    def test_risk_status_match_is_case_and_space_sensitive(
        self, validator: SiteRowValidator
    ) -> None:
        report = validator.validate(
            parse_text("site_name,latitude,longitude,risk_status\nA,10,10,low\nB,1,1, High ")
        )

        assert _messages(report.warnings) == [
            "Row 2: Invalid risk_status (low). Should be 'High' or 'Low'",
            "Row 3: Invalid risk_status ( High ). Should be 'High' or 'Low'",
        ]
        assert report.valid_row_count == 2
        assert report.is_valid

    @pytest.mark.parametrize("field", ["summer_capacity", "winter_capacity"])
    def test_unparsable_capacity_warns(self, validator: SiteRowValidator, field: str) -> None:
        report = validator.validate(
            (RawRow(2, {"site_name": "A", "latitude": "0", "longitude": "0", field: "lots"}),)
        )

        assert _messages(report.warnings) == [f"Row 2: Invalid {field} (lots)"]
        assert report.valid_row_count == 1
        assert report.is_valid

    def test_empty_optional_values_are_ignored(self, validator: SiteRowValidator) -> None:
        row = RawRow(
            2,
            {
                "site_name": "A",
                "latitude": "0",
                "longitude": "0",
                "risk_status": "",
                "summer_capacity": " ",
            },
        )

        assert validator.validate_row(row) == []

    def test_delimiter_only_line_reports_each_missing_value(
        self, validator: SiteRowValidator
    ) -> None:
        report = validator.validate(parse_text("site_name,latitude,longitude\n,,\n"))

        assert _messages(report.errors) == [
            "Row 2: Missing site_name",
            "Row 2: Missing latitude",
            "Row 2: Missing longitude",
        ]
        assert report.valid_row_count == 0

    def test_warnings_do_not_rescue_rows_with_errors(self, validator: SiteRowValidator) -> None:
        report = validator.validate(
            parse_text("site_name,latitude,longitude,risk_status\nA,100,0,Medium")
        )

        assert report.valid_row_count == 0
        assert len(report.errors) == 1
        assert len(report.warnings) == 1


class TestReport:
    def test_findings_follow_row_then_field_order(self, validator: SiteRowValidator) -> None:
        report = validator.validate(
            parse_text(
                "site_name,latitude,longitude,risk_status,summer_capacity\n"
                ",10,500,Medium,x\n"
                "B,-95,10,,\n"
            )
        )

        assert [(f.row_number, f.field) for f in report.findings] == [
            (2, "site_name"),
            (2, "longitude"),
            (2, "risk_status"),
            (2, "summer_capacity"),
            (3, "latitude"),
        ]

    def test_valid_count_never_exceeds_total(self, validator: SiteRowValidator) -> None:
        report = validator.validate(
            parse_text("site_name,latitude,longitude\nA,1,1\nB,x,1\nC,2,2\n")
        )

        assert report.valid_row_count <= report.row_count
        assert report.valid_row_count == 2

    def test_revalidation_yields_identical_report(self, validator: SiteRowValidator) -> None:
        rows = parse_text(
            "site_name,latitude,longitude,risk_status\nA,91,10,Medium\nB,45,45,High\n"
        )

        assert validator.validate(rows) == validator.validate(rows)
