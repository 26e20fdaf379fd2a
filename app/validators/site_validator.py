"""
app/validators/site_validator.py

File- and row-level validation for GIS site uploads.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

from app.domain.site_ingestion import RawRow, ValidationFinding, ValidationReport
from app.domain.site_schema import DEFAULT_SITE_SCHEMA, FieldDefinition, FieldKind, SiteSchemaRegistry

logger = logging.getLogger(__name__)

LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)


def parse_number(value: Any) -> float | None:
    """
    Parse a trimmed decimal string into a finite float, or None.
    """

    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    try:
        parsed = float(raw)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


class SiteRowValidator:
    """
    Validates parsed site rows against the site schema registry.

    Errors exclude a row from ingestion; warnings are advisory only.
    """

    def __init__(
        self,
        schema: SiteSchemaRegistry = DEFAULT_SITE_SCHEMA,
        *,
        log_findings: bool = False,
    ) -> None:
        self._schema = schema
        self._log_findings = log_findings

    @property
    def schema(self) -> SiteSchemaRegistry:
        return self._schema

    def validate(self, rows: Sequence[RawRow]) -> ValidationReport:
        """
        Validate every row and return the aggregate report.
        """

        if not rows:
            finding = ValidationFinding.error(None, None, "CSV file is empty")
            self._log(finding)
            return ValidationReport(row_count=0, valid_row_count=0, findings=(finding,))

        findings: list[ValidationFinding] = []

        headers = set(rows[0].columns)
        missing_columns = tuple(
            name for name in self._schema.required_fields if name not in headers
        )
        for name in missing_columns:
            findings.append(
                ValidationFinding.error(1, name, f"Missing required column: {name}")
            )

        valid_row_numbers: set[int] = set()
        for row in rows:
            row_findings = self.validate_row(row)
            findings.extend(row_findings)
            if not any(finding.is_error for finding in row_findings):
                valid_row_numbers.add(row.row_number)

        for finding in findings:
            self._log(finding)

        report = ValidationReport(
            row_count=len(rows),
            valid_row_count=len(valid_row_numbers),
            findings=tuple(findings),
            missing_columns=missing_columns,
            valid_row_numbers=frozenset(valid_row_numbers),
        )
        logger.info(
            "Validated site rows total=%d valid=%d errors=%d warnings=%d",
            report.row_count,
            report.valid_row_count,
            len(report.errors),
            len(report.warnings),
        )
        return report

    def validate_row(self, row: RawRow) -> list[ValidationFinding]:
        """
        Return the findings for one row, in field order.
        """

        findings: list[ValidationFinding] = []
        for definition in self._schema.fields:
            value = row.get(definition.name)
            if definition.required:
                self._check_required(row, definition, value, findings)
            elif not is_blank(value):
                self._check_optional(row, definition, value, findings)
        return findings

    def _check_required(
        self,
        row: RawRow,
        definition: FieldDefinition,
        value: str | None,
        findings: list[ValidationFinding],
    ) -> None:
        if is_blank(value):
            findings.append(
                ValidationFinding.error(
                    row.row_number,
                    definition.name,
                    f"Missing {definition.name}",
                    value,
                )
            )
            return

        if definition.kind == FieldKind.LATITUDE:
            self._check_coordinate(row, definition, value, LATITUDE_RANGE, findings)
        elif definition.kind == FieldKind.LONGITUDE:
            self._check_coordinate(row, definition, value, LONGITUDE_RANGE, findings)

    def _check_coordinate(
        self,
        row: RawRow,
        definition: FieldDefinition,
        value: str,
        bounds: tuple[float, float],
        findings: list[ValidationFinding],
    ) -> None:
        parsed = parse_number(value)
        low, high = bounds
        if parsed is None or not low <= parsed <= high:
            findings.append(
                ValidationFinding.error(
                    row.row_number,
                    definition.name,
                    f"Invalid {definition.name} ({value})",
                    value,
                )
            )

    def _check_optional(
        self,
        row: RawRow,
        definition: FieldDefinition,
        value: str,
        findings: list[ValidationFinding],
    ) -> None:
        if definition.kind == FieldKind.ENUM:
            if not definition.accepts(value):
                expected = " or ".join(f"'{allowed}'" for allowed in definition.allowed_values)
                findings.append(
                    ValidationFinding.warning(
                        row.row_number,
                        definition.name,
                        f"Invalid {definition.name} ({value}). Should be {expected}",
                        value,
                    )
                )
        elif definition.kind == FieldKind.NUMERIC:
            if parse_number(value) is None:
                findings.append(
                    ValidationFinding.warning(
                        row.row_number,
                        definition.name,
                        f"Invalid {definition.name} ({value})",
                        value,
                    )
                )

    def _log(self, finding: ValidationFinding) -> None:
        if self._log_findings:
            logger.warning(
                "Site CSV %s row=%s field=%s message=%s",
                finding.severity,
                finding.row_number,
                finding.field,
                finding.message,
            )
