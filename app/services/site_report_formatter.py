"""
app/services/site_report_formatter.py

Human-readable rendering of validation reports and the upload template.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass

from app.domain.site_ingestion import IngestionResult, ValidationFinding, ValidationReport
from app.domain.site_schema import DEFAULT_SITE_SCHEMA, TEMPLATE_FILENAME, SiteSchemaRegistry


@dataclass(frozen=True)
class FormattedReport:
    """
    Display-ready report. Counts are always the untruncated totals.
    """

    is_valid: bool
    row_count: int
    valid_row_count: int
    error_count: int
    warning_count: int
    error_lines: tuple[str, ...]
    warning_lines: tuple[str, ...]

    def to_text(self) -> str:
        lines = [
            f"Total Rows: {self.row_count}",
            f"Valid Rows: {self.valid_row_count}",
            f"Errors: {self.error_count}",
            f"Warnings: {self.warning_count}",
        ]
        if self.error_lines:
            lines.append("Errors found:")
            lines.extend(f"  - {line}" for line in self.error_lines)
        if self.warning_lines:
            lines.append("Warnings:")
            lines.extend(f"  - {line}" for line in self.warning_lines)
        return "\n".join(lines)


class SiteReportFormatter:
    """
    Renders validation reports, success messages and the blank template.
    """

    def __init__(
        self,
        *,
        max_errors: int = 10,
        max_warnings: int = 5,
        schema: SiteSchemaRegistry = DEFAULT_SITE_SCHEMA,
    ) -> None:
        self._max_errors = max(0, max_errors)
        self._max_warnings = max(0, max_warnings)
        self._schema = schema

    @property
    def template_filename(self) -> str:
        return TEMPLATE_FILENAME

    def format_report(self, report: ValidationReport) -> FormattedReport:
        errors = report.errors
        warnings = report.warnings
        return FormattedReport(
            is_valid=report.is_valid,
            row_count=report.row_count,
            valid_row_count=report.valid_row_count,
            error_count=len(errors),
            warning_count=len(warnings),
            error_lines=self._truncate(errors, self._max_errors, "errors"),
            warning_lines=self._truncate(warnings, self._max_warnings, "warnings"),
        )

    def format_success(self, result: IngestionResult) -> str:
        return f"Successfully uploaded {result.records_committed} sites"

    def render_template(self) -> str:
        """
        Header of every field name followed by one example row.
        """

        fields = self._schema.all_fields
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=fields, lineterminator="\n")
        writer.writeheader()
        writer.writerow(self._schema.template_example_row())
        return buffer.getvalue()

    @staticmethod
    def _truncate(
        findings: Sequence[ValidationFinding],
        limit: int,
        noun: str,
    ) -> tuple[str, ...]:
        lines = [finding.describe() for finding in findings[:limit]]
        hidden = len(findings) - limit
        if hidden > 0:
            lines.append(f"... and {hidden} more {noun}")
        return tuple(lines)
