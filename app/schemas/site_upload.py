"""
app/schemas/site_upload.py

Response schemas for GIS site upload endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.site_ingestion import IngestionOutcome, ValidationFinding
from app.services.site_report_formatter import FormattedReport


class ValidationFindingResponse(BaseModel):
    """
    API response model for one validation finding.
    """

    row_number: int | None = Field(default=None, ge=1)
    field: str | None = None
    message: str
    severity: str
    value: str | None = None

    @classmethod
    def from_finding(cls, finding: ValidationFinding) -> "ValidationFindingResponse":
        return cls(
            row_number=finding.row_number,
            field=finding.field,
            message=finding.message,
            severity=finding.severity,
            value=finding.value,
        )


class ValidationReportResponse(BaseModel):
    """
    Counts are untruncated; ``error_lines``/``warning_lines`` are the
    display-truncated summaries.
    """

    is_valid: bool
    row_count: int = Field(..., ge=0)
    valid_row_count: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    warning_count: int = Field(..., ge=0)
    missing_columns: list[str] = Field(default_factory=list)
    errors: list[ValidationFindingResponse] = Field(default_factory=list)
    warnings: list[ValidationFindingResponse] = Field(default_factory=list)
    error_lines: list[str] = Field(default_factory=list)
    warning_lines: list[str] = Field(default_factory=list)


class IngestionOutcomeResponse(BaseModel):
    batch_index: int = Field(..., ge=0)
    batch_size: int = Field(..., ge=0)
    succeeded: bool
    records_committed: int = Field(..., ge=0)
    total_records: int = Field(..., ge=0)
    progress_percent: float = Field(..., ge=0, le=100)
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: IngestionOutcome) -> "IngestionOutcomeResponse":
        return cls(
            batch_index=outcome.batch_index,
            batch_size=outcome.batch_size,
            succeeded=outcome.succeeded,
            records_committed=outcome.records_committed,
            total_records=outcome.total_records,
            progress_percent=outcome.progress_percent,
            error=outcome.error,
        )


class SiteUploadResponse(BaseModel):
    message: str
    records_committed: int = Field(..., ge=0)
    report: ValidationReportResponse
    outcomes: list[IngestionOutcomeResponse] = Field(default_factory=list)


def build_report_response(
    formatted: FormattedReport,
    *,
    errors: tuple[ValidationFinding, ...],
    warnings: tuple[ValidationFinding, ...],
    missing_columns: tuple[str, ...],
) -> ValidationReportResponse:
    return ValidationReportResponse(
        is_valid=formatted.is_valid,
        row_count=formatted.row_count,
        valid_row_count=formatted.valid_row_count,
        error_count=formatted.error_count,
        warning_count=formatted.warning_count,
        missing_columns=list(missing_columns),
        errors=[ValidationFindingResponse.from_finding(f) for f in errors],
        warnings=[ValidationFindingResponse.from_finding(f) for f in warnings],
        error_lines=list(formatted.error_lines),
        warning_lines=list(formatted.warning_lines),
    )
