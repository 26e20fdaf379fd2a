"""
app/domain/errors.py

Exceptions raised by the site upload pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.site_ingestion import IngestionOutcome, ValidationReport


class SiteIngestionError(Exception):
    """Base exception for site upload failures."""


class ParseError(SiteIngestionError):
    """
    Raised when an upload cannot be read as CSV. No rows are returned.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        row_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.row_number = row_number

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "line_number": self.line_number,
            "row_number": self.row_number,
        }


class UploadRejectedError(ParseError):
    """
    Raised before parsing when the upload is not an acceptable CSV file.
    """

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class SchemaError(SiteIngestionError):
    """
    Raised when ingestion is requested for a file missing required columns.
    """

    def __init__(self, missing_columns: tuple[str, ...]) -> None:
        super().__init__(f"Missing required columns: {', '.join(missing_columns)}")
        self.missing_columns = missing_columns


class InvalidUploadError(SiteIngestionError):
    """
    Raised when ingestion is requested for a file with row-level errors.
    """

    def __init__(self, report: "ValidationReport") -> None:
        super().__init__(
            f"Upload has {len(report.errors)} validation error(s); "
            f"{report.valid_row_count} of {report.row_count} rows are valid."
        )
        self.report = report


class StoreError(SiteIngestionError):
    """Raised by a persistence collaborator when a batch insert fails."""


class IngestError(SiteIngestionError):
    """
    Raised when a batch submission fails. Earlier batches stay committed.
    """

    def __init__(
        self,
        *,
        batch_index: int,
        records_committed: int,
        total_records: int,
        store_error: str,
        outcomes: tuple["IngestionOutcome", ...] = (),
    ) -> None:
        super().__init__(
            f"Batch {batch_index + 1} failed after {records_committed} of "
            f"{total_records} records were committed: {store_error}"
        )
        self.batch_index = batch_index
        self.records_committed = records_committed
        self.total_records = total_records
        self.store_error = store_error
        self.outcomes = outcomes

    def to_dict(self) -> dict[str, object]:
        return {
            "message": str(self),
            "batch_index": self.batch_index,
            "records_committed": self.records_committed,
            "total_records": self.total_records,
            "store_error": self.store_error,
        }
