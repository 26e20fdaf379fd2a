"""
app/services/site_upload_service.py

Synchronous site upload pipeline: parse -> validate -> batch -> ingest.

Each call parses the upload afresh. Nothing is persisted until the whole
file validates cleanly; from then on batches are committed one by one and a
store failure leaves earlier batches in place.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache

from app.config import get_site_ingestion_settings
from app.domain.errors import InvalidUploadError, SchemaError
from app.domain.site_ingestion import IngestionResult, RawRow, ValidationReport
from app.parsers.site_csv_parser import SiteCSVParser
from app.services.site_batcher import SiteBatcher
from app.services.site_ingestor import ProgressCallback, SiteBatchInserter, SiteIngestor
from app.services.site_report_formatter import SiteReportFormatter
from app.validators.site_validator import SiteRowValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedUpload:
    rows: tuple[RawRow, ...]
    report: ValidationReport


@dataclass(frozen=True)
class SiteUploadResult:
    report: ValidationReport
    ingestion: IngestionResult


class SiteUploadService:
    """
    Coordinates the site upload stages for one upload at a time.
    """

    def __init__(
        self,
        *,
        parser: SiteCSVParser | None = None,
        validator: SiteRowValidator | None = None,
        batcher: SiteBatcher | None = None,
        ingestor: SiteIngestor | None = None,
        formatter: SiteReportFormatter | None = None,
    ) -> None:
        self._parser = parser or SiteCSVParser()
        self._validator = validator or SiteRowValidator()
        self._batcher = batcher or SiteBatcher()
        self._ingestor = ingestor or SiteIngestor()
        self._formatter = formatter or SiteReportFormatter()

    @property
    def parser(self) -> SiteCSVParser:
        return self._parser

    @property
    def formatter(self) -> SiteReportFormatter:
        return self._formatter

    def validate_upload(
        self,
        content: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> ValidatedUpload:
        """
        Parse and validate an upload. Raises ``ParseError`` on malformed input.
        """

        rows = self._parser.parse(content, filename=filename, content_type=content_type)
        report = self._validator.validate(rows)
        return ValidatedUpload(rows=rows, report=report)

    def ingest_upload(
        self,
        content: bytes,
        *,
        uploaded_by: uuid.UUID,
        store: SiteBatchInserter,
        filename: str | None = None,
        content_type: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SiteUploadResult:
        """
        Validate an upload and, when fully valid, persist it batch by batch.

        Raises ``SchemaError`` or ``InvalidUploadError`` before anything is
        written, and ``IngestError`` when a batch submission fails.
        """

        validated = self.validate_upload(content, filename=filename, content_type=content_type)
        report = validated.report
        if report.missing_columns:
            raise SchemaError(report.missing_columns)
        if not report.is_valid:
            raise InvalidUploadError(report)

        batches = self._batcher.build_batches(
            validated.rows,
            report,
            uploaded_by=uploaded_by,
        )
        logger.info(
            "Ingesting site upload filename=%r uploaded_by=%s records=%d batches=%d warnings=%d",
            filename,
            uploaded_by,
            report.valid_row_count,
            len(batches),
            len(report.warnings),
        )
        ingestion = self._ingestor.ingest(batches, store, on_progress=on_progress)
        return SiteUploadResult(report=report, ingestion=ingestion)


@lru_cache(maxsize=1)
def get_site_upload_service() -> SiteUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """

    settings = get_site_ingestion_settings()
    return SiteUploadService(
        parser=SiteCSVParser(max_upload_bytes=settings.max_upload_bytes),
        validator=SiteRowValidator(log_findings=settings.log_findings),
        batcher=SiteBatcher(batch_size=settings.batch_size),
        formatter=SiteReportFormatter(
            max_errors=settings.max_listed_errors,
            max_warnings=settings.max_listed_warnings,
        ),
    )
