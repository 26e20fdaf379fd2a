"""
app/api/routers/site_upload.py

GIS site upload HTTP endpoints.

GET  /sites/template   CSV template download
POST /sites/validate   parse + validate, nothing persisted
POST /sites/upload     parse + validate + batched insert into gis_sites
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.dependencies import CSVUpload, get_csv_upload, get_site_store
from app.domain.errors import (
    IngestError,
    InvalidUploadError,
    ParseError,
    SchemaError,
    UploadRejectedError,
)
from app.domain.site_ingestion import IngestionOutcome, ValidationReport
from app.schemas.site_upload import (
    IngestionOutcomeResponse,
    SiteUploadResponse,
    ValidationReportResponse,
    build_report_response,
)
from app.services.site_ingestor import SiteBatchInserter
from app.services.site_upload_service import SiteUploadService, get_site_upload_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites", tags=["sites"])

_REJECTION_STATUS = {
    "size": 413,
    "content_type": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
}


def _report_response(
    service: SiteUploadService,
    report: ValidationReport,
) -> ValidationReportResponse:
    return build_report_response(
        service.formatter.format_report(report),
        errors=report.errors,
        warnings=report.warnings,
        missing_columns=report.missing_columns,
    )


def _parse_error_to_http(exc: ParseError) -> HTTPException:
    if isinstance(exc, UploadRejectedError):
        return HTTPException(
            status_code=_REJECTION_STATUS.get(exc.reason, status.HTTP_400_BAD_REQUEST),
            detail=exc.message,
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict())


@router.get("/template")
def download_template(
    service: SiteUploadService = Depends(get_site_upload_service),
) -> Response:
    """
    Download the CSV template listing every accepted column.
    """

    formatter = service.formatter
    return Response(
        content=formatter.render_template(),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={formatter.template_filename}",
        },
    )


@router.post("/validate", response_model=ValidationReportResponse)
def validate_sites(
    upload: CSVUpload = Depends(get_csv_upload),
    service: SiteUploadService = Depends(get_site_upload_service),
) -> ValidationReportResponse:
    """
    Validate a site CSV and report every finding. Nothing is persisted.
    """

    try:
        validated = service.validate_upload(
            upload.content,
            filename=upload.filename,
            content_type=upload.content_type,
        )
    except ParseError as exc:
        raise _parse_error_to_http(exc) from exc

    return _report_response(service, validated.report)


@router.post("/upload", response_model=SiteUploadResponse)
def upload_sites(
    uploaded_by: uuid.UUID = Query(..., description="Identity stamped on every inserted site"),
    upload: CSVUpload = Depends(get_csv_upload),
    service: SiteUploadService = Depends(get_site_upload_service),
    store: SiteBatchInserter = Depends(get_site_store),
) -> SiteUploadResponse:
    """
    Validate a site CSV and, when it is fully valid, insert it in batches.
    """

    def _on_progress(outcome: IngestionOutcome) -> None:
        logger.info(
            "Site upload progress uploaded_by=%s batch=%d progress=%.1f%%",
            uploaded_by,
            outcome.batch_index,
            outcome.progress,
        )

    try:
        result = service.ingest_upload(
            upload.content,
            uploaded_by=uploaded_by,
            store=store,
            filename=upload.filename,
            content_type=upload.content_type,
            on_progress=_on_progress,
        )
    except ParseError as exc:
        raise _parse_error_to_http(exc) from exc
    except SchemaError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "missing_columns": list(exc.missing_columns)},
        ) from exc
    except InvalidUploadError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "report": _report_response(service, exc.report).model_dump(),
            },
        ) from exc
    except IngestError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=exc.to_dict(),
        ) from exc

    return SiteUploadResponse(
        message=service.formatter.format_success(result.ingestion),
        records_committed=result.ingestion.records_committed,
        report=_report_response(service, result.report),
        outcomes=[
            IngestionOutcomeResponse.from_outcome(outcome)
            for outcome in result.ingestion.outcomes
        ],
    )
