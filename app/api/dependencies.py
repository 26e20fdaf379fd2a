"""
app/api/dependencies.py

Shared FastAPI dependencies for site upload requests.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass

from fastapi import Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.repositories.gis_site_repository import GisSiteRepository
from app.services.site_ingestor import SiteBatchInserter
from app.services.site_upload_service import SiteUploadService, get_site_upload_service
from db.session import get_db


@dataclass(frozen=True)
class CSVUpload:
    content: bytes
    filename: str | None
    content_type: str | None


def get_csv_upload(
    file: UploadFile = File(...),
    service: SiteUploadService = Depends(get_site_upload_service),
) -> Generator[CSVUpload, None, None]:
    """
    Read the upload body, stopping one byte past the size ceiling so an
    oversized file is rejected without buffering all of it.
    """

    try:
        content = file.file.read(service.parser.max_upload_bytes + 1)
        yield CSVUpload(
            content=content,
            filename=file.filename,
            content_type=file.content_type,
        )
    finally:
        file.file.close()


def get_site_store(db: Session = Depends(get_db)) -> SiteBatchInserter:
    return GisSiteRepository(db)
