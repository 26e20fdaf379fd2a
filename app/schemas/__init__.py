"""
app/schemas package marker.
"""

from app.schemas.site_upload import (
    IngestionOutcomeResponse,
    SiteUploadResponse,
    ValidationFindingResponse,
    ValidationReportResponse,
)

__all__ = [
    "IngestionOutcomeResponse",
    "SiteUploadResponse",
    "ValidationFindingResponse",
    "ValidationReportResponse",
]
