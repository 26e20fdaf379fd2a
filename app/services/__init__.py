"""
app/services package marker.
"""

from app.services.site_batcher import SiteBatcher
from app.services.site_ingestor import SiteBatchInserter, SiteIngestor
from app.services.site_report_formatter import FormattedReport, SiteReportFormatter
from app.services.site_upload_service import (
    SiteUploadResult,
    SiteUploadService,
    ValidatedUpload,
    get_site_upload_service,
)

__all__ = [
    "FormattedReport",
    "SiteBatchInserter",
    "SiteBatcher",
    "SiteIngestor",
    "SiteReportFormatter",
    "SiteUploadResult",
    "SiteUploadService",
    "ValidatedUpload",
    "get_site_upload_service",
]
