"""
app/domain package marker.
"""

from app.domain.errors import (
    IngestError,
    InvalidUploadError,
    ParseError,
    SchemaError,
    SiteIngestionError,
    StoreError,
    UploadRejectedError,
)
from app.domain.site_ingestion import (
    FindingSeverity,
    IngestionOutcome,
    IngestionResult,
    NormalizedSiteRecord,
    RawRow,
    ValidationFinding,
    ValidationReport,
)
from app.domain.site_schema import DEFAULT_SITE_SCHEMA, FieldDefinition, FieldKind, SiteSchemaRegistry

__all__ = [
    "DEFAULT_SITE_SCHEMA",
    "FieldDefinition",
    "FieldKind",
    "FindingSeverity",
    "IngestError",
    "IngestionOutcome",
    "IngestionResult",
    "InvalidUploadError",
    "NormalizedSiteRecord",
    "ParseError",
    "RawRow",
    "SchemaError",
    "SiteIngestionError",
    "SiteSchemaRegistry",
    "StoreError",
    "UploadRejectedError",
    "ValidationFinding",
    "ValidationReport",
]
