"""
app/config.py

Settings for the site upload pipeline, read from the environment once per
process.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from db.config import env_bool, env_int, env_str

_MIB = 1024 * 1024


@dataclass(frozen=True)
class SiteIngestionSettings:
    """
    Runtime settings for GIS site CSV uploads.
    """

    batch_size: int = 50
    max_upload_bytes: int = 10 * _MIB
    max_listed_errors: int = 10
    max_listed_warnings: int = 5
    log_findings: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@lru_cache(maxsize=1)
def get_site_ingestion_settings() -> SiteIngestionSettings:
    defaults = SiteIngestionSettings()
    return SiteIngestionSettings(
        batch_size=env_int("SITE_INGEST_BATCH_SIZE", defaults.batch_size, minimum=1),
        max_upload_bytes=env_int(
            "SITE_INGEST_MAX_UPLOAD_BYTES", defaults.max_upload_bytes, minimum=1
        ),
        max_listed_errors=env_int(
            "SITE_INGEST_MAX_LISTED_ERRORS", defaults.max_listed_errors, minimum=0
        ),
        max_listed_warnings=env_int(
            "SITE_INGEST_MAX_LISTED_WARNINGS", defaults.max_listed_warnings, minimum=0
        ),
        log_findings=env_bool("SITE_INGEST_LOG_FINDINGS", defaults.log_findings),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings(level=env_str("LOG_LEVEL", "INFO").upper())
