"""
app/repositories/gis_site_repository.py

Persistence layer for uploaded GIS sites.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StoreError
from app.domain.site_ingestion import NormalizedSiteRecord
from db.models.gis_site import GisSite

logger = logging.getLogger(__name__)


class GisSiteRepository:
    """
    Inserts site batches, committing each batch on its own.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def insert_batch(self, records: Sequence[NormalizedSiteRecord]) -> int:
        """
        Insert and commit one batch. The batch is rolled back on failure.
        """

        if not records:
            return 0

        payloads = [record.to_payload() for record in records]
        try:
            self._session.execute(insert(GisSite), payloads)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("GIS site batch insert failed size=%d: %s", len(payloads), exc)
            raise StoreError(f"Failed to insert site batch: {exc.__class__.__name__}") from exc
        return len(payloads)
