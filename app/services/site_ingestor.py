"""
app/services/site_ingestor.py

Sequential batch submission to the site store.

Batches go to the store one at a time, in order. The first failure stops the
run: later batches are never attempted and earlier ones stay committed,
since each batch insert is its own unit of atomicity.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from app.domain.errors import IngestError, StoreError
from app.domain.site_ingestion import IngestionOutcome, IngestionResult, NormalizedSiteRecord
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[IngestionOutcome], None]


class SiteBatchInserter(Protocol):
    """
    Persistence collaborator for site batches.

    Implementations insert the whole batch or raise ``StoreError``.
    """

    def insert_batch(self, records: Sequence[NormalizedSiteRecord]) -> int:
        ...


class SiteIngestor:
    """
    Submits site batches and reports cumulative progress after each one.
    """

    def ingest(
        self,
        batches: Sequence[Sequence[NormalizedSiteRecord]],
        store: SiteBatchInserter,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> IngestionResult:
        total_records = sum(len(batch) for batch in batches)
        committed = 0
        outcomes: list[IngestionOutcome] = []

        for batch_index, batch in enumerate(batches):
            try:
                store.insert_batch(batch)
            except StoreError as exc:
                outcome = IngestionOutcome(
                    batch_index=batch_index,
                    batch_size=len(batch),
                    succeeded=False,
                    records_committed=committed,
                    total_records=total_records,
                    error=str(exc),
                )
                outcomes.append(outcome)
                self._emit(outcome, on_progress)
                log_event(
                    logger,
                    logging.ERROR,
                    "site_ingest_batch_failed",
                    batch_index=batch_index,
                    records_committed=committed,
                    total_records=total_records,
                    error=str(exc),
                )
                raise IngestError(
                    batch_index=batch_index,
                    records_committed=committed,
                    total_records=total_records,
                    store_error=str(exc),
                    outcomes=tuple(outcomes),
                ) from exc

            committed += len(batch)
            outcome = IngestionOutcome(
                batch_index=batch_index,
                batch_size=len(batch),
                succeeded=True,
                records_committed=committed,
                total_records=total_records,
            )
            outcomes.append(outcome)
            self._emit(outcome, on_progress)
            log_event(
                logger,
                logging.INFO,
                "site_ingest_batch_committed",
                batch_index=batch_index,
                batch_size=len(batch),
                records_committed=committed,
                total_records=total_records,
                progress=outcome.progress_percent,
            )

        logger.info(
            "Site ingestion complete batches=%d records=%d",
            len(outcomes),
            committed,
        )
        return IngestionResult(
            total_records=total_records,
            records_committed=committed,
            outcomes=tuple(outcomes),
        )

    @staticmethod
    def _emit(outcome: IngestionOutcome, on_progress: ProgressCallback | None) -> None:
        if on_progress is not None:
            on_progress(outcome)
