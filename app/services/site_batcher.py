"""
app/services/site_batcher.py

Coerces valid rows into persistence records and splits them into batches.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from app.domain.site_ingestion import NormalizedSiteRecord, RawRow, ValidationReport
from app.domain.site_schema import DEFAULT_SITE_SCHEMA, FieldKind, SiteSchemaRegistry
from app.validators.site_validator import is_blank, parse_number

DEFAULT_BATCH_SIZE = 50


class SiteBatcher:
    """
    Pure, order-preserving row-to-batch transformation.
    """

    def __init__(
        self,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        schema: SiteSchemaRegistry = DEFAULT_SITE_SCHEMA,
    ) -> None:
        self._batch_size = max(1, batch_size)
        self._schema = schema

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def normalize(
        self,
        rows: Sequence[RawRow],
        report: ValidationReport,
        *,
        uploaded_by: uuid.UUID,
    ) -> tuple[NormalizedSiteRecord, ...]:
        """
        Build records for the rows the report marks valid, in input order.
        """

        return tuple(
            self.normalize_row(row, uploaded_by=uploaded_by)
            for row in rows
            if report.is_row_valid(row.row_number)
        )

    def normalize_row(self, row: RawRow, *, uploaded_by: uuid.UUID) -> NormalizedSiteRecord:
        values: dict[str, object] = {}
        for definition in self._schema.fields:
            raw = row.get(definition.name)
            if is_blank(raw):
                values[definition.name] = None
            elif definition.kind in (FieldKind.LATITUDE, FieldKind.LONGITUDE, FieldKind.NUMERIC):
                values[definition.name] = parse_number(raw)
            elif definition.kind == FieldKind.ENUM:
                values[definition.name] = raw if definition.accepts(raw) else None
            else:
                values[definition.name] = str(raw).strip()

        return NormalizedSiteRecord(uploaded_by=uploaded_by, **values)

    def partition(
        self,
        records: Sequence[NormalizedSiteRecord],
    ) -> tuple[tuple[NormalizedSiteRecord, ...], ...]:
        """
        Split records into consecutive batches; only the last may be short.
        """

        size = self._batch_size
        return tuple(
            tuple(records[start : start + size])
            for start in range(0, len(records), size)
        )

    def build_batches(
        self,
        rows: Sequence[RawRow],
        report: ValidationReport,
        *,
        uploaded_by: uuid.UUID,
    ) -> tuple[tuple[NormalizedSiteRecord, ...], ...]:
        return self.partition(self.normalize(rows, report, uploaded_by=uploaded_by))
