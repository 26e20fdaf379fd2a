"""
app/domain/site_ingestion.py

Value types passed between the site upload pipeline stages.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping


class FindingSeverity:
    ERROR = "error"
    WARNING = "warning"


# Collected finding kinds; neither is ever raised.
RowError = FindingSeverity.ERROR
RowWarning = FindingSeverity.WARNING


@dataclass(frozen=True)
class RawRow:
    """
    One data line from an uploaded CSV, keyed by header name.

    ``row_number`` is 1-based with the header counted as row 1.
    """

    row_number: int
    values: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column: str) -> str | None:
        return self.values.get(column)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self.values.keys())


@dataclass(frozen=True)
class ValidationFinding:
    """
    One validation issue. ``row_number`` is None for file-level findings.
    """

    row_number: int | None
    field: str | None
    message: str
    severity: str
    value: str | None = None

    @classmethod
    def error(
        cls,
        row_number: int | None,
        field: str | None,
        message: str,
        value: str | None = None,
    ) -> "ValidationFinding":
        return cls(row_number, field, message, FindingSeverity.ERROR, value)

    @classmethod
    def warning(
        cls,
        row_number: int | None,
        field: str | None,
        message: str,
        value: str | None = None,
    ) -> "ValidationFinding":
        return cls(row_number, field, message, FindingSeverity.WARNING, value)

    @property
    def is_error(self) -> bool:
        return self.severity == FindingSeverity.ERROR

    def describe(self) -> str:
        if self.row_number is None:
            return self.message
        return f"Row {self.row_number}: {self.message}"


@dataclass(frozen=True)
class ValidationReport:
    """
    Outcome of validating one parsed upload.
    """

    row_count: int
    valid_row_count: int
    findings: tuple[ValidationFinding, ...] = ()
    missing_columns: tuple[str, ...] = ()
    valid_row_numbers: frozenset[int] = frozenset()

    @property
    def errors(self) -> tuple[ValidationFinding, ...]:
        return tuple(f for f in self.findings if f.is_error)

    @property
    def warnings(self) -> tuple[ValidationFinding, ...]:
        return tuple(f for f in self.findings if not f.is_error)

    @property
    def is_valid(self) -> bool:
        return not self.missing_columns and not self.errors

    def is_row_valid(self, row_number: int) -> bool:
        return row_number in self.valid_row_numbers


@dataclass(frozen=True)
class NormalizedSiteRecord:
    """
    Typed, trimmed site record ready for persistence.
    """

    site_name: str
    latitude: float
    longitude: float
    uploaded_by: uuid.UUID
    risk_status: str | None = None
    site_type: str | None = None
    authority: str | None = None
    summer_capacity: float | None = None
    winter_capacity: float | None = None
    functional_location: str | None = None
    licence_area: str | None = None
    power_transformers: str | None = None
    site_voltage: str | None = None
    what3words: str | None = None
    type: str | None = None
    voltage_transformer_ratings: str | None = None
    connection_queue: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "site_name": self.site_name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "risk_status": self.risk_status,
            "site_type": self.site_type,
            "authority": self.authority,
            "summer_capacity": self.summer_capacity,
            "winter_capacity": self.winter_capacity,
            "functional_location": self.functional_location,
            "licence_area": self.licence_area,
            "power_transformers": self.power_transformers,
            "site_voltage": self.site_voltage,
            "what3words": self.what3words,
            "type": self.type,
            "voltage_transformer_ratings": self.voltage_transformer_ratings,
            "connection_queue": self.connection_queue,
            "uploaded_by": self.uploaded_by,
        }


@dataclass(frozen=True)
class IngestionOutcome:
    """
    Progress snapshot emitted after one batch submission.
    """

    batch_index: int
    batch_size: int
    succeeded: bool
    records_committed: int
    total_records: int
    error: str | None = None

    @property
    def progress(self) -> float:
        """Committed share of all records, 0-100."""
        if self.total_records <= 0:
            return 100.0 if self.succeeded else 0.0
        return self.records_committed / self.total_records * 100.0

    @property
    def progress_percent(self) -> float:
        return round(self.progress, 1)


@dataclass(frozen=True)
class IngestionResult:
    """
    End-of-run ingestion summary for a fully successful upload.
    """

    total_records: int
    records_committed: int
    outcomes: tuple[IngestionOutcome, ...] = ()

    @property
    def batch_count(self) -> int:
        return len(self.outcomes)
