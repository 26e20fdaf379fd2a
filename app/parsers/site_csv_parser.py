"""
app/parsers/site_csv_parser.py

Turns uploaded CSV bytes into header-keyed raw rows.

The first non-empty line is the header. Every later non-empty line is a data
row aligned to the header by position; rows shorter than the header are
padded with empty values. Row numbers count the header as row 1 and ignore
skipped blank lines.
"""

from __future__ import annotations

import csv
import io
import logging

from app.domain.errors import ParseError, UploadRejectedError
from app.domain.site_ingestion import RawRow

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class SiteCSVParser:
    """
    Size-capped, strict CSV reader for site uploads.
    """

    def __init__(self, *, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
        self._max_upload_bytes = max(1, max_upload_bytes)
        # A single field may be as large as the whole upload.
        csv.field_size_limit(max(csv.field_size_limit(), self._max_upload_bytes))

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    def check_upload(
        self,
        *,
        size: int,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """
        Reject uploads that are not CSV or exceed the size ceiling.
        """

        normalized_name = (filename or "").strip().lower()
        normalized_type = (content_type or "").split(";", 1)[0].strip().lower()
        if normalized_type not in CSV_CONTENT_TYPES and not normalized_name.endswith(".csv"):
            raise UploadRejectedError(
                "Only CSV files are allowed.",
                reason="content_type",
            )
        if size > self._max_upload_bytes:
            raise UploadRejectedError(
                f"File exceeds the maximum upload size of {self._max_upload_bytes} bytes.",
                reason="size",
            )

    def parse(
        self,
        content: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> tuple[RawRow, ...]:
        """
        Parse the whole upload. Any malformed input raises ``ParseError``
        and no rows are returned.
        """

        self.check_upload(size=len(content), filename=filename, content_type=content_type)

        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"CSV must be UTF-8 encoded (invalid byte at offset {exc.start}).",
            ) from exc

        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        headers: list[str] | None = None
        rows: list[RawRow] = []

        try:
            for record in reader:
                if self._is_blank_line(record):
                    continue
                if headers is None:
                    headers = self._read_headers(record, line_number=reader.line_num)
                    continue

                row_number = len(rows) + 2
                if len(record) > len(headers):
                    raise ParseError(
                        f"Row {row_number} has {len(record)} values but the header "
                        f"defines {len(headers)} columns.",
                        line_number=reader.line_num,
                        row_number=row_number,
                    )
                padded = record + [""] * (len(headers) - len(record))
                rows.append(RawRow(row_number=row_number, values=dict(zip(headers, padded))))
        except csv.Error as exc:
            raise ParseError(
                f"Invalid CSV format: {exc}",
                line_number=reader.line_num,
                row_number=len(rows) + 2 if headers is not None else 1,
            ) from exc

        logger.info(
            "Parsed site CSV filename=%r columns=%d rows=%d",
            filename,
            len(headers or []),
            len(rows),
        )
        return tuple(rows)

    @staticmethod
    def _read_headers(record: list[str], *, line_number: int) -> list[str]:
        headers = [name.strip() for name in record]
        if any(not name for name in headers):
            raise ParseError(
                "CSV header contains an empty column name.",
                line_number=line_number,
                row_number=1,
            )
        seen: set[str] = set()
        for name in headers:
            if name in seen:
                raise ParseError(
                    f"CSV header repeats column name {name!r}.",
                    line_number=line_number,
                    row_number=1,
                )
            seen.add(name)
        return headers

    @staticmethod
    def _is_blank_line(record: list[str]) -> bool:
        return not record or (len(record) == 1 and not record[0].strip())
