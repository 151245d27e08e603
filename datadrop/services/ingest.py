"""
Upload ingestion pipeline.

decode -> strip BOM -> detect separator -> parse -> clean keys -> map/validate
-> insert one row at a time -> summarize.

Per-row problems (missing id, rejected insert) are counted and sampled but never
stop the upload. Parse failures, an empty file, or an unusable storage
connection abort the whole upload before any row is inserted.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datadrop.schemas.upload import SampleError, UploadSummary
from datadrop.services.delimited import (
    ParseError,
    decode_upload,
    describe_separator,
    detect_separator,
    parse_rows,
    separator_label,
)
from datadrop.services.records import insert_record, storage_error_message
from datadrop.services.row_mapper import (
    RowValidationError,
    clean_keys,
    clean_string,
    map_row,
)

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_ERROR_LIMIT = 3
EMPTY_UPLOAD_MESSAGE = "File is empty or contains no valid data"


class IngestionError(Exception):
    """Fatal ingestion failure: nothing from this upload was stored."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyUploadError(IngestionError):
    """The file parsed to zero rows."""

    def __init__(self, message: str = EMPTY_UPLOAD_MESSAGE):
        super().__init__(message)


@dataclass
class IngestionTally:
    """Running counts for one upload; frozen into an UploadSummary at the end."""

    sample_limit: int = DEFAULT_SAMPLE_ERROR_LIMIT
    inserted: int = 0
    failed: int = 0
    samples: list[SampleError] = field(default_factory=list)

    def record_insert(self) -> None:
        self.inserted += 1

    def record_failure(self, row_number: int, reason: str, data: dict[str, str]) -> None:
        self.failed += 1
        if len(self.samples) < self.sample_limit:
            self.samples.append(SampleError(row=row_number, reason=reason, data=data))

    def summary(
        self,
        *,
        rows_processed: int,
        columns: list[str],
        separator: str,
        file_name: str,
    ) -> UploadSummary:
        return UploadSummary(
            message=f"Successfully uploaded {self.inserted} rows. {self.failed} rows failed.",
            rows_processed=rows_processed,
            rows_inserted=self.inserted,
            rows_failed=self.failed,
            columns=columns,
            separator=separator_label(separator),
            file_name=file_name,
            sample_errors=list(self.samples) if self.failed else None,
        )


def _acquire_connection(db: Session) -> None:
    """Open the session's connection up front so an unreachable database fails the whole upload."""
    try:
        db.connection()
    except SQLAlchemyError as e:
        raise IngestionError(storage_error_message(e)) from e


def load_rows(
    db: Session,
    rows: list[dict[str, str]],
    *,
    sample_limit: int = DEFAULT_SAMPLE_ERROR_LIMIT,
) -> IngestionTally:
    """
    Validate and insert key-cleaned rows strictly in order.

    Row numbers in failure samples are 1-based over the parsed rows.
    """
    tally = IngestionTally(sample_limit=sample_limit)
    for row_number, row in enumerate(rows, start=1):
        try:
            canonical = map_row(row)
        except RowValidationError as e:
            logger.info("Skipping row %s with null/invalid id: %s", row_number, row)
            tally.record_failure(row_number, e.reason, row)
            continue
        try:
            insert_record(db, canonical)
        except SQLAlchemyError as e:
            reason = storage_error_message(e)
            logger.warning("Error inserting row %s: %s", row_number, reason)
            tally.record_failure(row_number, reason, row)
            continue
        tally.record_insert()
    return tally


def ingest_upload(
    db: Session,
    content: bytes,
    file_name: str,
    *,
    sample_limit: int = DEFAULT_SAMPLE_ERROR_LIMIT,
) -> UploadSummary:
    """
    Run the whole pipeline for one uploaded file and return its summary.

    Raises EmptyUploadError when no rows were parsed and IngestionError when the
    file cannot be parsed or the database cannot be reached. The caller owns the
    session and must close it.
    """
    try:
        text = decode_upload(content)
        separator = detect_separator(text)
        logger.info(
            "Processing: %s, Detected separator: %s",
            file_name,
            describe_separator(separator),
        )
        header, parsed = parse_rows(text, separator)
    except ParseError as e:
        raise IngestionError(e.message) from e

    rows = [clean_keys(row) for row in parsed]
    if not rows:
        raise EmptyUploadError()

    _acquire_connection(db)

    columns = [clean_string(name) for name in header]
    logger.info("Columns detected: %s", columns)
    logger.info("Total rows to process: %s", len(rows))
    for index, row in enumerate(rows[:2], start=1):
        logger.debug("Sample row %s: %s", index, row)

    tally = load_rows(db, rows, sample_limit=sample_limit)
    logger.info(
        "Upload finished: file=%s, rows_processed=%s, rows_inserted=%s, rows_failed=%s",
        file_name,
        len(rows),
        tally.inserted,
        tally.failed,
    )
    return tally.summary(
        rows_processed=len(rows),
        columns=columns,
        separator=separator,
        file_name=file_name,
    )
