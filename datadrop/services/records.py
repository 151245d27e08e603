"""Read/write access to the data table: list, insert one, clear, count."""

import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datadrop.models import DataRecord
from datadrop.schemas.records import CanonicalRow

logger = logging.getLogger(__name__)


def storage_error_message(exc: SQLAlchemyError) -> str:
    """Driver message of a storage error without SQLAlchemy's statement/parameter suffix."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig).strip()
    return str(exc)


def list_records(db: Session) -> list[DataRecord]:
    """All stored rows, ascending by id."""
    return list(db.scalars(select(DataRecord).order_by(DataRecord.id.asc())))


def insert_record(db: Session, row: CanonicalRow) -> None:
    """
    Insert and commit a single row.

    On a storage error the session is rolled back (discarding only this row)
    and the error is re-raised for the caller to record.
    """
    try:
        db.execute(
            insert(DataRecord).values(
                {
                    DataRecord.post_id: row.post_id,
                    DataRecord.id: row.id,
                    DataRecord.name: row.name,
                    DataRecord.email: row.email,
                    DataRecord.body: row.body,
                }
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def clear_records(db: Session) -> int:
    """Delete every stored row; returns how many were removed (0 on an empty table)."""
    result = db.execute(delete(DataRecord))
    db.commit()
    deleted = result.rowcount or 0
    logger.info("Cleared data table: rows_deleted=%s", deleted)
    return deleted


def count_records(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(DataRecord)) or 0
