"""Data endpoints: list, search/paginate and clear the stored rows."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datadrop.core.database import get_db
from datadrop.core.errors import ApiError
from datadrop.schemas.records import ClearResponse, RecordOut, SearchPage
from datadrop.services.browse import SEARCH_ALL, UnknownColumnError, search_records
from datadrop.services.records import clear_records, list_records, storage_error_message

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_PAGE_SIZE = 100


@router.get("", response_model=list[RecordOut])
def get_data(
    db: Annotated[Session, Depends(get_db)],
) -> list[RecordOut]:
    """Return every stored row, ascending by id."""
    try:
        records = list_records(db)
    except SQLAlchemyError as e:
        logger.error("Database error listing data: %s", e)
        raise ApiError(500, storage_error_message(e)) from e
    return [RecordOut.model_validate(r) for r in records]


@router.get("/search", response_model=SearchPage)
def search_data(
    db: Annotated[Session, Depends(get_db)],
    q: Annotated[str, Query(description="Case-insensitive substring to match.")] = "",
    column: Annotated[
        str, Query(description="'all' or one of postId, id, name, email, body.")
    ] = SEARCH_ALL,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 10,
) -> SearchPage:
    """
    Return one page of rows matching `q` in `column`.

    An empty `q` matches everything. The response includes the total match
    count and a condensed list of page numbers for rendering pagination.
    """
    try:
        return search_records(db, query=q, column=column, page=page, page_size=page_size)
    except UnknownColumnError as e:
        raise ApiError(400, str(e)) from e
    except SQLAlchemyError as e:
        logger.error("Database error searching data: %s", e)
        raise ApiError(500, storage_error_message(e)) from e


@router.delete("", response_model=ClearResponse)
def delete_data(
    db: Annotated[Session, Depends(get_db)],
) -> ClearResponse:
    """Delete every stored row. Succeeds on an empty table."""
    try:
        clear_records(db)
    except SQLAlchemyError as e:
        logger.error("Delete error: %s", e)
        raise ApiError(500, storage_error_message(e)) from e
    return ClearResponse()
