"""Stats endpoint: current row count of the data table."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datadrop.core.database import get_db
from datadrop.core.errors import ApiError
from datadrop.schemas.records import StatsResponse
from datadrop.services.records import count_records, storage_error_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=StatsResponse)
def get_stats(
    db: Annotated[Session, Depends(get_db)],
) -> StatsResponse:
    """Return the number of stored rows as `totalRows`."""
    try:
        total = count_records(db)
    except SQLAlchemyError as e:
        logger.error("Stats error: %s", e)
        raise ApiError(500, storage_error_message(e)) from e
    return StatsResponse(total_rows=total)
