"""GET /health: liveness plus a read of the data table."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from datadrop.core.config import settings
from datadrop.core.database import get_db
from datadrop.schemas.health import HealthResponse
from datadrop.services.records import count_records, storage_error_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse, response_model_exclude_none=True)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report that the backend is up and whether the data table can be read.

    Counting rows catches both an unreachable server and a missing migration.
    A failure shows up as `database: "disconnected"`; the status code stays 200.
    """
    try:
        count_records(db)
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning("Health check could not read data table: %s", storage_error_message(e))
        database = "disconnected"
    return HealthResponse(environment=settings.APP_ENV, database=database)
