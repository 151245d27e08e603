"""Upload endpoint: accept a CSV/TSV file, load its rows into the data table, report the outcome."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from datadrop.core.config import get_settings
from datadrop.core.database import get_db
from datadrop.core.errors import ApiError
from datadrop.schemas.upload import UploadSummary
from datadrop.services.ingest import EmptyUploadError, IngestionError, ingest_upload

logger = logging.getLogger(__name__)

router = APIRouter()

FILE_FIELD = "csvFile"
ALLOWED_CONTENT_TYPES = frozenset(
    {
        "text/csv",
        "text/tab-separated-values",
        "application/vnd.ms-excel",
        "text/plain",
    }
)
ALLOWED_EXTENSIONS = (".csv", ".tsv", ".txt")


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def is_allowed_file(filename: str, content_type: str | None) -> bool:
    """Accept a declared CSV/TSV/text content type or a .csv/.tsv/.txt name."""
    declared = (content_type or "").split(";")[0].strip().lower()
    return declared in ALLOWED_CONTENT_TYPES or filename.lower().endswith(ALLOWED_EXTENSIONS)


async def _get_upload_file(request: Request) -> UploadFile:
    """Pull the uploaded file from a multipart form: csvFile, then file, then any file part."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise ApiError(400, "No file uploaded")
    form = await request.form()
    file = form.get(FILE_FIELD)
    if file is None or not _is_upload_file(file):
        file = form.get("file")
    if file is None or not _is_upload_file(file):
        file = next((v for v in form.values() if _is_upload_file(v)), None)
    if file is None:
        raise ApiError(400, "No file uploaded")
    return file


@router.post("", response_model=UploadSummary, response_model_exclude_none=True)
async def upload_file(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> UploadSummary:
    """
    Load a CSV or TSV file into the data table.

    Send `multipart/form-data` with the file in a field named `csvFile`. The
    separator is detected from the first line (tab if present, else comma).
    Columns are matched by name (`id`/`Id`/`ID`, `postId`/`post_id`, ...).

    Rows without a usable integer id, and rows the database rejects, are
    skipped and counted; the response reports processed/inserted/failed counts
    and up to three sample failures. A file with no data rows is a 400.
    """
    settings = get_settings()
    file = await _get_upload_file(request)
    filename = getattr(file, "filename", None) or ""
    if not is_allowed_file(filename, getattr(file, "content_type", None)):
        raise ApiError(400, "Only CSV/TSV/TXT files are allowed!")
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise ApiError(
            413,
            f"File size must not exceed {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB.",
        )

    # Per-row inserts block; keep them off the event loop.
    try:
        return await run_in_threadpool(
            ingest_upload,
            db,
            content,
            filename,
            sample_limit=settings.SAMPLE_ERROR_LIMIT,
        )
    except EmptyUploadError as e:
        raise ApiError(400, e.message) from e
    except IngestionError as e:
        logger.error("Upload error for %s: %s", filename, e.message)
        raise ApiError(500, "Failed to process file", details=e.message) from e
