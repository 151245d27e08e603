"""Pydantic request/response schemas."""

from datadrop.schemas.health import HealthResponse
from datadrop.schemas.records import (
    CanonicalRow,
    ClearResponse,
    RecordOut,
    SearchPage,
    StatsResponse,
)
from datadrop.schemas.upload import SampleError, UploadSummary

__all__ = [
    "CanonicalRow",
    "ClearResponse",
    "HealthResponse",
    "RecordOut",
    "SampleError",
    "SearchPage",
    "StatsResponse",
    "UploadSummary",
]
