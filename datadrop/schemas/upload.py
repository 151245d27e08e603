"""Response schemas for the upload endpoint."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SampleError(BaseModel):
    """One failed row: 1-based index over parsed rows, reason, and the row as uploaded."""

    row: int = Field(..., ge=1)
    reason: str
    data: dict[str, str]


class UploadSummary(BaseModel):
    """What happened to an upload. Partial success is still a successful upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    rows_processed: int = Field(..., ge=0, description="Rows parsed from the file.")
    rows_inserted: int = Field(..., ge=0, description="Rows stored.")
    rows_failed: int = Field(..., ge=0, description="Rows rejected or failed to insert.")
    columns: list[str] = Field(default_factory=list)
    separator: Literal["TAB", "COMMA"]
    file_name: str
    sample_errors: list[SampleError] | None = Field(
        default=None,
        description="First few failures; omitted when every row was inserted.",
    )
