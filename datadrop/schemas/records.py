"""Schemas for canonical rows and the stored-record read API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalRow(BaseModel):
    """Uploaded row mapped onto the five fields of the data table. id is always set."""

    model_config = ConfigDict(frozen=True)

    post_id: int | None = None
    id: int
    name: str = ""
    email: str = ""
    body: str = ""


class RecordOut(BaseModel):
    """One stored row as returned by GET /data (camelCase keys on the wire)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    post_id: int | None = None
    id: int
    name: str
    email: str
    body: str


class StatsResponse(BaseModel):
    """Row count of the data table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_rows: int = Field(..., ge=0, description="Number of stored rows.")


class ClearResponse(BaseModel):
    """Acknowledgment for DELETE /data."""

    success: bool = True
    message: str = "All data cleared"


class SearchPage(BaseModel):
    """One page of rows matching a search, plus the condensed page-number window."""

    rows: list[RecordOut] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Rows matching the query (all pages).")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    page_numbers: list[int | str] = Field(
        default_factory=list,
        description='Page links to render; "..." marks a gap.',
    )
