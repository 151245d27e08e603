"""Search and paginate stored rows for the table view."""

import math

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.orm import Session

from datadrop.models import DataRecord
from datadrop.schemas.records import RecordOut, SearchPage

SEARCH_ALL = "all"
MAX_VISIBLE_PAGES = 5
GAP = "..."

# Searchable column (as shown to clients) -> ORM attribute.
SEARCH_COLUMNS = {
    "postId": DataRecord.post_id,
    "id": DataRecord.id,
    "name": DataRecord.name,
    "email": DataRecord.email,
    "body": DataRecord.body,
}


class UnknownColumnError(ValueError):
    """Raised when a search targets a column that does not exist."""


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _resolve_column(column: str):
    if column.lower() == SEARCH_ALL:
        return None
    for key, attr in SEARCH_COLUMNS.items():
        if key.lower() == column.lower() or attr.key == column:
            return attr
    raise UnknownColumnError(
        f"Unknown search column {column!r}; expected 'all' or one of {sorted(SEARCH_COLUMNS)}"
    )


def search_filter(query: str, column: str = SEARCH_ALL):
    """
    Case-insensitive substring condition over one column, or over every column for "all".

    Returns None for a blank query (no filtering).
    """
    needle = query.strip()
    if not needle:
        return None
    pattern = f"%{_escape_like(needle)}%"
    attr = _resolve_column(column)
    attrs = list(SEARCH_COLUMNS.values()) if attr is None else [attr]
    return or_(*(cast(a, String).ilike(pattern, escape="\\") for a in attrs))


def page_numbers(current_page: int, total_pages: int) -> list[int | str]:
    """
    Condensed page links: every page when there are at most five, otherwise the
    first and last page with a window around the current one and "..." for gaps.
    """
    if total_pages <= MAX_VISIBLE_PAGES:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, GAP, total_pages]
    if current_page >= total_pages - 2:
        return [1, GAP, *range(total_pages - 3, total_pages + 1)]
    return [1, GAP, current_page - 1, current_page, current_page + 1, GAP, total_pages]


def search_records(
    db: Session,
    query: str = "",
    column: str = SEARCH_ALL,
    page: int = 1,
    page_size: int = 10,
) -> SearchPage:
    """Return one page of matching rows ordered by id; a page past the end is clamped to the last."""
    condition = search_filter(query, column)
    count_stmt = select(func.count()).select_from(DataRecord)
    rows_stmt = select(DataRecord).order_by(DataRecord.id.asc())
    if condition is not None:
        count_stmt = count_stmt.where(condition)
        rows_stmt = rows_stmt.where(condition)

    total = db.scalar(count_stmt) or 0
    total_pages = math.ceil(total / page_size)
    page = max(1, min(page, total_pages or 1))
    rows = db.scalars(rows_stmt.offset((page - 1) * page_size).limit(page_size))
    return SearchPage(
        rows=[RecordOut.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        page_numbers=page_numbers(page, total_pages),
    )
