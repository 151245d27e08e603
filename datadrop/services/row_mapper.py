"""Map loosely keyed uploaded rows onto the five canonical fields of the data table."""

import re
from collections.abc import Mapping

from datadrop.schemas.records import CanonicalRow
from datadrop.services.delimited import strip_bom

INVALID_ID_REASON = "Invalid or missing id"

# Canonical field -> accepted source column names, tried in order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "post_id": ("postId", "PostId", "post_id", "POSTID"),
    "id": ("id", "Id", "ID"),
    "name": ("name", "Name", "NAME"),
    "email": ("email", "Email", "EMAIL"),
    "body": ("body", "Body", "BODY"),
}

# Leading base-10 integer: optional sign then ASCII digits; anything after is ignored ("12.5" -> 12).
_LEADING_INT = re.compile(r"[+-]?[0-9]+")


class RowValidationError(ValueError):
    """Raised when a row cannot become a CanonicalRow (missing or unparseable id)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def clean_string(value: str | None) -> str:
    """Strip a leading BOM and surrounding whitespace; None and "" become ""."""
    if not value:
        return ""
    return strip_bom(value).strip()


def to_int_or_none(value: str | None) -> int | None:
    """Parse the leading integer of a cleaned value, or None when there is none."""
    cleaned = clean_string(value)
    if not cleaned:
        return None
    match = _LEADING_INT.match(cleaned)
    if not match:
        return None
    return int(match.group(0))


def clean_keys(row: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of row with every key BOM-stripped and trimmed; values are untouched."""
    return {clean_string(key): value for key, value in row.items()}


def lookup(row: Mapping[str, str], field: str) -> str:
    """First alias of field that is present in row with a non-empty cleaned value, else ""."""
    for alias in FIELD_ALIASES[field]:
        value = clean_string(row.get(alias))
        if value:
            return value
    return ""


def map_row(row: Mapping[str, str]) -> CanonicalRow:
    """
    Build the canonical row from a key-cleaned uploaded row.

    Raises RowValidationError when id is absent, empty or not an integer.
    post_id falls back to None under the same conditions.
    """
    row_id = to_int_or_none(lookup(row, "id"))
    if row_id is None:
        raise RowValidationError(INVALID_ID_REASON)
    return CanonicalRow(
        post_id=to_int_or_none(lookup(row, "post_id")),
        id=row_id,
        name=lookup(row, "name"),
        email=lookup(row, "email"),
        body=lookup(row, "body"),
    )
