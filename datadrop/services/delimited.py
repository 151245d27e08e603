"""Decode uploaded bytes, sniff the field separator and parse delimited text into rows."""

import csv
import io
import logging
import re
from collections.abc import Iterator

from datadrop.core.config import MAX_UPLOAD_BYTES_CEILING

logger = logging.getLogger(__name__)

BOM = "\ufeff"
REPLACEMENT_CHAR = "\ufffd"
TAB = "\t"
COMMA = ","

# A single cell may span the whole upload; the csv module's default cap is 128 KB.
MAX_FIELD_CHARS = MAX_UPLOAD_BYTES_CEILING

_SEPARATOR_LABELS = {TAB: "TAB", COMMA: "COMMA"}
_SEPARATOR_FORMATS = {TAB: "TAB (TSV)", COMMA: "COMMA (CSV)"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ParseError(Exception):
    """Raised when the delimited stream is malformed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def strip_bom(text: str) -> str:
    """Remove exactly one leading byte-order mark, if present."""
    if text.startswith(BOM):
        return text[len(BOM):]
    return text


def decode_upload(content: bytes) -> str:
    """
    Decode bytes as UTF-8 and drop a leading BOM.

    Invalid byte sequences become U+FFFD instead of failing the upload.
    """
    text = content.decode("utf-8", errors="replace")
    if REPLACEMENT_CHAR in text and REPLACEMENT_CHAR.encode("utf-8") not in content:
        logger.warning("Invalid UTF-8 sequences replaced with U+FFFD")
    if text.startswith(BOM):
        logger.info("BOM detected and removed")
    return strip_bom(text)


def first_line(text: str) -> str:
    """Content up to the first line terminator, or the whole text when there is none."""
    return _LINE_BREAK.split(text, maxsplit=1)[0]


def detect_separator(text: str) -> str:
    """Tab if the first line contains one, comma otherwise. Later lines are never inspected."""
    return TAB if TAB in first_line(text) else COMMA


def separator_label(separator: str) -> str:
    """Label reported to clients: "TAB" or "COMMA"."""
    return _SEPARATOR_LABELS[separator]


def describe_separator(separator: str) -> str:
    return _SEPARATOR_FORMATS[separator]


def _is_blank_line(cells: list[str]) -> bool:
    return not cells or (len(cells) == 1 and not cells[0].strip())


def _iter_lines(text: str, separator: str) -> Iterator[list[str]]:
    """Yield the cells of each non-blank line; csv errors surface as ParseError."""
    if csv.field_size_limit() < MAX_FIELD_CHARS:
        csv.field_size_limit(MAX_FIELD_CHARS)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=separator)
    try:
        for cells in reader:
            if not _is_blank_line(cells):
                yield cells
    except csv.Error as e:
        raise ParseError(f"Malformed delimited text at line {reader.line_num}: {e!s}") from e


def _to_row(header: list[str], cells: list[str]) -> dict[str, str]:
    row: dict[str, str] = {}
    for index, cell in enumerate(cells):
        key = header[index] if index < len(header) else f"_{index}"
        row[key] = cell.strip()
    return row


def iter_rows(text: str, separator: str) -> Iterator[dict[str, str]]:
    """
    Lazily yield one mapping per non-empty line after the header.

    Header names and values are trimmed. Missing trailing cells are omitted from
    the mapping; cells beyond the header are keyed ``_<index>``.
    """
    header: list[str] | None = None
    for cells in _iter_lines(text, separator):
        if header is None:
            header = [cell.strip() for cell in cells]
            continue
        yield _to_row(header, cells)


def parse_rows(text: str, separator: str) -> tuple[list[str], list[dict[str, str]]]:
    """
    Parse the whole text into (header, rows).

    Rows are fully materialized because the caller needs the column list and the
    row count before validation begins.
    """
    lines = _iter_lines(text, separator)
    header = [cell.strip() for cell in next(lines, [])]
    rows = [_to_row(header, cells) for cells in lines]
    return header, rows
