"""
Load a CSV/TSV file from disk into the data table. Run from project root:
  python -m datadrop.scripts.load_file PATH [--clear]
Example:
  python -m datadrop.scripts.load_file comments.tsv --clear
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from datadrop.core.config import get_settings
from datadrop.core.database import SessionLocal
from datadrop.core.logging_setup import configure_logging
from datadrop.services.ingest import IngestionError, ingest_upload
from datadrop.services.records import clear_records, storage_error_message

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load a CSV/TSV file into the data table.")
    parser.add_argument("path", type=Path, help="File to load (.csv, .tsv or .txt)")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete all stored rows before loading",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        content = args.path.read_bytes()
    except OSError as e:
        print(f"Cannot read {args.path}: {e.strerror}", file=sys.stderr)
        return 1
    if len(content) > settings.MAX_UPLOAD_BYTES:
        print(f"{args.path} exceeds MAX_UPLOAD_BYTES ({settings.MAX_UPLOAD_BYTES}).", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if args.clear:
            clear_records(db)
        summary = ingest_upload(
            db,
            content,
            args.path.name,
            sample_limit=settings.SAMPLE_ERROR_LIMIT,
        )
    except IngestionError as e:
        logger.error("Load failed for %s: %s", args.path, e.message)
        return 1
    except SQLAlchemyError as e:
        logger.error("Could not clear data table: %s", storage_error_message(e))
        return 1
    finally:
        db.close()

    print(json.dumps(summary.model_dump(by_alias=True, exclude_none=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
