# services/batch.py
"""Row-by-row runner shared by the spreadsheet imports.

Each row is its own unit of work: a failing row is rolled back and reported
as ``"Row {k}: {message}"`` (1-indexed), and processing moves on.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable, List

from pydantic import ValidationError
from sqlalchemy.orm import Session

from utils.errors import InvalidInput

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")


@dataclass
class BatchResult:
    success: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)


def describe_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'row'}: {err['msg']}"
            for err in exc.errors()
        )
    message = getattr(exc, "message", None) or str(exc)
    return message or "Unknown error"


def run_batch(db: Session, rows: Iterable[Any], handler: Callable[[Any], Any]) -> BatchResult:
    result = BatchResult()

    for index, row in enumerate(rows, start=1):
        try:
            handler(row)
        except Exception as e:
            db.rollback()
            result.failed += 1
            result.errors.append(f"Row {index}: {describe_error(e)}")
            logger.debug("Import row %s failed: %s", index, e)
        else:
            result.success += 1

    logger.info("Import finished: %s imported, %s failed", result.success, result.failed)
    return result


def parse_row_date(value: Any) -> date:
    """Parse a spreadsheet date cell (ISO date or timestamp, or day-first)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip() if value is not None else ""
    if text:
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise InvalidInput(f"Invalid date format: {value}")
