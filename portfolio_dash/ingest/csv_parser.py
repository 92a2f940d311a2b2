"""Parsing of brokerage holdings exports.

The export is a quoted, comma separated file with a header row and the
columns Instrument, Qty, Avg. Cost, LTP, Invested, Cur. Val, P&L, Net Chg,
Day Chg. Quoted commas are not supported: every comma is a separator.
"""

from typing import Dict, List, Optional

from ..config import settings
from ..core.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    MissingColumnsError,
    NoValidRowsError,
    UnsupportedFileTypeError,
)
from ..core.logger import logger

RawRow = Dict[str, str]

ROW_FIELDS = (
    "instrument",
    "quantity",
    "avg_cost",
    "ltp",
    "invested",
    "current_value",
    "pnl",
    "net_change",
    "day_change",
)

HEADER_KEYWORDS = ("instrument", "qty", "ltp", "invested", "cur. val", "p&l")

CSV_CONTENT_TYPE = "text/csv"


def _split_line(line: str) -> List[str]:
    return [value.replace('"', '').strip() for value in line.split(',')]


def parse_csv(content: str) -> List[RawRow]:
    """Turn the raw export text into rows keyed by ``ROW_FIELDS``.

    The first non-blank line is the header and is skipped without being
    inspected. Lines with fewer than nine fields or without an instrument
    name are dropped silently.

    Raises:
        EmptyFileError: the content holds no non-blank line.
        NoValidRowsError: no data line survived filtering.
    """
    lines = [line for line in content.split('\n') if line.strip()]

    if not lines:
        raise EmptyFileError()

    rows: List[RawRow] = []
    skipped = 0

    for line in lines[1:]:
        values = _split_line(line.strip())

        if len(values) < len(ROW_FIELDS) or not values[0]:
            skipped += 1
            continue

        rows.append({
            field: values[index] or "0"
            for index, field in enumerate(ROW_FIELDS)
        })

    if not rows:
        raise NoValidRowsError()

    if skipped:
        logger.info(f"Skipped {skipped} malformed CSV lines")

    return rows


def validate_csv_format(filename: str, size: int, content: str) -> bool:
    """Advisory pre-flight check of an export before it is uploaded.

    Only the file name, the byte size and the header line are looked at;
    passing this check does not mean ``parse_csv`` will find rows.
    """
    if not filename.endswith('.csv'):
        raise UnsupportedFileTypeError()

    if size > settings.MAX_UPLOAD_SIZE:
        raise FileTooLargeError()

    lines = content.split('\n')
    if len(lines) < 2:
        raise MissingColumnsError("CSV file must contain at least a header and one data row")

    header = lines[0].lower()
    if not any(keyword in header for keyword in HEADER_KEYWORDS):
        raise MissingColumnsError()

    return True


def check_upload_file(filename: Optional[str], content_type: Optional[str], size: int) -> None:
    """Gate applied to an upload before any parsing happens."""
    if content_type != CSV_CONTENT_TYPE and not (filename or "").endswith('.csv'):
        raise UnsupportedFileTypeError("Only CSV files are allowed")

    if size > settings.MAX_UPLOAD_SIZE:
        raise FileTooLargeError()
