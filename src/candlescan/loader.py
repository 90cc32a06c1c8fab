"""
CSV Loader

Turns delimited text rows of `date,open,high,low,close` into DayRecords.
Parsing errors are reported per row as RowParseError; a row that fails
never produces a record. Whether a bad row skips or aborts the import is
the caller's choice (skip_invalid).
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from .config import LoaderConfig
from .exceptions import RowParseError
from .models import DayRecord


logger = logging.getLogger(__name__)

FIELD_COUNT = 5


@dataclass
class LoadResult:
    """Records parsed from one input, plus the rows that were rejected."""

    records: List[DayRecord] = field(default_factory=list)
    rejected: List[RowParseError] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def total_rows(self) -> int:
        return len(self.records) + len(self.rejected)


def parse_decimal(text: str) -> Decimal:
    """
    Parse a price field as an exact decimal.

    Raises:
        ValueError: for empty, non-numeric or non-finite text
    """
    value = text.strip()
    if not value:
        raise ValueError("empty price field")
    try:
        result = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"invalid decimal {text!r}")
    if not result.is_finite():
        raise ValueError(f"non-finite decimal {text!r}")
    return result


def parse_date(text: str, date_format: str = "%d/%m/%Y") -> date:
    """
    Parse a date field with the given strptime format.

    Raises:
        ValueError: if the text does not match the format
    """
    try:
        return datetime.strptime(text.strip(), date_format).date()
    except ValueError:
        raise ValueError(f"invalid date {text!r} (expected format {date_format})")


def parse_row(fields: Sequence[str], line_number: Optional[int] = None, date_format: str = "%d/%m/%Y") -> DayRecord:
    """
    Build a DayRecord from one row of five text fields.

    Raises:
        RowParseError: if the row is malformed or violates DayRecord validation
    """
    if len(fields) != FIELD_COUNT:
        raise RowParseError(
            f"expected {FIELD_COUNT} fields, got {len(fields)}",
            line_number=line_number,
            row=fields
        )

    try:
        day = parse_date(fields[0], date_format)
        open_price, high, low, close = (parse_decimal(f) for f in fields[1:])
    except ValueError as e:
        raise RowParseError(str(e), line_number=line_number, row=fields) from e

    try:
        return DayRecord(date=day, open=open_price, high=high, low=low, close=close)
    except ValidationError as e:
        messages = "; ".join(error['msg'] for error in e.errors())
        raise RowParseError(messages, line_number=line_number, row=fields) from e


def read_day_records(
    lines: Iterable[str],
    *,
    date_format: str = "%d/%m/%Y",
    delimiter: str = ",",
    has_header: bool = True,
    skip_invalid: bool = True,
    source: Optional[str] = None
) -> LoadResult:
    """
    Parse day records from lines of delimited text.

    Args:
        lines: Text lines, e.g. an open file
        date_format: strptime format of the date column
        delimiter: Field separator
        has_header: Skip the first non-blank row
        skip_invalid: Collect bad rows in LoadResult.rejected instead of raising
        source: Label for log messages

    Returns:
        LoadResult with records in input order

    Raises:
        RowParseError: on the first bad row when skip_invalid is False
    """
    result = LoadResult(source=source)
    header_pending = has_header

    reader = csv.reader(lines, delimiter=delimiter)
    for row in reader:
        if not row or all(not cell.strip() for cell in row):
            continue
        if header_pending:
            header_pending = False
            continue

        line_number = reader.line_num
        try:
            result.records.append(parse_row(row, line_number=line_number, date_format=date_format))
        except RowParseError as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping row from {source or 'input'}: {e}")
            result.rejected.append(e)

    logger.debug(f"Loaded {len(result.records)} record(s), rejected {len(result.rejected)}")
    return result


def load_day_records(path: Union[str, Path], config: Optional[LoaderConfig] = None) -> LoadResult:
    """
    Load day records from a CSV file.

    Args:
        path: CSV file with columns date, open, high, low, close
        config: Loader settings; defaults to LoaderConfig()

    Returns:
        LoadResult for the file
    """
    config = config or LoaderConfig()
    path = Path(path)

    with open(path, 'r', encoding=config.encoding, newline='') as f:
        return read_day_records(
            f,
            date_format=config.date_format,
            delimiter=config.delimiter,
            has_header=config.has_header,
            skip_invalid=config.skip_invalid_rows,
            source=str(path)
        )
