#!/usr/bin/env python3
"""
Transaction File Loader

Reads delimited transaction files record by record and turns each record into
a validated Transaction.

Expected shape:
    Id,Date,Transaction
    0,7/15,+60.5
    1,7/28,-10.3

Bad records are skipped and logged; only problems with the source as a whole
(unreadable file, wrong header) abort the load.
"""

import csv
import logging
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from ..core.errors import (
    InvalidFormatError,
    ParseError,
    ProcessingCancelledError,
    SourceReadError,
)
from ..core.models import Transaction, parse_transaction

logger = logging.getLogger(__name__)

EXPECTED_HEADER = ("Id", "Date", "Transaction")

# Header is line 1, so the first data record is line 2
FIRST_DATA_LINE = 2


def ingest_transactions(
    source: str | Path | TextIO,
    cancel_event: threading.Event | None = None,
) -> list[Transaction]:
    """
    Load all valid transactions from a CSV source.

    Args:
        source: Path to a CSV file, or an already open text stream
        cancel_event: Checked before every record read; when set, loading stops

    Returns:
        Accepted transactions in file order (possibly empty)

    Raises:
        InvalidFormatError: If the header is missing or not Id,Date,Transaction
        SourceReadError: If the source cannot be opened or read
        ProcessingCancelledError: If cancel_event fires during the load
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.debug(f"Opening transaction file: {path}")
        try:
            with open(path, newline="", encoding="utf-8-sig") as f:
                return _read_records(f, str(path), cancel_event)
        except OSError as e:
            raise SourceReadError(f"cannot read {path}: {e}") from e

    name = getattr(source, "name", "<stream>")
    return _read_records(source, str(name), cancel_event)


def _read_records(stream: TextIO, name: str, cancel_event: threading.Event | None) -> list[Transaction]:
    reader = csv.reader(stream, strict=True)

    try:
        header = next(reader, None)
    except csv.Error as e:
        raise InvalidFormatError(f"unreadable header in {name}: {e}") from e
    except UnicodeDecodeError as e:
        raise SourceReadError(f"cannot decode {name}: {e}") from e

    if header is None:
        raise InvalidFormatError(f"missing header in {name}")
    logger.debug(f"CSV header read from {name}: {header}")
    if not _header_matches(header):
        raise InvalidFormatError(f"invalid CSV header in {name}, expected {list(EXPECTED_HEADER)}, got {header}")

    transactions: list[Transaction] = []
    skipped = 0

    for line_number, record in _numbered_records(reader, name, cancel_event):
        if record is None:
            skipped += 1
            continue

        if len(record) != len(EXPECTED_HEADER):
            logger.warning(
                f"Skipping line {line_number} in {name}: expected {len(EXPECTED_HEADER)} fields, got {len(record)}"
            )
            skipped += 1
            continue

        try:
            transaction = parse_transaction(*record)
        except ParseError as e:
            logger.warning(f"Skipping invalid transaction on line {line_number} in {name}: {e}")
            skipped += 1
            continue

        transactions.append(transaction)

    logger.info(f"Loaded {len(transactions)} transactions from {name} ({skipped} skipped)")
    return transactions


def _numbered_records(
    reader: Iterator[list[str]], name: str, cancel_event: threading.Event | None
) -> Iterator[tuple[int, list[str] | None]]:
    """
    Yield (line_number, record) pairs, with None for records the tokenizer rejected.

    Blank lines are not records and do not advance the line number.
    """
    line_number = FIRST_DATA_LINE
    while True:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Loading of {name} cancelled at line {line_number}")
            raise ProcessingCancelledError(f"loading of {name} cancelled")

        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.warning(f"Skipping malformed line {line_number} in {name}: {e}")
            yield line_number, None
            line_number += 1
            continue
        except UnicodeDecodeError as e:
            raise SourceReadError(f"cannot decode {name} near line {line_number}: {e}") from e

        if not record:
            continue

        yield line_number, record
        line_number += 1


def _header_matches(header: list[str]) -> bool:
    if len(header) != len(EXPECTED_HEADER):
        return False
    return all(actual.strip() == expected for actual, expected in zip(header, EXPECTED_HEADER))
