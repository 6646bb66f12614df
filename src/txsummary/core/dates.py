#!/usr/bin/env python3
"""
Transaction Date Parsing

Ordered-trial parsing of the loosely formatted dates found in transaction
files, plus the month label used as the aggregation key.

Formats are tried in a fixed order and the first one that parses wins:

1. month/day            ("7/15")        current year substituted
2. month/day/2-digit    ("7/15/24")
3. month/day/4-digit    ("7/15/2024")
4. ISO year-month-day   ("2024-07-15")
"""

from datetime import date, datetime

# (strptime format, carries an explicit year)
DATE_FORMATS: tuple[tuple[str, bool], ...] = (
    ("%m/%d", False),
    ("%m/%d/%y", True),
    ("%m/%d/%Y", True),
    ("%Y-%m-%d", True),
)


def parse_transaction_date(date_str: str, today: date | None = None) -> date:
    """
    Parse a transaction date by trying each accepted format in order.

    Args:
        date_str: Raw date text from the file
        today: Reference date for the year substitution (default: date.today())

    Returns:
        Parsed calendar date

    Raises:
        ValueError: If no format matches

    Examples:
        parse_transaction_date("7/2", today=date(2024, 1, 1)) -> date(2024, 7, 2)
        parse_transaction_date("7/2/24") -> date(2024, 7, 2)
    """
    if today is None:
        today = date.today()

    for fmt, has_year in DATE_FORMATS:
        try:
            if has_year:
                return datetime.strptime(date_str, fmt).date()
            # Parse with the substituted year so Feb 29 is judged against it
            return datetime.strptime(f"{today.year} {date_str}", f"%Y {fmt}").date()
        except ValueError:
            continue

    raise ValueError(f"unrecognized date: {date_str!r}")


def month_label(value: date) -> str:
    """
    Format the aggregation key for a date, e.g. "July 2024".

    Day-of-month is ignored so every day in a month maps to one key.
    """
    return f"{value.strftime('%B')} {value.year:04d}"


def month_label_sort_key(label: str) -> tuple[int, int]:
    """
    Sort key that orders month labels chronologically.

    Args:
        label: A label produced by month_label

    Returns:
        (year, month) tuple
    """
    parsed = datetime.strptime(label, "%B %Y")
    return (parsed.year, parsed.month)
