#!/usr/bin/env python3
"""
Core Data Models for Transaction Processing

The Transaction record and the record parser that is the only sanctioned way
to build one from raw file fields.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .dates import month_label, parse_transaction_date
from .errors import InvalidAmountError, InvalidDateError, InvalidIDError
from .money import Money

_INTEGER_LITERAL = re.compile(r"[+-]?\d+")


class TransactionKind(Enum):
    """Direction of a monetary movement."""

    CREDIT = "credit"
    DEBIT = "debit"


@dataclass(frozen=True)
class Transaction:
    """
    One validated line of a transaction file.

    The amount is always a non-negative magnitude; whether it adds to or
    subtracts from the balance is decided by kind alone.
    """

    id: int
    date: date
    amount: Money
    kind: TransactionKind

    def __post_init__(self) -> None:
        if self.amount.sign() < 0:
            raise ValueError(f"transaction amount must be non-negative, got {self.amount.to_decimal()}")
        if not isinstance(self.kind, TransactionKind):
            raise TypeError(f"unknown transaction kind: {self.kind!r}")

    @property
    def is_credit(self) -> bool:
        return self.kind is TransactionKind.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.kind is TransactionKind.DEBIT

    @property
    def month_label(self) -> str:
        """Aggregation key such as "July 2024"."""
        return month_label(self.date)

    @property
    def signed_amount(self) -> Money:
        """Amount with the sign applied: credits positive, debits negative."""
        if self.kind is TransactionKind.CREDIT:
            return self.amount
        if self.kind is TransactionKind.DEBIT:
            return -self.amount
        raise TypeError(f"unknown transaction kind: {self.kind!r}")


def parse_transaction(id_text: str, date_text: str, amount_text: str, today: date | None = None) -> Transaction:
    """
    Build a Transaction from the three raw fields of a file record.

    Args:
        id_text: Integer identifier, e.g. "1"
        date_text: Date in one of the accepted formats, e.g. "7/15"
        amount_text: Amount with a mandatory leading sign, e.g. "+60.5"
        today: Reference date for dates written without a year

    Returns:
        Validated, immutable Transaction

    Raises:
        InvalidIDError: If the identifier is not an integer
        InvalidDateError: If the date matches no accepted format
        InvalidAmountError: If the amount is empty, unsigned or malformed
    """
    transaction_id = _parse_id(id_text)

    try:
        parsed_date = parse_transaction_date(date_text.strip(), today=today)
    except ValueError as e:
        raise InvalidDateError(date_text) from e

    amount, kind = _parse_amount(amount_text)

    return Transaction(id=transaction_id, date=parsed_date, amount=amount, kind=kind)


def _parse_id(id_text: str) -> int:
    clean = id_text.strip()
    if not _INTEGER_LITERAL.fullmatch(clean):
        raise InvalidIDError(id_text)
    return int(clean)


def _parse_amount(amount_text: str) -> tuple[Money, TransactionKind]:
    clean = amount_text.strip()
    if not clean:
        raise InvalidAmountError(amount_text, "empty")

    sign, magnitude = clean[0], clean[1:]
    if sign == "+":
        kind = TransactionKind.CREDIT
    elif sign == "-":
        kind = TransactionKind.DEBIT
    else:
        raise InvalidAmountError(amount_text, "missing leading + or -")

    try:
        amount = Money.from_string(magnitude)
    except ValueError as e:
        raise InvalidAmountError(amount_text) from e

    return amount.abs(), kind
