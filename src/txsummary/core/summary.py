#!/usr/bin/env python3
"""
Transaction Summary Aggregation

Folds a sequence of transactions into per-month counts, per-month credit and
debit totals, the running balance, and the average credit and debit.

All arithmetic is exact: Money wraps decimal.Decimal, so repeated runs over
the same input always produce identical results.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .dates import month_label_sort_key
from .models import Transaction, TransactionKind
from .money import Money


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Summary:
    """
    Aggregate statistics for one processed file.

    Built once by aggregate() and never mutated afterwards. Holds no reference
    back to the transactions it was computed from.
    """

    total_balance: Money = field(default_factory=Money.zero)
    monthly_transaction_counts: Mapping[str, int] = field(default_factory=dict)
    monthly_credits: Mapping[str, Money] = field(default_factory=dict)
    monthly_debits: Mapping[str, Money] = field(default_factory=dict)
    average_credit: Money = field(default_factory=Money.zero)
    average_debit: Money = field(default_factory=Money.zero)

    def __post_init__(self):
        for name in ("monthly_transaction_counts", "monthly_credits", "monthly_debits"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    def has_transactions(self) -> bool:
        """True if at least one transaction was aggregated."""
        return sum(self.monthly_transaction_counts.values()) > 0

    @property
    def transaction_count(self) -> int:
        return sum(self.monthly_transaction_counts.values())

    def sorted_monthly_counts(self) -> list[tuple[str, int]]:
        """Monthly counts as (label, count) pairs in chronological order."""
        return sorted(self.monthly_transaction_counts.items(), key=lambda item: month_label_sort_key(item[0]))

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary (amounts as decimal strings)."""
        return {
            "total_balance": str(self.total_balance.to_decimal()),
            "monthly_transaction_counts": dict(self.monthly_transaction_counts),
            "monthly_credits": {k: str(v.to_decimal()) for k, v in self.monthly_credits.items()},
            "monthly_debits": {k: str(v.to_decimal()) for k, v in self.monthly_debits.items()},
            "average_credit": str(self.average_credit.to_decimal()),
            "average_debit": str(self.average_debit.to_decimal()),
        }


def aggregate(transactions: Iterable[Transaction]) -> Summary:
    """
    Compute a Summary in a single pass.

    Processing order does not affect the result; only sums and counts are
    accumulated. An empty input yields an all-zero Summary.

    Args:
        transactions: Validated transactions from one file

    Returns:
        Immutable Summary

    Example:
        >>> summary = aggregate(transactions)
        >>> summary.monthly_transaction_counts["July 2024"]
        3
    """
    balance = Money.zero()
    counts: dict[str, int] = {}
    monthly_credits: dict[str, Money] = {}
    monthly_debits: dict[str, Money] = {}
    credit_sum = Money.zero()
    debit_sum = Money.zero()
    credit_count = 0
    debit_count = 0

    for transaction in transactions:
        key = transaction.month_label
        counts[key] = counts.get(key, 0) + 1

        if transaction.kind is TransactionKind.CREDIT:
            balance = balance + transaction.amount
            monthly_credits[key] = monthly_credits.get(key, Money.zero()) + transaction.amount
            credit_sum = credit_sum + transaction.amount
            credit_count += 1
        elif transaction.kind is TransactionKind.DEBIT:
            balance = balance - transaction.amount
            monthly_debits[key] = monthly_debits.get(key, Money.zero()) + transaction.amount
            debit_sum = debit_sum + transaction.amount
            debit_count += 1
        else:
            raise TypeError(f"unknown transaction kind: {transaction.kind!r}")

    return Summary(
        total_balance=balance,
        monthly_transaction_counts=_frozen(counts),
        monthly_credits=_frozen(monthly_credits),
        monthly_debits=_frozen(monthly_debits),
        average_credit=credit_sum / credit_count if credit_count else Money.zero(),
        average_debit=debit_sum / debit_count if debit_count else Money.zero(),
    )


class SummaryCalculator:
    """Injectable wrapper around aggregate() for the processor."""

    def calculate(self, transactions: Iterable[Transaction]) -> Summary:
        return aggregate(transactions)
