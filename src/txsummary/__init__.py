"""
txsummary - Transaction File Summaries by Email

Watches a directory for transaction CSV files, validates each record, computes
monthly statistics with exact decimal arithmetic, optionally stores the
records, and emails a summary to a recipient.

Domain Packages:
- core: Money, dates, transaction model, aggregation, errors, configuration
- ingest: CSV loading and directory watching
- storage: SQLAlchemy persistence
- notify: HTML email rendering and SMTP delivery
- processing: Pipeline orchestration
- cli: Command-line interface

Example Usage:
    from txsummary import aggregate, ingest_transactions

    summary = aggregate(ingest_transactions("txns.csv"))
    print(summary.total_balance)
"""

__version__ = "0.1.0"

from .core.models import Transaction, TransactionKind, parse_transaction
from .core.money import Money
from .core.summary import Summary, aggregate
from .ingest.loader import ingest_transactions

__all__ = [
    "Money",
    "Summary",
    "Transaction",
    "TransactionKind",
    "aggregate",
    "ingest_transactions",
    "parse_transaction",
]
