"""
Core Utilities Package

Shared business logic, data models, and utilities for transaction processing.

This package provides:
- Exact decimal money handling
- Ordered-trial date parsing and month labels
- The Transaction model and its record parser
- Summary aggregation
- The error taxonomy and collaborator protocols
- Configuration management
"""

from .config import (
    Config,
    Environment,
    get_config,
    is_development,
    is_production,
    reload_config,
)
from .currency import format_dollars, format_fixed, parse_decimal_amount
from .dates import month_label, parse_transaction_date
from .errors import (
    EmailDeliveryError,
    EmptyFileError,
    InvalidAmountError,
    InvalidDateError,
    InvalidFormatError,
    InvalidIDError,
    ParseError,
    PersistenceError,
    ProcessingCancelledError,
    SourceReadError,
    TransactionProcessingError,
)
from .models import Transaction, TransactionKind, parse_transaction
from .money import Money
from .summary import Summary, SummaryCalculator, aggregate

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "is_development",
    "is_production",
    "reload_config",
    # Currency
    "Money",
    "format_dollars",
    "format_fixed",
    "parse_decimal_amount",
    # Dates
    "month_label",
    "parse_transaction_date",
    # Models
    "Transaction",
    "TransactionKind",
    "parse_transaction",
    "Summary",
    "SummaryCalculator",
    "aggregate",
    # Errors
    "EmailDeliveryError",
    "EmptyFileError",
    "InvalidAmountError",
    "InvalidDateError",
    "InvalidFormatError",
    "InvalidIDError",
    "ParseError",
    "PersistenceError",
    "ProcessingCancelledError",
    "SourceReadError",
    "TransactionProcessingError",
]
