#!/usr/bin/env python3
"""
Error Taxonomy for Transaction Processing

Every failure the processing pipeline can report derives from
TransactionProcessingError, so callers can catch the whole family at once.

Levels:
- Field-level (ParseError and subclasses): raised by the record parser and
  always recovered by the ingestion driver.
- Source-level (InvalidFormatError, SourceReadError): fatal to one ingestion.
- Empty-result (EmptyFileError): no transaction survived ingestion.
- Persistence (PersistenceError): recovered by the processor, logged only.
- Delivery (EmailDeliveryError): fatal to a single processing run.
- Cancellation (ProcessingCancelledError): graceful stop, not a failure.
"""


class TransactionProcessingError(Exception):
    """Base class for all processing failures."""


class ParseError(TransactionProcessingError, ValueError):
    """A single record field could not be turned into a transaction."""

    field_name = "record"

    def __init__(self, value: str, reason: str | None = None):
        self.value = value
        self.reason = reason
        message = f"invalid {self.field_name}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidIDError(ParseError):
    """Transaction identifier is not an integer."""

    field_name = "transaction id"


class InvalidDateError(ParseError):
    """Transaction date matches none of the accepted formats."""

    field_name = "transaction date"


class InvalidAmountError(ParseError):
    """Transaction amount is unsigned, empty, or not a decimal number."""

    field_name = "transaction amount"


class InvalidFormatError(TransactionProcessingError):
    """Source does not have the expected header shape."""


class SourceReadError(TransactionProcessingError):
    """Source could not be opened or read."""


class EmptyFileError(TransactionProcessingError):
    """Source was readable but contributed no valid transactions."""


class PersistenceError(TransactionProcessingError):
    """Data store failed to save a batch; nothing from the batch is visible."""


class EmailDeliveryError(TransactionProcessingError):
    """Summary email could not be rendered or delivered."""


class ProcessingCancelledError(TransactionProcessingError):
    """Processing stopped because the cancellation signal fired."""
