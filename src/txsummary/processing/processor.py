#!/usr/bin/env python3
"""
Transaction Processor

Runs one file through load → aggregate → persist → email, and keeps doing so
for every new file in a watched directory.

Failure policy per file:
- Load errors and empty files stop the run before anything is sent
- Persistence errors are logged and the run continues to the email step
- Email errors fail the run
"""

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.errors import (
    EmptyFileError,
    PersistenceError,
    ProcessingCancelledError,
    TransactionProcessingError,
)
from ..core.interfaces import DataStore, EmailService, FileWatcher
from ..core.models import Transaction
from ..core.summary import Summary, SummaryCalculator
from ..ingest.loader import ingest_transactions
from ..ingest.watcher import PollingDirectoryWatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of a successful process_one run."""

    file_path: Path
    recipient: str
    transaction_count: int
    summary: Summary
    # None when no data store is configured
    persisted: bool | None


class TransactionProcessor:
    """
    Orchestrates processing of transaction files.

    Files are processed strictly one at a time; watch_and_process finishes a
    file completely before it looks at the next notification.
    """

    def __init__(
        self,
        email_service: EmailService,
        data_store: DataStore | None = None,
        calculator: SummaryCalculator | None = None,
        watcher: FileWatcher | None = None,
    ):
        """
        Initialize processor with its collaborators.

        Args:
            email_service: Renders and delivers summaries (required)
            data_store: Optional persistence; None disables saving
            calculator: Summary calculator (default: SummaryCalculator())
            watcher: Directory watcher for continuous mode (default: polling watcher)
        """
        self.email_service = email_service
        self.data_store = data_store
        self.calculator = calculator or SummaryCalculator()
        self.watcher = watcher or PollingDirectoryWatcher()

    def process_one(
        self,
        file_path: str | Path,
        recipient: str,
        cancel_event: threading.Event | None = None,
    ) -> ProcessingResult:
        """
        Process a single transaction file and email its summary.

        Args:
            file_path: CSV file to process
            recipient: Email address that receives the summary
            cancel_event: Optional cancellation signal checked while loading

        Returns:
            ProcessingResult describing the run

        Raises:
            InvalidFormatError: If the file header is wrong
            SourceReadError: If the file cannot be read
            EmptyFileError: If no valid transactions were found
            EmailDeliveryError: If the summary could not be delivered
            ProcessingCancelledError: If cancel_event fired during loading
        """
        file_path = Path(file_path)
        logger.info(f"Processing transaction file {file_path} for {recipient}")

        transactions = ingest_transactions(file_path, cancel_event=cancel_event)
        if not transactions:
            logger.warning(f"No valid transactions found in {file_path}")
            raise EmptyFileError(f"no transactions found in file {file_path}")

        summary = self.calculator.calculate(transactions)
        logger.info(f"Aggregated {len(transactions)} transactions from {file_path}")

        persisted = self._persist(transactions)

        self.email_service.send_summary(recipient, summary)

        logger.info(f"File {file_path} processed successfully for {recipient}")
        return ProcessingResult(
            file_path=file_path,
            recipient=recipient,
            transaction_count=len(transactions),
            summary=summary,
            persisted=persisted,
        )

    def watch_and_process(self, directory: str | Path, recipient: str, cancel_event: threading.Event) -> None:
        """
        Process every new file that appears in directory until cancelled.

        A failure on one file is logged and never stops the loop.

        Args:
            directory: Directory to watch
            recipient: Email address that receives each summary
            cancel_event: Stops the loop when set

        Raises:
            ProcessingCancelledError: Always, once cancel_event is set
            FileNotFoundError: If directory does not exist
        """
        directory = Path(directory)
        logger.info(f"Starting directory watch on {directory} for {recipient}")

        for file_path in self.watcher.watch(directory, cancel_event):
            if cancel_event.is_set():
                break
            try:
                self.process_one(file_path, recipient, cancel_event=cancel_event)
            except ProcessingCancelledError:
                break
            except TransactionProcessingError as e:
                logger.error(f"Failed to process {file_path}: {e}")
            except Exception:
                logger.exception(f"Unexpected error while processing {file_path}")

        if not cancel_event.is_set():
            raise TransactionProcessingError(f"watcher for {directory} stopped without cancellation")

        logger.info("Directory watch stopped")
        raise ProcessingCancelledError(f"watch of {directory} cancelled")

    def _persist(self, transactions: Sequence[Transaction]) -> bool | None:
        if self.data_store is None:
            logger.debug("No data store configured, skipping persistence")
            return None

        try:
            self.data_store.save_transactions(transactions)
        except PersistenceError as e:
            logger.error(f"Failed to save transactions, continuing without persistence: {e}")
            return False

        logger.info(f"Saved {len(transactions)} transactions")
        return True
