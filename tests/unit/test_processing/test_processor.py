#!/usr/bin/env python3
"""Tests for the transaction processor."""

import logging
import threading
from decimal import Decimal

import pytest

from tests.fixtures.transaction_files import write_raw_csv, write_transactions_csv
from txsummary.core.errors import (
    EmailDeliveryError,
    EmptyFileError,
    InvalidFormatError,
    PersistenceError,
    ProcessingCancelledError,
    SourceReadError,
    TransactionProcessingError,
)
from txsummary.processing.processor import TransactionProcessor
from txsummary.storage.datastore import SqlDataStore


class FakeEmailService:
    """Records summaries instead of sending them."""

    def __init__(self, error: Exception | None = None):
        self.sent = []
        self.error = error

    def render_template(self, summary):
        return "<html></html>"

    def send(self, recipient, rendered_body):
        self.sent.append((recipient, rendered_body))

    def send_summary(self, recipient, summary):
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, summary))


class FakeDataStore:
    """Collects saved batches, optionally failing."""

    def __init__(self, fail: bool = False):
        self.saved = []
        self.fail = fail

    def save_transactions(self, transactions):
        if self.fail:
            raise PersistenceError("database unavailable")
        self.saved.append(list(transactions))

    def get_account_balance(self, account_id):
        return Decimal(0)

    def save_account(self, email):
        return "account-1"


class ListWatcher:
    """Yields a fixed list of paths, then sets the cancel event."""

    def __init__(self, paths, cancel_at_end: bool = True):
        self.paths = paths
        self.cancel_at_end = cancel_at_end

    def watch(self, directory, cancel_event):
        yield from self.paths
        if self.cancel_at_end:
            cancel_event.set()


class TestProcessOne:
    """Test single-file processing."""

    def test_success(self, sample_csv):
        """Test load, aggregate, persist and email in order."""
        email, store = FakeEmailService(), FakeDataStore()
        processor = TransactionProcessor(email_service=email, data_store=store)

        result = processor.process_one(sample_csv, "someone@example.com")

        assert result.transaction_count == 5
        assert result.persisted is True
        assert result.summary.total_balance.to_decimal() == Decimal("54.99")
        assert len(store.saved) == 1 and len(store.saved[0]) == 5
        assert email.sent == [("someone@example.com", result.summary)]

    def test_without_data_store(self, sample_csv):
        """Test persistence is optional."""
        email = FakeEmailService()
        result = TransactionProcessor(email_service=email).process_one(sample_csv, "someone@example.com")

        assert result.persisted is None
        assert len(email.sent) == 1

    def test_empty_file_sends_nothing(self, temp_dir):
        """Test a file with no valid records is an error and nothing is sent."""
        path = write_transactions_csv(temp_dir / "empty.csv", [("x", "bad", "bad")])
        email, store = FakeEmailService(), FakeDataStore()

        with pytest.raises(EmptyFileError):
            TransactionProcessor(email_service=email, data_store=store).process_one(path, "someone@example.com")

        assert email.sent == []
        assert store.saved == []

    def test_invalid_header(self, temp_dir):
        """Test format errors propagate before any side effect."""
        path = write_raw_csv(temp_dir / "bad.csv", "a,b,c\n1,2024-07-15,+1\n")
        email = FakeEmailService()

        with pytest.raises(InvalidFormatError):
            TransactionProcessor(email_service=email).process_one(path, "someone@example.com")
        assert email.sent == []

    def test_missing_file(self, temp_dir):
        """Test an absent file is a read error."""
        with pytest.raises(SourceReadError):
            TransactionProcessor(email_service=FakeEmailService()).process_one(
                temp_dir / "missing.csv", "someone@example.com"
            )

    def test_persistence_failure_still_emails(self, sample_csv, caplog):
        """Test a failed save is logged and the summary is still delivered."""
        email = FakeEmailService()
        processor = TransactionProcessor(email_service=email, data_store=FakeDataStore(fail=True))

        with caplog.at_level(logging.ERROR, logger="txsummary.processing.processor"):
            result = processor.process_one(sample_csv, "someone@example.com")

        assert result.persisted is False
        assert len(email.sent) == 1
        assert "Failed to save transactions" in caplog.text

    def test_email_failure_is_fatal(self, sample_csv):
        """Test delivery errors propagate after persisting."""
        store = FakeDataStore()
        processor = TransactionProcessor(
            email_service=FakeEmailService(error=EmailDeliveryError("smtp down")), data_store=store
        )

        with pytest.raises(EmailDeliveryError):
            processor.process_one(sample_csv, "someone@example.com")
        assert len(store.saved) == 1

    def test_cancelled(self, sample_csv):
        """Test a set cancel event stops before anything is sent."""
        cancel = threading.Event()
        cancel.set()
        email = FakeEmailService()

        with pytest.raises(ProcessingCancelledError):
            TransactionProcessor(email_service=email).process_one(
                sample_csv, "someone@example.com", cancel_event=cancel
            )
        assert email.sent == []

    @pytest.mark.integration
    def test_with_sql_store(self, sample_csv):
        """Test the real SQL store behind the processor."""
        store = SqlDataStore("sqlite://")
        try:
            result = TransactionProcessor(email_service=FakeEmailService(), data_store=store).process_one(
                sample_csv, "someone@example.com"
            )
            account_id = store.get_account_id(store.default_account_email)
            assert result.persisted is True
            assert store.get_account_balance(account_id) == Decimal("54.99")
        finally:
            store.close()


class TestWatchAndProcess:
    """Test the continuous watch loop."""

    def test_processes_each_file_and_survives_failures(self, temp_dir, sample_csv, caplog):
        """Test a bad file is logged and later files are still processed."""
        bad = write_raw_csv(temp_dir / "bad.csv", "nope\n")
        empty = write_transactions_csv(temp_dir / "empty.csv", [])
        email = FakeEmailService()
        processor = TransactionProcessor(email_service=email, watcher=ListWatcher([bad, empty, sample_csv]))

        with caplog.at_level(logging.ERROR, logger="txsummary.processing.processor"):
            with pytest.raises(ProcessingCancelledError):
                processor.watch_and_process(temp_dir, "someone@example.com", threading.Event())

        assert len(email.sent) == 1
        assert f"Failed to process {bad}" in caplog.text
        assert f"Failed to process {empty}" in caplog.text

    def test_unexpected_errors_do_not_stop_loop(self, temp_dir, sample_csv):
        """Test even non-domain errors are contained per file."""
        email = FakeEmailService(error=RuntimeError("boom"))
        processor = TransactionProcessor(email_service=email, watcher=ListWatcher([sample_csv, sample_csv]))

        with pytest.raises(ProcessingCancelledError):
            processor.watch_and_process(temp_dir, "someone@example.com", threading.Event())

    def test_stops_when_cancelled_between_files(self, temp_dir, sample_csv):
        """Test files delivered after cancellation are not processed."""
        cancel = threading.Event()

        class CancellingEmail(FakeEmailService):
            def send_summary(self, recipient, summary):
                super().send_summary(recipient, summary)
                cancel.set()

        email = CancellingEmail()
        processor = TransactionProcessor(email_service=email, watcher=ListWatcher([sample_csv, sample_csv]))

        with pytest.raises(ProcessingCancelledError):
            processor.watch_and_process(temp_dir, "someone@example.com", cancel)

        assert len(email.sent) == 1

    def test_watcher_ending_without_cancel_is_an_error(self, temp_dir):
        """Test a watcher that simply stops is reported."""
        processor = TransactionProcessor(email_service=FakeEmailService(), watcher=ListWatcher([], cancel_at_end=False))

        with pytest.raises(TransactionProcessingError, match="stopped without cancellation"):
            processor.watch_and_process(temp_dir, "someone@example.com", threading.Event())

    def test_missing_directory(self, temp_dir):
        """Test the default watcher rejects a missing directory."""
        processor = TransactionProcessor(email_service=FakeEmailService())

        with pytest.raises(FileNotFoundError):
            processor.watch_and_process(temp_dir / "missing", "someone@example.com", threading.Event())
