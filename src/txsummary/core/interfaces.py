#!/usr/bin/env python3
"""
Collaborator Protocols

Narrow interfaces the processor depends on, separating the parsing and
aggregation core from directory watching, persistence, and email delivery.
Concrete implementations live in txsummary.ingest, txsummary.storage and
txsummary.notify; tests substitute simple fakes.
"""

import threading
from collections.abc import Iterator, Sequence
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from .models import Transaction
from .summary import Summary


class FileWatcher(Protocol):
    """Source of "new file appeared" notifications for a directory."""

    def watch(self, directory: Path, cancel_event: threading.Event) -> Iterator[Path]:
        """
        Yield paths of new matching files as they appear.

        The iterator is lazy and potentially infinite. It must stop yielding
        and release its resources once cancel_event is set.

        Raises:
            FileNotFoundError: If directory does not exist
        """
        ...


class DataStore(Protocol):
    """Persistence of processed transactions."""

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        """
        Save a batch atomically.

        Either every transaction in the batch becomes visible or none does.

        Raises:
            PersistenceError: If the batch could not be saved
        """
        ...

    def get_account_balance(self, account_id: str) -> Decimal:
        """
        Sum of signed amounts saved for an account.

        Returns:
            Balance, or zero for an account with no transactions
        """
        ...

    def save_account(self, email: str) -> str:
        """
        Create an account.

        Returns:
            New account identifier
        """
        ...


class EmailService(Protocol):
    """Rendering and delivery of summary emails."""

    def render_template(self, summary: Summary) -> str:
        """Render the summary as an email body."""
        ...

    def send(self, recipient: str, rendered_body: str) -> None:
        """
        Deliver a rendered body.

        Raises:
            EmailDeliveryError: If delivery fails
        """
        ...

    def send_summary(self, recipient: str, summary: Summary) -> None:
        """
        Render and deliver in one call.

        Raises:
            EmailDeliveryError: If rendering or delivery fails
        """
        ...
