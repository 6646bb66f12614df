#!/usr/bin/env python3
"""
SQL DataStore Implementation

Persists processed transactions with SQLAlchemy. Every batch is attributed to
a single default account and written inside one database transaction, so a
failed save leaves nothing from the batch behind.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import DEFAULT_ACCOUNT_EMAIL
from ..core.errors import PersistenceError
from ..core.models import Transaction, TransactionKind
from ..core.money import Money
from .client import create_db_engine, create_session_factory, session_scope
from .models import AccountRow, Base, TransactionRow

logger = logging.getLogger(__name__)


class SqlDataStore:
    """
    DataStore backed by any SQLAlchemy-supported database.

    Note: all saved transactions belong to one default account; the source
    files carry no account information.
    """

    def __init__(self, database_url: str, default_account_email: str = DEFAULT_ACCOUNT_EMAIL):
        """
        Initialize the store and create the schema if needed.

        Args:
            database_url: SQLAlchemy URL, e.g. "postgresql+psycopg://..." or "sqlite:///txsummary.db"
            default_account_email: Account every saved batch is attributed to

        Raises:
            PersistenceError: If the database cannot be reached
        """
        self.default_account_email = default_account_email
        self.engine: Engine = create_db_engine(database_url)
        self._session_factory = create_session_factory(self.engine)

        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            self.engine.dispose()
            raise PersistenceError(f"cannot initialize database: {e}") from e

        logger.info(f"Database ready: {self.engine.url.render_as_string(hide_password=True)}")

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        """
        Save a batch atomically under the default account.

        Raises:
            PersistenceError: If any insert fails; the whole batch is rolled back
        """
        if not transactions:
            return

        logger.debug(f"Saving batch of {len(transactions)} transactions")
        try:
            with session_scope(self._session_factory) as session:
                account_id = self._get_or_create_account(session, self.default_account_email)
                session.add_all(_to_row(account_id, t) for t in transactions)
        except SQLAlchemyError as e:
            raise PersistenceError(f"saving {len(transactions)} transactions failed: {e}") from e

        logger.info(f"Saved {len(transactions)} transactions to account {self.default_account_email}")

    def get_account_balance(self, account_id: str) -> Decimal:
        """
        Sum of signed amounts for an account (zero if it has none).

        Summed in Python so the result is exact on every backend.
        """
        try:
            with session_scope(self._session_factory) as session:
                amounts = session.scalars(
                    select(TransactionRow.amount).where(TransactionRow.account_id == account_id)
                ).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"reading balance for account {account_id} failed: {e}") from e

        return sum((Decimal(a) for a in amounts), Decimal(0))

    def save_account(self, email: str) -> str:
        """
        Create an account and return its id.

        Raises:
            PersistenceError: If the account cannot be created (e.g. duplicate email)
        """
        try:
            with session_scope(self._session_factory) as session:
                account_id = self._create_account(session, email)
        except SQLAlchemyError as e:
            raise PersistenceError(f"creating account {email} failed: {e}") from e
        return account_id

    def get_account_id(self, email: str) -> str | None:
        """Look up an account id by email."""
        with session_scope(self._session_factory) as session:
            return session.scalar(select(AccountRow.id).where(AccountRow.email == email))

    def get_transactions(
        self, account_id: str, start: date | None = None, end: date | None = None
    ) -> list[Transaction]:
        """
        Load saved transactions for an account, optionally within [start, end].

        Debits come back as positive magnitudes with kind DEBIT.
        """
        stmt = select(TransactionRow).where(TransactionRow.account_id == account_id)
        if start is not None:
            stmt = stmt.where(TransactionRow.transaction_date >= start)
        if end is not None:
            stmt = stmt.where(TransactionRow.transaction_date <= end)
        stmt = stmt.order_by(TransactionRow.transaction_date, TransactionRow.row_id)

        transactions = []
        with session_scope(self._session_factory) as session:
            for row in session.scalars(stmt):
                try:
                    kind = TransactionKind(row.transaction_type)
                except ValueError:
                    logger.warning(f"Unknown transaction type {row.transaction_type!r} for row {row.row_id}")
                    continue
                transactions.append(
                    Transaction(
                        id=row.external_id,
                        date=row.transaction_date,
                        amount=Money.from_decimal(Decimal(row.amount)).abs(),
                        kind=kind,
                    )
                )
        return transactions

    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def _get_or_create_account(self, session: Session, email: str) -> str:
        account_id = session.scalar(select(AccountRow.id).where(AccountRow.email == email))
        if account_id is None:
            account_id = self._create_account(session, email)
        return account_id

    def _create_account(self, session: Session, email: str) -> str:
        account_id = str(uuid.uuid4())
        session.add(AccountRow(id=account_id, email=email))
        session.flush()
        logger.info(f"Created account {account_id} for {email}")
        return account_id


def _to_row(account_id: str, transaction: Transaction) -> TransactionRow:
    return TransactionRow(
        external_id=transaction.id,
        account_id=account_id,
        transaction_date=transaction.date,
        amount=transaction.signed_amount.to_decimal(),
        transaction_type=transaction.kind.value,
    )
