#!/usr/bin/env python3
"""
Main CLI Entry Point for txsummary

Provides one-shot processing, continuous directory watching, and a dry-run
summary command.
"""

import logging
import os
import signal
import threading
from pathlib import Path

import click

from ..core.config import Config, get_config
from ..core.currency import format_dollars
from ..core.errors import PersistenceError, ProcessingCancelledError, TransactionProcessingError
from ..core.summary import aggregate
from ..ingest.loader import ingest_transactions
from ..ingest.watcher import PollingDirectoryWatcher
from ..notify.smtp_sender import SmtpEmailService
from ..processing.processor import TransactionProcessor

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    txsummary - Transaction File Summaries by Email

    Parses transaction CSV files, computes monthly statistics, and emails a
    summary to a recipient.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["TXSUMMARY_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("txsummary").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Persistence: {'enabled' if config.database.enabled else 'disabled'}")


@main.command()
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--recipient", "-r", help="Summary recipient (default: RECIPIENT_EMAIL)")
@click.pass_context
def process(ctx: click.Context, file: Path, recipient: str | None) -> None:
    """
    Process one transaction file and email its summary.

    Examples:
      txsummary process data/txns.csv --recipient someone@example.com
    """
    config: Config = ctx.obj["config"]
    recipient = _require_recipient(recipient, config)
    processor = build_processor(config)

    try:
        result = processor.process_one(file, recipient)
    except TransactionProcessingError as e:
        raise click.ClickException(str(e)) from e
    finally:
        _close_store(processor)

    click.echo(f"Processed {result.transaction_count} transactions from {file}")
    click.echo(f"Summary sent to {recipient}")
    if result.persisted is False:
        click.echo("Warning: transactions were not saved to the database", err=True)


@main.command()
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--recipient", "-r", help="Summary recipient (default: RECIPIENT_EMAIL)")
@click.pass_context
def watch(ctx: click.Context, directory: Path | None, recipient: str | None) -> None:
    """
    Watch a directory and process every new transaction file.

    Runs until interrupted (Ctrl+C or SIGTERM). Failures on individual files
    are logged and do not stop the watch.

    Examples:
      txsummary watch
      txsummary watch /data/incoming --recipient someone@example.com
    """
    config: Config = ctx.obj["config"]
    recipient = _require_recipient(recipient, config)
    directory = directory or config.watch.directory
    processor = build_processor(config)

    cancel_event = threading.Event()
    _install_signal_handlers(cancel_event)

    click.echo(f"Watching {directory} (Ctrl+C to stop)")
    try:
        processor.watch_and_process(directory, recipient, cancel_event)
    except ProcessingCancelledError:
        logger.info("Application stopped gracefully")
        click.echo("Stopped")
    except (FileNotFoundError, TransactionProcessingError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        _close_store(processor)


@main.command()
@click.argument("file", type=click.Path(path_type=Path))
def summarize(file: Path) -> None:
    """
    Print the summary of a file without saving or sending anything.

    Examples:
      txsummary summarize data/txns.csv
    """
    try:
        transactions = ingest_transactions(file)
    except TransactionProcessingError as e:
        raise click.ClickException(str(e)) from e

    summary = aggregate(transactions)

    click.echo(f"Transactions: {summary.transaction_count}")
    click.echo(f"Total balance: {format_dollars(summary.total_balance.to_decimal())}")
    for month, count in summary.sorted_monthly_counts():
        click.echo(f"Number of transactions in {month}: {count}")
    click.echo(f"Average credit amount: {format_dollars(summary.average_credit.to_decimal())}")
    click.echo(f"Average debit amount: {format_dollars(-summary.average_debit.to_decimal())}")


@main.command()
def version() -> None:
    """Show version information."""
    from txsummary import __version__

    click.echo(f"txsummary v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    config_dict = ctx.obj["config"].to_dict()

    click.echo("Current Configuration:")
    for key, value in config_dict.items():
        if isinstance(value, dict):
            click.echo(f"  {key}:")
            for nested_key, nested_value in value.items():
                click.echo(f"    {nested_key}: {nested_value}")
        else:
            click.echo(f"  {key}: {value}")


def build_processor(config: Config) -> TransactionProcessor:
    """Wire the processor from configuration."""
    data_store = None
    if config.database.enabled:
        # Imported lazily so runs without a database never load SQLAlchemy
        from ..storage.datastore import SqlDataStore

        try:
            data_store = SqlDataStore(config.database.url, config.database.default_account_email)
        except PersistenceError as e:
            logger.warning(f"Database initialization failed, continuing without persistence: {e}")
    else:
        logger.info("Database disabled, continuing without persistence")

    watcher = PollingDirectoryWatcher(
        poll_interval=config.watch.poll_seconds,
        pattern=config.watch.pattern,
        include_existing=config.watch.include_existing,
    )
    return TransactionProcessor(
        email_service=SmtpEmailService(config.smtp),
        data_store=data_store,
        watcher=watcher,
    )


def _require_recipient(recipient: str | None, config: Config) -> str:
    recipient = recipient or config.recipient_email
    if not recipient:
        raise click.UsageError("No recipient given; pass --recipient or set RECIPIENT_EMAIL")
    return recipient


def _install_signal_handlers(cancel_event: threading.Event) -> None:
    def _handle(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        cancel_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def _close_store(processor: TransactionProcessor) -> None:
    close = getattr(processor.data_store, "close", None)
    if close is not None:
        close()


if __name__ == "__main__":
    main()
