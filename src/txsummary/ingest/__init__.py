"""
Ingestion Package

Reading transaction files and discovering new ones.

This package provides:
- CSV loading with per-record validation and skip-on-error semantics
- Polling directory watcher for continuous processing
"""

from .loader import EXPECTED_HEADER, ingest_transactions
from .watcher import PollingDirectoryWatcher

__all__ = [
    "EXPECTED_HEADER",
    "PollingDirectoryWatcher",
    "ingest_transactions",
]
