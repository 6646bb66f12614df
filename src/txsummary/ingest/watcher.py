#!/usr/bin/env python3
"""
Directory Watcher

Polls a directory and yields transaction files as they appear or change.

A file is reported only once its size and modification time have been
stable across two consecutive polls, so files still being copied in are not
picked up half written.
"""

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# (size in bytes, mtime in ns)
FileSignature = tuple[int, int]


class PollingDirectoryWatcher:
    """
    Watches one directory for new or modified files matching a glob pattern.

    Files already present when the watch starts are treated as seen unless
    include_existing is True.
    """

    def __init__(self, poll_interval: float = 1.0, pattern: str = "*.csv", include_existing: bool = False):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.poll_interval = poll_interval
        self.pattern = pattern
        self.include_existing = include_existing

    def watch(self, directory: Path, cancel_event: threading.Event) -> Iterator[Path]:
        """
        Yield paths of new or changed files until cancel_event is set.

        Args:
            directory: Directory to poll
            cancel_event: Stops the watch when set

        Yields:
            Path of each file that became ready

        Raises:
            FileNotFoundError: If directory does not exist
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Watch directory not found: {directory}")

        logger.info(f"Watching {directory} for {self.pattern} (poll every {self.poll_interval}s)")

        reported: dict[Path, FileSignature] = {}
        pending: dict[Path, FileSignature] = {}

        if not self.include_existing:
            reported.update(self._scan(directory))
            logger.debug(f"Ignoring {len(reported)} pre-existing files in {directory}")

        while not cancel_event.is_set():
            current = self._scan(directory)

            for seen in (reported, pending):
                for path in [p for p in seen if p not in current]:
                    del seen[path]

            ready = []
            for path, signature in current.items():
                if reported.get(path) == signature:
                    pending.pop(path, None)
                    continue
                if pending.get(path) == signature:
                    ready.append(path)
                else:
                    pending[path] = signature

            for path in sorted(ready):
                if cancel_event.is_set():
                    break
                reported[path] = pending.pop(path)
                logger.info(f"New transaction file detected: {path}")
                yield path

            cancel_event.wait(self.poll_interval)

        logger.info(f"Stopped watching {directory}")

    def _scan(self, directory: Path) -> dict[Path, FileSignature]:
        signatures: dict[Path, FileSignature] = {}
        for path in directory.glob(self.pattern):
            try:
                stat = path.stat()
            except OSError as e:
                # Removed between glob and stat
                logger.debug(f"Cannot stat {path}: {e}")
                continue
            if path.is_file():
                signatures[path] = (stat.st_size, stat.st_mtime_ns)
        return signatures
