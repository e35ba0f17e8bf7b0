"""
Periodic panel synchronization.

Runs a background thread that refreshes the directory and then flushes
the ledger once per interval, until stopped.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SyncLoop:
    """Cancellable refresh-then-flush loop."""

    def __init__(
        self,
        refresh: Callable[[], bool],
        flush: Callable[[], bool],
        interval: float = 180.0,
        name: str = "uniproxy-sync",
    ):
        """
        Initialize sync loop.

        Args:
            refresh: Directory refresh step
            flush: Ledger flush step
            interval: Seconds between cycles
            name: Thread name
        """
        self.refresh = refresh
        self.flush = flush
        self.interval = interval
        self.name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self.cycles = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background thread; no-op if already running."""
        with self._lock:
            if self.is_running:
                return
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, daemon=True, name=self.name)
            self._thread.start()
        logger.info(f"Sync loop started (interval {self.interval}s)")

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Signal the loop to exit and wait for it.

        A cycle already in progress finishes first; its network calls are
        bounded by the panel client's timeouts.

        Returns:
            True if the thread has exited
        """
        with self._lock:
            thread = self._thread
            self._stop.set()
        if thread is None:
            return True

        thread.join(timeout)
        if thread.is_alive():
            logger.warning(f"Sync loop did not stop within {timeout}s")
            return False

        with self._lock:
            if self._thread is thread:
                self._thread = None
        logger.info("Sync loop stopped")
        return True

    def run_once(self) -> None:
        """
        Run one refresh-then-flush cycle in the calling thread.

        Each step is guarded separately; a failed refresh still lets the
        pending traffic be flushed.
        """
        logger.info("Updating user list from panel")
        try:
            self.refresh()
        except Exception as e:
            logger.exception(f"User list refresh failed: {e}")

        logger.info("Pushing traffic data to panel")
        try:
            self.flush()
        except Exception as e:
            logger.exception(f"Traffic flush failed: {e}")

        with self._lock:
            self.cycles += 1

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.run_once()
