"""
Usage ledger.

Accumulates per-credential traffic between flushes. A flush detaches the
whole map in one step so recording never waits on network I/O.
"""

import threading
from typing import Dict, List, Mapping, Optional, Tuple

Usage = Tuple[int, int]

MAX_COUNT = 2**64 - 1


class Ledger:
    """Thread-safe credential -> (download, upload) accumulator."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, List[int]] = {}

    def add(self, credential: str, download: int, upload: int) -> None:
        """
        Increase a credential's counters.

        Raises:
            TypeError: If a byte count is not an int (bool and float included)
            ValueError: If a byte count is negative or above 2**64 - 1
        """
        for count in (download, upload):
            if type(count) is bool or not isinstance(count, int):
                raise TypeError(f"Byte counts must be int, got {type(count).__name__}")
            if not 0 <= count <= MAX_COUNT:
                raise ValueError(f"Byte counts must be within [0, 2**64 - 1], got ({download}, {upload})")

        with self._lock:
            entry = self._entries.get(credential)
            if entry is None:
                self._entries[credential] = [download, upload]
            else:
                entry[0] += download
                entry[1] += upload

    def detach(self) -> Dict[str, Usage]:
        """Take all pending usage and leave an empty ledger behind."""
        with self._lock:
            entries, self._entries = self._entries, {}
        return {credential: (entry[0], entry[1]) for credential, entry in entries.items()}

    def merge(self, snapshot: Mapping[str, Usage]) -> None:
        """Add a previously detached snapshot back into the live ledger."""
        with self._lock:
            for credential, (download, upload) in snapshot.items():
                entry = self._entries.get(credential)
                if entry is None:
                    self._entries[credential] = [download, upload]
                else:
                    entry[0] += download
                    entry[1] += upload

    def get(self, credential: str) -> Optional[Usage]:
        """Pending usage for one credential, or None."""
        with self._lock:
            entry = self._entries.get(credential)
            return (entry[0], entry[1]) if entry is not None else None

    def pending(self) -> Dict[str, Usage]:
        """Copy of all pending usage, without detaching it."""
        with self._lock:
            return {credential: (entry[0], entry[1]) for credential, entry in self._entries.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
