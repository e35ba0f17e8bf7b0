"""
Credential directory.

Holds the panel's current user set as an immutable snapshot. Refreshes
build a complete new snapshot and swap it in by reference, so readers
always see both maps from the same fetch.
"""

import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from ..panel.models import PanelUser

logger = logging.getLogger(__name__)

Hasher = Callable[[str], str]


@dataclass(frozen=True)
class DirectorySnapshot:
    """Read-only credential maps built from a single fetch."""

    accounts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    hashes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, users: Iterable[PanelUser], hasher: Hasher) -> "DirectorySnapshot":
        """
        Build both maps from scratch.

        Duplicate credentials keep the last id seen.
        """
        accounts = {}
        hashes = {}
        for user in users:
            accounts[user.uuid] = user.id
            hashes[hasher(user.uuid)] = user.uuid
        return cls(MappingProxyType(accounts), MappingProxyType(hashes))

    def authenticate(self, credential_hash: str) -> bool:
        credential = self.hashes.get(credential_hash)
        return credential is not None and credential in self.accounts

    def resolve(self, credential: str) -> Optional[int]:
        return self.accounts.get(credential)

    def __len__(self) -> int:
        return len(self.accounts)


class Directory:
    """
    Thread-safe holder of the current DirectorySnapshot.

    The lock only guards the reference swap; snapshots themselves are
    immutable and can be read without it once obtained.
    """

    def __init__(self, hasher: Hasher):
        """
        Initialize an empty directory.

        Args:
            hasher: One-way function applied to credentials for the hash index
        """
        self._hasher = hasher
        self._lock = threading.Lock()
        self._snapshot = DirectorySnapshot()

    @property
    def snapshot(self) -> DirectorySnapshot:
        with self._lock:
            return self._snapshot

    def replace(self, users: Iterable[PanelUser]) -> DirectorySnapshot:
        """
        Install a new snapshot built from ``users``.

        The snapshot is built before the lock is taken; only the swap is
        serialized.

        Returns:
            The installed snapshot
        """
        snapshot = DirectorySnapshot.build(users, self._hasher)
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot

        removed = len(previous.accounts.keys() - snapshot.accounts.keys())
        if removed:
            logger.info(f"{removed} account(s) removed from directory")
        return snapshot

    def authenticate(self, credential: str) -> bool:
        """Check a credential through the hash index of the current snapshot."""
        credential_hash = self._hasher(credential)
        return self.snapshot.authenticate(credential_hash)

    def resolve(self, credential: str) -> Optional[int]:
        """Map a credential to its account id, or None if unknown."""
        return self.snapshot.resolve(credential)

    def __contains__(self, credential: str) -> bool:
        return self.resolve(credential) is not None

    def __len__(self) -> int:
        return len(self.snapshot)
