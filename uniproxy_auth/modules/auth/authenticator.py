"""
Panel-backed authenticator for proxy connections.

Connection handlers call auth() and record() from any thread. A background
SyncLoop keeps the directory fresh and reports recorded traffic. Both
paths only touch the network from the loop (or close()), never from
auth()/record().
"""

import logging
import threading
from collections import defaultdict
from typing import Dict, Optional, Tuple

from ...config.provider import PanelConfig
from ...errors import FetchError, InitializationError, PushError
from ...logging_config import mask_credential
from ..directory import Directory
from ..ledger import Ledger
from ..panel.models import TrafficReport
from ..sync import SyncLoop
from .interfaces import HashPrimitive, UsagePanel, sha224_hex

logger = logging.getLogger(__name__)


class DisabledAuthenticator:
    """
    Authenticator used when panel integration is turned off.

    Every credential is accepted and nothing is accounted.
    """

    enabled = False

    def auth(self, credential: str) -> bool:
        return True

    def record(self, credential: str, download: int, upload: int) -> bool:
        return False

    def start(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> "DisabledAuthenticator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ActiveAuthenticator:
    """
    Authenticator backed by a remote panel.

    Owns the Directory, the Ledger and the SyncLoop. Construction seeds the
    directory with one synchronous fetch; the loop is started separately
    with start().
    """

    enabled = True

    def __init__(
        self,
        config: PanelConfig,
        panel: UsagePanel,
        hasher: HashPrimitive = sha224_hex,
    ):
        """
        Initialize and seed the directory.

        Args:
            config: Panel configuration
            panel: Client used for fetch and push
            hasher: One-way function for the credential hash index

        Raises:
            InitializationError: If the initial user list fetch fails
        """
        self.config = config
        self.panel = panel
        self.directory = Directory(hasher)
        self.ledger = Ledger()
        self.sync_loop = SyncLoop(self.refresh, self.flush, interval=config.sync_interval)
        self._closed = False
        self._close_lock = threading.Lock()

        try:
            self._refresh()
        except FetchError as e:
            raise InitializationError(f"Failed to fetch initial user list from panel: {e}") from e

    def auth(self, credential: str) -> bool:
        """
        Check a credential against the current directory.

        The credential is hashed and looked up in the hash index; the
        recovered credential must still hold an account id.
        """
        return self.directory.authenticate(credential)

    def record(self, credential: str, download: int, upload: int) -> bool:
        """
        Add traffic for a known credential.

        Args:
            credential: Credential of the connection
            download: Bytes sent to the client
            upload: Bytes received from the client

        Returns:
            False, without touching the ledger, for unknown credentials

        Raises:
            TypeError: If a byte count is not an int
            ValueError: If a byte count is negative or above 2**64 - 1
        """
        if self.directory.resolve(credential) is None:
            return False
        self.ledger.add(credential, download, upload)
        return True

    def refresh(self) -> bool:
        """
        Replace the directory from a fresh fetch.

        Returns:
            False if the fetch failed; the previous directory stays in effect
        """
        try:
            self._refresh()
        except FetchError as e:
            logger.error(f"Failed to update user list from panel: {e}")
            return False
        return True

    def _refresh(self) -> None:
        users = self.panel.fetch_users()
        snapshot = self.directory.replace(users)
        logger.info(f"Fetched {len(snapshot)} users from panel")

    def flush(self) -> bool:
        """
        Report pending traffic to the panel.

        Once detached, usage is merged back on any failure, including an
        unexpected exception, which is re-raised after the merge.

        Returns:
            True if the report was accepted or nothing was pending.
            False if the push failed; all detached usage is merged back.
        """
        pending = self.ledger.detach()
        if not pending:
            return True

        try:
            totals, dropped = self._resolve(pending)
            if dropped:
                logger.info(f"Dropping traffic for {dropped} credential(s) no longer in directory")
            if not totals:
                return True
            self.panel.push_traffic(TrafficReport.from_totals(totals))
        except PushError as e:
            logger.error(f"Failed to push traffic data: {e}")
            self.ledger.merge(pending)
            return False
        except Exception:
            logger.exception("Unexpected error while flushing traffic, usage kept for next flush")
            self.ledger.merge(pending)
            raise

        logger.info(f"Traffic data pushed successfully for {len(totals)} account(s)")
        return True

    def _resolve(self, pending: Dict[str, Tuple[int, int]]) -> Tuple[Dict[int, Tuple[int, int]], int]:
        snapshot = self.directory.snapshot
        totals: Dict[int, list] = defaultdict(lambda: [0, 0])
        dropped = 0
        for credential, (download, upload) in pending.items():
            account_id = snapshot.resolve(credential)
            if account_id is None:
                logger.debug(f"No account for {mask_credential(credential)}, dropping its traffic")
                dropped += 1
                continue
            totals[account_id][0] += download
            totals[account_id][1] += upload
        return {account_id: (d, u) for account_id, (d, u) in totals.items()}, dropped

    def start(self) -> None:
        """Start periodic synchronization."""
        if self._closed:
            raise RuntimeError("Authenticator is closed")
        self.sync_loop.start()

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Stop synchronization and make one final flush attempt.

        Args:
            timeout: Max seconds to wait for an in-progress cycle
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        self.sync_loop.stop(timeout)
        try:
            if not self.flush():
                logger.warning(f"Final flush failed; {len(self.ledger)} credential(s) unreported")
        finally:
            self.panel.close()

    def __enter__(self) -> "ActiveAuthenticator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
