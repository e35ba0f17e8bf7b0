"""Authentication interfaces following Black Box Design principles."""
import hashlib
from typing import List, Protocol

from ..panel.models import PanelUser, TrafficReport


class HashPrimitive(Protocol):
    """One-way function over a credential string."""

    def __call__(self, credential: str) -> str:
        ...


def sha224_hex(credential: str) -> str:
    """Default hash primitive: hex SHA-224, as trojan clients send it."""
    return hashlib.sha224(credential.encode("utf-8")).hexdigest()


class UsagePanel(Protocol):
    """Protocol for the remote panel - allows swappable transports."""

    def fetch_users(self) -> List[PanelUser]:
        """
        Fetch the current user list.

        Raises:
            FetchError: On any failure
        """
        ...

    def push_traffic(self, report: TrafficReport) -> None:
        """
        Report usage.

        Raises:
            PushError: On any failure
        """
        ...

    def close(self) -> None:
        ...


class Authenticator(Protocol):
    """Protocol the proxy's connection handlers program against."""

    def auth(self, credential: str) -> bool:
        """
        Check a credential presented by a connecting client.

        Returns:
            True if the client may connect
        """
        ...

    def record(self, credential: str, download: int, upload: int) -> bool:
        """
        Account traffic for a credential.

        Returns:
            True if the usage was recorded
        """
        ...

    def start(self) -> None:
        ...

    def close(self) -> None:
        ...
