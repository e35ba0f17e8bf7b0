"""Exception hierarchy shared by all uniproxy_auth modules."""

from typing import Optional


class UniProxyAuthError(Exception):
    """Base class for all uniproxy_auth errors."""


class ConfigError(UniProxyAuthError, ValueError):
    """Raised when panel configuration is missing or invalid."""


class InitializationError(UniProxyAuthError):
    """Raised when an enabled authenticator cannot seed its directory."""


class PanelError(UniProxyAuthError):
    """
    Base class for panel I/O failures.

    Args:
        message: Human readable description
        url: Request URL with the API token redacted
        status_code: HTTP status when the panel answered, else None
    """

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchError(PanelError):
    """User list could not be fetched or did not match the expected schema."""


class PushError(PanelError):
    """Traffic report was not accepted by the panel."""


__all__ = [
    "UniProxyAuthError",
    "ConfigError",
    "InitializationError",
    "PanelError",
    "FetchError",
    "PushError",
]
