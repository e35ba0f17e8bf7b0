"""
uniproxy_auth - Panel authentication for proxy nodes

Validates client credentials against a V2Board-compatible panel and
reports per-client traffic back to it.

Architecture:
- Each module is self-contained with clear interfaces
- No module knows the internals of another
- Directory and ledger are synchronized independently

Modules:
- auth: Authenticator facade and factory
- panel: UniProxy HTTP client
- directory: Current credential snapshot
- ledger: Unreported traffic
- sync: Background refresh/flush loop
"""

from .errors import (
    ConfigError,
    FetchError,
    InitializationError,
    PanelError,
    PushError,
    UniProxyAuthError,
)

__version__ = "1.0.0"
