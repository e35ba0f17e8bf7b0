"""
Authentication Module - Black Box Interface

Purpose: Validate proxy credentials and account their traffic
Interface: auth(), record(), start(), close()
Hidden: Directory snapshots, ledger, sync loop, panel transport

Disabled configurations get an always-allow authenticator with the same
interface, so callers never branch on the mode.
"""

from .authenticator import ActiveAuthenticator, DisabledAuthenticator
from .factory import AuthFactory
from .interfaces import Authenticator, HashPrimitive, UsagePanel, sha224_hex

__all__ = [
    "ActiveAuthenticator",
    "AuthFactory",
    "Authenticator",
    "DisabledAuthenticator",
    "HashPrimitive",
    "UsagePanel",
    "sha224_hex",
]
