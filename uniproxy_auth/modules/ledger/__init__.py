"""
Ledger Module - Black Box Interface

Purpose: Accumulate traffic not yet reported to the panel
Interface: add(), detach(), merge(), pending()
Hidden: Storage layout, locking
"""

from .ledger import Ledger

__all__ = ["Ledger"]
