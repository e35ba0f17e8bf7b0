"""
Sync Module - Black Box Interface

Purpose: Keep directory and ledger in step with the panel
Interface: start(), stop(), run_once()
Hidden: Threading, scheduling, stop signalling
"""

from .sync import SyncLoop

__all__ = ["SyncLoop"]
