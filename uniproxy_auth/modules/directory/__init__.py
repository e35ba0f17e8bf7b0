"""
Directory Module - Black Box Interface

Purpose: Know which credentials are currently valid
Interface: replace(), authenticate(), resolve()
Hidden: Snapshot layout, hash index, locking
"""

from .directory import Directory, DirectorySnapshot

__all__ = ["Directory", "DirectorySnapshot"]
