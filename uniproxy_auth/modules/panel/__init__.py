"""
Panel Module - Black Box Interface

Purpose: Talk to the remote account panel
Interface: PanelClient.fetch_users(), PanelClient.push_traffic()
Hidden: HTTP transport, URL layout, query parameters, response validation

Replaceable with any client exposing the same two calls.
"""

from .client import PanelClient
from .models import PanelUser, TrafficReport, UserListResponse

__all__ = ["PanelClient", "PanelUser", "TrafficReport", "UserListResponse"]
