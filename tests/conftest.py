"""
Shared pytest fixtures for uniproxy_auth tests.

This module provides:
- FakePanel: scripted UniProxy panel served through httpx.MockTransport
- Panel configuration and client fixtures
"""

import json
import os
import sys
from typing import Any, Dict, List, Union

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from uniproxy_auth.config.provider import PanelConfig
from uniproxy_auth.modules.panel import PanelClient
from uniproxy_auth.modules.panel.client import PUSH_PATH, USER_PATH

Scripted = Union[httpx.Response, Exception]


class FakePanel:
    """
    In-memory stand-in for the panel's UniProxy endpoints.

    Usage:
        def test_push(fake_panel, panel_client):
            fake_panel.set_users({"abc": 7})
            fake_panel.fail_next_push(httpx.ConnectError("down"))
            ...
            assert fake_panel.pushes == [{"7": ["100", "50"]}]

    Scripted responses are consumed first; once exhausted the panel
    answers with the current user list or accepts the push.
    """

    def __init__(self):
        self.users: List[Dict[str, Any]] = []
        self.user_script: List[Scripted] = []
        self.push_script: List[Scripted] = []
        self.requests: List[httpx.Request] = []
        self.push_attempts: List[Dict[str, Any]] = []
        self.pushes: List[Dict[str, Any]] = []

    def set_users(self, users: Dict[str, int]) -> "FakePanel":
        self.users = [{"uuid": uuid, "id": account_id} for uuid, account_id in users.items()]
        return self

    def fail_next_fetch(self, failure: Scripted) -> "FakePanel":
        self.user_script.append(failure)
        return self

    def fail_next_push(self, failure: Scripted) -> "FakePanel":
        self.push_script.append(failure)
        return self

    @property
    def fetch_count(self) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith(USER_PATH))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path.endswith(USER_PATH):
            scripted = self._answer(self.user_script)
            if scripted is not None:
                return scripted
            return httpx.Response(200, json={"users": self.users})

        if request.url.path.endswith(PUSH_PATH):
            payload = json.loads(request.content)
            self.push_attempts.append(payload)
            scripted = self._answer(self.push_script)
            if scripted is not None and not scripted.is_success:
                return scripted
            self.pushes.append(payload)
            if scripted is not None:
                return scripted
            return httpx.Response(200, json={"data": True})

        return httpx.Response(404)

    @staticmethod
    def _answer(script: List[Scripted]):
        if not script:
            return None
        item = script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def panel_config():
    """Enabled panel configuration with a short sync interval."""
    return PanelConfig(
        enabled=True,
        api_host="https://panel.example.com",
        api_key="secret-token",
        node_id=3,
        sync_interval=0.05,
    )


@pytest.fixture
def fake_panel():
    """Fake panel seeded with one account."""
    return FakePanel().set_users({"abc": 7})


@pytest.fixture
def panel_client(panel_config, fake_panel):
    """PanelClient wired to the fake panel."""
    client = PanelClient(panel_config, transport=httpx.MockTransport(fake_panel.handler))
    yield client
    client.close()
