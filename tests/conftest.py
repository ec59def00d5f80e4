"""
Pytest configuration and shared fixtures for the Altegio MCP tests.
"""

import functools
import json

import httpx
import pytest

from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import AltegioConfig, load_config
from altegio_mcp.tools import clients, records, schedule, services, staff, transactions

TOOL_MODULES = (records, clients, services, staff, schedule, transactions)


class FakeAltegio:
    """Records outgoing requests and replays queued responses through httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self._queue = []
        self.transport = httpx.MockTransport(self._handle)

    def respond(self, data=None, status=200):
        """Queue an enveloped success response carrying `data`."""
        self._queue.append((status, {"json": {"success": True, "data": data, "meta": {}}}))

    def respond_raw(self, status=200, **kwargs):
        """Queue a response built from raw httpx.Response kwargs (json=..., text=...)."""
        self._queue.append((status, kwargs))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._queue:
            status, kwargs = self._queue.pop(0)
            return httpx.Response(status, **kwargs)
        return httpx.Response(200, json={"success": True, "data": []})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def config():
    return AltegioConfig(
        partner_token="test_partner_token",
        user_token="test_user_token",
        company_id="99999",
    )


@pytest.fixture
def altegio_env(monkeypatch):
    monkeypatch.setenv("ALTEGIO_TOKEN", "test_partner_token")
    monkeypatch.setenv("ALTEGIO_USER_TOKEN", "test_user_token")
    monkeypatch.setenv("ALTEGIO_COMPANY_ID", "99999")
    monkeypatch.delenv("ALTEGIO_BASE_URL", raising=False)
    monkeypatch.delenv("ALTEGIO_TIMEOUT", raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def fake_altegio():
    return FakeAltegio()


@pytest.fixture
def fake_api(monkeypatch, altegio_env, fake_altegio):
    """Route every tool's API client through the fake transport."""
    client_factory = functools.partial(AltegioAPIClient, transport=fake_altegio.transport)
    for module in TOOL_MODULES:
        monkeypatch.setattr(module, "AltegioAPIClient", client_factory)
    return fake_altegio
