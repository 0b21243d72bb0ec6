"""Pytest hooks and fixtures."""

import os
import xmlrpc.client
from typing import Any

import pytest


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "network: talks to a real XML-RPC endpoint (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip network tests unless a live endpoint is configured."""
    if os.environ.get("WPXMLRPC_TEST_ENDPOINT"):
        return
    skip = pytest.mark.skip(reason="Set WPXMLRPC_TEST_ENDPOINT to run against a live blog")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip)


POST_229 = {
    "post_id": "229",
    "post_title": "Penthouse sea view",
    "post_type": "post",
    "post_status": "publish",
    "post_date": xmlrpc.client.DateTime("20140320T10:30:00"),
    "terms": [],
    "custom_fields": [],
}


class StubTransport:
    """Transport double returning queued bodies (or raising queued exceptions)."""

    name = "stub"

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.sent: list[tuple[bytes, Any]] = []
        self.checked = 0

    def check(self, endpoint) -> None:
        self.checked += 1

    def send(self, payload: bytes, endpoint) -> bytes:
        self.sent.append((payload, endpoint))
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def last_call(self) -> tuple[str, tuple[Any, ...]]:
        """Decode the most recent request body into (method, params)."""
        params, method = xmlrpc.client.loads(self.sent[-1][0])
        return method, params


def success_envelope(value: Any) -> bytes:
    return xmlrpc.client.dumps((value,), methodresponse=True, allow_none=True).encode("utf-8")


def fault_envelope(code: int, message: str) -> bytes:
    return xmlrpc.client.dumps(xmlrpc.client.Fault(code, message), methodresponse=True).encode("utf-8")


@pytest.fixture
def stub_transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def envelopes():
    """Builders for XML-RPC response bodies."""
    class _Envelopes:
        success = staticmethod(success_envelope)
        fault = staticmethod(fault_envelope)
        post_229 = POST_229

    return _Envelopes
