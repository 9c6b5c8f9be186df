"""
Pytest fixtures for the Falu client tests.
"""

import json

import pytest

from falu.client import FaluClient
from falu.core.config import ClientOptions
from falu.core.retry import RetryPolicy
from falu.core.transport import TransportResponse


class FakeTransport:
    """Replays queued responses (or raises queued exceptions) and records requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    async def send(self, request):
        self.requests.append(request)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self):
        self.closed = True


def _json_response(status_code, body=None, headers=None):
    if body is None:
        content = b""
    elif isinstance(body, bytes):
        content = body
    else:
        content = json.dumps(body).encode("utf-8")
    return TransportResponse(status_code=status_code, headers=headers or {}, content=content)


@pytest.fixture
def json_response():
    """Factory for transport responses with a JSON body."""
    return _json_response


@pytest.fixture
def options():
    """Client options with a test key."""
    return ClientOptions(api_key="sk_test_123")


@pytest.fixture
def no_delay_policy():
    """Retry policy that never sleeps."""
    return RetryPolicy(max_retries=2, base_delay=0, max_delay=0, jitter=0)


@pytest.fixture
def make_client(options, no_delay_policy):
    """Build a client around a fake transport replaying ``responses``."""

    def factory(*responses):
        transport = FakeTransport(*responses)
        client = FaluClient(options, transport=transport, retry_policy=no_delay_policy)
        return client, transport

    return factory


@pytest.fixture
def fake_transport():
    """The recording transport class, for tests that drive the runtime directly."""
    return FakeTransport
