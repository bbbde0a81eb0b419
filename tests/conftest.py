import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hc import HTTPClient, ObjectPool, Request, Response, set_default_client  # noqa: E402


def pytest_configure(config):
    # Add custom markers for test organization
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def clean_env_vars(monkeypatch):
    """Keep ``HC_*`` variables from the host environment out of tests."""
    for name in ("HC_READ_TIMEOUT", "HC_WRITE_TIMEOUT", "HC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def sent() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def mock_client(sent) -> Callable[..., HTTPClient]:
    """Factory for clients backed by ``httpx.MockTransport``.

    The handler receives the outgoing ``httpx.Request`` and returns an
    ``httpx.Response``; every request is also appended to ``sent``.
    """
    clients = []

    def factory(handler=None, **kwargs) -> HTTPClient:
        def record(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            if handler is None:
                return httpx.Response(200)
            return handler(request)

        kwargs.setdefault("trust_env", False)
        kwargs.setdefault("requests", ObjectPool(Request))
        kwargs.setdefault("responses", ObjectPool(Response))
        client = HTTPClient(transport=httpx.MockTransport(record), **kwargs)
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def default_client(mock_client):
    """Install a mock client as the process default for one test."""

    def install(handler=None) -> HTTPClient:
        client = mock_client(handler)
        previous.append(set_default_client(client))
        return client

    previous = []
    yield install
    if previous:
        set_default_client(previous[0])
