import pytest

from tokenguard import logging_config
from tokenguard.auth_token.client import TokenClient
from tokenguard.auth_token.coordinator import RefreshCoordinator
from tokenguard.auth_token.store import InMemoryCredentialStore

from tests.fixtures.fakes import FakeAuthServer, FakeTransport
from tests.fixtures.token_fixtures import get_mock_credentials


@pytest.fixture
def auth_server() -> FakeAuthServer:
    return FakeAuthServer()


@pytest.fixture
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore(**get_mock_credentials("expired"))


@pytest.fixture
def coordinator(auth_server: FakeAuthServer, store: InMemoryCredentialStore) -> RefreshCoordinator:
    token_client = TokenClient(FakeTransport(auth_server.handle_refresh), "/refresh-token")
    return RefreshCoordinator(store, FakeTransport(auth_server.handle), token_client)


@pytest.fixture(autouse=True)
def _fresh_error_aggregator(monkeypatch):
    """Keep structured error records from leaking between tests."""
    monkeypatch.setattr(logging_config, "error_aggregator", logging_config.ErrorAggregator())
