"""Credential storage, the refresh exchange client and the refresh coordinator."""

from .client import TokenClient, TokenOutcome, TokenResult
from .coordinator import RefreshCoordinator, RefreshOutcome, RefreshState
from .store import CredentialStore, InMemoryCredentialStore, JsonFileCredentialStore

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "RefreshCoordinator",
    "RefreshOutcome",
    "RefreshState",
    "TokenClient",
    "TokenOutcome",
    "TokenResult",
]
