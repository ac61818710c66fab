"""HTTP client with transparent single-flight access token refresh."""

from .api.client import ApiClient
from .auth_token.client import TokenClient
from .auth_token.coordinator import RefreshCoordinator, RefreshState
from .auth_token.store import InMemoryCredentialStore, JsonFileCredentialStore
from .errors.internal import AuthorizationFailure, NetworkError, ResponseError
from .http.transport import AiohttpTransport, RequestSpec, Response

__version__ = "0.1.0"

__all__ = [
    "AiohttpTransport",
    "ApiClient",
    "AuthorizationFailure",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "NetworkError",
    "RefreshCoordinator",
    "RefreshState",
    "RequestSpec",
    "Response",
    "ResponseError",
    "TokenClient",
]
