"""Environment-backed settings for the demo server and the refreshing client."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class ServerSettings:
    """Settings for the demo authorization server.

    Attributes:
        port: TCP port to listen on.
        token: The only access token the server accepts.
        refresh_token: The only refresh token the server exchanges.
        route_get_auth: Path of the auth check endpoint.
        route_post_todo: Path of the sample application endpoint.
        route_post_refresh_token: Path of the refresh endpoint.
    """

    port: int = 3333
    token: str = "123456"
    refresh_token: str = "abcd"
    route_get_auth: str = "/auth"
    route_post_todo: str = "/todo"
    route_post_refresh_token: str = "/refresh-token"

    @classmethod
    def from_env(cls) -> ServerSettings:
        return cls(
            port=constants.PORT,
            token=constants.TOKEN,
            refresh_token=constants.REFRESH_TOKEN,
            route_get_auth=constants.ROUTE_GET_AUTH,
            route_post_todo=constants.ROUTE_POST_TODO,
            route_post_refresh_token=constants.ROUTE_POST_REFRESH_TOKEN,
        )


@dataclass(frozen=True)
class ClientSettings:
    """Settings for the refreshing API client.

    Attributes:
        base_url: Base URL every request path is joined to.
        access_token: Initial access token ("" means none).
        refresh_token: Refresh token used for the exchange.
        refresh_path: Path of the refresh endpoint on the same server.
        token_file: Optional JSON file used to persist credentials.
        timeout: Total per-request timeout in seconds.
    """

    base_url: str = "http://localhost:3333"
    access_token: str = ""
    refresh_token: str = ""
    refresh_path: str = "/refresh-token"
    token_file: str = ""
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> ClientSettings:
        return cls(
            base_url=constants.API_BASE_URL,
            access_token=constants.ACCESS_TOKEN,
            refresh_token=constants.REFRESH_TOKEN,
            refresh_path=constants.ROUTE_POST_REFRESH_TOKEN,
            token_file=constants.TOKEN_FILE,
            timeout=constants.REQUEST_TIMEOUT_SECONDS,
        )
