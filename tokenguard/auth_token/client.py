"""Refresh exchange HTTP client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..constants import ROUTE_POST_REFRESH_TOKEN
from ..errors.internal import RefreshExchangeFailure
from ..http.transport import RequestSpec, Response, Transport


class TokenOutcome(str, Enum):
    """Enumeration of possible outcomes from a refresh exchange.

    Attributes:
        REFRESHED: A new access token was issued.
        FAILED: The authorization server refused or answered unusably.
    """

    REFRESHED = "refreshed"
    FAILED = "failed"


@dataclass
class TokenResult:
    """Result of a refresh exchange.

    Attributes:
        outcome: The outcome of the operation.
        access_token: The new access token, if issued.
        status: HTTP status of the refresh response.
    """

    outcome: TokenOutcome
    access_token: str | None = None
    status: int | None = None


class TokenClient:
    """Client for the authorization server's refresh endpoint.

    The transport given here must not be wrapped by the refresh coordinator,
    otherwise a rejected refresh would try to refresh itself.
    """

    def __init__(
        self, transport: Transport, refresh_path: str = ROUTE_POST_REFRESH_TOKEN
    ) -> None:
        """Initialize the token client.

        Args:
            transport: Transport used for the exchange.
            refresh_path: Path of the refresh endpoint.
        """
        self.transport = transport
        self.refresh_path = refresh_path

    async def refresh(self, refresh_token: str | None) -> TokenResult:
        """Exchange a refresh token for a new access token.

        Sends ``POST <refresh_path>`` with ``{"refresh_token": refresh_token}``.
        The refresh token is sent as-is, even when empty or invalid; the
        server decides.

        Args:
            refresh_token: The refresh token to present.

        Returns:
            TokenResult with REFRESHED outcome on success, FAILED otherwise.

        Raises:
            NetworkError: If the exchange could not be completed.
        """
        spec = RequestSpec(
            "POST", self.refresh_path, json={"refresh_token": refresh_token}
        )
        resp = await self.transport.send(spec)
        try:
            access_token = self._extract_token(resp)
        except RefreshExchangeFailure as e:
            logging.warning(f"❌ Token refresh rejected status={resp.status} reason={e}")
            return TokenResult(TokenOutcome.FAILED, None, resp.status)
        logging.info(f"🔄 Token refreshed status={resp.status}")
        return TokenResult(TokenOutcome.REFRESHED, access_token, resp.status)

    @staticmethod
    def _extract_token(resp: Response) -> str:
        if not resp.ok:
            raise RefreshExchangeFailure(
                f"HTTP {resp.status} during token refresh", data={"status": resp.status}
            )
        if not isinstance(resp.data, dict):
            raise RefreshExchangeFailure("Refresh response is not a JSON object")
        token = resp.data.get("token")
        if not isinstance(token, str) or not token:
            raise RefreshExchangeFailure("Missing token in refresh response")
        return token
