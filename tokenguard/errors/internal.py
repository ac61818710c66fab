"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the refreshing client. Only
raise these inside application/network boundaries; never surface raw aiohttp
or JSON errors to callers, wrap them instead.

Classes:
  InternalError          – Base for all internal errors.
  NetworkError           – Transport-level failure (connection, timeout, protocol).
  OAuthError             – Authentication / authorization related failures.
  RefreshExchangeFailure – Unusable answer from the refresh endpoint (internal only).
  ParsingError           – Response / file parsing issues.
  ResponseError          – Unrecovered non-2xx response handed back to a caller.
  AuthorizationFailure   – ResponseError for a rejected credential.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..http.transport import Response


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    This includes connection failures, timeouts and malformed HTTP exchanges.
    It is never retried automatically.
    """


class OAuthError(InternalError):
    """Exception raised for OAuth authentication or authorization failures."""


class RefreshExchangeFailure(OAuthError):
    """The refresh endpoint did not hand out a new access token.

    Raised and consumed inside the token client; callers only ever see the
    authorization failure of their own request.
    """


class ParsingError(InternalError):
    """Exception raised for response or file parsing errors."""


class ResponseError(InternalError):
    """A request finished with a non-2xx response that was not recovered.

    Mirrors the usual HTTP client error shape: the final response is
    available as ``error.response`` with ``status`` and ``data``.

    Args:
        response: The final response for the call.
        message: Optional error message, derived from the status when omitted.
    """

    def __init__(self, response: Response, message: str | None = None) -> None:
        super().__init__(
            message or f"Request failed with status code {response.status}",
            data={"status": response.status},
        )
        self.response = response

    @property
    def status(self) -> int:
        return self.response.status


class AuthorizationFailure(ResponseError):
    """The credential was rejected and could not be renewed."""


__all__ = [
    "InternalError",
    "NetworkError",
    "OAuthError",
    "RefreshExchangeFailure",
    "ParsingError",
    "ResponseError",
    "AuthorizationFailure",
]
