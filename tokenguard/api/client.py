"""Caller-facing API client.

Wraps the refresh coordinator with the conventional HTTP client surface:
successful calls return a :class:`Response`, unrecovered non-2xx calls raise
:class:`ResponseError` carrying the final response. If new request shapes are
needed, prefer adding focused helpers here instead of building
``RequestSpec`` objects across modules.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..auth_token.coordinator import RefreshCoordinator
from ..errors.internal import AuthorizationFailure, ResponseError
from ..http.transport import RequestSpec, Response


class ApiClient:
    """Asynchronous client whose calls never deal with tokens.

    Args:
        coordinator: The refresh coordinator every request goes through.
    """

    def __init__(self, coordinator: RefreshCoordinator) -> None:
        self.coordinator = coordinator

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Response:
        """Perform a request through the refresh coordinator.

        Args:
            method: HTTP method (e.g., 'GET', 'POST').
            path: Path relative to the API base URL.
            headers: Extra request headers.
            json: JSON body for the request.
            params: Query parameters for the request.

        Returns:
            The final 2xx response.

        Raises:
            AuthorizationFailure: If the credential was rejected and could not
                be renewed, or the replay was rejected again.
            ResponseError: For any other non-2xx final response.
            NetworkError: If the request failed at the transport level.
        """
        spec = RequestSpec(
            method.upper(), path, headers=dict(headers or {}), json=json, params=params
        )
        response = await self.coordinator.execute(spec)
        if response.ok:
            return response
        if self.coordinator.is_auth_failure(response):
            raise AuthorizationFailure(response)
        raise ResponseError(response)

    # ---- High level helpers ----
    async def get(self, path: str, **kwargs: Any) -> Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> Response:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> Response:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> Response:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Response:
        return await self.request("DELETE", path, **kwargs)
