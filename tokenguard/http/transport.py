"""Request/response types and the aiohttp-backed transport.

A transport only moves bytes: every HTTP status comes back as a
:class:`Response`, and only connection, timeout or protocol problems raise
(as :class:`NetworkError`). Authorization handling lives one layer up in the
refresh coordinator, so transports can be shared by the coordinator and the
token client without recursion.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

import aiohttp

from ..constants import APPLICATION_JSON, REQUEST_TIMEOUT_SECONDS
from ..errors.internal import NetworkError


@dataclass(frozen=True)
class RequestSpec:
    """Description of one outgoing request.

    Attributes:
        method: HTTP method (e.g. 'GET', 'POST').
        path: Path relative to the transport's base URL.
        headers: Request headers.
        json: JSON-serializable body, or None for no body.
        params: Query parameters.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    json: Any = None
    params: Mapping[str, str] | None = None

    def with_authorization(self, access_token: str) -> RequestSpec:
        """Return a copy carrying ``Authorization: Bearer <access_token>``."""
        headers = {
            k: v for k, v in self.headers.items() if k.lower() != "authorization"
        }
        headers["Authorization"] = f"Bearer {access_token}"
        return replace(self, headers=headers)


@dataclass
class Response:
    """Outcome of a request that reached the server.

    Attributes:
        status: HTTP status code.
        data: Decoded JSON body, raw text for non-JSON bodies, None when empty.
        headers: Response headers.
    """

    status: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Capability to send a request and return the server's response."""

    async def send(self, spec: RequestSpec) -> Response:
        """Send ``spec``.

        Raises:
            NetworkError: If the request could not be completed.
        """
        ...


class AiohttpTransport:
    """Transport backed by a shared aiohttp session.

    Args:
        session: The aiohttp session to use for requests.
        base_url: URL every request path is joined to.
        timeout: Total timeout in seconds for each request.

    Raises:
        ValueError: If session is not provided.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        if not session:
            raise ValueError("aiohttp session required")
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def send(self, spec: RequestSpec) -> Response:
        """Perform the HTTP request described by ``spec``.

        Args:
            spec: The request to send.

        Returns:
            Response with status, decoded body and headers.

        Raises:
            NetworkError: On connection failures, timeouts or protocol errors.
        """
        url = self.url_for(spec.path)
        start_time = time.monotonic()
        try:
            async with self._session.request(
                spec.method.upper(),
                url,
                headers=dict(spec.headers),
                params=spec.params,
                json=spec.json,
                timeout=self._timeout,
            ) as resp:
                data = await self._decode_body(resp)
                logging.debug(
                    f"HTTP {spec.method.upper()} {url} -> {resp.status} "
                    f"({time.monotonic() - start_time:.3f}s)"
                )
                return Response(resp.status, data, dict(resp.headers))
        except TimeoutError as e:
            logging.warning(
                f"⏱️ HTTP {spec.method.upper()} {url} timed out after "
                f"{time.monotonic() - start_time:.3f}s"
            )
            raise NetworkError(
                f"Request to {url} timed out", data={"url": url}
            ) from e
        except aiohttp.ClientError as e:
            logging.warning(
                f"💥 HTTP {spec.method.upper()} {url} failed: {type(e).__name__}"
            )
            raise NetworkError(
                f"HTTP request failed: {e}", data={"url": url}
            ) from e

    @staticmethod
    async def _decode_body(resp: aiohttp.ClientResponse) -> Any:
        """Decode a response body as JSON when possible, else as text.

        Undecodable bytes are replaced so a malformed body never escapes
        as anything but data.
        """
        raw = await resp.read()
        if not raw:
            return None
        try:
            text = raw.decode(resp.charset or "utf-8", errors="replace")
        except LookupError:
            text = raw.decode("utf-8", errors="replace")
        if not text:
            return None
        if APPLICATION_JSON in resp.headers.get("Content-Type", ""):
            try:
                return json.loads(text)
            except ValueError:
                logging.debug(f"Response claimed JSON but did not parse status={resp.status}")
        return text
