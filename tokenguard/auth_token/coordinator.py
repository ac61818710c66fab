"""Single-flight token refresh around outgoing requests.

Every request goes out with the current access token. When the server
rejects the credential, the first call to notice starts one refresh
exchange; calls that are rejected while it is running wait for the same
exchange instead of starting their own. Once the exchange settles each call
either replays its request once with the new token or hands back its own
original rejection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from ..constants import AUTH_FAILURE_STATUSES
from ..errors.internal import NetworkError
from ..http.transport import RequestSpec, Response, Transport
from .client import TokenClient, TokenOutcome
from .store import CredentialStore


class RefreshState(Enum):
    """Whether a refresh exchange is currently in flight."""

    IDLE = "idle"
    REFRESHING = "refreshing"


@dataclass(frozen=True)
class RefreshOutcome:
    """Shared result of one refresh cycle.

    Attributes:
        access_token: The new access token, None when the exchange failed.
        error: Transport error raised by the exchange, if any.
    """

    access_token: str | None = None
    error: NetworkError | None = None

    @property
    def succeeded(self) -> bool:
        return self.access_token is not None


_FAILED = RefreshOutcome()


class RefreshCoordinator:
    """Executes requests and recovers once from rejected credentials.

    Args:
        store: Credential store holding the access and refresh tokens.
        transport: Transport used for application requests and replays.
        token_client: Client performing the refresh exchange. It must use a
            transport that is not wrapped by this coordinator.
        auth_failure_statuses: Response statuses meaning "credential invalid
            or expired".
    """

    def __init__(
        self,
        store: CredentialStore,
        transport: Transport,
        token_client: TokenClient,
        *,
        auth_failure_statuses: Iterable[int] = AUTH_FAILURE_STATUSES,
    ) -> None:
        self.store = store
        self.transport = transport
        self.token_client = token_client
        self.auth_failure_statuses = frozenset(auth_failure_statuses)
        self._state = RefreshState.IDLE
        self._inflight: asyncio.Future[RefreshOutcome] | None = None
        # Guards the IDLE -> REFRESHING check-and-set and the settle step.
        self._state_lock = asyncio.Lock()
        self.refresh_count = 0

    @property
    def state(self) -> RefreshState:
        return self._state

    def is_auth_failure(self, response: Response) -> bool:
        return response.status in self.auth_failure_statuses

    async def execute(self, spec: RequestSpec) -> Response:
        """Send a request, refreshing the access token once if it is rejected.

        Args:
            spec: The request to send. It is never mutated.

        Returns:
            The first response when the credential was accepted, the replayed
            response after a successful refresh, or the original rejection
            when the refresh failed.

        Raises:
            NetworkError: If the request, the replay or the refresh exchange
                could not be completed at the transport level.
        """
        response = await self._send(spec)
        if not self.is_auth_failure(response):
            return response

        logging.info(
            f"🔑 Credential rejected status={response.status} "
            f"request={spec.method.upper()} {spec.path}"
        )
        outcome = await self._await_refresh()
        if outcome.error is not None:
            raise NetworkError(
                f"Token refresh failed at transport level: {outcome.error}",
                data={"method": spec.method.upper(), "path": spec.path},
            ) from outcome.error
        if not outcome.succeeded:
            logging.info(
                f"❌ Refresh failed, returning original rejection "
                f"request={spec.method.upper()} {spec.path} status={response.status}"
            )
            return response

        logging.debug(f"🔁 Replaying request={spec.method.upper()} {spec.path}")
        # The replay is final: a second rejection is returned as-is.
        return await self.transport.send(spec.with_authorization(outcome.access_token))

    async def _send(self, spec: RequestSpec) -> Response:
        access_token = self.store.get_access_token()
        if access_token:
            spec = spec.with_authorization(access_token)
        return await self.transport.send(spec)

    async def _await_refresh(self) -> RefreshOutcome:
        """Join the in-flight refresh, starting one if none is running."""
        async with self._state_lock:
            owner = self._state is RefreshState.IDLE
            if owner:
                self._state = RefreshState.REFRESHING
                self._inflight = asyncio.get_running_loop().create_future()
                self.refresh_count += 1
            inflight = self._inflight

        if owner:
            await self._run_exchange(inflight)
            return inflight.result()

        logging.debug("⏳ Waiting for in-flight token refresh")
        # Shielded so one waiter's cancellation does not cancel the others.
        return await asyncio.shield(inflight)

    async def _run_exchange(self, inflight: asyncio.Future[RefreshOutcome]) -> None:
        """Perform the refresh exchange and settle the cycle.

        The cycle is settled whatever happens, including cancellation of the
        calling task; anything other than a new token counts as a failure.
        """
        logging.info("🔄 Refreshing access token")
        outcome = _FAILED
        try:
            result = await self.token_client.refresh(self.store.get_refresh_token())
            if result.outcome is TokenOutcome.REFRESHED and result.access_token:
                outcome = RefreshOutcome(access_token=result.access_token)
        except NetworkError as e:
            logging.warning(f"💥 Network error during token refresh: {e}")
            outcome = RefreshOutcome(error=e)
        finally:
            async with self._state_lock:
                self._settle(inflight, outcome)

    def _settle(
        self, inflight: asyncio.Future[RefreshOutcome], outcome: RefreshOutcome
    ) -> None:
        # Caller holds _state_lock.
        try:
            if outcome.succeeded:
                self.store.set_access_token(outcome.access_token)
        finally:
            self._state = RefreshState.IDLE
            self._inflight = None
            if not inflight.done():
                inflight.set_result(outcome)
