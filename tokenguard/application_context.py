"""Central application context for shared async resources."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .api.client import ApiClient
from .auth_token.client import TokenClient
from .auth_token.coordinator import RefreshCoordinator
from .auth_token.store import (
    CredentialStore,
    InMemoryCredentialStore,
    JsonFileCredentialStore,
)
from .config import ClientSettings
from .http.transport import AiohttpTransport


class ApplicationContext:
    """Owns the HTTP session and the objects wired on top of it."""

    session: aiohttp.ClientSession | None
    store: CredentialStore | None
    coordinator: RefreshCoordinator | None
    api: ApiClient | None
    _lock: asyncio.Lock

    def __init__(self, settings: ClientSettings) -> None:
        self.settings = settings
        self.session = None
        self.store = None
        self.coordinator = None
        self.api = None
        self._lock = asyncio.Lock()

    # ------------------------- Construction ------------------------- #
    @classmethod
    async def create(
        cls,
        settings: ClientSettings | None = None,
        store: CredentialStore | None = None,
    ) -> ApplicationContext:
        """Create and wire a new ApplicationContext instance.

        The application transport and the refresh transport share one
        session but are distinct objects; only application requests go
        through the coordinator.

        Args:
            settings: Client settings; read from the environment when omitted.
            store: Credential store; built from the settings when omitted.

        Returns:
            A fully initialized ApplicationContext instance.
        """
        ctx = cls(settings or ClientSettings.from_env())
        logging.debug("🧪 Creating application context")
        # Store first: a token file that cannot be written must not leave
        # an open session behind.
        ctx.store = store or ctx._build_store()
        ctx.session = aiohttp.ClientSession()
        api_transport = AiohttpTransport(
            ctx.session, ctx.settings.base_url, timeout=ctx.settings.timeout
        )
        refresh_transport = AiohttpTransport(
            ctx.session, ctx.settings.base_url, timeout=ctx.settings.timeout
        )
        token_client = TokenClient(refresh_transport, ctx.settings.refresh_path)
        ctx.coordinator = RefreshCoordinator(ctx.store, api_transport, token_client)
        ctx.api = ApiClient(ctx.coordinator)
        return ctx

    def _build_store(self) -> CredentialStore:
        if self.settings.token_file:
            store: CredentialStore = JsonFileCredentialStore(self.settings.token_file)
            # Settings only fill gaps; the file holds the most recent tokens.
            if self.settings.access_token and not store.get_access_token():
                store.set_access_token(self.settings.access_token)
            if self.settings.refresh_token and not store.get_refresh_token():
                store.set_refresh_token(self.settings.refresh_token)
            return store
        return InMemoryCredentialStore(
            self.settings.access_token or None, self.settings.refresh_token or None
        )

    # --------------------------- Lifecycle -------------------------- #
    async def shutdown(self) -> None:
        """Close the HTTP session and drop the wired objects."""
        async with self._lock:
            await self._close_http_session()
            self.api = None
            self.coordinator = None
            logging.debug("✅ Application context shutdown complete")

    async def _close_http_session(self) -> None:
        if not self.session:
            return
        try:
            await self.session.close()
        except (aiohttp.ClientError, OSError) as e:
            logging.error(f"💥 Error closing HTTP session: {str(e)}")
        finally:
            self.session = None

    async def __aenter__(self) -> ApplicationContext:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.shutdown()
