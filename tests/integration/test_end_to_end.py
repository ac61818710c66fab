"""
End-to-end tests: the refreshing client against the demo server over HTTP.
"""

import asyncio
import json

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from tokenguard.application_context import ApplicationContext
from tokenguard.auth_token.coordinator import RefreshState
from tokenguard.config import ClientSettings, ServerSettings
from tokenguard.errors.internal import AuthorizationFailure, NetworkError
from tokenguard.main import send_request
from tokenguard.server.app import create_app

from tests.fixtures.token_fixtures import (
    EXPIRED_TOKEN,
    INVALID_REFRESH_TOKEN,
    VALID_REFRESH_TOKEN,
    VALID_TOKEN,
)


@pytest_asyncio.fixture
async def server():
    settings = ServerSettings(token=VALID_TOKEN, refresh_token=VALID_REFRESH_TOKEN)
    async with TestServer(create_app(settings)) as srv:
        yield srv


def _client_settings(server, **overrides) -> ClientSettings:
    values = {
        "base_url": str(server.make_url("/")),
        "access_token": EXPIRED_TOKEN,
        "refresh_token": VALID_REFRESH_TOKEN,
        "refresh_path": "/refresh-token",
        "timeout": 5.0,
    }
    values.update(overrides)
    return ClientSettings(**values)


@pytest.mark.asyncio
async def test_valid_token_needs_no_refresh(server) -> None:
    async with await ApplicationContext.create(_client_settings(server, access_token=VALID_TOKEN)) as ctx:
        response = await ctx.api.get("/auth")

        assert response.status == 200
        assert response.data == {"message": "authorized"}
        assert ctx.coordinator.refresh_count == 0


@pytest.mark.asyncio
async def test_expired_token_is_refreshed_transparently(server) -> None:
    async with await ApplicationContext.create(_client_settings(server)) as ctx:
        response = await ctx.api.get("/auth")

        assert response.status == 200
        assert response.data["message"] == "authorized"
        assert ctx.store.get_access_token() == VALID_TOKEN
        assert ctx.coordinator.refresh_count == 1


@pytest.mark.asyncio
async def test_post_after_refresh(server) -> None:
    async with await ApplicationContext.create(_client_settings(server)) as ctx:
        response = await ctx.api.post("/todo", {"task": "test"})

        assert response.status == 200
        assert response.data["task"] == "test"


@pytest.mark.asyncio
async def test_invalid_refresh_token_surfaces_original_401(server) -> None:
    settings = _client_settings(server, refresh_token=INVALID_REFRESH_TOKEN)
    async with await ApplicationContext.create(settings) as ctx:
        with pytest.raises(AuthorizationFailure) as excinfo:
            await ctx.api.get("/auth")

        assert excinfo.value.response.status == 401
        assert excinfo.value.response.data == {"message": "unauthorized"}
        assert ctx.coordinator.state is RefreshState.IDLE


@pytest.mark.asyncio
async def test_concurrent_requests_all_recover(server) -> None:
    async with await ApplicationContext.create(_client_settings(server)) as ctx:
        responses = await asyncio.gather(*(ctx.api.get("/auth") for _ in range(5)))

        assert [r.status for r in responses] == [200] * 5
        assert ctx.coordinator.state is RefreshState.IDLE


@pytest.mark.asyncio
async def test_refreshed_token_is_persisted(server, tmp_path) -> None:
    token_file = tmp_path / "tokens.json"
    settings = _client_settings(server, token_file=str(token_file))
    async with await ApplicationContext.create(settings) as ctx:
        await ctx.api.get("/auth")

    assert json.loads(token_file.read_text()) == {
        "access_token": VALID_TOKEN,
        "refresh_token": VALID_REFRESH_TOKEN,
    }


@pytest.mark.asyncio
async def test_unreachable_server_raises_network_error() -> None:
    settings = ClientSettings(base_url="http://127.0.0.1:9", access_token=VALID_TOKEN, timeout=2.0)
    async with await ApplicationContext.create(settings) as ctx:
        with pytest.raises(NetworkError):
            await ctx.api.get("/auth")


@pytest.mark.asyncio
async def test_send_request_prints_outcome(server, capsys) -> None:
    code = await send_request("GET", "/auth", settings=_client_settings(server))

    assert code == 0
    assert capsys.readouterr().out.strip() == '200 {"message": "authorized"}'


@pytest.mark.asyncio
async def test_send_request_reports_failure(server, capsys) -> None:
    settings = _client_settings(server, refresh_token=INVALID_REFRESH_TOKEN)

    code = await send_request("GET", "/auth", settings=settings)

    assert code == 1
    assert capsys.readouterr().out.strip() == '401 {"message": "unauthorized"}'
