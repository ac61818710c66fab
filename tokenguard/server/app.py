"""Demo authorization server used to exercise the refreshing client.

Serves three endpoints, all paths configurable:

- ``GET /auth``: 200 ``{"message": "authorized"}`` for the current token, else 401.
- ``POST /todo``: echoes ``{"id", "task"}`` for the current token, else 401.
- ``POST /refresh-token``: 200 ``{"token"}`` for the configured refresh token, else 404.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from aiohttp import web

from ..config import ServerSettings

SETTINGS_KEY = web.AppKey("settings", ServerSettings)


def _bearer_token(request: web.Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    parts = authorization.split(" ")
    if len(parts) != 2 or not parts[1]:
        return None
    return parts[1]


def _is_authorized(request: web.Request) -> bool:
    return _bearer_token(request) == request.app[SETTINGS_KEY].token


def _unauthorized() -> web.Response:
    return web.json_response({"message": "unauthorized"}, status=401)


async def _json_body(request: web.Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


async def get_auth(request: web.Request) -> web.Response:
    if not _is_authorized(request):
        return _unauthorized()
    return web.json_response({"message": "authorized"})


async def post_todo(request: web.Request) -> web.Response:
    if not _is_authorized(request):
        return _unauthorized()
    body = await _json_body(request)
    return web.json_response({"id": int(time.time() * 1000), "task": body.get("task")})


async def post_refresh_token(request: web.Request) -> web.Response:
    body = await _json_body(request)
    settings = request.app[SETTINGS_KEY]
    if body.get("refresh_token") != settings.refresh_token:
        logging.info("❌ Unknown refresh token presented")
        return web.json_response(
            {"message": "refresh token does not exist"}, status=404
        )
    return web.json_response({"token": settings.token})


def create_app(settings: ServerSettings | None = None) -> web.Application:
    """Build the demo server application.

    Args:
        settings: Server settings; read from the environment when omitted.

    Returns:
        The configured aiohttp application.
    """
    settings = settings or ServerSettings.from_env()
    app = web.Application()
    app[SETTINGS_KEY] = settings
    app.router.add_get(settings.route_get_auth, get_auth)
    app.router.add_post(settings.route_post_todo, post_todo)
    app.router.add_post(settings.route_post_refresh_token, post_refresh_token)
    return app


def run_server(settings: ServerSettings | None = None) -> None:
    """Serve the demo application until interrupted."""
    settings = settings or ServerSettings.from_env()
    logging.info(f"🚀 App listening on port {settings.port}")
    web.run_app(create_app(settings), port=settings.port, print=None)
