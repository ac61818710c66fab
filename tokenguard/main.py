"""Command line entry point.

``serve`` runs the demo authorization server; ``request`` sends one request
through the refreshing client and prints the outcome.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from .application_context import ApplicationContext
from .config import ClientSettings, ServerSettings
from .errors.handling import log_error
from .errors.internal import NetworkError, ResponseError
from .logging_config import LoggerConfigurator, log_final_error_summary
from .server.app import run_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokenguard",
        description="HTTP client with transparent single-flight token refresh",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="run the demo authorization server")

    req = sub.add_parser("request", help="send one request through the client")
    req.add_argument("method", help="HTTP method, e.g. GET or POST")
    req.add_argument("path", help="path relative to API_BASE_URL")
    req.add_argument("--json", dest="body", help="JSON request body")
    return parser


def _print_response(status: int, data: Any) -> None:
    rendered = json.dumps(data) if isinstance(data, dict | list) else data
    print(f"{status} {rendered if rendered is not None else ''}".rstrip())


async def send_request(
    method: str, path: str, body: Any = None, settings: ClientSettings | None = None
) -> int:
    """Send one request and print its outcome.

    Returns:
        Process exit code: 0 for a 2xx response, 1 otherwise.
    """
    try:
        ctx = await ApplicationContext.create(settings)
        async with ctx:
            try:
                response = await ctx.api.request(method, path, json=body)
            except ResponseError as e:
                _print_response(e.response.status, e.response.data)
                return 1
            except NetworkError as e:
                log_error("Request failed", e, context={"method": method, "path": path})
                return 1
            _print_response(response.status, response.data)
            return 0
    finally:
        log_final_error_summary()


def main(argv: Sequence[str] | None = None) -> int:
    """Main function"""
    args = build_parser().parse_args(argv)
    LoggerConfigurator().configure()

    if args.command == "serve":
        run_server(ServerSettings.from_env())
        return 0

    body = None
    if args.body is not None:
        try:
            body = json.loads(args.body)
        except ValueError as e:
            logging.error(f"❌ Invalid JSON body: {e}")
            return 2
    try:
        return asyncio.run(send_request(args.method, args.path, body))
    except KeyboardInterrupt:
        logging.warning("⌨️ Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
