import logging
from unittest.mock import AsyncMock, Mock, patch

import pytest

from tokenguard import main as main_module
from tokenguard.errors.internal import NetworkError


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch.object(main_module, "LoggerConfigurator") as configurator:
        yield configurator


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        main_module.build_parser().parse_args([])


def test_parser_request_arguments() -> None:
    args = main_module.build_parser().parse_args(["request", "POST", "/todo", "--json", '{"task": "t"}'])
    assert (args.command, args.method, args.path, args.body) == ("request", "POST", "/todo", '{"task": "t"}')


def test_main_request_passes_decoded_body() -> None:
    with patch.object(main_module, "send_request", new_callable=AsyncMock) as send:
        send.return_value = 0
        code = main_module.main(["request", "POST", "/todo", "--json", '{"task": "t"}'])

    assert code == 0
    send.assert_awaited_once_with("POST", "/todo", {"task": "t"})


def test_main_request_rejects_invalid_json() -> None:
    with patch.object(main_module, "send_request", new_callable=AsyncMock) as send:
        code = main_module.main(["request", "POST", "/todo", "--json", "{nope"])

    assert code == 2
    send.assert_not_awaited()


def test_main_serve_runs_server() -> None:
    with patch.object(main_module, "run_server", Mock()) as run:
        code = main_module.main(["serve"])

    assert code == 0
    run.assert_called_once()


@pytest.mark.asyncio
async def test_send_request_logs_final_error_summary_on_network_failure(caplog) -> None:
    ctx = AsyncMock()
    ctx.__aenter__.return_value = ctx
    ctx.api.request.side_effect = NetworkError("refused")

    with patch.object(main_module.ApplicationContext, "create", AsyncMock(return_value=ctx)):
        with caplog.at_level(logging.INFO):
            code = await main_module.send_request("GET", "/auth")

    assert code == 1
    assert "Final error summary" in caplog.text
    assert "network: 1 total" in caplog.text
    ctx.__aexit__.assert_awaited_once()
