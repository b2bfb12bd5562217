"""CLI tests."""

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from account_api.cli.main import cli
from account_api.services.user_store import StoreError


def test_ping_ok():
    with patch("account_api.services.user_store.MongoUserStore.ping", new_callable=AsyncMock), \
            patch("account_api.services.user_store.MongoUserStore.close", new_callable=AsyncMock):
        result = CliRunner().invoke(cli, ["ping"])
    assert result.exit_code == 0
    assert "Connected" in result.output


def test_ping_failure_exits_non_zero():
    with patch(
        "account_api.services.user_store.MongoUserStore.ping",
        new_callable=AsyncMock,
        side_effect=StoreError("Could not ping db"),
    ), patch("account_api.services.user_store.MongoUserStore.close", new_callable=AsyncMock):
        result = CliRunner().invoke(cli, ["ping"])
    assert result.exit_code == 1


def test_serve_uses_settings():
    with patch("uvicorn.run") as run:
        result = CliRunner().invoke(cli, ["serve", "--port", "9001"])
    assert result.exit_code == 0
    run.assert_called_once()
    assert run.call_args.kwargs["port"] == 9001
    assert run.call_args.args[0] == "account_api.main:app"
