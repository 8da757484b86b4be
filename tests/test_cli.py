"""Tests for CLI functionality."""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from auth0cleanup.cli.main import build_event, cli
from auth0cleanup.models.config import Settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    # setenv first so the CLI's own os.environ writes are undone afterwards
    for name in ("PARAM_PREFIX", "AWS_REGION", "SSOID"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def http_response(status, body):
    return {
        "statusCode": status,
        "headers": {"content-type": "application/json"},
        "body": json.dumps(body),
    }


class TestBuildEvent:
    def test_path(self):
        assert build_event("abc", "path") == {"pathParameters": {"ssoid": "abc"}}

    def test_query(self):
        assert build_event("abc", "query") == {
            "queryStringParameters": {"ssoid": "abc"}
        }

    def test_env_or_missing(self):
        assert build_event("abc", "env") == {}
        assert build_event(None, "path") == {}


class TestCLIMain:
    """Test main CLI functionality."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "invoke" in result.output
        assert "doctor" in result.output

    @patch("auth0cleanup.handler.lambda_handler")
    def test_invoke_passes_event_and_context(self, mock_handler):
        mock_handler.return_value = http_response(
            200, {"message": "Cannot find user", "ssoid": "abc", "results": []}
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["invoke", "--ssoid", "abc", "--via", "query"])

        assert result.exit_code == 0
        event, context = mock_handler.call_args.args
        assert event == {"queryStringParameters": {"ssoid": "abc"}}
        assert context.function_name == "local-auth0-cleanup"
        assert "Status: 200" in result.output

    @patch("auth0cleanup.handler.lambda_handler")
    def test_invoke_exits_on_server_error(self, mock_handler):
        mock_handler.return_value = http_response(500, {"error": "Missing AUTH0_DOMAIN"})

        runner = CliRunner()
        result = runner.invoke(cli, ["invoke", "--ssoid", "abc"])

        assert result.exit_code == 1
        assert "Missing AUTH0_DOMAIN" in result.output

    @patch("auth0cleanup.handler.build_service")
    def test_doctor_reports_missing_setting(self, mock_build):
        service = MagicMock()
        service.resolver.resolve.return_value = Settings({"AUTH0_DOMAIN": "t.auth0.com"})
        mock_build.return_value = service

        runner = CliRunner()
        result = runner.invoke(cli, ["doctor", "--test-token"])

        assert result.exit_code == 1
        assert "Missing AUTH0_CLIENT_ID" in result.output
