"""
Tests for main.py and get_token.py - Startup and the token CLI
"""

import pytest
from unittest.mock import MagicMock, patch

from chat_relay.exceptions import ConfigError, RemoteError


class TestBuildGateway:
    """Tests for build_gateway function."""

    @patch("chat_relay.main.CredentialProvider")
    def test_exits_when_key_cannot_be_loaded(self, mock_provider_class):
        from chat_relay.main import build_gateway

        mock_provider_class.from_config.side_effect = ConfigError("no key")

        with pytest.raises(SystemExit) as exc_info:
            build_gateway({"spaces_page_size": 100})

        assert exc_info.value.code == 1

    @patch("chat_relay.main.CredentialProvider")
    def test_builds_gateway_with_page_size(self, mock_provider_class):
        from chat_relay.main import build_gateway

        gateway = build_gateway({"spaces_page_size": 42})

        assert gateway.page_size == 42
        mock_provider_class.from_config.assert_called_once()

    def test_exits_without_any_key_source(self, tmp_path):
        """Test fail-fast startup with real config and no key anywhere."""
        from chat_relay.main import build_gateway
        from chat_relay.utils.config import get_config

        config = dict(get_config(), service_account_key_file=str(tmp_path / "missing.json"))

        with pytest.raises(SystemExit):
            build_gateway(config)


class TestMain:
    """Tests for the HTTP server entry point."""

    @patch("chat_relay.main.uvicorn")
    @patch("chat_relay.main.CredentialProvider")
    def test_runs_uvicorn_on_configured_port(self, mock_provider_class, mock_uvicorn, monkeypatch):
        from chat_relay.main import main

        monkeypatch.setenv("PORT", "4567")
        main()

        mock_uvicorn.run.assert_called_once()
        assert mock_uvicorn.run.call_args.kwargs["port"] == 4567

    @patch("chat_relay.main.uvicorn")
    @patch("chat_relay.main.CredentialProvider")
    def test_does_not_serve_without_credentials(self, mock_provider_class, mock_uvicorn):
        from chat_relay.main import main

        mock_provider_class.from_config.side_effect = ConfigError("no key")

        with pytest.raises(SystemExit):
            main()

        mock_uvicorn.run.assert_not_called()


class TestMcpMain:
    """Tests for the MCP server entry point."""

    @patch("chat_relay.main.FastMCP")
    @patch("chat_relay.main.CredentialProvider")
    def test_registers_tools_and_runs(self, mock_provider_class, mock_fastmcp):
        from chat_relay.main import mcp_main

        mcp_main()

        mock_fastmcp.assert_called_once_with(name="Chat Relay")
        mock_fastmcp.return_value.run.assert_called_once()


class TestGetToken:
    """Tests for the token CLI."""

    @patch("chat_relay.get_token.CredentialProvider")
    def test_prints_token(self, mock_provider_class, capsys):
        from chat_relay.get_token import main

        mock_provider_class.from_config.return_value.get_access_token.return_value = "ya29.token"

        main()

        assert capsys.readouterr().out.strip().endswith("ya29.token")

    @pytest.mark.parametrize("error", [ConfigError("no key"), RemoteError("invalid_grant")])
    @patch("chat_relay.get_token.CredentialProvider")
    def test_exits_on_failure(self, mock_provider_class, error):
        from chat_relay.get_token import main

        mock_provider_class.from_config.side_effect = error

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
