"""Tests for tool discovery and the command line entry point."""

import pytest

import main
from core import server
from core.server import DynamicMCPServer, get_client

EXPECTED_TOOLS = [
    "get_components",
    "get_event",
    "get_metrics",
    "get_monitor",
    "get_monitor_check_states",
    "get_monitor_check_status",
    "get_trace",
    "list_events",
    "list_metrics",
    "list_monitors",
    "list_traces",
    "plot_metrics",
    "query_metric",
    "query_topology",
    "search_metrics",
]


class TestDynamicMCPServer:
    """Tests for tool loading."""

    def test_load_tools(self) -> None:
        loaded = DynamicMCPServer().load_tools()
        assert loaded == EXPECTED_TOOLS

    def test_client_not_configured(self) -> None:
        server.set_client(None)
        with pytest.raises(RuntimeError, match="not configured"):
            get_client()


class TestMain:
    """Tests for argument parsing and settings."""

    def test_env_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("SUSE_OBSERVABILITY_URL", "https://so.example.com/")
        monkeypatch.setenv("SUSE_OBSERVABILITY_TOKEN", "tok")
        monkeypatch.setenv("SUSE_OBSERVABILITY_API_TOKEN", "true")
        settings = main.build_settings(main.parse_args([]))
        assert settings.url == "https://so.example.com"
        assert settings.token == "tok"
        assert settings.api_token is True
        assert settings.verify_tls is True

    def test_flags_override_env(self, monkeypatch) -> None:
        monkeypatch.setenv("SUSE_OBSERVABILITY_URL", "https://env.example.com")
        args = main.parse_args(
            ["--url", "http://localhost:8080", "--insecure", "--http", "127.0.0.1:9000", "--timeout", "5"]
        )
        settings = main.build_settings(args)
        assert settings.url == "http://localhost:8080"
        assert settings.verify_tls is False
        assert settings.listen_addr == "127.0.0.1:9000"
        assert settings.timeout == 5.0

    def test_invalid_url_exits(self, monkeypatch) -> None:
        monkeypatch.delenv("SUSE_OBSERVABILITY_URL", raising=False)
        assert main.main(["--url", "not-a-url"]) == 2

    def test_listen_addr_without_port_exits(self, monkeypatch) -> None:
        monkeypatch.delenv("MCP_HTTP_ADDR", raising=False)
        assert main.main(["--url", "https://so.example.com", "--http", "localhost"]) == 2
