"""Shared test fixtures for all test modules."""

from unittest.mock import create_autospec

import pytest

from core import server
from core.client import ObservabilityClient
from core.models import MetricPoint, MetricSeries


@pytest.fixture(autouse=True)
def isolated_tool_config(tmp_path, monkeypatch):
    """Point tool configuration at an empty location so defaults apply."""
    monkeypatch.setenv("KMCP_CONFIG", str(tmp_path / "kmcp.yaml"))
    return tmp_path / "kmcp.yaml"


@pytest.fixture
def mock_client():
    """Autospecced API client installed as the server's client."""
    client = create_autospec(ObservabilityClient, instance=True)
    server.set_client(client)
    yield client
    server.set_client(None)


@pytest.fixture
def series_factory():
    """Factory fixture building MetricSeries from (seconds, value) pairs."""

    def make(name="metric", labels=None, points=()):
        return MetricSeries(
            name=name,
            labels=labels or {},
            points=[MetricPoint(timestamp=ts * 1000, value=v) for ts, v in points],
        )

    return make
