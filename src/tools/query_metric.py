"""Evaluate a PromQL query at the current instant."""

from datetime import datetime, timezone

from core.formatters import format_metrics_table
from core.server import get_client, mcp
from core.utils import get_tool_config

DEFAULT_QUERY_TIMEOUT = "30s"


@mcp.tool()
def query_metric(query: str) -> str:
    """Run an instant PromQL query evaluated now.

    Args:
        query: PromQL query (e.g., "up")

    Returns:
        Markdown table with one row per returned series.
    """
    timeout = get_tool_config("query_metric").get("timeout", DEFAULT_QUERY_TIMEOUT)
    series = get_client().query_metric(query, datetime.now(timezone.utc), timeout)
    return format_metrics_table(series)
