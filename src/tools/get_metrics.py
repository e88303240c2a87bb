"""Query metrics over a range of time."""

import logging

from core.formatters import format_metrics_table
from core.server import get_client, mcp
from core.utils import get_tool_config, parse_time_range

logger = logging.getLogger(__name__)

DEFAULT_STEP = "1m"
DEFAULT_QUERY_TIMEOUT = "30s"


@mcp.tool()
def get_metrics(query: str, start: str = "1h", end: str = "now", step: str = "") -> str:
    """Run a PromQL range query and return the time series as a table.

    Args:
        query: PromQL query (e.g., 'sum(rate(http_requests_total[5m])) by (service)')
        start: "now" or a look-back duration (e.g., "1h", "24h")
        end: "now" or a look-back duration (e.g., "30m")
        step: Resolution step (e.g., "15s", "1m", "5m"; default: "1m")

    Returns:
        Markdown table with timestamps, values and labels.
    """
    config = get_tool_config("get_metrics")
    start_time, end_time = parse_time_range(start, end)
    step = step or config.get("step", DEFAULT_STEP)
    timeout = config.get("timeout", DEFAULT_QUERY_TIMEOUT)

    try:
        series = get_client().query_range_metric(query, start_time, end_time, step, timeout)
    except Exception as e:
        logger.error(f"Range query failed for {query!r}: {e}")
        raise
    return format_metrics_table(series)
