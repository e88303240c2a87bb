"""Plot metrics over a range of time as ASCII charts."""

import logging

from core.formatters import CHART_HEIGHT, CHART_WIDTH, format_metrics_chart
from core.server import get_client, mcp
from core.utils import get_tool_config, parse_time_range

logger = logging.getLogger(__name__)

DEFAULT_STEP = "1m"
DEFAULT_QUERY_TIMEOUT = "30s"


@mcp.tool()
def plot_metrics(query: str, start: str = "1h", end: str = "now", step: str = "") -> str:
    """Run a PromQL range query and draw one ASCII line chart per series.

    Args:
        query: PromQL query
        start: "now" or a look-back duration (e.g., "1h")
        end: "now" or a look-back duration
        step: Resolution step (default: "1m")

    Returns:
        Text charts with min/max values, start/end times and the series name.
    """
    config = get_tool_config("plot_metrics")
    start_time, end_time = parse_time_range(start, end)
    try:
        series = get_client().query_range_metric(
            query,
            start_time,
            end_time,
            step or config.get("step", DEFAULT_STEP),
            config.get("timeout", DEFAULT_QUERY_TIMEOUT),
        )
    except Exception as e:
        logger.error(f"Range query failed for {query!r}: {e}")
        raise
    return format_metrics_chart(
        series,
        width=int(config.get("width", CHART_WIDTH)),
        height=int(config.get("height", CHART_HEIGHT)),
    )
