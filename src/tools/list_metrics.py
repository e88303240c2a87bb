"""List the metrics bound to a topology component."""

from datetime import datetime, timedelta, timezone

from core.formatters import format_bound_metrics_table
from core.server import get_client, mcp


@mcp.tool()
def list_metrics(component_id: int) -> str:
    """List metrics bound to a component, with units and PromQL expressions.

    Args:
        component_id: Component ID (from get_components)

    Returns:
        Markdown table of bound metrics and their queries.
    """
    end = datetime.now(timezone.utc)
    start = end - timedelta(hours=1)
    response = get_client().get_bound_metrics_with_data(component_id, start, end)
    return format_bound_metrics_table(response, component_id)
