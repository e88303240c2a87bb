"""List topology events."""

from core.errors import InvalidFilterError
from core.formatters import format_events_table
from core.server import get_client, mcp
from core.utils import get_tool_config, parse_time_range

DEFAULT_LIMIT = 20


@mcp.tool()
def list_events(query: str, start: str = "1h", end: str = "now", limit: int = 0) -> str:
    """List events (deployments, health changes, anomalies) for the components an STQL query selects.

    Args:
        query: STQL expression (e.g., the query printed by get_components)
        start: "now" or a look-back duration (e.g., "1h")
        end: "now" or a look-back duration
        limit: Maximum number of events (default: 20)

    Returns:
        Markdown table of events with time, name, category, type and source.
    """
    query = query.strip()
    if not query:
        raise InvalidFilterError("query must not be empty")
    start_time, end_time = parse_time_range(start, end)
    limit = limit if limit > 0 else int(get_tool_config("list_events").get("limit", DEFAULT_LIMIT))

    response = get_client().get_events(query, start_time, end_time, limit)
    return format_events_table(response, query)
