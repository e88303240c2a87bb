"""Run a raw STQL topology query."""

from core.errors import InvalidFilterError
from core.formatters import format_components_table
from core.server import get_client, mcp


@mcp.tool()
def query_topology(query: str) -> str:
    """Run an STQL query against the topology snapshot API.

    Args:
        query: STQL expression (e.g., 'type IN ("pod") AND healthstate IN ("CRITICAL")')

    Returns:
        Markdown table of matching components.
    """
    query = query.strip()
    if not query:
        raise InvalidFilterError("query must not be empty")
    components = get_client().snapshot_topology_query(query)
    return format_components_table(components, "", query)
