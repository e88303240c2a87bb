"""Retrieve a monitor definition."""

import json

from core.server import get_client, mcp


@mcp.tool()
def get_monitor(monitor_id_or_urn: str) -> str:
    """Get a monitor by ID or URN.

    Args:
        monitor_id_or_urn: Monitor identifier (numeric ID or URN)

    Returns:
        JSON monitor definition.
    """
    return json.dumps(get_client().get_monitor(monitor_id_or_urn), indent=2)
