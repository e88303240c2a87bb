"""List the check states a monitor produced."""

import json

from core.server import get_client, mcp


@mcp.tool()
def get_monitor_check_states(
    monitor_id_or_urn: str,
    health_state: str = "",
    limit: int = 0,
    timestamp: int = 0,
) -> str:
    """Get the check states generated by a monitor.

    Args:
        monitor_id_or_urn: Monitor identifier (ID or URN)
        health_state: Only states with this health (CRITICAL, DEVIATING, CLEAR, UNKNOWN)
        limit: Maximum number of states (0 for the API default)
        timestamp: Query time in epoch milliseconds (0 for now)

    Returns:
        JSON list of check states.
    """
    res = get_client().get_monitor_check_states(
        monitor_id_or_urn, health_state.strip().upper(), limit, timestamp
    )
    return json.dumps(res, indent=2)
