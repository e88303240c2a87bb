"""Explain a single monitor check status."""

import json

from core.formatters import format_timestamp
from core.server import get_client, mcp


@mcp.tool()
def get_monitor_check_status(check_status_id: int, topology_time: int = 0) -> str:
    """Get a monitor check status by ID, including the metrics behind it.

    Args:
        check_status_id: Check status ID
        topology_time: Topology time in epoch milliseconds (0 for now)

    Returns:
        Summary header followed by the JSON check status.
    """
    res = get_client().get_monitor_check_status(check_status_id, topology_time)

    triggered = res.get("triggeredTimestamp")
    triggered_at = format_timestamp(triggered) + " UTC" if triggered else "unknown"
    summary = (
        f"Check Status for Monitor '{res.get('monitorName', '')}' (Health: {res.get('health', 'UNKNOWN')})\n"
        f"Triggered at: {triggered_at}\n"
        f"Message: {res.get('message', '')}"
    )
    return summary + "\n\n" + json.dumps(res, indent=2)
