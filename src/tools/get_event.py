"""Retrieve a single topology event."""

import json

from core.server import get_client, mcp
from core.utils import parse_time_range


@mcp.tool()
def get_event(event_id: str, start: str = "24h", end: str = "now") -> str:
    """Get an event by identifier, searched within a time window.

    Args:
        event_id: Event identifier (from list_events)
        start: "now" or a look-back duration (default: "24h")
        end: "now" or a look-back duration

    Returns:
        JSON event with its elements, tags and source links.
    """
    start_time, end_time = parse_time_range(start, end)
    return json.dumps(get_client().get_event(event_id, start_time, end_time), indent=2)
