"""Retrieve a distributed trace."""

import json

from core.server import get_client, mcp


@mcp.tool()
def get_trace(trace_id: str) -> str:
    """Get all spans of a trace.

    Args:
        trace_id: Trace ID (from list_traces)

    Returns:
        JSON trace with its spans.
    """
    return json.dumps(get_client().get_trace(trace_id), indent=2)
