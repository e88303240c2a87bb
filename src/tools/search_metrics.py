"""Search available metric names."""

import re
from datetime import datetime, timedelta, timezone

from core.errors import InvalidFilterError
from core.formatters import format_metric_names
from core.server import get_client, mcp


@mcp.tool()
def search_metrics(filter: str = "") -> str:
    """List metric names that had data in the last hour.

    Args:
        filter: Optional regex to match metric names (e.g., "^http_.*_total$")

    Returns:
        Comma-separated metric names.
    """
    pattern = None
    if filter:
        try:
            pattern = re.compile(filter)
        except re.error as e:
            raise InvalidFilterError(f"invalid regex filter: {e}") from e

    end = datetime.now(timezone.utc)
    names = get_client().list_metrics(end - timedelta(hours=1), end)
    if pattern is not None:
        names = [name for name in names if pattern.search(name)]
    return format_metric_names(names)
