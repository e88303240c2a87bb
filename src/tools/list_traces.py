"""List recent traces of an OpenTelemetry service component."""

import json
from datetime import datetime, timedelta, timezone

from core.errors import ComponentNotFoundError, ObservabilityError
from core.server import get_client, mcp
from core.utils import get_tool_config

OTEL_SERVICES_QUERY = '(label IN ("stackpack:open-telemetry") AND type IN ("otel service"))'
DEFAULT_PAGE_SIZE = 20


@mcp.tool()
def list_traces(component_id: int) -> str:
    """List trace IDs recorded in the last hour for an OpenTelemetry service.

    Args:
        component_id: ID of an "otel service" component (from get_components)

    Returns:
        JSON list of trace IDs, newest first as returned by the API.
    """
    client = get_client()
    components = client.snapshot_topology_query(OTEL_SERVICES_QUERY)
    component = next((c for c in components if c.id == component_id), None)
    if component is None or not component.tags:
        raise ComponentNotFoundError(f"Component {component_id} not found among OpenTelemetry services")

    name = component.tag_value("service.name")
    namespace = component.tag_value("service.namespace")
    if not name or not namespace:
        raise ObservabilityError(
            f"Component {component_id} has no service.name and service.namespace tags"
        )

    page_size = int(get_tool_config("list_traces").get("page_size", DEFAULT_PAGE_SIZE))
    end = datetime.now(timezone.utc)
    result = client.query_traces(
        start=end - timedelta(hours=1),
        end=end,
        service_name=name,
        service_namespace=namespace,
        page=0,
        page_size=page_size,
    )
    trace_ids = [trace.get("traceId") for trace in result.get("traces") or []]
    return json.dumps(trace_ids)
