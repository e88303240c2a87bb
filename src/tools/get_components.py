"""Search topology components using STQL filters."""

import logging

from core.formatters import format_components_table
from core.server import get_client, mcp
from core.stql import ComponentFilter

logger = logging.getLogger(__name__)


@mcp.tool()
def get_components(
    names: str = "",
    types: str = "",
    healthstates: str = "",
    layers: str = "",
    domains: str = "",
    with_neighbors: bool = False,
    with_neighbors_levels: str = "",
    with_neighbors_direction: str = "",
) -> str:
    """Search topology components. All filters accept comma-separated values and are combined with AND.

    Args:
        names: Exact component names (e.g., "checkout-service,redis-master")
        types: Component types (e.g., "pod,service,deployment")
        healthstates: Health states (e.g., "CRITICAL,DEVIATING")
        layers: Layers (e.g., "Services,Containers")
        domains: Cluster names (e.g., "prod-cluster,staging-cluster")
        with_neighbors: Also return components connected to the matches
        with_neighbors_levels: Levels to expand, 1-14 or "all" (default: 1)
        with_neighbors_direction: "up", "down" or "both" (default: both)

    Returns:
        Markdown table of matching components with their names, IDs and health states.
    """
    component_filter = ComponentFilter(
        names=names,
        types=types,
        healthstates=healthstates,
        layers=layers,
        domains=domains,
        with_neighbors=with_neighbors,
        with_neighbors_levels=with_neighbors_levels,
        with_neighbors_direction=with_neighbors_direction,
    )
    query = component_filter.to_stql()
    logger.debug(f"Component query: {query}")

    components = get_client().snapshot_topology_query(query)
    return format_components_table(components, component_filter.describe(), query)
