"""List the monitors reporting on a component."""

from core.formatters import format_monitors_table
from core.server import get_client, mcp


@mcp.tool()
def list_monitors(component_id: int) -> str:
    """List monitors for a component with their health, remediation hints and queries.

    Args:
        component_id: Component ID (from get_components)

    Returns:
        Markdown table of the component's monitor check states.
    """
    response = get_client().get_component(component_id)
    return format_monitors_table(response, component_id)
