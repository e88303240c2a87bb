"""Markdown and ASCII rendering of tool results."""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from core.models import Component, MetricSeries

NO_DATA = "No data found."
PLACEHOLDER = "-"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CHART_TIME_FORMAT = "%H:%M:%S"

CHART_WIDTH = 80
CHART_HEIGHT = 15
MIN_CHART_WIDTH = 50
MIN_CHART_HEIGHT = 8
Y_AXIS_WIDTH = 10
LEGEND_MAX = 30


def format_timestamp(timestamp_ms: int, fmt: str = TIMESTAMP_FORMAT) -> str:
    """Render epoch milliseconds as UTC calendar time."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime(fmt)


def escape_cell(value: Any) -> str:
    """Make a value safe for a single Markdown table cell."""
    text = "" if value is None else str(value)
    text = " ".join(text.splitlines())
    return text.replace("|", "\\|") or PLACEHOLDER


def markdown_table(headers: List[str], rows: Iterable[List[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "---|" * len(headers),
    ]
    for row in rows:
        lines.append("| " + " | ".join(escape_cell(cell) for cell in row) + " |")
    return "\n".join(lines) + "\n"


def format_metrics_table(series: List[MetricSeries]) -> str:
    """One row per point: Timestamp, Value and every label key (sorted)."""
    if not series:
        return NO_DATA

    label_keys = sorted({k for s in series for k in s.labels if k != "__name__"})
    rows = []
    for s in series:
        for point in s.points:
            row = [format_timestamp(point.timestamp), repr(point.value)]
            row.extend(s.labels.get(k, PLACEHOLDER) for k in label_keys)
            rows.append(row)
    return markdown_table(["Timestamp", "Value"] + label_keys, rows)


def format_components_table(
    components: List[Component], filters: str, query: str
) -> str:
    if not components:
        return f"No components found for query: `{query}`"

    summary = f"Found {len(components)} component(s)"
    if filters:
        summary += f" matching {filters}"
    rows = [[c.name, c.id, c.state or PLACEHOLDER] for c in components]
    return f"{summary}\nQuery: `{query}`\n\n" + markdown_table(["Name", "ID", "State"], rows)


def format_bound_metrics_table(response: Dict[str, Any], component_id: int) -> str:
    bound_metrics = response.get("boundMetrics") or []
    if not bound_metrics:
        return f"No bound metrics found for component {component_id}."

    rows = []
    for metric in bound_metrics:
        queries = metric.get("boundQueries") or [{}]
        for query in queries:
            rows.append([
                metric.get("name"),
                metric.get("unit"),
                query.get("alias"),
                query.get("expression"),
            ])
    header = f"Bound metrics for component {component_id}:\n\n"
    return header + markdown_table(["Name", "Unit", "Alias", "Query"], rows)


def format_monitors_table(response: Dict[str, Any], component_id: int) -> str:
    node = response.get("node") or {}
    check_states = node.get("syncedCheckStates") or []
    if not check_states:
        return f"No monitors found for component {component_id}."

    rows = []
    for state in check_states:
        data = state.get("data") or {}
        queries = [
            q.get("query")
            for series in data.get("displayTimeSeries") or []
            for q in series.get("queries") or []
            if q.get("query")
        ]
        rows.append([
            state.get("name"),
            state.get("health"),
            data.get("remediationHint"),
            "; ".join(queries),
        ])
    name = node.get("name") or component_id
    header = f"Monitors for component {name} ({component_id}):\n\n"
    return header + markdown_table(["Name", "Health", "Remediation Hint", "Queries"], rows)


def format_events_table(response: Dict[str, Any], query: str) -> str:
    items = response.get("items") or []
    if not items:
        return f"No events found for query: `{query}`"

    rows = []
    for event in items:
        event_time = event.get("eventTime")
        rows.append([
            format_timestamp(event_time) if event_time else PLACEHOLDER,
            event.get("name"),
            event.get("category"),
            event.get("eventType"),
            event.get("source"),
            event.get("identifier"),
        ])
    total = response.get("total", len(items))
    header = f"Showing {len(items)} of {total} event(s) for query: `{query}`\n\n"
    return header + markdown_table(
        ["Time", "Name", "Category", "Type", "Source", "Identifier"], rows
    )


def format_metric_names(names: List[str]) -> str:
    output = ", ".join(names)
    return output or "No metrics found."


def format_metrics_chart(
    series: List[MetricSeries],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> str:
    if not series:
        return NO_DATA
    return "\n".join(render_ascii_chart(s, width, height) for s in series)


def _axis_value(value: float) -> str:
    text = f"{value:.2f}"
    if len(text) >= Y_AXIS_WIDTH:
        text = f"{value:.2e}"
    return text


def _write(grid: List[List[str]], row: int, col: int, text: str, limit: Optional[int] = None) -> None:
    end = len(grid[row]) - 1 if limit is None else limit
    for i, char in enumerate(text):
        if col + i >= end:
            break
        grid[row][col + i] = char


def render_ascii_chart(
    series: MetricSeries,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> str:
    """Plot a series as a boxed line chart of width x height characters.

    Values map linearly onto rows (minimum at the bottom), timestamps onto
    columns; each point lands on the nearest cell. NaN and infinite samples
    are not plotted.
    """
    points = [p for p in series.points if math.isfinite(p.value)]
    if len(points) < 2:
        return f"Not enough data points to plot for {series.name}"

    width = max(width, MIN_CHART_WIDTH)
    height = max(height, MIN_CHART_HEIGHT)
    axis_row = height - 3
    label_row = height - 2
    top_row, bottom_row = 1, axis_row - 1
    first_col, last_col = Y_AXIS_WIDTH + 1, width - 2

    values = [p.value for p in points]
    min_val, max_val = min(values), max(values)
    min_time, max_time = points[0].timestamp, points[-1].timestamp
    range_val = (max_val - min_val) or 1
    range_time = (max_time - min_time) or 1

    grid = [[" "] * width for _ in range(height)]

    for x in range(width):
        grid[0][x] = "─"
        grid[height - 1][x] = "─"
    for y in range(height):
        grid[y][0] = "│"
        grid[y][width - 1] = "│"
    grid[0][0], grid[0][width - 1] = "┌", "┐"
    grid[height - 1][0], grid[height - 1][width - 1] = "└", "┘"

    title = " Metrics "
    _write(grid, 0, (width - len(title)) // 2, title)

    for y in range(top_row, axis_row):
        grid[y][Y_AXIS_WIDTH] = "│"
    grid[axis_row][Y_AXIS_WIDTH] = "└"
    for x in range(first_col, width - 1):
        grid[axis_row][x] = "─"

    rows = bottom_row - top_row
    cols = last_col - first_col
    for p in points:
        x = first_col + round((p.timestamp - min_time) / range_time * cols)
        y = bottom_row - round((p.value - min_val) / range_val * rows)
        grid[min(max(y, top_row), bottom_row)][min(max(x, first_col), last_col)] = "•"

    _write(grid, top_row, 1, _axis_value(max_val), Y_AXIS_WIDTH)
    _write(grid, bottom_row, 1, _axis_value(min_val), Y_AXIS_WIDTH)
    if top_row + 1 < bottom_row:
        _write(grid, top_row + 1, 1, "Value", Y_AXIS_WIDTH)

    start_label = format_timestamp(min_time, CHART_TIME_FORMAT)
    end_label = format_timestamp(max_time, CHART_TIME_FORMAT)
    _write(grid, label_row, first_col, start_label)
    _write(grid, label_row, last_col + 1 - len(end_label), end_label)

    legend = f" {series.name} "
    if len(legend) > LEGEND_MAX:
        legend = legend[:LEGEND_MAX - 3] + "..."
    legend_x = width - len(legend) - 3
    legend_y = top_row + 1
    for x in range(legend_x, legend_x + len(legend) + 2):
        grid[legend_y][x] = "─"
        grid[legend_y + 2][x] = "─"
    for y in range(legend_y, legend_y + 3):
        grid[y][legend_x] = "│"
        grid[y][legend_x + len(legend) + 1] = "│"
    grid[legend_y][legend_x] = "┌"
    grid[legend_y][legend_x + len(legend) + 1] = "┐"
    grid[legend_y + 2][legend_x] = "└"
    grid[legend_y + 2][legend_x + len(legend) + 1] = "┘"
    _write(grid, legend_y + 1, legend_x + 1, legend)

    return "\n".join("".join(row) for row in grid) + "\n"
