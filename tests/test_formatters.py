"""Tests for Markdown tables and ASCII charts."""

from datetime import datetime, timezone

from core.formatters import (
    MIN_CHART_WIDTH,
    escape_cell,
    format_bound_metrics_table,
    format_components_table,
    format_events_table,
    format_metric_names,
    format_metrics_chart,
    format_metrics_table,
    format_monitors_table,
    render_ascii_chart,
)
from core.metrics import normalize_metric_data
from core.models import Component


def _parse_rows(table: str):
    lines = table.strip().splitlines()
    header = [c.strip() for c in lines[0].strip("|").split("|")]
    rows = [[c.strip() for c in line.strip("|").split("|")] for line in lines[2:]]
    return header, rows


class TestMetricsTable:
    """Tests for format_metrics_table()."""

    def test_empty_series(self) -> None:
        assert format_metrics_table([]) == "No data found."

    def test_columns_are_timestamp_value_then_sorted_labels(self, series_factory) -> None:
        series = [
            series_factory(labels={"pod": "a", "namespace": "x"}, points=[(1700000000, 1)]),
            series_factory(labels={"cluster": "c"}, points=[(1700000000, 2)]),
        ]
        header, rows = _parse_rows(format_metrics_table(series))
        assert header == ["Timestamp", "Value", "cluster", "namespace", "pod"]
        assert rows[0] == ["2023-11-14 22:13:20", "1.0", "-", "x", "a"]
        assert rows[1] == ["2023-11-14 22:13:20", "2.0", "c", "-", "-"]

    def test_name_label_is_not_a_column(self, series_factory) -> None:
        series = [series_factory(labels={"__name__": "up", "job": "j"}, points=[(1, 1)])]
        header, _ = _parse_rows(format_metrics_table(series))
        assert "__name__" not in header

    def test_series_without_points_has_no_rows(self, series_factory) -> None:
        header, rows = _parse_rows(format_metrics_table([series_factory(labels={"a": "b"})]))
        assert header == ["Timestamp", "Value", "a"]
        assert rows == []

    def test_rows_round_trip(self) -> None:
        data = {
            "resultType": "matrix",
            "result": [
                {"metric": {"__name__": "cpu", "pod": "web-1"}, "values": [[1700000000, "0.5"], [1700000060, "42.25"]]},
                {"metric": {"__name__": "cpu", "pod": "web-2", "zone": "eu"}, "values": [[1700000000, "3"]]},
            ],
        }
        series = normalize_metric_data(data)
        header, rows = _parse_rows(format_metrics_table(series))

        expected = [
            (p.timestamp, p.value, s.labels)
            for s in series
            for p in s.points
        ]
        recovered = []
        for row in rows:
            ts = datetime.strptime(row[0], "%Y-%m-%d %H:%M:%S").replace(tzinfo=timezone.utc)
            labels = {k: v for k, v in zip(header[2:], row[2:]) if v != "-"}
            recovered.append((int(ts.timestamp() * 1000), float(row[1]), labels))
        assert recovered == expected

    def test_values_and_labels_are_not_altered(self) -> None:
        data = {
            "resultType": "vector",
            "result": [
                {"metric": {"pod": "a  b"}, "value": [1700000000, "0.123456"]},
                {"metric": {"pod": "c"}, "value": [1700000000, "1e-7"]},
            ],
        }
        header, rows = _parse_rows(format_metrics_table(normalize_metric_data(data)))
        assert header == ["Timestamp", "Value", "pod"]
        assert [(float(r[1]), r[2]) for r in rows] == [(0.123456, "a  b"), (1e-7, "c")]

    def test_newline_in_label_stays_on_one_row(self, series_factory) -> None:
        table = format_metrics_table([series_factory(labels={"msg": "x\ny"}, points=[(0, 1)])])
        _, rows = _parse_rows(table)
        assert rows == [["1970-01-01 00:00:00", "1.0", "x y"]]


class TestComponentsTable:
    """Tests for format_components_table()."""

    def test_empty(self) -> None:
        text = format_components_table([], "name: x", 'name IN ("x")')
        assert text == 'No components found for query: `name IN ("x")`'

    def test_summary_and_rows(self) -> None:
        components = [
            Component(id=1, name="service-a", state="CLEAR"),
            Component(id=2, name="service-b"),
        ]
        text = format_components_table(components, "name: service-a, service-b", "q")
        assert text.startswith("Found 2 component(s) matching name: service-a, service-b")
        assert "Query: `q`" in text
        assert "| Name | ID | State |" in text
        assert "| service-a | 1 | CLEAR |" in text
        assert "| service-b | 2 | - |" in text

    def test_pipe_in_name_is_escaped(self) -> None:
        text = format_components_table([Component(id=3, name="a|b")], "", "q")
        assert "| a\\|b | 3 | - |" in text


class TestSupplementaryTables:
    """Tests for bound metrics, monitors, events and metric name output."""

    def test_bound_metrics(self) -> None:
        response = {
            "boundMetrics": [
                {"name": "cpu_usage", "unit": "percent", "boundQueries": [{"expression": "avg(cpu_usage)", "alias": "CPU"}]}
            ]
        }
        text = format_bound_metrics_table(response, 123)
        assert "| cpu_usage | percent | CPU | avg(cpu_usage) |" in text

    def test_bound_metrics_empty(self) -> None:
        assert "No bound metrics found" in format_bound_metrics_table({"boundMetrics": []}, 1)

    def test_monitors(self) -> None:
        response = {
            "node": {
                "id": 5,
                "name": "web",
                "syncedCheckStates": [
                    {
                        "name": "High CPU",
                        "health": "CRITICAL",
                        "data": {
                            "remediationHint": "Check\nlogs",
                            "displayTimeSeries": [{"queries": [{"query": "avg(cpu)"}, {"query": "max(cpu)"}]}],
                        },
                    }
                ],
            }
        }
        text = format_monitors_table(response, 5)
        assert "| High CPU | CRITICAL | Check logs | avg(cpu); max(cpu) |" in text

    def test_monitors_empty(self) -> None:
        assert "No monitors found" in format_monitors_table({"node": {"syncedCheckStates": []}}, 1)

    def test_events(self) -> None:
        response = {
            "items": [
                {
                    "identifier": "ev-1",
                    "name": "Deployment updated",
                    "category": "Changes",
                    "eventType": "Deployment",
                    "source": "Kubernetes",
                    "eventTime": 1700000000000,
                }
            ],
            "total": 7,
        }
        text = format_events_table(response, "q")
        assert text.startswith("Showing 1 of 7 event(s)")
        assert "| 2023-11-14 22:13:20 | Deployment updated | Changes | Deployment | Kubernetes | ev-1 |" in text

    def test_events_empty(self) -> None:
        assert format_events_table({"items": []}, "q") == "No events found for query: `q`"

    def test_metric_names(self) -> None:
        assert format_metric_names(["a", "b"]) == "a, b"
        assert format_metric_names([]) == "No metrics found."

    def test_escape_cell_placeholder(self) -> None:
        assert escape_cell(None) == "-"
        assert escape_cell("") == "-"


class TestAsciiChart:
    """Tests for render_ascii_chart()."""

    def test_not_enough_points(self, series_factory) -> None:
        series = series_factory(name="up", points=[(1, 1)])
        assert render_ascii_chart(series) == "Not enough data points to plot for up"

    def test_grid_size(self, series_factory) -> None:
        series = series_factory(name="up", points=[(0, 1), (60, 2), (120, 0.5)])
        lines = render_ascii_chart(series, width=80, height=15).splitlines()
        assert len(lines) == 15
        assert all(len(line) == 80 for line in lines)
        assert lines[0].startswith("┌") and lines[-1].endswith("┘")

    def test_contains_labels_and_legend(self, series_factory) -> None:
        series = series_factory(name="http_requests", points=[(1700000000, 1.5), (1700000600, 9.25)])
        chart = render_ascii_chart(series)
        assert " http_requests " in chart
        assert "9.25" in chart
        assert "1.50" in chart
        assert "22:13:20" in chart
        assert "22:23:20" in chart
        assert "Metrics" in chart
        assert chart.count("•") == 2

    def test_max_at_top_min_at_bottom(self, series_factory) -> None:
        series = series_factory(points=[(0, 0), (100, 10)])
        lines = render_ascii_chart(series, width=80, height=15).splitlines()
        rows_with_marker = [i for i, line in enumerate(lines) if "•" in line]
        assert rows_with_marker == [1, 11]

    def test_long_name_is_truncated(self, series_factory) -> None:
        name = "container_cpu_usage_seconds_total_by_namespace"
        chart = render_ascii_chart(series_factory(name=name, points=[(0, 1), (1, 2)]))
        assert name not in chart
        assert " " + name[:26] + "..." in chart

    def test_constant_series_and_small_size(self, series_factory) -> None:
        series = series_factory(points=[(0, 5), (0, 5)])
        lines = render_ascii_chart(series, width=10, height=3).splitlines()
        assert all(len(line) == MIN_CHART_WIDTH for line in lines)

    def test_non_finite_samples_are_skipped(self) -> None:
        data = {
            "resultType": "matrix",
            "result": [
                {"metric": {"__name__": "cpu"}, "values": [[100, "1"], [160, "NaN"], [220, "+Inf"], [280, "3"]]}
            ],
        }
        chart = render_ascii_chart(normalize_metric_data(data)[0])
        assert chart.count("•") == 2
        assert "3.00" in chart
        assert "1.00" in chart

    def test_only_one_finite_sample(self, series_factory) -> None:
        series = series_factory(name="cpu", points=[(0, float("nan")), (60, 2), (120, float("-inf"))])
        assert render_ascii_chart(series) == "Not enough data points to plot for cpu"

    def test_charts_are_separated_by_one_blank_line(self, series_factory) -> None:
        series = [
            series_factory(name="a", points=[(0, 1), (1, 2)]),
            series_factory(name="b", points=[(0, 1), (1, 2)]),
        ]
        lines = format_metrics_chart(series, width=60, height=10).splitlines()
        assert len(lines) == 21
        assert lines[10] == ""
        assert lines[11].startswith("┌")

    def test_chart_per_series(self, series_factory) -> None:
        series = [
            series_factory(name="a", points=[(0, 1), (1, 2)]),
            series_factory(name="b", points=[(0, 1)]),
        ]
        text = format_metrics_chart(series)
        assert " a " in text
        assert "Not enough data points to plot for b" in text
        assert format_metrics_chart([]) == "No data found."
