"""Normalization of PromQL-style query responses into MetricSeries."""

from typing import Any, Dict, List

from core.errors import (
    MalformedMetricPointError,
    UnsupportedResultTypeError,
    UpstreamError,
)
from core.models import DEFAULT_SERIES_NAME, MetricPoint, MetricSeries

NAME_LABEL = "__name__"


def normalize_metric_response(payload: Dict[str, Any]) -> List[MetricSeries]:
    """Normalize a full metrics API response (status, errors, data).

    Raises:
        UpstreamError: If the API reported the query as failed.
    """
    errors = payload.get("errors") or []
    if payload.get("status") == "error" or errors:
        message = "metric query failed"
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            message = errors[0]["message"]
        raise UpstreamError(message)
    return normalize_metric_data(payload.get("data") or {})


def normalize_metric_data(data: Dict[str, Any]) -> List[MetricSeries]:
    """Turn a {resultType, result} document into a list of series.

    scalar and string results hold a single [timestamp, "value"] pair; vector
    items carry one pair under "value", matrix items a list under "values".
    """
    result_type = data.get("resultType")
    if "result" not in data:
        raise MalformedMetricPointError("metric response has no result")
    result = data["result"]

    if result_type in ("scalar", "string"):
        return [MetricSeries(name=DEFAULT_SERIES_NAME, points=[_parse_point(result)])]

    if result_type == "vector":
        return [
            _series(item, [_parse_point(_field(item, "value"))])
            for item in _items(result)
        ]

    if result_type == "matrix":
        series = []
        for item in _items(result):
            values = _field(item, "values")
            if not isinstance(values, list):
                raise MalformedMetricPointError(f"expected a list of points, got {values!r}")
            series.append(_series(item, [_parse_point(p) for p in values]))
        return series

    raise UnsupportedResultTypeError(f"unsupported metric resultType: {result_type!r}")


def _items(result: Any) -> List[Dict[str, Any]]:
    if not isinstance(result, list) or not all(isinstance(i, dict) for i in result):
        raise MalformedMetricPointError(f"expected a list of series, got {result!r}")
    return result


def _field(item: Dict[str, Any], key: str) -> Any:
    if key not in item:
        raise MalformedMetricPointError(f"series is missing {key!r}")
    return item[key]


def _series(item: Dict[str, Any], points: List[MetricPoint]) -> MetricSeries:
    raw_labels = item.get("metric") or {}
    if not isinstance(raw_labels, dict):
        raise MalformedMetricPointError(f"expected a label map, got {raw_labels!r}")
    labels = {str(k): str(v) for k, v in raw_labels.items()}
    name = labels.pop(NAME_LABEL, "") or DEFAULT_SERIES_NAME
    return MetricSeries(name=name, labels=labels, points=points)


def _parse_point(raw: Any) -> MetricPoint:
    """Parse [timestamp_seconds, "value"] into a point with a millisecond timestamp."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise MalformedMetricPointError(f"expected [timestamp, value], got {raw!r}")
    timestamp, value = raw
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise MalformedMetricPointError(f"invalid timestamp {timestamp!r}")
    try:
        parsed = float(str(value).strip())
    except ValueError as e:
        raise MalformedMetricPointError(f"invalid metric value {value!r}") from e
    return MetricPoint(timestamp=int(round(timestamp * 1000)), value=parsed)
