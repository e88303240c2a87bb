"""HTTP client for the SUSE Observability REST API."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from core.errors import UpstreamError
from core.metrics import normalize_metric_response
from core.models import Component, MetricSeries
from core.utils import to_millis

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = "10s"


def new_view_snapshot_request(query: str) -> Dict[str, Any]:
    """Body for POST /api/snapshot."""
    return {
        "_type": "ViewSnapshotRequest",
        "metadata": {
            "_type": "QueryMetadata",
            "showFullComponent": False,
            "groupingEnabled": False,
            "showIndirectRelations": False,
            "minGroupSize": 2,
            "groupedByLayer": False,
            "groupedByDomain": False,
            "groupedByRelation": False,
            "showCause": "NONE",
            "autoGrouping": False,
            "connectedComponents": False,
            "neighboringComponents": False,
        },
        "query": query,
        "queryVersion": "0.0.1",
    }


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        errors = body.get("errors") or []
        if errors and isinstance(errors[0], dict):
            return errors[0].get("message")
    return None


class ObservabilityClient:
    """Thin wrapper around the SUSE Observability API.

    The HTTP transport is passed in (or built from verify_tls/timeout), so
    tests can hand over an httpx.Client backed by a MockTransport.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        api_token: bool = False,
        http_client: Optional[httpx.Client] = None,
        verify_tls: bool = True,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.api_token = api_token
        self._http = http_client or httpx.Client(verify=verify_tls, timeout=timeout)

    @property
    def auth_header(self) -> str:
        """API tokens and service tokens travel in different headers."""
        return "X-API-Token" if self.api_token else "X-API-Key"

    def close(self) -> None:
        self._http.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}/api/{endpoint}"
        headers = {self.auth_header: self.token, "Content-Type": "application/json"}
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self._http.request(method, url, params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response) or f"{e.response.status_code} {e.response.reason_phrase}"
            raise UpstreamError(
                f"{method} {endpoint} failed: {message}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"{method} {endpoint} failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"{method} {endpoint} returned invalid JSON") from e

    # Metrics

    def list_metrics(self, start: datetime, end: datetime) -> List[str]:
        """Names of all metrics with data between start and end."""
        res = self._request(
            "GET",
            "metrics/label/__name__/values",
            params={"start": to_millis(start), "end": to_millis(end)},
        )
        return res.get("data") or []

    def query_metric(self, query: str, at: datetime, timeout: str = DEFAULT_TIMEOUT) -> List[MetricSeries]:
        """Instant query evaluated at a single point in time.

        Timeout is in the form "<number><unit (y|w|d|h|m|s|ms)>", e.g. "10s".
        """
        res = self._request(
            "GET",
            "metrics/query",
            params={"query": query, "timeout": timeout, "time": to_millis(at)},
        )
        return normalize_metric_response(res)

    def query_range_metric(
        self,
        query: str,
        start: datetime,
        end: datetime,
        step: str,
        timeout: str = DEFAULT_TIMEOUT,
    ) -> List[MetricSeries]:
        """Range query; step uses the same duration format as timeout."""
        res = self._request(
            "GET",
            "metrics/query_range",
            params={
                "query": query,
                "timeout": timeout,
                "step": step,
                "start": to_millis(start),
                "end": to_millis(end),
            },
        )
        return normalize_metric_response(res)

    def get_bound_metrics_with_data(
        self, component_id: int, start: datetime, end: datetime
    ) -> Dict[str, Any]:
        return self._request(
            "GET",
            f"components/{component_id}/boundMetricsWithData",
            params={
                "startSeconds": int(start.timestamp()),
                "endSeconds": int(end.timestamp()),
            },
        )

    # Topology

    def get_component(self, component_id: int) -> Dict[str, Any]:
        """Component with full details, including its synced check states."""
        return self._request("GET", f"components/{component_id}")

    def snapshot_topology_query(self, query: str) -> List[Component]:
        res = self._request("POST", "snapshot", json=new_view_snapshot_request(query))
        snapshot = res.get("viewSnapshotResponse") or {}
        errors = snapshot.get("errors") or []
        if errors:
            raise UpstreamError(errors[0].get("message") or "topology query failed")
        return [Component.from_view(c) for c in snapshot.get("components") or []]

    # Monitors

    def get_monitor(self, monitor_id_or_urn: str) -> Dict[str, Any]:
        return self._request("GET", f"monitors/{monitor_id_or_urn}")

    def get_monitor_check_states(
        self,
        monitor_id_or_urn: str,
        health_state: str = "",
        limit: int = 0,
        timestamp: int = 0,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if health_state:
            params["healthState"] = health_state
        if limit > 0:
            params["limit"] = limit
        if timestamp > 0:
            params["timestamp"] = timestamp
        return self._request("GET", f"monitors/{monitor_id_or_urn}/checkStates", params=params)

    def get_monitor_check_status(self, check_status_id: int, topology_time: int = 0) -> Dict[str, Any]:
        params = {"topologyTime": topology_time} if topology_time > 0 else None
        return self._request("GET", f"monitor/checkStatus/{check_status_id}", params=params)

    # Traces

    def query_traces(
        self,
        start: datetime,
        end: datetime,
        service_name: str,
        service_namespace: str,
        page: int = 0,
        page_size: int = 20,
    ) -> Dict[str, Any]:
        attributes = {
            "service.name": [service_name],
            "service.namespace": [service_namespace],
        }
        body = {
            "primarySpanFilter": {"attributes": attributes},
            "secondarySpanFilter": {"attributes": {}},
            "sortBy": [],
        }
        return self._request(
            "POST",
            "traces/query",
            params={
                "start": to_millis(start),
                "end": to_millis(end),
                "page": page,
                "pageSize": page_size,
            },
            json=body,
        )

    def get_trace(self, trace_id: str) -> Dict[str, Any]:
        return self._request("GET", f"traces/{trace_id}")

    # Events

    def get_events(
        self, topology_query: str, start: datetime, end: datetime, limit: int = 20
    ) -> Dict[str, Any]:
        body = {
            "startTimestampMs": to_millis(start),
            "endTimestampMs": to_millis(end),
            "topologyQuery": topology_query,
            "limit": limit,
        }
        return self._request("POST", "events", json=body)

    def get_event(self, event_id: str, start: datetime, end: datetime) -> Dict[str, Any]:
        return self._request(
            "GET",
            f"events/{event_id}",
            params={
                "startTimestampMs": to_millis(start),
                "endTimestampMs": to_millis(end),
            },
        )
