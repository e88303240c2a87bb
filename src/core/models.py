"""Typed views of SUSE Observability payloads used by the tools."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

DEFAULT_SERIES_NAME = "metric"


class MetricPoint(BaseModel):
    """A single sample; timestamp is epoch milliseconds."""

    timestamp: int
    value: float


class MetricSeries(BaseModel):
    name: str = DEFAULT_SERIES_NAME
    labels: Dict[str, str] = Field(default_factory=dict)
    points: List[MetricPoint] = Field(default_factory=list)


class Component(BaseModel):
    """Simplified topology component from a view snapshot."""

    id: int
    name: str = ""
    state: Optional[str] = None
    type_id: Optional[int] = None
    identifiers: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_view(cls, data: Dict[str, Any]) -> "Component":
        """Build from a ViewComponent JSON object."""
        state = data.get("state") or {}
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            state=state.get("healthState") or None,
            type_id=data.get("type"),
            identifiers=data.get("identifiers") or [],
            tags=data.get("tags") or [],
        )

    def tag_value(self, key: str) -> Optional[str]:
        """Value of a "key:value" tag, or None."""
        for tag in self.tags:
            tag_key, _, value = tag.partition(":")
            if tag_key == key:
                return value
        return None
