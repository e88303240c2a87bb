"""Shared utilities for suse-observability-mcp MCP server."""

import logging
import os
import re
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, field_validator

from core.errors import InvalidTimeFormatError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "kmcp.yaml"

_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d|w)")
_PORT = re.compile(r"[0-9]{1,5}")
_DURATION = re.compile(r"^(?:\d+(?:\.\d+)?(?:ms|s|m|h|d|w))+$")


class Settings(BaseModel):
    """Connection and runtime settings for the server."""

    url: str
    token: str = ""
    api_token: bool = False
    verify_tls: bool = True
    timeout: float = 30.0
    listen_addr: str = ""
    log_level: str = "INFO"

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"invalid SUSE Observability URL: {value!r}")
        return value.rstrip("/")

    @field_validator("listen_addr")
    @classmethod
    def _validate_listen_addr(cls, value: str) -> str:
        if not value:
            return value
        _, sep, port = value.rpartition(":")
        if not sep or not _PORT.fullmatch(port) or not 0 < int(port) < 65536:
            raise ValueError(f"invalid listen address {value!r}: expected host:port")
        return value


def load_config(config_path: str) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Error loading config from {config_path}: {e}")
        return {}


def get_shared_config() -> dict[str, Any]:
    """Get shared configuration that tools can access.

    Returns:
        Shared configuration dictionary
    """
    config = load_config(get_env_var("KMCP_CONFIG", DEFAULT_CONFIG_PATH))
    tools_config = config.get("tools", {})
    if isinstance(tools_config, dict):
        return tools_config
    return {}


def get_tool_config(tool_name: str) -> dict[str, Any]:
    """Get configuration for a specific tool.

    Args:
        tool_name: Name of the tool

    Returns:
        Tool-specific configuration
    """
    shared_config = get_shared_config()
    tool_config = shared_config.get(tool_name, {})
    if isinstance(tool_config, dict):
        return tool_config
    return {}


def get_env_var(key: str, default: str = "") -> str:
    """Get environment variable with fallback.

    Args:
        key: Environment variable key
        default: Default value if not found

    Returns:
        Environment variable value or default
    """
    return os.environ.get(key, default)


def get_env_flag(key: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    value = get_env_var(key)
    if not value:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging on stderr; stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as "1h", "30m" or "1h30m".

    Raises:
        InvalidTimeFormatError: If the string is not a duration.
    """
    value = value.strip()
    if not _DURATION.match(value):
        raise InvalidTimeFormatError(
            f"invalid time format: {value} (expected 'now' or duration like '1h')"
        )
    total = timedelta()
    try:
        for amount, unit in _DURATION_PART.findall(value):
            total += float(amount) * _DURATION_UNITS[unit]
    except OverflowError as e:
        raise InvalidTimeFormatError(f"duration out of range: {value}") from e
    return total


def parse_time(value: str, now: Optional[datetime] = None) -> datetime:
    """Resolve 'now' or a look-back duration to an absolute UTC time.

    Args:
        value: "now" or a duration, interpreted as now minus that duration
        now: Reference instant (defaults to the current time)

    Returns:
        Timezone-aware datetime
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if value.strip() == "now":
        return now
    duration = parse_duration(value)
    try:
        return now - duration
    except OverflowError as e:
        raise InvalidTimeFormatError(f"time out of range: {value}") from e


def parse_time_range(
    start: str, end: str, now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Parse a start/end pair, naming the offending side on failure."""
    if now is None:
        now = datetime.now(timezone.utc)
    try:
        start_time = parse_time(start, now)
    except InvalidTimeFormatError as e:
        raise InvalidTimeFormatError(f"failed to parse start time: {e}") from e
    try:
        end_time = parse_time(end, now)
    except InvalidTimeFormatError as e:
        raise InvalidTimeFormatError(f"failed to parse end time: {e}") from e
    return start_time, end_time


def split_values(raw: str) -> List[str]:
    """Split a comma-separated argument, dropping blanks and duplicates."""
    values = [item.strip() for item in (raw or "").split(",")]
    return list(dict.fromkeys(item for item in values if item))


def to_millis(moment: datetime) -> int:
    """Epoch milliseconds for a datetime."""
    return int(moment.timestamp() * 1000)
