"""FastMCP server instance and tool discovery for suse-observability-mcp."""

import importlib
import logging
from pathlib import Path
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from core.client import ObservabilityClient

logger = logging.getLogger(__name__)

SERVER_NAME = "SUSE Observability MCP server"

mcp = FastMCP(SERVER_NAME)

_client: Optional[ObservabilityClient] = None


def set_client(client: Optional[ObservabilityClient]) -> None:
    """Install the API client used by every tool."""
    global _client
    _client = client


def get_client() -> ObservabilityClient:
    if _client is None:
        raise RuntimeError("SUSE Observability client is not configured")
    return _client


class DynamicMCPServer:
    """Loads every module under tools_dir so their @mcp.tool() decorators run."""

    def __init__(self, name: str = SERVER_NAME, tools_dir: Optional[Path] = None):
        self.name = name
        self.tools_dir = tools_dir or Path(__file__).resolve().parent.parent / "tools"
        self.loaded_tools: List[str] = []

    def load_tools(self) -> List[str]:
        for path in sorted(self.tools_dir.glob("*.py")):
            if path.name.startswith("_"):
                continue
            importlib.import_module(f"tools.{path.stem}")
            self.loaded_tools.append(path.stem)
            logger.info(f"Loaded tool: {path.stem}")
        return self.loaded_tools

    def run(self, listen_addr: str = "") -> None:
        """Serve over stdio, or streamable HTTP when listen_addr is "host:port"."""
        if not listen_addr:
            mcp.run(transport="stdio")
            return
        host, _, port = listen_addr.rpartition(":")
        mcp.settings.host = host or "0.0.0.0"
        mcp.settings.port = int(port)
        logger.info(f"Server listening on {mcp.settings.host}:{mcp.settings.port}")
        mcp.run(transport="streamable-http")
