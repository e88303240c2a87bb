"""Entry point for the SUSE Observability MCP server."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from pydantic import ValidationError

from core.client import ObservabilityClient
from core.server import DynamicMCPServer, set_client
from core.utils import Settings, get_env_flag, get_env_var, setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SUSE Observability MCP server")
    parser.add_argument("--url", default=get_env_var("SUSE_OBSERVABILITY_URL"),
                        help="SUSE Observability API URL")
    parser.add_argument("--token", default=get_env_var("SUSE_OBSERVABILITY_TOKEN"),
                        help="SUSE Observability API or service token")
    parser.add_argument("--apitoken", action="store_true",
                        default=get_env_flag("SUSE_OBSERVABILITY_API_TOKEN"),
                        help="The token is an API token instead of a service token")
    parser.add_argument("--http", default=get_env_var("MCP_HTTP_ADDR"),
                        help="host:port for the streamable HTTP transport, defaults to stdio")
    parser.add_argument("--insecure", action="store_true",
                        default=get_env_flag("SUSE_OBSERVABILITY_INSECURE"),
                        help="Skip TLS certificate verification")
    parser.add_argument("--timeout", type=float, default=30.0,
                        help="HTTP timeout in seconds")
    parser.add_argument("--config", default=get_env_var("KMCP_CONFIG"),
                        help="Path to the kmcp.yaml tool configuration")
    parser.add_argument("--log-level", default=get_env_var("LOG_LEVEL", "INFO"))
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    return Settings(
        url=args.url,
        token=args.token,
        api_token=args.apitoken,
        verify_tls=not args.insecure,
        timeout=args.timeout,
        listen_addr=args.http,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    if args.config:
        os.environ["KMCP_CONFIG"] = args.config

    try:
        settings = build_settings(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    client = ObservabilityClient(
        settings.url,
        settings.token,
        api_token=settings.api_token,
        verify_tls=settings.verify_tls,
        timeout=settings.timeout,
    )
    set_client(client)

    server = DynamicMCPServer()
    server.load_tools()
    try:
        server.run(settings.listen_addr)
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
