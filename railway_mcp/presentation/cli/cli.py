"""
CLI Module

Architectural Intent:
- Command-line interface for the Railway MCP server
- Entry point for all user interactions
- Delegates to the MCP server built over the composition root
- Supports --verbose/--debug flags for log level control
- stdout belongs to the MCP stream while serving; status goes to stderr
"""

import argparse
import asyncio
import logging
import sys
import traceback
from typing import Optional

from railway_mcp.composition_root import container_factory
from railway_mcp.infrastructure.config import RailwayMCPConfig, load_config
from railway_mcp.infrastructure.logging import configure_logging
from railway_mcp.infrastructure.mcp_servers.railway_server import (
    MCPServer,
    create_railway_server,
)
from railway_mcp.infrastructure.mcp_servers.stdio_transport import run_stdio

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="railway-mcp",
        description="Railway provisioning tools for AI agents over MCP",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to JSON config (default: railway-mcp.json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("serve", help="Start the MCP server on stdin/stdout")
    subparsers.add_parser("tools", help="List the registered MCP tools")
    return parser


def build_server(config: RailwayMCPConfig) -> MCPServer:
    return create_railway_server(
        container_factory(config), name=config.mcp.server_name
    )


async def async_main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    # Configure logging based on flags
    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=config.log_json)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=config.log_json)
    else:
        configure_logging(level=config.log_level, json_format=config.log_json)

    verbose = args.verbose or args.debug

    if args.command == "tools":
        server = build_server(config)
        for tool in await server.list_tools():
            print(f"  - {tool.name}: {tool.description}")
        return 0

    if args.command == "serve":
        server = build_server(config)
        if not config.api.default_token:
            logger.info("No default token configured; calls must carry their own")
        print(f"[*] {server.name} MCP server listening on stdio", file=sys.stderr)
        try:
            await run_stdio(server)
        except Exception as e:
            print(f"[-] MCP server stopped: {e}", file=sys.stderr)
            if verbose:
                traceback.print_exc()
            return 1
        return 0

    parser.print_help()
    return 0


def main():
    try:
        sys.exit(asyncio.run(async_main()))
    except KeyboardInterrupt:
        print("\n[*] MCP server stopped.", file=sys.stderr)


if __name__ == "__main__":
    main()
