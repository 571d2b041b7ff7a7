"""
MCP Servers Package

Architectural Intent:
- Contains the MCP server exposing the Railway provisioning tools
- Every tool call runs against a fresh, credential-bound container
"""

from railway_mcp.infrastructure.mcp_servers.railway_server import (
    MCPError,
    MCPServer,
    MCPTool,
    create_railway_server,
)
from railway_mcp.infrastructure.mcp_servers.stdio_transport import run_stdio

__all__ = ["MCPServer", "MCPError", "MCPTool", "create_railway_server", "run_stdio"]
