"""
Gateway Package

Architectural Intent:
- Adapters implementing ResourceGatewayPort against the remote platform
"""

from railway_mcp.infrastructure.gateway.railway_gateway import RailwayGateway

__all__ = ["RailwayGateway"]
