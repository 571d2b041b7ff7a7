"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

__all__ = [
    "Operation",
    "ResourceGatewayPort",
]
