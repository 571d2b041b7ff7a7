"""
TCP Proxy Operations Use Case

Architectural Intent:
- Public TCP endpoints for a service in one environment: create, delete, list
- Application ports are validated before the platform is called
"""

import logging
from typing import Any

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.domain.errors import InvalidRequestError, RemoteFailureError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)


class TcpProxyOperations:
    def __init__(self, gateway: ResourceGatewayPort) -> None:
        self.gateway = gateway

    @operation_boundary("Error creating TCP proxy")
    async def create(
        self, environment_id: str, service_id: str, application_port: int
    ) -> dict[str, Any]:
        if isinstance(application_port, bool) or not isinstance(application_port, int):
            raise InvalidRequestError("application_port must be an integer")
        if not (1 <= application_port <= 65535):
            raise InvalidRequestError(
                f"application_port {application_port} out of range",
                {"application_port": application_port},
            )
        data = await self.gateway.execute(
            Operation.TCP_PROXY_CREATE,
            {
                "input": {
                    "environmentId": environment_id,
                    "serviceId": service_id,
                    "applicationPort": application_port,
                }
            },
        )
        proxy = data.get("tcpProxyCreate")
        if not proxy:
            raise RemoteFailureError(
                f"Failed to create proxy for {service_id} in environment {environment_id}"
            )
        logger.info("Created TCP proxy %s for %s", proxy.get("id"), service_id)
        return proxy

    @operation_boundary("Error deleting TCP proxy")
    async def delete(self, proxy_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(Operation.TCP_PROXY_DELETE, {"id": proxy_id})
        if not data.get("tcpProxyDelete"):
            raise RemoteFailureError(f"Failed to delete TCP Proxy with ID {proxy_id}")
        logger.info("Deleted TCP proxy %s", proxy_id)
        return {"success": True}

    @operation_boundary("Error listing TCP proxies")
    async def list(self, environment_id: str, service_id: str) -> list[dict[str, Any]]:
        data = await self.gateway.execute(
            Operation.TCP_PROXIES,
            {"environmentId": environment_id, "serviceId": service_id},
        )
        return list(data.get("tcpProxies") or [])
