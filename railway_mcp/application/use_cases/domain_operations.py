"""
Service Domain Operations Use Case

Architectural Intent:
- HTTP domains routed to a service: check availability, create, retarget,
  delete, list
- A requested domain name is checked for availability before creation so an
  unavailable name is reported as a bad request instead of a platform error
"""

import logging
from typing import Any, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.domain.errors import InvalidRequestError, RemoteFailureError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)


def _check_port(port: Any) -> None:
    if isinstance(port, bool) or not isinstance(port, int) or not (1 <= port <= 65535):
        raise InvalidRequestError(
            f"target_port must be an integer between 1 and 65535: {port!r}",
            {"target_port": port},
        )


class DomainOperations:
    def __init__(self, gateway: ResourceGatewayPort) -> None:
        self.gateway = gateway

    @operation_boundary("Error checking domain availability")
    async def check(self, domain: str) -> dict[str, Any]:
        data = await self.gateway.execute(Operation.DOMAIN_AVAILABLE, {"domain": domain})
        result = data.get("serviceDomainAvailable") or {}
        return {
            "domain": domain,
            "available": bool(result.get("available")),
            "message": result.get("message") or "",
        }

    @operation_boundary("Error creating domain")
    async def create(
        self,
        environment_id: str,
        service_id: str,
        domain: Optional[str] = None,
        suffix: Optional[str] = None,
        target_port: Optional[int] = None,
    ) -> dict[str, Any]:
        if domain:
            availability = await self.check(domain)
            if not availability["available"]:
                raise InvalidRequestError(
                    f"Domain unavailable: {availability['message']}", {"domain": domain}
                )
        if target_port is not None:
            _check_port(target_port)

        domain_input: dict[str, Any] = {
            "environmentId": environment_id,
            "serviceId": service_id,
        }
        if domain:
            domain_input["domain"] = domain
        if suffix:
            domain_input["suffix"] = suffix
        if target_port is not None:
            domain_input["targetPort"] = target_port

        data = await self.gateway.execute(Operation.DOMAIN_CREATE, {"input": domain_input})
        created = data.get("serviceDomainCreate")
        if not created:
            raise RemoteFailureError(f"Failed to create domain for {service_id}")
        logger.info("Created domain %s for %s", created.get("domain"), service_id)
        return created

    @operation_boundary("Error updating domain")
    async def update(self, domain_id: str, target_port: int) -> dict[str, Any]:
        _check_port(target_port)
        data = await self.gateway.execute(
            Operation.DOMAIN_UPDATE,
            {"input": {"id": domain_id, "targetPort": target_port}},
        )
        if not data.get("serviceDomainUpdate"):
            raise RemoteFailureError(f"Failed to update domain with ID {domain_id}")
        return {"success": True}

    @operation_boundary("Error deleting domain")
    async def delete(self, domain_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(Operation.DOMAIN_DELETE, {"id": domain_id})
        if not data.get("serviceDomainDelete"):
            raise RemoteFailureError(f"Failed to delete domain with ID {domain_id}")
        logger.info("Deleted domain %s", domain_id)
        return {"success": True}

    @operation_boundary("Error listing domains")
    async def list(
        self, project_id: str, environment_id: str, service_id: str
    ) -> dict[str, Any]:
        data = await self.gateway.execute(
            Operation.DOMAINS,
            {
                "projectId": project_id,
                "environmentId": environment_id,
                "serviceId": service_id,
            },
        )
        domains = data.get("domains") or {}
        return {
            "service_domains": domains.get("serviceDomains") or [],
            "custom_domains": domains.get("customDomains") or [],
        }
