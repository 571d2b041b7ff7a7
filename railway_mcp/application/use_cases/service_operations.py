"""
Service Operations Use Case

Architectural Intent:
- Template-less service creation from a repository or an image (one call each)
- Service listing, inspection, instance configuration and deletion; these are
  the calls a caller uses to clean up after a partial provisioning failure
- Service restart, followed by a single fixed pause so callers that read
  status right afterwards see settled state
"""

import asyncio
import logging
from typing import Any, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.orchestration.readiness import ReadinessWaiter
from railway_mcp.application.use_cases.connections import edges
from railway_mcp.domain.errors import (
    InvalidRequestError,
    NotFoundError,
    RemoteFailureError,
)
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)

RECENT_DEPLOYMENTS = 5
MAX_REPLICAS = 20

# Instance settings a caller may change, keyed by their platform field name.
INSTANCE_FIELDS = {
    "region": "region",
    "root_directory": "rootDirectory",
    "build_command": "buildCommand",
    "start_command": "startCommand",
    "num_replicas": "numReplicas",
    "healthcheck_path": "healthcheckPath",
    "sleep_application": "sleepApplication",
}


class ServiceOperations:
    def __init__(self, gateway: ResourceGatewayPort, readiness: ReadinessWaiter) -> None:
        self.gateway = gateway
        self.readiness = readiness

    async def _create(
        self, project_id: str, source: dict[str, str], name: Optional[str]
    ) -> dict[str, Any]:
        service_input: dict[str, Any] = {"projectId": project_id, "source": source}
        if name:
            service_input["name"] = name
        data = await self.gateway.execute(
            Operation.SERVICE_CREATE, {"input": service_input}
        )
        service = data.get("serviceCreate")
        if not service:
            raise RemoteFailureError("Platform returned no service")
        logger.info("Created service %s in project %s", service.get("id"), project_id)
        return service

    @operation_boundary("Error listing services")
    async def list(self, project_id: str) -> list[dict[str, Any]]:
        data = await self.gateway.execute(Operation.PROJECT, {"projectId": project_id})
        project = data.get("project")
        if not project:
            raise NotFoundError(
                f"Project not found: {project_id}", {"project_id": project_id}
            )
        return edges(project.get("services"))

    @operation_boundary("Error getting service details")
    async def info(
        self, project_id: str, service_id: str, environment_id: str
    ) -> dict[str, Any]:
        instance_data, deployment_data = await asyncio.gather(
            self.gateway.execute(
                Operation.SERVICE_INSTANCE,
                {"serviceId": service_id, "environmentId": environment_id},
            ),
            self.gateway.execute(
                Operation.DEPLOYMENTS,
                {
                    "input": {
                        "projectId": project_id,
                        "serviceId": service_id,
                        "environmentId": environment_id,
                    },
                    "first": RECENT_DEPLOYMENTS,
                },
            ),
        )
        instance = instance_data.get("serviceInstance")
        if not instance:
            raise NotFoundError(
                "Service instance not found.",
                {"service_id": service_id, "environment_id": environment_id},
            )
        return {
            "service_instance": instance,
            "deployments": edges(deployment_data.get("deployments")),
        }

    @operation_boundary("Error creating service")
    async def create_from_repo(
        self, project_id: str, repo: str, name: Optional[str] = None
    ) -> dict[str, Any]:
        if not repo:
            raise InvalidRequestError("repo cannot be empty")
        return await self._create(project_id, {"repo": repo}, name)

    @operation_boundary("Error creating service")
    async def create_from_image(
        self, project_id: str, image: str, name: Optional[str] = None
    ) -> dict[str, Any]:
        if not image:
            raise InvalidRequestError("image cannot be empty")
        return await self._create(project_id, {"image": image}, name)

    @operation_boundary("Error updating service")
    async def update(
        self, service_id: str, environment_id: str, **settings: Any
    ) -> dict[str, Any]:
        unknown = sorted(set(settings) - set(INSTANCE_FIELDS))
        if unknown:
            raise InvalidRequestError(
                f"Unknown service settings: {', '.join(unknown)}", {"unknown": unknown}
            )
        changes = {
            INSTANCE_FIELDS[key]: value
            for key, value in settings.items()
            if value is not None
        }
        if not changes:
            raise InvalidRequestError("No service settings to update")
        replicas = changes.get("numReplicas")
        if replicas is not None and not (1 <= replicas <= MAX_REPLICAS):
            raise InvalidRequestError(
                f"num_replicas must be between 1 and {MAX_REPLICAS}",
                {"num_replicas": replicas},
            )

        data = await self.gateway.execute(
            Operation.SERVICE_INSTANCE_UPDATE,
            {"serviceId": service_id, "environmentId": environment_id, "input": changes},
        )
        if not data.get("serviceInstanceUpdate"):
            raise RemoteFailureError(
                f"Failed to update service instance of {service_id} "
                f"in environment {environment_id}"
            )
        logger.info("Updated service %s: %s", service_id, ", ".join(sorted(changes)))
        return {"success": True, "updated": sorted(changes)}

    @operation_boundary("Error deleting service")
    async def delete(self, service_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(
            Operation.SERVICE_DELETE, {"serviceId": service_id}
        )
        if not data.get("serviceDelete"):
            raise RemoteFailureError(f"Failed to delete service {service_id}")
        logger.info("Deleted service %s", service_id)
        return {"success": True}

    @operation_boundary("Error restarting service")
    async def restart(self, service_id: str, environment_id: str) -> dict[str, Any]:
        await self.gateway.execute(
            Operation.SERVICE_INSTANCE_REDEPLOY,
            {"serviceId": service_id, "environmentId": environment_id},
        )
        await self.readiness.pause()
        return {"success": True}
