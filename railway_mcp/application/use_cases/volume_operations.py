"""
Volume Operations Use Case

Architectural Intent:
- Persistent volumes outside the provisioning workflow: attach, rename,
  delete and list
- Listing flattens each volume's instances so callers see where it is mounted
  without walking the connection shape
"""

import logging
from typing import Any

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.use_cases.connections import edges
from railway_mcp.domain.errors import (
    InvalidRequestError,
    NotFoundError,
    RemoteFailureError,
)
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)


class VolumeOperations:
    def __init__(self, gateway: ResourceGatewayPort) -> None:
        self.gateway = gateway

    @operation_boundary("Error creating volume")
    async def create(
        self, project_id: str, service_id: str, environment_id: str, mount_path: str
    ) -> dict[str, Any]:
        if not mount_path.startswith("/"):
            raise InvalidRequestError(
                f"mount_path must be absolute: {mount_path}", {"mount_path": mount_path}
            )
        data = await self.gateway.execute(
            Operation.VOLUME_CREATE,
            {
                "input": {
                    "projectId": project_id,
                    "serviceId": service_id,
                    "environmentId": environment_id,
                    "mountPath": mount_path,
                }
            },
        )
        volume = data.get("volumeCreate")
        if not volume:
            raise RemoteFailureError(
                f"Failed to create volume for {service_id} in environment {environment_id}"
            )
        logger.info("Created volume %s for %s", volume.get("id"), service_id)
        return volume

    @operation_boundary("Error updating volume")
    async def update(self, volume_id: str, name: str) -> dict[str, Any]:
        if not name:
            raise InvalidRequestError("name cannot be empty")
        data = await self.gateway.execute(
            Operation.VOLUME_UPDATE, {"volumeId": volume_id, "input": {"name": name}}
        )
        volume = data.get("volumeUpdate")
        if not volume:
            raise RemoteFailureError(f"Failed to update volume {volume_id}")
        return volume

    @operation_boundary("Error deleting volume")
    async def delete(self, volume_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(Operation.VOLUME_DELETE, {"volumeId": volume_id})
        if not data.get("volumeDelete"):
            raise RemoteFailureError("Failed to delete volume", {"volume_id": volume_id})
        logger.info("Deleted volume %s", volume_id)
        return {"success": True}

    @operation_boundary("Error listing volumes")
    async def list(self, project_id: str) -> list[dict[str, Any]]:
        data = await self.gateway.execute(Operation.VOLUMES, {"projectId": project_id})
        project = data.get("project")
        if not project:
            raise NotFoundError(
                f"Project not found: {project_id}", {"project_id": project_id}
            )
        return [
            {**volume, "volumeInstances": edges(volume.get("volumeInstances"))}
            for volume in edges(project.get("volumes"))
        ]
