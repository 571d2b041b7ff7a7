"""
Project Operations Use Case

Architectural Intent:
- Projects and their environments: list, inspect, create, delete
- Project details flatten the environment and service connections so callers
  get the identifiers every other tool needs in one read
"""

import logging
from typing import Any, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.use_cases.connections import edges
from railway_mcp.domain.errors import (
    InvalidRequestError,
    NotFoundError,
    RemoteFailureError,
)
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)


class ProjectOperations:
    def __init__(self, gateway: ResourceGatewayPort) -> None:
        self.gateway = gateway

    @operation_boundary("Error getting project details")
    async def info(self, project_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(Operation.PROJECT, {"projectId": project_id})
        project = data.get("project")
        if not project:
            raise NotFoundError("Project not found.", {"project_id": project_id})
        return {
            "project": {
                key: value
                for key, value in project.items()
                if key not in ("environments", "services")
            },
            "environments": edges(project.get("environments")),
            "services": edges(project.get("services")),
        }

    @operation_boundary("Error creating project")
    async def create(self, name: str, team_id: Optional[str] = None) -> dict[str, Any]:
        if not name or not name.strip():
            raise InvalidRequestError("name cannot be empty")
        project_input: dict[str, Any] = {"name": name}
        if team_id:
            project_input["teamId"] = team_id
        data = await self.gateway.execute(
            Operation.PROJECT_CREATE, {"input": project_input}
        )
        project = data.get("projectCreate")
        if not project:
            raise RemoteFailureError(f"Failed to create project {name}")
        logger.info("Created project %s", project.get("id"))
        return project

    @operation_boundary("Error deleting project")
    async def delete(self, project_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(
            Operation.PROJECT_DELETE, {"projectId": project_id}
        )
        if not data.get("projectDelete"):
            raise RemoteFailureError(f"Failed to delete project {project_id}")
        logger.info("Deleted project %s", project_id)
        return {"success": True}

    @operation_boundary("Error listing environments")
    async def environments(self, project_id: str) -> list[dict[str, Any]]:
        data = await self.gateway.execute(
            Operation.ENVIRONMENTS, {"projectId": project_id}
        )
        return edges(data.get("environments"))

    @operation_boundary("Error listing projects")
    async def list(self) -> list[dict[str, Any]]:
        data = await self.gateway.execute(Operation.PROJECTS)
        return edges(data.get("projects"))
