"""
Deployment Operations Use Case

Architectural Intent:
- List recent deployments, trigger one, read its logs, check its status
- Agents tend to chain trigger/logs/status calls back to back, so trigger and
  logs wait once (fixed pause) before touching the platform
- Status uses an explicit readiness poll instead of a blind delay: it returns
  as soon as the deployment reaches a terminal status
"""

import logging
from typing import Any, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.orchestration.readiness import ReadinessWaiter
from railway_mcp.application.use_cases.connections import edges
from railway_mcp.domain.errors import NotFoundError, RemoteFailureError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset(
    {"SUCCESS", "FAILED", "CRASHED", "REMOVED", "SKIPPED", "SLEEPING"}
)


class DeploymentOperations:
    def __init__(self, gateway: ResourceGatewayPort, readiness: ReadinessWaiter) -> None:
        self.gateway = gateway
        self.readiness = readiness

    @operation_boundary("Error triggering deployment")
    async def trigger(
        self, service_id: str, environment_id: str, commit_sha: Optional[str] = None
    ) -> dict[str, Any]:
        await self.readiness.pause()
        params: dict[str, Any] = {"serviceId": service_id, "environmentId": environment_id}
        if commit_sha:
            params["commitSha"] = commit_sha
        data = await self.gateway.execute(Operation.DEPLOYMENT_TRIGGER, params)
        deployment_id = data.get("serviceInstanceDeployV2")
        if not deployment_id:
            raise RemoteFailureError(f"Platform did not start a deployment for {service_id}")
        logger.info("Triggered deployment %s for %s", deployment_id, service_id)
        return {"deployment_id": deployment_id}

    @operation_boundary("Error fetching logs")
    async def logs(self, deployment_id: str, limit: int = 100) -> list[dict[str, Any]]:
        await self.readiness.pause()
        params = {"deploymentId": deployment_id, "limit": limit}
        build = await self.gateway.execute(Operation.BUILD_LOGS, params)
        runtime = await self.gateway.execute(Operation.DEPLOYMENT_LOGS, params)
        return [
            *({**entry, "type": "build"} for entry in build.get("buildLogs") or []),
            *(
                {**entry, "type": "deployment"}
                for entry in runtime.get("deploymentLogs") or []
            ),
        ]

    @operation_boundary("Error checking deployment health")
    async def status(self, deployment_id: str) -> dict[str, Any]:
        async def poll() -> Optional[str]:
            data = await self.gateway.execute(Operation.DEPLOYMENT, {"id": deployment_id})
            deployment = data.get("deployment")
            if not deployment:
                raise NotFoundError(
                    f"Deployment not found: {deployment_id}",
                    {"deployment_id": deployment_id},
                )
            return deployment.get("status")

        status = await self.readiness.wait_until(
            poll, lambda value: value in TERMINAL_STATUSES
        )
        return {
            "deployment_id": deployment_id,
            "status": status,
            "settled": status in TERMINAL_STATUSES,
        }

    @operation_boundary("Error listing deployments")
    async def list(
        self,
        project_id: str,
        service_id: str,
        environment_id: str,
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        data = await self.gateway.execute(
            Operation.DEPLOYMENTS,
            {
                "input": {
                    "projectId": project_id,
                    "serviceId": service_id,
                    "environmentId": environment_id,
                },
                "first": limit,
            },
        )
        return edges(data.get("deployments"))
