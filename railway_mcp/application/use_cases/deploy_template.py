"""
Deploy Template Use Case

Architectural Intent:
- Platform-managed template deployment: one call hands the whole template to
  the platform, which provisions it asynchronously as a workflow
- Workflow status is polled separately; a reported error becomes a domain error
"""

import logging
from typing import Any, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.use_cases.template_catalog import TemplateCatalog
from railway_mcp.domain.errors import RemoteFailureError, WorkflowFailedError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort

logger = logging.getLogger(__name__)


class DeployTemplate:
    def __init__(self, gateway: ResourceGatewayPort, catalog: TemplateCatalog) -> None:
        self.gateway = gateway
        self.catalog = catalog

    @operation_boundary("Error creating service from template")
    async def deploy(
        self,
        project_id: str,
        template_id: str,
        environment_id: str,
        team_id: Optional[str] = None,
    ) -> dict[str, Any]:
        template = await self.catalog.resolve(template_id)
        payload: dict[str, Any] = {
            "environmentId": environment_id,
            "projectId": project_id,
            "serializedConfig": template.serialized_config,
            "templateId": template.id,
        }
        if team_id:
            payload["teamId"] = team_id

        data = await self.gateway.execute(Operation.TEMPLATE_DEPLOY, {"input": payload})
        response = data.get("templateDeploy")
        if not response:
            raise RemoteFailureError(f"Platform did not accept template {template_id}")

        logger.info(
            "Template %s deploying as workflow %s",
            template_id,
            response.get("workflowId"),
        )
        return {
            "project_id": response.get("projectId", project_id),
            "workflow_id": response.get("workflowId"),
        }

    @operation_boundary("Error getting workflow status")
    async def get_workflow_status(self, workflow_id: str) -> dict[str, Any]:
        data = await self.gateway.execute(
            Operation.WORKFLOW_STATUS, {"workflowId": workflow_id}
        )
        status = data.get("workflowStatus") or {}
        if status.get("error"):
            raise WorkflowFailedError(workflow_id, str(status["error"]))
        return {"workflow_id": workflow_id, "status": status.get("status")}
