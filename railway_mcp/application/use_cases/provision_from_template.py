"""
Provision From Template Use Case

Architectural Intent:
- Turns one ProvisionRequest into a running, reachable, persistently-storing
  service: create compute, apply variables, place, expose, attach storage
- Uses StepOrchestrator for strictly sequential execution with a step log
- The template is validated before any remote mutation happens

Failure Semantics:
- Failures before the service exists are surfaced unchanged
- Later failures raise PartialProvisioningFailure naming the created service,
  the failed sub-resource and the steps already completed
- Nothing is rolled back; created sub-resources belong to the platform
"""

import logging
from typing import Any

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.application.dtos.provisioning_dtos import (
    ProvisionRequest,
    ProvisionResult,
)
from railway_mcp.application.orchestration.step_orchestrator import (
    SKIPPED,
    StepFailedError,
    StepOrchestrator,
    WorkflowStep,
)
from railway_mcp.application.use_cases.template_catalog import TemplateCatalog
from railway_mcp.application.use_cases.variable_sync import VariableSyncEngine
from railway_mcp.domain.entities.template import ServiceSlot, Template
from railway_mcp.domain.errors import (
    InvalidRequestError,
    PartialProvisioningFailure,
    RemoteFailureError,
)
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort
from railway_mcp.domain.value_objects.variable_scope import VariableScope

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_PORT = 5432
DEFAULT_MOUNT_PATH = "/data"


def provisionable_slot(template: Template) -> ServiceSlot:
    """Return the template's single image-bearing slot or raise InvalidRequestError."""
    if not template.slots:
        raise InvalidRequestError(
            f"Invalid template {template.id}: no services found",
            {"template_id": template.id},
        )
    if len(template.slots) > 1:
        raise InvalidRequestError(
            f"Invalid template {template.id}: expected one service, found "
            f"{len(template.slots)}; use the template deploy workflow instead",
            {"template_id": template.id},
        )
    slot = template.slots[0]
    if not slot.has_image:
        raise InvalidRequestError(
            f"Invalid template {template.id}: no image source found",
            {"template_id": template.id, "slot": slot.key},
        )
    return slot


class ProvisionFromTemplate:
    def __init__(
        self,
        gateway: ResourceGatewayPort,
        catalog: TemplateCatalog,
        variables: VariableSyncEngine,
        default_port: int = DEFAULT_APPLICATION_PORT,
        default_mount_path: str = DEFAULT_MOUNT_PATH,
    ) -> None:
        self.gateway = gateway
        self.catalog = catalog
        self.variables = variables
        self.default_port = default_port
        self.default_mount_path = default_mount_path

    @operation_boundary("Error creating database")
    async def execute(self, request: ProvisionRequest) -> ProvisionResult:
        template = await self.catalog.resolve(request.template_id)
        slot = provisionable_slot(template)
        service_name = request.name or slot.name or template.name

        async def create_service(context: dict[str, Any], results: dict[str, Any]) -> dict:
            data = await self.gateway.execute(
                Operation.SERVICE_CREATE,
                {
                    "input": {
                        "projectId": request.project_id,
                        "name": service_name,
                        "source": {"image": slot.image},
                    }
                },
            )
            service = data.get("serviceCreate")
            if not service or not service.get("id"):
                raise RemoteFailureError("Platform returned no service")
            context["service_id"] = service["id"]
            return service

        async def apply_variables(context: dict[str, Any], results: dict[str, Any]) -> Any:
            defaults = slot.variable_defaults()
            if not defaults:
                return SKIPPED
            scope = VariableScope(
                request.project_id, request.environment_id, context["service_id"]
            )
            return await self.variables.bulk_set(scope, defaults)

        async def place(context: dict[str, Any], results: dict[str, Any]) -> dict:
            service_id = context["service_id"]
            context["place_stage"] = "service instance lookup"
            data = await self.gateway.execute(
                Operation.SERVICE_INSTANCE,
                {"serviceId": service_id, "environmentId": request.environment_id},
            )
            instance = data.get("serviceInstance")
            if not instance:
                raise InvalidRequestError(
                    "Service instance not found.",
                    {"service_id": service_id, "environment_id": request.environment_id},
                )
            if request.region:
                context["place_stage"] = "region update"
                data = await self.gateway.execute(
                    Operation.SERVICE_INSTANCE_UPDATE,
                    {
                        "serviceId": service_id,
                        "environmentId": request.environment_id,
                        "input": {"region": request.region},
                    },
                )
                if not data.get("serviceInstanceUpdate"):
                    raise RemoteFailureError(
                        f"Failed to update service instance of {service_id} "
                        f"in environment {request.environment_id}"
                    )
            return instance

        async def expose(context: dict[str, Any], results: dict[str, Any]) -> dict:
            service_id = context["service_id"]
            port = slot.first_proxy_port or self.default_port
            data = await self.gateway.execute(
                Operation.TCP_PROXY_CREATE,
                {
                    "input": {
                        "environmentId": request.environment_id,
                        "serviceId": service_id,
                        "applicationPort": port,
                    }
                },
            )
            proxy = data.get("tcpProxyCreate")
            if not proxy:
                raise RemoteFailureError(
                    f"Failed to create proxy for {service_id} "
                    f"in environment {request.environment_id}"
                )
            return proxy

        async def attach_storage(context: dict[str, Any], results: dict[str, Any]) -> dict:
            service_id = context["service_id"]
            mount_path = slot.first_mount_path or self.default_mount_path
            data = await self.gateway.execute(
                Operation.VOLUME_CREATE,
                {
                    "input": {
                        "projectId": request.project_id,
                        "environmentId": request.environment_id,
                        "serviceId": service_id,
                        "mountPath": mount_path,
                    }
                },
            )
            volume = data.get("volumeCreate")
            if not volume:
                raise RemoteFailureError(
                    f"Failed to create volume for {service_id} "
                    f"in environment {request.environment_id}"
                )
            return volume

        orchestrator = StepOrchestrator([
            WorkflowStep("create_service", create_service, "service creation"),
            WorkflowStep("apply_variables", apply_variables, "variable application"),
            WorkflowStep("place", place, "service instance lookup"),
            WorkflowStep("expose", expose, "proxy creation"),
            WorkflowStep("attach_storage", attach_storage, "volume creation"),
        ])

        context: dict[str, Any] = {}
        try:
            results = await orchestrator.execute(context)
        except StepFailedError as e:
            service_id = context.get("service_id")
            if service_id is None:
                raise e.cause
            subresource = e.step.label
            if e.step.name == "place":
                subresource = context.get("place_stage", subresource)
            raise PartialProvisioningFailure(
                service_id=service_id,
                failed_step=e.step.name,
                subresource=subresource,
                completed_steps=e.completed,
                cause=e.cause,
            ) from e.cause

        logger.info(
            "Provisioned %s from template %s (steps: %s)",
            context["service_id"],
            template.id,
            ", ".join(orchestrator.log.completed),
        )
        return ProvisionResult(
            service=results["create_service"],
            template_id=template.id,
            completed_steps=list(orchestrator.log.completed),
        )
