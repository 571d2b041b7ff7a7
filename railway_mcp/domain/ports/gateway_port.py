"""
Resource Gateway Port

Architectural Intent:
- Single authenticated channel for every remote platform call
- One gateway instance is bound to one caller credential for one invocation
- Errors are normalized to the domain vocabulary (see domain.errors)
- The gateway never retries; retry or wait policy belongs to the caller

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Operations are named by the Operation enum so use cases never see the wire
  format; the adapter owns the mapping to GraphQL documents
"""

from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable


class Operation(str, Enum):
    TEMPLATES = "templates"
    TEMPLATE_DEPLOY = "templateDeploy"
    WORKFLOW_STATUS = "workflowStatus"
    PROJECTS = "projects"
    PROJECT = "project"
    PROJECT_CREATE = "projectCreate"
    PROJECT_DELETE = "projectDelete"
    ENVIRONMENTS = "environments"
    SERVICE_CREATE = "serviceCreate"
    SERVICE_DELETE = "serviceDelete"
    SERVICE_INSTANCE = "serviceInstance"
    SERVICE_INSTANCE_UPDATE = "serviceInstanceUpdate"
    SERVICE_INSTANCE_REDEPLOY = "serviceInstanceRedeploy"
    VARIABLES = "variables"
    VARIABLE_UPSERT = "variableUpsert"
    VARIABLE_COLLECTION_UPSERT = "variableCollectionUpsert"
    VARIABLE_DELETE = "variableDelete"
    TCP_PROXIES = "tcpProxies"
    TCP_PROXY_CREATE = "tcpProxyCreate"
    TCP_PROXY_DELETE = "tcpProxyDelete"
    VOLUMES = "volumes"
    VOLUME_CREATE = "volumeCreate"
    VOLUME_UPDATE = "volumeUpdate"
    VOLUME_DELETE = "volumeDelete"
    DOMAINS = "domains"
    DOMAIN_AVAILABLE = "serviceDomainAvailable"
    DOMAIN_CREATE = "serviceDomainCreate"
    DOMAIN_UPDATE = "serviceDomainUpdate"
    DOMAIN_DELETE = "serviceDomainDelete"
    DEPLOYMENTS = "deployments"
    DEPLOYMENT_TRIGGER = "serviceInstanceDeployV2"
    DEPLOYMENT = "deployment"
    BUILD_LOGS = "buildLogs"
    DEPLOYMENT_LOGS = "deploymentLogs"


@runtime_checkable
class ResourceGatewayPort(Protocol):
    """Port for authenticated remote platform calls."""

    async def execute(
        self, operation: Operation, parameters: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Run one remote operation and return its data payload.

        Raises UnauthenticatedError, NotFoundError, InvalidRequestError or
        RemoteFailureError.
        """
        ...
