"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the application
- Single place where the gateway and use cases are wired together
- One container per tool invocation: it is bound to that invocation's
  credential and closed when the invocation ends, so nothing survives
  between calls

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- The container is an async context manager that closes the gateway
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx

from railway_mcp.application.orchestration.readiness import ReadinessWaiter
from railway_mcp.application.use_cases.deploy_template import DeployTemplate
from railway_mcp.application.use_cases.deployment_operations import (
    DeploymentOperations,
)
from railway_mcp.application.use_cases.domain_operations import DomainOperations
from railway_mcp.application.use_cases.project_operations import ProjectOperations
from railway_mcp.application.use_cases.provision_from_template import (
    ProvisionFromTemplate,
)
from railway_mcp.application.use_cases.service_operations import ServiceOperations
from railway_mcp.application.use_cases.tcp_proxy_operations import TcpProxyOperations
from railway_mcp.application.use_cases.template_catalog import TemplateCatalog
from railway_mcp.application.use_cases.variable_sync import VariableSyncEngine
from railway_mcp.application.use_cases.volume_operations import VolumeOperations
from railway_mcp.domain.services.template_search import TemplateSearch
from railway_mcp.infrastructure.config import RailwayMCPConfig
from railway_mcp.infrastructure.gateway.railway_gateway import RailwayGateway


@dataclass
class RailwayContainer:
    """DI container holding all wired dependencies for one invocation."""

    gateway: RailwayGateway
    templates: TemplateCatalog
    variables: VariableSyncEngine
    provisioning: ProvisionFromTemplate
    template_deploy: DeployTemplate
    services: ServiceOperations
    deployments: DeploymentOperations
    projects: ProjectOperations
    volumes: VolumeOperations
    tcp_proxies: TcpProxyOperations
    domains: DomainOperations

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def __aenter__(self) -> "RailwayContainer":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def create_container(
    credential: Optional[str],
    config: Optional[RailwayMCPConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
) -> RailwayContainer:
    """Create and wire all dependencies for a single credential."""
    config = config or RailwayMCPConfig()

    gateway = RailwayGateway(
        credential,
        endpoint=config.api.endpoint,
        timeout_seconds=config.api.timeout_seconds,
        transport=transport,
    )
    readiness = ReadinessWaiter(
        delay_seconds=config.readiness.delay_seconds,
        max_attempts=config.readiness.max_attempts,
        backoff_min=config.readiness.backoff_min,
        backoff_max=config.readiness.backoff_max,
        sleep=sleep,
    )
    templates = TemplateCatalog(
        gateway,
        TemplateSearch(
            threshold=config.templates.search_threshold,
            name_weight=config.templates.name_weight,
            description_weight=config.templates.description_weight,
        ),
    )
    variables = VariableSyncEngine(gateway)
    provisioning = ProvisionFromTemplate(
        gateway,
        templates,
        variables,
        default_port=config.provisioning.default_port,
        default_mount_path=config.provisioning.default_mount_path,
    )

    return RailwayContainer(
        gateway=gateway,
        templates=templates,
        variables=variables,
        provisioning=provisioning,
        template_deploy=DeployTemplate(gateway, templates),
        services=ServiceOperations(gateway, readiness),
        deployments=DeploymentOperations(gateway, readiness),
        projects=ProjectOperations(gateway),
        volumes=VolumeOperations(gateway),
        tcp_proxies=TcpProxyOperations(gateway),
        domains=DomainOperations(gateway),
    )


def container_factory(
    config: Optional[RailwayMCPConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Callable[[Optional[str]], RailwayContainer]:
    """Return a per-call factory falling back to the configured default token."""
    config = config or RailwayMCPConfig()

    def factory(credential: Optional[str] = None) -> RailwayContainer:
        return create_container(
            credential or config.api.default_token or None,
            config,
            transport=transport,
        )

    return factory
