"""Tests for the composition root wiring."""

import json

import httpx
import pytest

from railway_mcp.composition_root import (
    RailwayContainer,
    container_factory,
    create_container,
)
from railway_mcp.domain.errors import UnauthenticatedError
from railway_mcp.infrastructure.config import (
    ApiConfig,
    ProvisioningConfig,
    RailwayMCPConfig,
    ReadinessConfig,
    TemplateSearchConfig,
)
from railway_mcp.infrastructure.mcp_servers.railway_server import (
    MCPError,
    create_railway_server,
)


def _templates_transport(seen):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        body = json.loads(request.content)
        assert "templates" in body["query"]
        return httpx.Response(200, json={"data": {"templates": {"edges": []}}})

    return httpx.MockTransport(handler)


class TestCreateContainer:
    def test_wires_everything(self):
        container = create_container("tok")
        assert isinstance(container, RailwayContainer)
        assert container.provisioning.catalog is container.templates
        assert container.provisioning.variables is container.variables
        assert container.template_deploy.gateway is container.gateway
        for use_case in (
            container.projects,
            container.volumes,
            container.tcp_proxies,
            container.domains,
        ):
            assert use_case.gateway is container.gateway

    def test_config_values_flow_through(self):
        config = RailwayMCPConfig(
            api=ApiConfig(endpoint="https://example.test/graphql", timeout_seconds=3.0),
            templates=TemplateSearchConfig(search_threshold=90.0),
            provisioning=ProvisioningConfig(default_port=6379, default_mount_path="/mnt"),
            readiness=ReadinessConfig(delay_seconds=0.0, max_attempts=2),
        )
        container = create_container("tok", config)

        assert container.gateway.endpoint == "https://example.test/graphql"
        assert container.gateway.timeout_seconds == 3.0
        assert container.templates.matcher.threshold == 90.0
        assert container.provisioning.default_port == 6379
        assert container.provisioning.default_mount_path == "/mnt"
        assert container.services.readiness.delay_seconds == 0.0
        assert container.deployments.readiness.max_attempts == 2

    @pytest.mark.asyncio
    async def test_context_manager_closes_gateway(self):
        seen = []
        async with create_container("tok", transport=_templates_transport(seen)) as container:
            await container.templates.search()
            assert container.gateway._client is not None
        assert container.gateway._client is None
        assert seen == ["Bearer tok"]


class TestContainerFactory:
    @pytest.mark.asyncio
    async def test_call_credential_wins(self):
        seen = []
        config = RailwayMCPConfig(api=ApiConfig(default_token="default"))
        factory = container_factory(config, transport=_templates_transport(seen))

        async with factory("per-call") as container:
            await container.templates.search()

        assert seen == ["Bearer per-call"]

    @pytest.mark.asyncio
    async def test_falls_back_to_default_token(self):
        seen = []
        config = RailwayMCPConfig(api=ApiConfig(default_token="default"))
        factory = container_factory(config, transport=_templates_transport(seen))

        async with factory(None) as container:
            await container.templates.search()

        assert seen == ["Bearer default"]

    @pytest.mark.asyncio
    async def test_no_credential_anywhere(self):
        factory = container_factory(RailwayMCPConfig())
        async with factory(None) as container:
            with pytest.raises(UnauthenticatedError):
                await container.templates.search()

    @pytest.mark.asyncio
    async def test_server_reports_unauthenticated(self):
        server = create_railway_server(container_factory(RailwayMCPConfig()))
        with pytest.raises(MCPError) as exc_info:
            await server.call_tool("RAILWAY_TEMPLATE_LIST", {})
        assert exc_info.value.code == "unauthenticated"
