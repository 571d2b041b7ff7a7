"""
MCP Server Infrastructure

Architectural Intent:
- MCP server exposing the Railway provisioning capabilities as agent tools
- Every tool call gets a fresh container bound to that call's credential,
  built by the context factory and closed when the call returns
- Handlers return plain JSON-safe values; the transport wraps them

MCP Integration:
- Exposed as 'railway-tools' MCP server
- Tools: RAILWAY_PROJECT_*, RAILWAY_TEMPLATE_*, RAILWAY_DATABASE_*,
  RAILWAY_VARIABLE_*, RAILWAY_SERVICE_*, RAILWAY_DEPLOYMENT_*,
  RAILWAY_VOLUME_*, RAILWAY_TCP_PROXY_*, RAILWAY_DOMAIN_*
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncContextManager, Awaitable, Callable, Optional

from railway_mcp.application.dtos.provisioning_dtos import (
    CopyVariablesRequest,
    CopyVariablesResponse,
    ProvisionRequest,
)
from railway_mcp.domain.errors import RailwayError
from railway_mcp.domain.value_objects.variable_scope import SyncPolicy, VariableScope
from railway_mcp.infrastructure.mcp_servers.output import build_output

logger = logging.getLogger(__name__)

ContextFactory = Callable[[Optional[str]], AsyncContextManager[Any]]


@dataclass
class MCPTool:
    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Callable[..., Awaitable[Any]]

    @property
    def parameters(self) -> set[str]:
        return set(self.input_schema.get("properties", {}))

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))


class MCPError(Exception):
    """Structured MCP error.

    ``tool_error`` is set when the failure belongs to the tool result (domain
    errors, bad arguments) rather than to the protocol (unknown tool).
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        tool_error: bool = True,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.tool_error = tool_error

    @classmethod
    def from_domain(cls, error: RailwayError) -> "MCPError":
        return cls(error.code, error.message, error.details)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": str(self),
                "details": self.details,
            }
        }


class MCPServer:
    """
    MCP tool registry.

    Handlers are called as ``handler(container, **arguments)`` where the
    container comes from ``context_factory(credential)``.
    """

    def __init__(self, name: str, context_factory: ContextFactory) -> None:
        self.name = name
        self.context_factory = context_factory
        self._tools: dict[str, MCPTool] = {}

    def tool(
        self,
        name: str,
        description: str = "",
        input_schema: Optional[dict[str, Any]] = None,
    ) -> Callable[[Callable[..., Awaitable[Any]]], MCPTool]:
        def decorator(handler: Callable[..., Awaitable[Any]]) -> MCPTool:
            tool = MCPTool(
                name=name,
                description=description,
                input_schema=input_schema or {"type": "object", "properties": {}},
                handler=handler,
            )
            self._tools[name] = tool
            return tool

        return decorator

    async def list_tools(self) -> list[MCPTool]:
        return list(self._tools.values())

    def _check_arguments(self, tool: MCPTool, arguments: dict[str, Any]) -> None:
        unknown = sorted(set(arguments) - tool.parameters)
        if unknown:
            raise MCPError(
                "invalid",
                f"Unknown arguments for {tool.name}: {', '.join(unknown)}",
                {"unknown": unknown},
            )
        missing = [p for p in tool.required if arguments.get(p) in (None, "")]
        if missing:
            raise MCPError(
                "invalid",
                f"Missing required arguments for {tool.name}: {', '.join(missing)}",
                {"missing": missing},
            )

    async def call_tool(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None,
        credential: Optional[str] = None,
    ) -> Any:
        if name not in self._tools:
            raise MCPError("tool_not_found", f"Tool '{name}' not found", tool_error=False)
        tool = self._tools[name]
        arguments = arguments or {}
        self._check_arguments(tool, arguments)

        logger.info("Tool call: %s", name, extra={"tool": name})
        try:
            async with self.context_factory(credential) as container:
                return await tool.handler(container, **arguments)
        except RailwayError as e:
            raise MCPError.from_domain(e) from e
        except ValueError as e:
            raise MCPError("invalid", str(e)) from e
        except MCPError:
            raise
        except Exception as e:
            logger.exception("Tool %s failed", name)
            raise MCPError("internal_error", str(e)) from e


def _schema(properties: dict[str, Any], required: Optional[list[str]] = None) -> dict:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _string(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


def _integer(description: str) -> dict[str, str]:
    return {"type": "integer", "description": description}


_PROJECT_ID = _string("ID of the project")
_ENVIRONMENT_ID = _string("ID of the environment")
_SERVICE_ID = _string("ID of the service")
_OPTIONAL_SERVICE_ID = _string(
    "ID of the service (omit for shared environment variables)"
)
_DEPLOYMENT_ID = _string("ID of the deployment")


def _check_limit(limit: Any) -> None:
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ValueError("limit must be a positive integer")


def create_railway_server(
    context_factory: ContextFactory, name: str = "railway-tools"
) -> MCPServer:
    """
    Factory function to create the Railway MCP server with all tools registered.
    """
    server = MCPServer(name, context_factory)

    # Projects

    @server.tool(
        name="RAILWAY_PROJECT_LIST",
        description="List all projects the credential can access",
    )
    async def project_list(container) -> Any:
        return {"projects": await container.projects.list()}

    @server.tool(
        name="RAILWAY_PROJECT_INFO",
        description="Get a project with its environments and services",
        input_schema=_schema({"project_id": _PROJECT_ID}, ["project_id"]),
    )
    async def project_info(container, project_id: str) -> Any:
        return build_output(await container.projects.info(project_id))

    @server.tool(
        name="RAILWAY_PROJECT_CREATE",
        description="Create a new project",
        input_schema=_schema(
            {
                "name": _string("Name for the project"),
                "team_id": _string("ID of the team to own the project (optional)"),
            },
            ["name"],
        ),
    )
    async def project_create(container, name: str, team_id: Optional[str] = None) -> Any:
        return build_output(await container.projects.create(name, team_id))

    @server.tool(
        name="RAILWAY_PROJECT_DELETE",
        description="Delete a project and everything in it",
        input_schema=_schema({"project_id": _PROJECT_ID}, ["project_id"]),
    )
    async def project_delete(container, project_id: str) -> Any:
        return build_output(await container.projects.delete(project_id))

    @server.tool(
        name="RAILWAY_PROJECT_ENVIRONMENTS",
        description="List the environments of a project",
        input_schema=_schema({"project_id": _PROJECT_ID}, ["project_id"]),
    )
    async def project_environments(container, project_id: str) -> Any:
        return {"environments": await container.projects.environments(project_id)}

    # Templates

    @server.tool(
        name="RAILWAY_TEMPLATE_LIST",
        description=(
            "List all available templates on Railway grouped by category, "
            "optionally filtered by a fuzzy search query"
        ),
        input_schema=_schema(
            {"search_query": _string("Search query to filter templates by name and description")}
        ),
    )
    async def template_list(container, search_query: Optional[str] = None) -> Any:
        templates = await container.templates.search(search_query)
        return build_output(container.templates.categorize(templates))

    @server.tool(
        name="RAILWAY_TEMPLATE_DEPLOY",
        description="Deploy a template into a project and environment",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "template_id": _string("ID of the template to deploy"),
                "environment_id": _ENVIRONMENT_ID,
                "team_id": _string("ID of the team (optional)"),
            },
            ["project_id", "template_id", "environment_id"],
        ),
    )
    async def template_deploy(
        container,
        project_id: str,
        template_id: str,
        environment_id: str,
        team_id: Optional[str] = None,
    ) -> Any:
        return build_output(
            await container.template_deploy.deploy(
                project_id, template_id, environment_id, team_id
            )
        )

    @server.tool(
        name="RAILWAY_TEMPLATE_GET_WORKFLOW_STATUS",
        description="Check the status of a template deployment workflow",
        input_schema=_schema(
            {"workflow_id": _string("ID of the workflow returned by a template deploy")},
            ["workflow_id"],
        ),
    )
    async def template_get_workflow_status(container, workflow_id: str) -> Any:
        return build_output(
            await container.template_deploy.get_workflow_status(workflow_id)
        )

    # Databases

    @server.tool(
        name="RAILWAY_DATABASE_LIST_TYPES",
        description="List database types that can be provisioned, grouped by category",
    )
    async def database_list_types(container) -> Any:
        return build_output(await container.templates.list_database_templates())

    @server.tool(
        name="RAILWAY_DATABASE_DEPLOY",
        description=(
            "Provision a database service from a template: creates the service, "
            "applies its default variables, places it, exposes a TCP proxy and "
            "attaches a volume"
        ),
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "template_id": _string("ID of the database template"),
                "environment_id": _ENVIRONMENT_ID,
                "region": _string("Region to place the service in (optional)"),
                "name": _string("Name for the new service (optional)"),
            },
            ["project_id", "template_id", "environment_id"],
        ),
    )
    async def database_deploy(
        container,
        project_id: str,
        template_id: str,
        environment_id: str,
        region: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Any:
        request = ProvisionRequest(
            project_id=project_id,
            template_id=template_id,
            environment_id=environment_id,
            region=region,
            name=name,
        )
        return build_output(await container.provisioning.execute(request))

    # Variables

    scope_properties = {
        "project_id": _PROJECT_ID,
        "environment_id": _ENVIRONMENT_ID,
        "service_id": _OPTIONAL_SERVICE_ID,
    }
    scope_required = ["project_id", "environment_id"]

    @server.tool(
        name="RAILWAY_VARIABLE_LIST",
        description="List variables for a service or the shared environment",
        input_schema=_schema(scope_properties, scope_required),
    )
    async def variable_list(
        container,
        project_id: str,
        environment_id: str,
        service_id: Optional[str] = None,
    ) -> Any:
        scope = VariableScope(project_id, environment_id, service_id)
        return {"variables": await container.variables.list(scope)}

    @server.tool(
        name="RAILWAY_VARIABLE_SET",
        description="Create or update a single variable",
        input_schema=_schema(
            {
                **scope_properties,
                "name": _string("Variable name"),
                "value": _string("Variable value"),
            },
            [*scope_required, "name"],
        ),
    )
    async def variable_set(
        container,
        project_id: str,
        environment_id: str,
        name: str,
        value: str = "",
        service_id: Optional[str] = None,
    ) -> Any:
        scope = VariableScope(project_id, environment_id, service_id)
        await container.variables.set(scope, name, str(value))
        return {"success": True, "name": name}

    @server.tool(
        name="RAILWAY_VARIABLE_DELETE",
        description="Delete a variable",
        input_schema=_schema(
            {**scope_properties, "name": _string("Variable name")},
            [*scope_required, "name"],
        ),
    )
    async def variable_delete(
        container,
        project_id: str,
        environment_id: str,
        name: str,
        service_id: Optional[str] = None,
    ) -> Any:
        scope = VariableScope(project_id, environment_id, service_id)
        await container.variables.delete(scope, name)
        return {"success": True, "name": name}

    @server.tool(
        name="RAILWAY_VARIABLE_BULK_SET",
        description="Create or update several variables in one request",
        input_schema=_schema(
            {
                **scope_properties,
                "variables": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                    "description": "Mapping of variable names to values",
                },
            },
            [*scope_required, "variables"],
        ),
    )
    async def variable_bulk_set(
        container,
        project_id: str,
        environment_id: str,
        variables: dict[str, Any],
        service_id: Optional[str] = None,
    ) -> Any:
        if not isinstance(variables, dict):
            raise ValueError("variables must be an object of name/value pairs")
        scope = VariableScope(project_id, environment_id, service_id)
        entries = {str(k): str(v) for k, v in variables.items()}
        return {"updated": await container.variables.bulk_set(scope, entries)}

    @server.tool(
        name="RAILWAY_VARIABLE_COPY",
        description=(
            "Copy variables from one environment to another; existing target "
            "variables are kept unless overwrite is set"
        ),
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "source_environment_id": _string("ID of the source environment"),
                "target_environment_id": _string("ID of the target environment"),
                "service_id": _OPTIONAL_SERVICE_ID,
                "overwrite": {
                    "type": "boolean",
                    "description": "Overwrite variables that already exist in the target",
                    "default": False,
                },
            },
            ["project_id", "source_environment_id", "target_environment_id"],
        ),
    )
    async def variable_copy(
        container,
        project_id: str,
        source_environment_id: str,
        target_environment_id: str,
        service_id: Optional[str] = None,
        overwrite: bool = False,
    ) -> Any:
        request = CopyVariablesRequest(
            project_id=project_id,
            source_environment_id=source_environment_id,
            target_environment_id=target_environment_id,
            service_id=service_id,
            overwrite=bool(overwrite),
        )
        copied = await container.variables.copy(
            request.project_id,
            request.source_environment_id,
            request.target_environment_id,
            request.service_id,
            SyncPolicy(overwrite=request.overwrite),
        )
        return build_output(CopyVariablesResponse(copied=copied))

    # Services

    @server.tool(
        name="RAILWAY_SERVICE_CREATE_FROM_REPO",
        description="Create a service from a GitHub repository",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "repo": _string("Repository in owner/name form"),
                "name": _string("Name for the service (optional)"),
            },
            ["project_id", "repo"],
        ),
    )
    async def service_create_from_repo(
        container, project_id: str, repo: str, name: Optional[str] = None
    ) -> Any:
        return build_output(
            await container.services.create_from_repo(project_id, repo, name)
        )

    @server.tool(
        name="RAILWAY_SERVICE_CREATE_FROM_IMAGE",
        description="Create a service from a Docker image",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "image": _string("Docker image reference"),
                "name": _string("Name for the service (optional)"),
            },
            ["project_id", "image"],
        ),
    )
    async def service_create_from_image(
        container, project_id: str, image: str, name: Optional[str] = None
    ) -> Any:
        return build_output(
            await container.services.create_from_image(project_id, image, name)
        )

    @server.tool(
        name="RAILWAY_SERVICE_RESTART",
        description="Restart a service in an environment",
        input_schema=_schema(
            {"service_id": _SERVICE_ID, "environment_id": _ENVIRONMENT_ID},
            ["service_id", "environment_id"],
        ),
    )
    async def service_restart(container, service_id: str, environment_id: str) -> Any:
        return build_output(await container.services.restart(service_id, environment_id))

    @server.tool(
        name="RAILWAY_SERVICE_LIST",
        description="List the services of a project",
        input_schema=_schema({"project_id": _PROJECT_ID}, ["project_id"]),
    )
    async def service_list(container, project_id: str) -> Any:
        return {"services": await container.services.list(project_id)}

    @server.tool(
        name="RAILWAY_SERVICE_INFO",
        description=(
            "Get a service's instance configuration in an environment together "
            "with its most recent deployments"
        ),
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "service_id": _SERVICE_ID,
                "environment_id": _ENVIRONMENT_ID,
            },
            ["project_id", "service_id", "environment_id"],
        ),
    )
    async def service_info(
        container, project_id: str, service_id: str, environment_id: str
    ) -> Any:
        return build_output(
            await container.services.info(project_id, service_id, environment_id)
        )

    @server.tool(
        name="RAILWAY_SERVICE_UPDATE",
        description="Update a service's configuration in an environment",
        input_schema=_schema(
            {
                "service_id": _SERVICE_ID,
                "environment_id": _ENVIRONMENT_ID,
                "region": _string("Region to run the service in"),
                "root_directory": _string("Directory containing the service code"),
                "build_command": _string("Command that builds the service"),
                "start_command": _string("Command that starts the service"),
                "num_replicas": _integer("Number of replicas to run (1-20)"),
                "healthcheck_path": _string("HTTP path used for health checks"),
                "sleep_application": {
                    "type": "boolean",
                    "description": "Let the service sleep while idle",
                },
            },
            ["service_id", "environment_id"],
        ),
    )
    async def service_update(
        container, service_id: str, environment_id: str, **settings: Any
    ) -> Any:
        return build_output(
            await container.services.update(service_id, environment_id, **settings)
        )

    @server.tool(
        name="RAILWAY_SERVICE_DELETE",
        description="Delete a service from its project",
        input_schema=_schema({"service_id": _SERVICE_ID}, ["service_id"]),
    )
    async def service_delete(container, service_id: str) -> Any:
        return build_output(await container.services.delete(service_id))

    # Deployments

    @server.tool(
        name="RAILWAY_DEPLOYMENT_LIST",
        description="List recent deployments of a service in an environment",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "service_id": _SERVICE_ID,
                "environment_id": _ENVIRONMENT_ID,
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of deployments to return",
                    "default": 5,
                },
            },
            ["project_id", "service_id", "environment_id"],
        ),
    )
    async def deployment_list(
        container,
        project_id: str,
        service_id: str,
        environment_id: str,
        limit: int = 5,
    ) -> Any:
        _check_limit(limit)
        return {
            "deployments": await container.deployments.list(
                project_id, service_id, environment_id, limit
            )
        }

    @server.tool(
        name="RAILWAY_DEPLOYMENT_TRIGGER",
        description="Trigger a new deployment of a service",
        input_schema=_schema(
            {
                "service_id": _SERVICE_ID,
                "environment_id": _ENVIRONMENT_ID,
                "commit_sha": _string("Commit to deploy (optional)"),
            },
            ["service_id", "environment_id"],
        ),
    )
    async def deployment_trigger(
        container,
        service_id: str,
        environment_id: str,
        commit_sha: Optional[str] = None,
    ) -> Any:
        return build_output(
            await container.deployments.trigger(service_id, environment_id, commit_sha)
        )

    @server.tool(
        name="RAILWAY_DEPLOYMENT_LOGS",
        description="Fetch build and runtime logs for a deployment",
        input_schema=_schema(
            {
                "deployment_id": _DEPLOYMENT_ID,
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of log lines per log type",
                    "default": 100,
                },
            },
            ["deployment_id"],
        ),
    )
    async def deployment_logs(container, deployment_id: str, limit: int = 100) -> Any:
        _check_limit(limit)
        return {"logs": await container.deployments.logs(deployment_id, limit)}

    @server.tool(
        name="RAILWAY_DEPLOYMENT_STATUS",
        description="Check the status of a deployment, waiting briefly for it to settle",
        input_schema=_schema({"deployment_id": _DEPLOYMENT_ID}, ["deployment_id"]),
    )
    async def deployment_status(container, deployment_id: str) -> Any:
        return build_output(await container.deployments.status(deployment_id))

    # Volumes

    @server.tool(
        name="RAILWAY_VOLUME_LIST",
        description="List the volumes of a project and where they are mounted",
        input_schema=_schema({"project_id": _PROJECT_ID}, ["project_id"]),
    )
    async def volume_list(container, project_id: str) -> Any:
        return {"volumes": await container.volumes.list(project_id)}

    @server.tool(
        name="RAILWAY_VOLUME_CREATE",
        description="Create a volume and mount it on a service",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "service_id": _SERVICE_ID,
                "environment_id": _ENVIRONMENT_ID,
                "mount_path": _string("Absolute path to mount the volume on"),
            },
            ["project_id", "service_id", "environment_id", "mount_path"],
        ),
    )
    async def volume_create(
        container,
        project_id: str,
        service_id: str,
        environment_id: str,
        mount_path: str,
    ) -> Any:
        return build_output(
            await container.volumes.create(
                project_id, service_id, environment_id, mount_path
            )
        )

    @server.tool(
        name="RAILWAY_VOLUME_UPDATE",
        description="Rename a volume",
        input_schema=_schema(
            {
                "volume_id": _string("ID of the volume"),
                "name": _string("New name for the volume"),
            },
            ["volume_id", "name"],
        ),
    )
    async def volume_update(container, volume_id: str, name: str) -> Any:
        return build_output(await container.volumes.update(volume_id, name))

    @server.tool(
        name="RAILWAY_VOLUME_DELETE",
        description="Delete a volume and its data",
        input_schema=_schema({"volume_id": _string("ID of the volume")}, ["volume_id"]),
    )
    async def volume_delete(container, volume_id: str) -> Any:
        return build_output(await container.volumes.delete(volume_id))

    # TCP proxies

    @server.tool(
        name="RAILWAY_TCP_PROXY_LIST",
        description="List the TCP proxies of a service in an environment",
        input_schema=_schema(
            {"environment_id": _ENVIRONMENT_ID, "service_id": _SERVICE_ID},
            ["environment_id", "service_id"],
        ),
    )
    async def tcp_proxy_list(container, environment_id: str, service_id: str) -> Any:
        return {"tcp_proxies": await container.tcp_proxies.list(environment_id, service_id)}

    @server.tool(
        name="RAILWAY_TCP_PROXY_CREATE",
        description="Expose a service port through a public TCP proxy",
        input_schema=_schema(
            {
                "environment_id": _ENVIRONMENT_ID,
                "service_id": _SERVICE_ID,
                "application_port": _integer("Port the service listens on"),
            },
            ["environment_id", "service_id", "application_port"],
        ),
    )
    async def tcp_proxy_create(
        container, environment_id: str, service_id: str, application_port: int
    ) -> Any:
        return build_output(
            await container.tcp_proxies.create(
                environment_id, service_id, application_port
            )
        )

    @server.tool(
        name="RAILWAY_TCP_PROXY_DELETE",
        description="Delete a TCP proxy",
        input_schema=_schema({"proxy_id": _string("ID of the TCP proxy")}, ["proxy_id"]),
    )
    async def tcp_proxy_delete(container, proxy_id: str) -> Any:
        return build_output(await container.tcp_proxies.delete(proxy_id))

    # Domains

    @server.tool(
        name="RAILWAY_DOMAIN_LIST",
        description="List the service and custom domains of a service",
        input_schema=_schema(
            {
                "project_id": _PROJECT_ID,
                "environment_id": _ENVIRONMENT_ID,
                "service_id": _SERVICE_ID,
            },
            ["project_id", "environment_id", "service_id"],
        ),
    )
    async def domain_list(
        container, project_id: str, environment_id: str, service_id: str
    ) -> Any:
        return build_output(
            await container.domains.list(project_id, environment_id, service_id)
        )

    @server.tool(
        name="RAILWAY_DOMAIN_CREATE",
        description=(
            "Create a domain for a service; leave domain empty to let the "
            "platform generate one"
        ),
        input_schema=_schema(
            {
                "environment_id": _ENVIRONMENT_ID,
                "service_id": _SERVICE_ID,
                "domain": _string("Domain name to request (optional)"),
                "suffix": _string("Suffix for a generated domain (optional)"),
                "target_port": _integer("Port to route traffic to (optional)"),
            },
            ["environment_id", "service_id"],
        ),
    )
    async def domain_create(
        container,
        environment_id: str,
        service_id: str,
        domain: Optional[str] = None,
        suffix: Optional[str] = None,
        target_port: Optional[int] = None,
    ) -> Any:
        return build_output(
            await container.domains.create(
                environment_id, service_id, domain, suffix, target_port
            )
        )

    @server.tool(
        name="RAILWAY_DOMAIN_CHECK",
        description="Check whether a domain name is available",
        input_schema=_schema({"domain": _string("Domain name to check")}, ["domain"]),
    )
    async def domain_check(container, domain: str) -> Any:
        return build_output(await container.domains.check(domain))

    @server.tool(
        name="RAILWAY_DOMAIN_UPDATE",
        description="Route a domain to a different service port",
        input_schema=_schema(
            {
                "domain_id": _string("ID of the domain"),
                "target_port": _integer("New port to route traffic to"),
            },
            ["domain_id", "target_port"],
        ),
    )
    async def domain_update(container, domain_id: str, target_port: int) -> Any:
        return build_output(await container.domains.update(domain_id, target_port))

    @server.tool(
        name="RAILWAY_DOMAIN_DELETE",
        description="Delete a domain",
        input_schema=_schema({"domain_id": _string("ID of the domain")}, ["domain_id"]),
    )
    async def domain_delete(container, domain_id: str) -> Any:
        return build_output(await container.domains.delete(domain_id))

    return server
