"""Global test configuration.

Provides an in-memory ResourceGatewayPort and template payload builders so
application tests never touch the network.
"""

import logging
from typing import Any, Optional

import pytest

from railway_mcp.domain.ports.gateway_port import Operation


class FakeGateway:
    """Records every call; variable operations are backed by an in-memory store."""

    def __init__(
        self,
        responses: Optional[dict[Operation, Any]] = None,
        failures: Optional[dict[Operation, Exception]] = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.calls: list[tuple[Operation, dict[str, Any]]] = []
        self.variables: dict[tuple, dict[str, str]] = {}

    @staticmethod
    def _scope_key(params: dict[str, Any]) -> tuple:
        return (params["projectId"], params["environmentId"], params.get("serviceId"))

    def seed(
        self,
        project_id: str,
        environment_id: str,
        values: dict[str, str],
        service_id: Optional[str] = None,
    ) -> None:
        self.variables[(project_id, environment_id, service_id)] = dict(values)

    def stored(
        self, project_id: str, environment_id: str, service_id: Optional[str] = None
    ) -> dict[str, str]:
        return dict(self.variables.get((project_id, environment_id, service_id), {}))

    def calls_to(self, operation: Operation) -> list[dict[str, Any]]:
        return [params for op, params in self.calls if op == operation]

    @property
    def mutations(self) -> list[Operation]:
        reads = {
            Operation.TEMPLATES,
            Operation.VARIABLES,
            Operation.SERVICE_INSTANCE,
            Operation.WORKFLOW_STATUS,
            Operation.DEPLOYMENT,
            Operation.BUILD_LOGS,
            Operation.DEPLOYMENT_LOGS,
            Operation.DEPLOYMENTS,
            Operation.PROJECTS,
            Operation.PROJECT,
            Operation.ENVIRONMENTS,
            Operation.VOLUMES,
            Operation.TCP_PROXIES,
            Operation.DOMAINS,
            Operation.DOMAIN_AVAILABLE,
        }
        return [op for op, _ in self.calls if op not in reads]

    async def execute(
        self, operation: Operation, parameters: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        parameters = parameters or {}
        self.calls.append((operation, parameters))
        if operation in self.failures:
            raise self.failures[operation]

        if operation == Operation.VARIABLES and operation not in self.responses:
            return {"variables": dict(self.variables.get(self._scope_key(parameters), {}))}
        if operation == Operation.VARIABLE_COLLECTION_UPSERT:
            data = parameters["input"]
            store = self.variables.setdefault(self._scope_key(data), {})
            store.update(data["variables"])
            return {"variableCollectionUpsert": True}
        if operation == Operation.VARIABLE_UPSERT:
            data = parameters["input"]
            self.variables.setdefault(self._scope_key(data), {})[data["name"]] = data["value"]
            return {"variableUpsert": True}
        if operation == Operation.VARIABLE_DELETE:
            data = parameters["input"]
            self.variables.get(self._scope_key(data), {}).pop(data["name"], None)
            return {"variableDelete": True}

        response = self.responses.get(operation, {})
        return response(parameters) if callable(response) else response


def build_template_node(
    id: str = "tpl-pg",
    name: str = "PostgreSQL",
    description: str = "Relational SQL database",
    category: Optional[str] = "Storage",
    services: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    if services is None:
        services = {
            "pg": {
                "name": "Postgres",
                "source": {"image": "ghcr.io/railwayapp-templates/postgres-ssl:16"},
                "networking": {"tcpProxies": {"5432": {}}},
                "variables": {
                    "PGDATA": {"defaultValue": "/var/lib/postgresql/data/pgdata"},
                    "POSTGRES_DB": {"defaultValue": "railway"},
                },
                "volumeMounts": {"data": {"mountPath": "/var/lib/postgresql/data"}},
            }
        }
    return {
        "id": id,
        "name": name,
        "description": description,
        "category": category,
        "serializedConfig": {"services": services},
    }


def templates_response(*nodes: dict[str, Any]) -> dict[str, Any]:
    return {"templates": {"edges": [{"node": node} for node in nodes]}}


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def template_node():
    return build_template_node


@pytest.fixture
def catalog_response():
    return templates_response


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("railway_mcp")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
