"""
Variable Sync Use Case

Architectural Intent:
- CRUD and reconciliation over scoped key/value variable sets
- A VariableSet is a view over remote storage, mutated in place
- copy() reads source and target once each and writes at most once

Consistency:
- Single-writer-at-a-time is assumed; two copies into the same scope may race
- copy() never deletes keys that exist only in the target
- delete() of an absent key raises NotFoundError
"""

import logging
from typing import Mapping, Optional

from railway_mcp.application.boundary import operation_boundary
from railway_mcp.domain.errors import NotFoundError
from railway_mcp.domain.ports.gateway_port import Operation, ResourceGatewayPort
from railway_mcp.domain.value_objects.variable_scope import SyncPolicy, VariableScope

logger = logging.getLogger(__name__)


class VariableSyncEngine:
    def __init__(self, gateway: ResourceGatewayPort) -> None:
        self.gateway = gateway

    @operation_boundary("Error listing variables")
    async def list(self, scope: VariableScope) -> dict[str, str]:
        data = await self.gateway.execute(Operation.VARIABLES, scope.to_params())
        variables = data.get("variables") or {}
        return {str(k): "" if v is None else str(v) for k, v in variables.items()}

    @operation_boundary("Error setting variable")
    async def set(self, scope: VariableScope, name: str, value: str) -> None:
        await self.gateway.execute(
            Operation.VARIABLE_UPSERT,
            {"input": {**scope.to_params(), "name": name, "value": value}},
        )
        logger.info("Set variable %s in %s", name, scope)

    @operation_boundary("Error deleting variable")
    async def delete(self, scope: VariableScope, name: str) -> None:
        existing = await self.list(scope)
        if name not in existing:
            raise NotFoundError(
                f"Variable {name} not found in {scope}",
                {"name": name, "scope": str(scope)},
            )
        await self.gateway.execute(
            Operation.VARIABLE_DELETE,
            {"input": {**scope.to_params(), "name": name}},
        )
        logger.info("Deleted variable %s from %s", name, scope)

    @operation_boundary("Error updating variables")
    async def bulk_set(self, scope: VariableScope, entries: Mapping[str, str]) -> int:
        if not entries:
            return 0
        await self.gateway.execute(
            Operation.VARIABLE_COLLECTION_UPSERT,
            {
                "input": {
                    **scope.to_params(),
                    "variables": {k: str(v) for k, v in entries.items()},
                    "replace": False,
                }
            },
        )
        logger.info("Upserted %d variables in %s", len(entries), scope)
        return len(entries)

    @operation_boundary("Error copying variables")
    async def copy(
        self,
        project_id: str,
        source_environment_id: str,
        target_environment_id: str,
        service_id: Optional[str] = None,
        policy: SyncPolicy = SyncPolicy(),
    ) -> int:
        source_scope = VariableScope(project_id, source_environment_id, service_id)
        target_scope = source_scope.in_environment(target_environment_id)

        source = await self.list(source_scope)
        if not source:
            return 0

        target = await self.list(target_scope)
        if policy.overwrite:
            to_write = dict(source)
        else:
            to_write = {k: v for k, v in source.items() if k not in target}

        if not to_write:
            logger.info("Nothing to copy from %s to %s", source_scope, target_scope)
            return 0

        return await self.bulk_set(target_scope, to_write)
