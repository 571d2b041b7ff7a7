"""
Variable Scope Value Objects

Architectural Intent:
- A scope is the (project, environment, optional service) triple naming one
  variable namespace on the platform
- A scope without a service is the shared scope of the environment
- SyncPolicy governs how a copy treats keys that already exist in the target
"""

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class VariableScope:
    project_id: str
    environment_id: str
    service_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("project_id cannot be empty")
        if not self.environment_id:
            raise ValueError("environment_id cannot be empty")
        if self.service_id == "":
            object.__setattr__(self, "service_id", None)

    @property
    def is_shared(self) -> bool:
        return self.service_id is None

    def in_environment(self, environment_id: str) -> "VariableScope":
        return replace(self, environment_id=environment_id)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "projectId": self.project_id,
            "environmentId": self.environment_id,
        }
        if self.service_id is not None:
            params["serviceId"] = self.service_id
        return params

    def __str__(self) -> str:
        service = self.service_id or "shared"
        return f"{self.project_id}/{self.environment_id}/{service}"


@dataclass(frozen=True)
class SyncPolicy:
    overwrite: bool = False
