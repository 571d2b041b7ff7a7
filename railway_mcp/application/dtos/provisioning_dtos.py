"""
Provisioning DTOs

Architectural Intent:
- Data Transfer Objects for provisioning and variable-sync use case boundaries
- Input validation at the application boundary
- Decouples external representation from domain model
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ProvisionRequest:
    project_id: str
    template_id: str
    environment_id: str
    # Accepted for parity with template deploy; service creation is
    # project-scoped, so provisioning never sends it.
    team_id: Optional[str] = None
    region: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("project_id cannot be empty")
        if not self.template_id:
            raise ValueError("template_id cannot be empty")
        if not self.environment_id:
            raise ValueError("environment_id cannot be empty")


@dataclass(frozen=True)
class ProvisionResult:
    service: dict[str, Any]
    template_id: str
    completed_steps: list[str] = field(default_factory=list)

    @property
    def service_id(self) -> str:
        return self.service["id"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": self.service,
            "template_id": self.template_id,
            "completed_steps": list(self.completed_steps),
        }


@dataclass(frozen=True)
class CopyVariablesRequest:
    project_id: str
    source_environment_id: str
    target_environment_id: str
    service_id: Optional[str] = None
    overwrite: bool = False

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ValueError("project_id cannot be empty")
        if not self.source_environment_id:
            raise ValueError("source_environment_id cannot be empty")
        if not self.target_environment_id:
            raise ValueError("target_environment_id cannot be empty")


@dataclass(frozen=True)
class CopyVariablesResponse:
    copied: int
