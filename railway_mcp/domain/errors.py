"""
Domain Errors

Architectural Intent:
- Single error vocabulary shared by the gateway, the use cases and the MCP layer
- Every error carries a stable machine code plus optional structured details
- PartialProvisioningFailure keeps enough context to locate orphaned resources

Error Kinds:
- unauthenticated: missing or rejected credential
- not_found: referenced entity, template or variable does not exist
- invalid: malformed or semantically impossible request
- remote_failure: the downstream platform call failed
- partial_provisioning_failure: a multi-step workflow failed after creating resources
"""

from __future__ import annotations
from typing import Any, Optional


class RailwayError(Exception):
    """Base class for all domain errors."""

    code = "railway_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class UnauthenticatedError(RailwayError):
    code = "unauthenticated"


class NotFoundError(RailwayError):
    code = "not_found"


class InvalidRequestError(RailwayError):
    code = "invalid"


class RemoteFailureError(RailwayError):
    code = "remote_failure"


class WorkflowFailedError(RemoteFailureError):
    """A platform-managed workflow reported an error."""

    def __init__(self, workflow_id: str, error: str):
        super().__init__(
            f"Error with workflow {workflow_id}: {error}",
            {"workflow_id": workflow_id, "workflow_error": error},
        )
        self.workflow_id = workflow_id
        self.workflow_error = error


class PartialProvisioningFailure(RailwayError):
    """
    A provisioning run failed after the compute service was created.

    Nothing is rolled back: the service and every sub-resource listed in
    completed_steps still exist on the platform.
    """

    code = "partial_provisioning_failure"

    def __init__(
        self,
        service_id: str,
        failed_step: str,
        subresource: str,
        completed_steps: list[str],
        cause: BaseException,
    ):
        message = (
            f"Provisioning failed during {subresource} for service {service_id}: "
            f"{cause}. Already created: {', '.join(completed_steps) or 'nothing'}"
        )
        super().__init__(
            message,
            {
                "service_id": service_id,
                "failed_step": failed_step,
                "subresource": subresource,
                "completed_steps": list(completed_steps),
                "cause": str(cause),
            },
        )
        self.service_id = service_id
        self.failed_step = failed_step
        self.subresource = subresource
        self.completed_steps = list(completed_steps)
        self.cause = cause
