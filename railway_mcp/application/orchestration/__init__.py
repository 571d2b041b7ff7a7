"""
Application Orchestration Package

Architectural Intent:
- Contains workflow orchestration components
- Linear step execution with a step log for multi-resource provisioning
- Readiness waiting for eventually consistent platform reads
"""

from railway_mcp.application.orchestration.step_orchestrator import (
    StepOrchestrator,
    WorkflowStep,
    OrchestrationError,
    StepFailedError,
    SKIPPED,
)
from railway_mcp.application.orchestration.readiness import ReadinessWaiter

__all__ = [
    "StepOrchestrator",
    "WorkflowStep",
    "OrchestrationError",
    "StepFailedError",
    "SKIPPED",
    "ReadinessWaiter",
]
