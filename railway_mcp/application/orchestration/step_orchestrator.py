"""
Step Orchestration Module

Architectural Intent:
- Linear workflow execution for multi-step provisioning processes
- Steps run strictly one after another; each step's remote side effect
  completes before the next begins
- Results from previous steps are available to later steps
- Completed steps are recorded in a step log so a failure can report what
  already exists on the platform

Failure Strategy:
- No retries and no compensation: the first failing step stops the run
- StepFailedError carries the failing step, the step log and the cause
- A step may return SKIPPED to signal it had nothing to do; skipped steps are
  not recorded as completed
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Awaitable, Any

logger = logging.getLogger(__name__)

SKIPPED = object()


@dataclass
class WorkflowStep:
    name: str
    execute: Callable[[dict[str, Any], dict[str, Any]], Awaitable[Any]]
    subresource: str = ""

    @property
    def label(self) -> str:
        return self.subresource or self.name


class OrchestrationError(Exception):
    pass


class StepFailedError(OrchestrationError):
    def __init__(
        self,
        step: WorkflowStep,
        completed: list[str],
        results: dict[str, Any],
        cause: BaseException,
    ) -> None:
        super().__init__(f"Step {step.name} ({step.label}) failed: {cause}")
        self.step = step
        self.completed = completed
        self.results = results
        self.cause = cause


@dataclass
class StepLog:
    completed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class StepOrchestrator:
    def __init__(self, steps: list[WorkflowStep]) -> None:
        names = [s.name for s in steps]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise OrchestrationError(
                f"Duplicate step names: {', '.join(sorted(duplicates))}"
            )
        self.steps = list(steps)
        self.log = StepLog()

    async def execute(self, context: dict[str, Any]) -> dict[str, Any]:
        results: dict[str, Any] = {}

        for step in self.steps:
            logger.info("Starting step %s", step.name)
            try:
                result = await step.execute(context, results)
            except Exception as e:
                logger.error("Step %s failed: %s", step.name, e)
                raise StepFailedError(
                    step, list(self.log.completed), dict(results), e
                ) from e

            if result is SKIPPED:
                logger.info("Skipped step %s", step.name)
                self.log.skipped.append(step.name)
                continue

            results[step.name] = result
            self.log.completed.append(step.name)
            logger.info("Completed step %s", step.name)

        return results
