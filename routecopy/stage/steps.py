"""Per-file plan recording.

Each processed file collects the steps it went through; the summary is logged
at debug level once the file reaches a terminal state.
"""

from __future__ import annotations

from typing import Any, List

from routecopy.core.logger import setup_logger
from routecopy.core.models import PlanStep

logger = setup_logger(__name__)


def record_step(steps: List[PlanStep], name: str, **details: Any) -> None:
    steps.append(PlanStep(name=name, details=details))


def format_plan(steps: List[PlanStep]) -> str:
    rendered = []
    for step in steps:
        if step.details:
            args = ", ".join(f"{key}={value}" for key, value in step.details.items())
            rendered.append(f"{step.name}({args})")
        else:
            rendered.append(step.name)
    return " -> ".join(rendered)


def log_plan_steps(label: str, steps: List[PlanStep]) -> None:
    if not steps:
        return
    logger.debug("Copy plan for %s: %s", label, format_plan(steps))
