from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Protocol, Sequence, TypeVar

from .config import Settings
from .errors import StepFailure, UnsupportedOS
from .logging_utils import message
from .osdetect import OSIdentifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StepContext:
    os_id: OSIdentifier
    settings: Settings
    dry_run: bool = False


class Step(Protocol):
    """A single provisioning step."""

    step_id: str

    def enabled(self, settings: Settings) -> bool:
        ...

    def run(self, ctx: StepContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]


def dispatch(table: Mapping[OSIdentifier, T], ctx: StepContext, step_id: str) -> T:
    """Pick the per-OS action for a step; an OS without an entry is an error."""

    try:
        return table[ctx.os_id]
    except KeyError:
        raise UnsupportedOS(ctx.os_id, step_id) from None


def run_pipeline(*, steps: Sequence[Step], ctx: StepContext) -> PipelineResult:
    """Run enabled steps in order, stopping at the first failure."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        if not step.enabled(ctx.settings):
            message("info", f"Skipping step {step.step_id} (disabled)")
            skipped.append(step.step_id)
            continue

        message("info", f"Running step {step.step_id}")
        try:
            step.run(ctx)
        except Exception as e:
            message("fail", f"Step {step.step_id} failed: {e}")
            raise StepFailure(step.step_id, str(e)) from e
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
