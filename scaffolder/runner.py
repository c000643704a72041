"""Run a generator's steps in order and record what happened."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .generators.base import Generator
from .logging import get_logger


@dataclass
class StepChange:
    """A step that completed, with the status line it returned."""

    step: str
    message: str


@dataclass
class StepFailure:
    """The step that aborted a run and the error it raised."""

    step: str
    error: str
    exception: BaseException | None = None


@dataclass
class RunReport:
    """Outcome of a generator run: completed steps and at most one failure."""

    generator: str
    changes: List[StepChange] = field(default_factory=list)
    failures: List[StepFailure] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class GeneratorRunner:
    """Executes steps sequentially; the first failing step aborts the rest."""

    def __init__(self) -> None:
        self.logger = get_logger("runner")

    def run(self, generator: Generator[Any], values: Mapping[str, Any]) -> RunReport:
        answers = generator.build_answers(values)
        steps = generator.steps(answers)
        report = RunReport(generator=generator.name)
        self.logger.debug("Running %s with %d steps", generator.name, len(steps))

        for index, step in enumerate(steps):
            try:
                message = step.action()
            except Exception as exc:
                self.logger.debug("Step '%s' failed", step.description, exc_info=True)
                report.failures.append(StepFailure(step.description, str(exc), exc))
                report.skipped.extend(remaining.description for remaining in steps[index + 1:])
                break
            report.changes.append(StepChange(step.description, message))
            self.logger.info("%s", message)
        return report


__all__ = ["GeneratorRunner", "RunReport", "StepChange", "StepFailure"]
