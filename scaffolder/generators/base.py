"""Base classes and shared steps for generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar

from ..config import ConfigError, RepoConfig, ScaffolderDefaults, load_repo_config
from ..errors import AnswerError, PreconditionError
from ..logging import get_logger
from ..prompting import Prompt
from ..rendering import TemplateRenderer
from ..textedit import InsertionOutcome, write_if_absent
from ..validators import validate_root_path

A = TypeVar("A")


@dataclass
class Step:
    """One ordered action of a generator run; returns a status line for the user."""

    description: str
    action: Callable[[], str]


class Generator(ABC, Generic[A]):
    """Contract for generators: prompts, typed answers, and ordered steps."""

    name: str = ""
    description: str = ""

    def __init__(
        self,
        defaults: ScaffolderDefaults | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.defaults = defaults or ScaffolderDefaults()
        self.renderer = renderer or TemplateRenderer()
        self.logger = get_logger(f"generators.{self.name}")

    @abstractmethod
    def prompts(self) -> List[Prompt]:
        """Questions asked before the run, in order."""

    @abstractmethod
    def build_answers(self, values: Mapping[str, Any]) -> A:
        """Validate raw answer values into the generator's typed answers."""

    @abstractmethod
    def steps(self, answers: A) -> List[Step]:
        """Ordered steps performing the file-system changes."""

    def manifest_steps(self, manifest: str, base_dir: Path, context: Mapping[str, Any]) -> List[Step]:
        """One create-if-absent step per file listed in ``manifests/<manifest>.yml``."""
        steps: List[Step] = []
        for entry in self.renderer.load_manifest(manifest):
            if not self.renderer.is_enabled(entry, context):
                self.logger.debug("Skipping %s: condition not met", entry.path)
                continue

            def _write(entry=entry) -> str:
                resolved = self.renderer.materialize(entry, context)
                target = base_dir / resolved["path"]
                label = _display_path(target, base_dir)
                if write_if_absent(target, resolved["content"]):
                    return f"Added {label}"
                return f"{label} already present"

            steps.append(Step(f"write {entry.path}", _write))
        return steps


def root_prompt(*, default: str = "../..", validate=validate_root_path, message: str | None = None) -> Prompt:
    return Prompt(
        name="root_dir",
        message=message or "Repo root directory (absolute or relative):",
        default=default,
        validate=validate,
    )


def repo_config_for(answers: Mapping[str, Any]) -> RepoConfig:
    """Config of the repo named by a partially answered ``root_dir``; empty when unreadable."""
    root = Path(str(answers.get("root_dir") or ".")).expanduser()
    try:
        return load_repo_config(root)
    except ConfigError:
        return RepoConfig(root=root.resolve())


def require_answer(
    values: Mapping[str, Any],
    name: str,
    validate: Optional[Callable[[Any], Optional[str]]] = None,
) -> str:
    value = str(values.get(name) or "").strip()
    message = validate(value) if validate is not None else (None if value else "Required")
    if message is not None:
        raise AnswerError(name, message)
    return value


def resolve_root(values: Mapping[str, Any]) -> Path:
    return Path(str(values.get("root_dir") or ".")).expanduser().resolve()


def as_flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"y", "yes", "true", "1", "on"}


def ensure_service_step(service_dir: Path) -> Step:
    def _check() -> str:
        if not (service_dir / "pom.xml").exists():
            raise PreconditionError(f"Service not found: {service_dir}")
        return "OK"

    return Step("check service exists", _check)


def workflows_step(root: Path, renderer: TemplateRenderer, enabled: bool) -> Step:
    """Copy the CI workflows verbatim, keeping any that already exist."""

    def _add() -> str:
        if not enabled:
            return "Skipped workflows"
        workflows_dir = root / ".github" / "workflows"
        for name in ("ci.yml", "publish-ghcr.yml"):
            write_if_absent(workflows_dir / name, renderer.read_raw(f"workflows/{name}"))
        return "Added workflows (if absent)"

    return Step("add workflows", _add)


def module_registration_message(outcome: InsertionOutcome, module_path: str) -> str:
    if outcome is InsertionOutcome.UNSUPPORTED:
        return "Skipped root pom module registration (no <modules>)"
    if outcome is InsertionOutcome.INSERTED:
        return f"Registered module: {module_path}"
    return f"Module already registered: {module_path}"


def _display_path(target: Path, base_dir: Path) -> str:
    try:
        return target.relative_to(base_dir).as_posix()
    except ValueError:
        return str(target)


__all__ = [
    "Generator",
    "Step",
    "as_flag",
    "ensure_service_step",
    "module_registration_message",
    "repo_config_for",
    "require_answer",
    "resolve_root",
    "root_prompt",
    "workflows_step",
]
