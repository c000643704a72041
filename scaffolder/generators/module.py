"""Add a module container (package regrouping only) to an existing service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping

from ..naming import java_package_to_path
from ..prompting import Prompt
from ..textedit import write_if_absent
from ..validators import validate_artifact_id, validate_java_identifier, validate_java_package
from .base import Generator, Step, ensure_service_step, require_answer, resolve_root, root_prompt


@dataclass
class ModuleAnswers:
    root_dir: Path
    service_name: str
    root_package: str
    module_name: str


class ModuleGenerator(Generator[ModuleAnswers]):
    name = "module"
    description = "Rev6A: add a module container under module/<module>/ (package regrouping only)"

    def prompts(self) -> List[Prompt]:
        return [
            root_prompt(message="Repo root directory:"),
            Prompt("service_name", "Existing service name under services/:", validate=validate_artifact_id),
            Prompt("root_package", "Root Java package (service):", validate=validate_java_package),
            Prompt(
                "module_name",
                "Module name (package), e.g. identity, profile:",
                validate=validate_java_identifier,
            ),
        ]

    def build_answers(self, values: Mapping[str, Any]) -> ModuleAnswers:
        return ModuleAnswers(
            root_dir=resolve_root(values),
            service_name=require_answer(values, "service_name", validate_artifact_id),
            root_package=require_answer(values, "root_package", validate_java_package),
            module_name=require_answer(values, "module_name", validate_java_identifier),
        )

    def steps(self, answers: ModuleAnswers) -> List[Step]:
        service_dir = answers.root_dir / "services" / answers.service_name
        module_dir = (
            service_dir
            / "src/main/java"
            / java_package_to_path(answers.root_package)
            / "module"
            / answers.module_name
        )

        def _add_module() -> str:
            if write_if_absent(module_dir / ".gitkeep", ""):
                return f"Added module: {answers.module_name}"
            return f"Module already present: {answers.module_name}"

        return [ensure_service_step(service_dir), Step("add module folder", _add_module)]


__all__ = ["ModuleAnswers", "ModuleGenerator"]
