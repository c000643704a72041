"""Create an internal library under ``libs/<name>``."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..config import load_repo_config
from ..errors import PreconditionError
from ..naming import to_java_package_safe
from ..prompting import Prompt
from ..textedit import (
    Dependency,
    DependencyRegion,
    InsertionOutcome,
    insert_dependency_entry,
    insert_module_entry,
    read_pom_coordinates,
)
from ..validators import validate_artifact_id, validate_java_package
from .base import (
    Generator,
    Step,
    as_flag,
    module_registration_message,
    repo_config_for,
    require_answer,
    resolve_root,
    root_prompt,
)


@dataclass
class LibAnswers:
    root_dir: Path
    lib_name: str
    group_id: Optional[str]
    base_package: str
    register_in_root_pom: bool = True
    register_in_bom: bool = True


class LibGenerator(Generator[LibAnswers]):
    name = "lib"
    description = "Create a new internal lib under libs/<name>"

    def prompts(self) -> List[Prompt]:
        return [
            root_prompt(),
            Prompt(
                "lib_name",
                "Lib name (folder/artifactId), e.g. shared-kernel, observability:",
                validate=validate_artifact_id,
            ),
            Prompt(
                "group_id",
                "Maven groupId:",
                default=lambda a: repo_config_for(a).group_id or self.defaults.group_id or "",
            ),
            Prompt(
                "base_package",
                "Base Java package:",
                validate=validate_java_package,
                default=lambda a: f"{a.get('group_id')}.{to_java_package_safe(a.get('lib_name', ''))}",
            ),
            Prompt(
                "register_in_root_pom",
                "Register module in root pom.xml <modules>?",
                kind="confirm",
                default=lambda a: repo_config_for(a).lib.register_in_root_pom,
            ),
            Prompt(
                "register_in_bom",
                "Register dependency in bom/pom.xml <dependencyManagement>?",
                kind="confirm",
                default=lambda a: repo_config_for(a).lib.register_in_bom,
            ),
        ]

    def build_answers(self, values: Mapping[str, Any]) -> LibAnswers:
        return LibAnswers(
            root_dir=resolve_root(values),
            lib_name=require_answer(values, "lib_name", validate_artifact_id),
            group_id=str(values.get("group_id") or "").strip() or None,
            base_package=require_answer(values, "base_package", validate_java_package),
            register_in_root_pom=as_flag(values.get("register_in_root_pom"), True),
            register_in_bom=as_flag(values.get("register_in_bom"), True),
        )

    def steps(self, answers: LibAnswers) -> List[Step]:
        root = answers.root_dir
        lib_dir = root / "libs" / answers.lib_name
        root_pom = root / "pom.xml"
        bom_pom = root / "bom" / "pom.xml"
        context: Dict[str, Any] = asdict(answers)

        def _precheck() -> str:
            lib_dir.mkdir(parents=True, exist_ok=True)
            if (lib_dir / "pom.xml").exists():
                raise PreconditionError(f"Lib already exists: {lib_dir}")
            config = load_repo_config(root)
            coords = read_pom_coordinates(root_pom)
            context["group_id"] = answers.group_id or config.group_id or coords.group_id
            if not context["group_id"]:
                raise PreconditionError(f"Could not determine groupId for {lib_dir}")
            context["platform_version"] = (
                coords.version or config.platform_version or self.defaults.platform_version
            )
            context["platform_artifact_id"] = (
                coords.artifact_id or config.platform_artifact_id or self.defaults.platform_artifact_id
            )
            context["test_dependencies"] = config.lib.test_dependencies
            return "OK"

        def _register_module() -> str:
            if not answers.register_in_root_pom:
                return "Skipped root pom module registration"
            module_path = f"libs/{answers.lib_name}"
            return module_registration_message(insert_module_entry(root_pom, module_path), module_path)

        def _register_bom() -> str:
            if not answers.register_in_bom:
                return "Skipped BOM registration"
            if not bom_pom.exists():
                return "Skipped BOM registration (no bom/pom.xml)"
            outcome = insert_dependency_entry(
                bom_pom,
                Dependency(context["group_id"], answers.lib_name, "${project.version}"),
                DependencyRegion.MANAGED,
            )
            if outcome is InsertionOutcome.UNSUPPORTED:
                return "Skipped BOM registration (no dependencyManagement/dependencies)"
            if outcome is InsertionOutcome.INSERTED:
                return f"Registered BOM dependency: {answers.lib_name}"
            return f"BOM dependency already present: {answers.lib_name}"

        return [
            Step("check lib is new", _precheck),
            *self.manifest_steps("lib", lib_dir, context),
            Step("register root module", _register_module),
            Step("register BOM dependency", _register_bom),
        ]


__all__ = ["LibAnswers", "LibGenerator"]
