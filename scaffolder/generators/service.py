"""Create a Rev6A Quarkus service skeleton under ``services/<name>``."""

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
    workflows_step,
)


@dataclass
class ServiceAnswers:
    root_dir: Path
    service_name: str
    group_id: Optional[str]
    root_package: str
    add_workflows: bool = True
    register_in_root_pom: bool = True
    autowire_internal_libs: bool = True
    internal_libs: Optional[List[str]] = None


class ServiceGenerator(Generator[ServiceAnswers]):
    name = "service"
    description = "Create a Rev6A Quarkus service skeleton (boot/shared/module) under services/<name>"

    def prompts(self) -> List[Prompt]:
        return [
            root_prompt(),
            Prompt("service_name", "Service name (folder/artifactId):", validate=validate_artifact_id),
            Prompt(
                "group_id",
                "Maven groupId:",
                default=lambda a: repo_config_for(a).group_id or self.defaults.group_id or "",
            ),
            Prompt(
                "root_package",
                "Root Java package, e.g. com.yourcompany.yourapp:",
                validate=validate_java_package,
                default=lambda a: f"{a.get('group_id')}.{to_java_package_safe(a.get('service_name', ''))}",
            ),
            Prompt(
                "add_workflows",
                "Also add GitHub Actions workflows (.github/workflows/ci.yml + publish-ghcr.yml)?",
                kind="confirm",
                default=lambda a: repo_config_for(a).service.add_workflows,
            ),
            Prompt(
                "register_in_root_pom",
                "Register module in root pom.xml <modules>?",
                kind="confirm",
                default=lambda a: repo_config_for(a).service.register_in_root_pom,
            ),
            Prompt(
                "autowire_internal_libs",
                "Autowire internal lib dependencies from libs/* ?",
                kind="confirm",
                default=True,
            ),
            Prompt(
                "internal_libs",
                "Internal libs to include as dependencies (comma separated):",
                kind="list",
                when=lambda a: bool(a.get("autowire_internal_libs"))
                and bool(repo_config_for(a).list_internal_libs()),
                choices=lambda a: repo_config_for(a).list_internal_libs(),
                default=lambda a: repo_config_for(a).service.internal_libs,
            ),
        ]

    def build_answers(self, values: Mapping[str, Any]) -> ServiceAnswers:
        internal_libs = values.get("internal_libs")
        if isinstance(internal_libs, str):
            internal_libs = [part.strip() for part in internal_libs.split(",") if part.strip()]
        for lib_name in internal_libs or []:
            require_answer({"internal_libs": lib_name}, "internal_libs", validate_artifact_id)
        return ServiceAnswers(
            root_dir=resolve_root(values),
            service_name=require_answer(values, "service_name", validate_artifact_id),
            group_id=str(values.get("group_id") or "").strip() or None,
            root_package=require_answer(values, "root_package", validate_java_package),
            add_workflows=as_flag(values.get("add_workflows"), True),
            register_in_root_pom=as_flag(values.get("register_in_root_pom"), True),
            autowire_internal_libs=as_flag(values.get("autowire_internal_libs"), True),
            internal_libs=list(internal_libs) if internal_libs is not None else None,
        )

    def steps(self, answers: ServiceAnswers) -> List[Step]:
        root = answers.root_dir
        service_dir = root / "services" / answers.service_name
        root_pom = root / "pom.xml"
        bom_pom = root / "bom" / "pom.xml"
        context: Dict[str, Any] = asdict(answers)

        def _precheck() -> str:
            service_dir.mkdir(parents=True, exist_ok=True)
            if (service_dir / "pom.xml").exists():
                raise PreconditionError(f"Service already exists: {service_dir}")
            coords = read_pom_coordinates(root_pom)
            if not coords.version:
                raise PreconditionError(f"Could not determine platform version from: {root_pom}")
            if not coords.artifact_id:
                raise PreconditionError(f"Could not determine platform artifactId from: {root_pom}")

            config = load_repo_config(root)
            context["platform_version"] = coords.version
            context["platform_artifact_id"] = coords.artifact_id
            context["docker_base_image"] = config.require(
                config.service.docker_base_image, "defaults.service.dockerBaseImage"
            )
            context["quarkus_extensions"] = config.require(
                config.service.quarkus_extensions, "defaults.service.quarkusExtensions"
            )
            context["test_dependencies"] = config.require(
                config.service.test_dependencies, "defaults.service.testDependencies"
            )
            if answers.internal_libs is None and answers.autowire_internal_libs:
                context["internal_libs"] = list(config.service.internal_libs)
            context["internal_libs"] = context.get("internal_libs") or []
            context["group_id"] = answers.group_id or config.group_id or coords.group_id
            return "OK"

        def _register_internal_libs() -> str:
            libs: List[str] = context["internal_libs"]
            if not answers.autowire_internal_libs:
                return "Skipped BOM registration for internal libs"
            if not libs:
                return "No internal libs to register in BOM"
            if not bom_pom.exists():
                return "Skipped BOM registration (no bom/pom.xml)"
            outcomes = [
                insert_dependency_entry(
                    bom_pom,
                    Dependency(context["group_id"], lib_name, "${project.version}"),
                    DependencyRegion.MANAGED,
                )
                for lib_name in libs
            ]
            if InsertionOutcome.UNSUPPORTED in outcomes:
                return "Skipped BOM registration (no dependencyManagement/dependencies)"
            if all(outcome is InsertionOutcome.ALREADY_PRESENT for outcome in outcomes):
                return "BOM dependencies already present"
            return "Registered internal libs in BOM (if missing)"

        def _register_module() -> str:
            if not answers.register_in_root_pom:
                return "Skipped root pom module registration"
            module_path = f"services/{answers.service_name}"
            return module_registration_message(insert_module_entry(root_pom, module_path), module_path)

        return [
            Step("check service is new", _precheck),
            *self.manifest_steps("service", service_dir, context),
            Step("register internal libs in BOM", _register_internal_libs),
            Step("register root module", _register_module),
            workflows_step(root, self.renderer, answers.add_workflows),
        ]


__all__ = ["ServiceAnswers", "ServiceGenerator"]
