"""Add a Rev6A usecase skeleton to a service, bootstrapping the service pom if needed."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..config import load_repo_config
from ..errors import PreconditionError
from ..naming import to_java_package_safe, to_kebab, to_pascal
from ..prompting import Prompt
from ..textedit import (
    DependencyRegion,
    ensure_dependencies_section,
    insert_dependency_entry,
    insert_module_entry,
    read_pom_coordinates,
    write_if_absent,
)
from ..validators import validate_artifact_id, validate_java_identifier, validate_java_package
from .base import Generator, Step, require_answer, resolve_root, root_prompt
from .eventbus import default_root_package


@dataclass
class UsecaseAnswers:
    root_dir: Path
    service_name: str
    root_package: str
    module_name: str
    usecase_name: str

    @property
    def usecase_pascal(self) -> str:
        return to_pascal(self.usecase_name)

    @property
    def usecase_kebab(self) -> str:
        return to_kebab(self.usecase_name)

    @property
    def usecase_package(self) -> str:
        return f"{to_java_package_safe(self.usecase_name)}usecase"


class UsecaseGenerator(Generator[UsecaseAnswers]):
    name = "usecase"
    description = "Add a Rev6A usecase skeleton under module/<module>/<usecase>/ inside an existing service"

    def prompts(self) -> List[Prompt]:
        return [
            root_prompt(message="Repo root directory:"),
            Prompt("service_name", "Existing service name under services/:", validate=validate_artifact_id),
            Prompt(
                "root_package",
                "Root Java package (service), e.g. com.yourcompany.yourapp:",
                validate=validate_java_package,
                default=lambda a: default_root_package(resolve_root(a), str(a.get("service_name") or "")),
            ),
            Prompt(
                "module_name",
                "Module name (package), e.g. identity, profile:",
                validate=validate_java_identifier,
            ),
            Prompt(
                "usecase_name",
                "Usecase name (kebab/word), e.g. login, issueotp:",
                validate=validate_java_identifier,
            ),
        ]

    def build_answers(self, values: Mapping[str, Any]) -> UsecaseAnswers:
        return UsecaseAnswers(
            root_dir=resolve_root(values),
            service_name=require_answer(values, "service_name", validate_artifact_id),
            root_package=require_answer(values, "root_package", validate_java_package),
            module_name=require_answer(values, "module_name", validate_java_identifier),
            usecase_name=require_answer(values, "usecase_name", validate_java_identifier),
        )

    def steps(self, answers: UsecaseAnswers) -> List[Step]:
        root = answers.root_dir
        service_dir = root / "services" / answers.service_name
        service_pom = service_dir / "pom.xml"
        root_pom = root / "pom.xml"
        context: Dict[str, Any] = asdict(answers)
        context.update(
            usecase_pascal=answers.usecase_pascal,
            usecase_kebab=answers.usecase_kebab,
            usecase_package=answers.usecase_package,
        )

        def _bootstrap_service() -> str:
            if service_pom.exists():
                return "OK"
            coords = read_pom_coordinates(root_pom)
            if not coords.group_id or not coords.version:
                raise PreconditionError(f"Could not determine groupId/version from root pom.xml: {root_pom}")
            pom = self.renderer.render(
                "usecase/service-pom.xml.j2",
                {**context, "group_id": coords.group_id, "platform_version": coords.version},
            )
            write_if_absent(service_pom, pom)
            insert_module_entry(root_pom, f"services/{answers.service_name}")
            return f"Bootstrapped service pom: services/{answers.service_name}"

        def _ensure_pom_dependencies() -> str:
            config = load_repo_config(root)
            context["core_package"] = config.require(config.core_package, "core.package")
            dependencies = config.require(config.usecase.dependencies, "defaults.usecase.pom.dependencies")
            test_dependencies = config.require(
                config.usecase.test_dependencies, "defaults.usecase.pom.testDependencies"
            )
            ensure_dependencies_section(service_pom)
            for dependency in dependencies:
                insert_dependency_entry(service_pom, dependency, DependencyRegion.PLAIN)
            for dependency in test_dependencies:
                if not dependency.scope:
                    dependency = replace(dependency, scope="test")
                insert_dependency_entry(service_pom, dependency, DependencyRegion.PLAIN)
            return "Ensured service pom deps"

        return [
            Step("bootstrap service pom", _bootstrap_service),
            Step("ensure usecase dependencies", _ensure_pom_dependencies),
            *self.manifest_steps("usecase", service_dir, context),
        ]


__all__ = ["UsecaseAnswers", "UsecaseGenerator"]
