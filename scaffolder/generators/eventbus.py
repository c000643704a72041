"""Add the in-memory event bus to an existing service."""

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
    append_property_lines,
    ensure_dependencies_section,
    insert_dependency_entry,
    read_pom_coordinates,
    read_pom_property,
)
from ..validators import validate_artifact_id, validate_java_package
from .base import Generator, Step, ensure_service_step, require_answer, resolve_root, root_prompt

EVENTBUS_ARTIFACTS = ("platform-core-contract", "platform-core-eventbus-inmemory")


def default_root_package(root: Path, service_name: str) -> str:
    """``<root.package>`` of the service pom, else ``<groupId>.<service>`` from the root pom."""
    declared = read_pom_property(root / "services" / service_name / "pom.xml", "root.package")
    if declared:
        return declared
    group_id = read_pom_coordinates(root / "pom.xml").group_id
    if group_id and service_name:
        return f"{group_id}.{to_java_package_safe(service_name)}"
    return ""


@dataclass
class EventBusAnswers:
    root_dir: Path
    service_name: str
    root_package: str
    group_id: Optional[str] = None


class EventBusGenerator(Generator[EventBusAnswers]):
    name = "eventbus"
    description = (
        "Add Rev6A in-memory EventBus (shared.contract.event + shared.infrastructure.eventbus.inmemory)"
    )

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
        ]

    def build_answers(self, values: Mapping[str, Any]) -> EventBusAnswers:
        root = resolve_root(values)
        service_name = require_answer(values, "service_name", validate_artifact_id)
        root_package = values.get("root_package") or default_root_package(root, service_name)
        return EventBusAnswers(
            root_dir=root,
            service_name=service_name,
            root_package=require_answer({"root_package": root_package}, "root_package", validate_java_package),
            group_id=str(values.get("group_id") or "").strip() or None,
        )

    def steps(self, answers: EventBusAnswers) -> List[Step]:
        root = answers.root_dir
        service_dir = root / "services" / answers.service_name
        service_pom = service_dir / "pom.xml"
        properties_path = service_dir / "src" / "main" / "resources" / "application.properties"
        context: Dict[str, Any] = asdict(answers)

        def _add_dependencies() -> str:
            group_id = (
                answers.group_id
                or load_repo_config(root).group_id
                or read_pom_coordinates(root / "pom.xml").group_id
            )
            if not group_id:
                raise PreconditionError(f"Could not determine groupId for {service_pom}")
            ensure_dependencies_section(service_pom)
            outcomes = [
                insert_dependency_entry(service_pom, Dependency(group_id, artifact_id), DependencyRegion.PLAIN)
                for artifact_id in EVENTBUS_ARTIFACTS
            ]
            if InsertionOutcome.UNSUPPORTED in outcomes:
                return "Skipped event bus dependencies (no <dependencies>)"
            if all(outcome is InsertionOutcome.ALREADY_PRESENT for outcome in outcomes):
                return "Event bus dependencies already present"
            return "Added event bus dependencies"

        def _add_properties() -> str:
            lines = [
                "scaffolder.eventbus.mode=in-memory",
                f"quarkus.log.category.\"{answers.root_package}.shared.infrastructure.eventbus\".level=INFO",
            ]
            if append_property_lines(properties_path, f"eventbus:{answers.service_name}", lines):
                return "Added event bus properties"
            return "Event bus properties already present"

        return [
            ensure_service_step(service_dir),
            *self.manifest_steps("eventbus", service_dir, context),
            Step("add event bus dependencies", _add_dependencies),
            Step("add event bus properties", _add_properties),
        ]


__all__ = ["EVENTBUS_ARTIFACTS", "EventBusAnswers", "EventBusGenerator", "default_root_package"]
