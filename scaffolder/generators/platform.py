"""Bootstrap a new platform repository."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..errors import PreconditionError
from ..prompting import Prompt
from ..validators import validate_artifact_id, validate_java_package, validate_new_root_path
from .base import Generator, Step, as_flag, require_answer, resolve_root, root_prompt, workflows_step


@dataclass
class PlatformAnswers:
    root_dir: Path
    group_id: str
    platform_artifact_id: str
    platform_version: str
    java_version: str
    maven_min_version: str
    quarkus_platform_group_id: str
    quarkus_platform_artifact_id: str
    quarkus_platform_version: str
    mandrel_builder_image: str
    enforcer_version: str
    surefire_version: str
    spotless_version: str
    checkstyle_version: str
    spotbugs_version: str
    archunit_version: str
    docker_base_image: str
    add_workflows: bool = True


class PlatformGenerator(Generator[PlatformAnswers]):
    """Creates the aggregator pom, BOM, platform-starter and repo scaffolding."""

    name = "platform"
    description = "Bootstrap a new platform repo (root + bom + platform-starter + base folders)"

    _VERSION_FIELDS = (
        ("enforcer_version", "maven-enforcer-plugin version:"),
        ("surefire_version", "maven-surefire-plugin version:"),
        ("spotless_version", "spotless-maven-plugin version:"),
        ("checkstyle_version", "maven-checkstyle-plugin version:"),
        ("spotbugs_version", "spotbugs-maven-plugin version:"),
        ("archunit_version", "archunit-junit5 version:"),
    )

    def prompts(self) -> List[Prompt]:
        d = self.defaults
        prompts = [
            root_prompt(
                default=".",
                validate=validate_new_root_path,
                message="Target repo root directory to create (absolute or relative):",
            ),
            Prompt("group_id", "Maven groupId:", default=d.group_id or "com.yourorg", validate=validate_java_package),
            Prompt(
                "platform_artifact_id",
                "Root artifactId (aggregator parent):",
                default=d.platform_artifact_id,
                validate=validate_artifact_id,
            ),
            Prompt("platform_version", "Platform version:", default=d.platform_version),
            Prompt("java_version", "Java version:", default=d.java_version),
            Prompt("quarkus_platform_version", "Quarkus platform version:", default=d.quarkus_platform_version),
            Prompt(
                "mandrel_builder_image",
                "Mandrel builder image (Quarkus native container build):",
                default=lambda a: d.builder_image_for(a.get("java_version")),
            ),
        ]
        prompts.extend(
            Prompt(field_name, message, default=getattr(d, field_name))
            for field_name, message in self._VERSION_FIELDS
        )
        prompts.append(
            Prompt(
                "add_workflows",
                "Add GitHub Actions workflows (.github/workflows/ci.yml + publish-ghcr.yml)?",
                kind="confirm",
                default=True,
            )
        )
        return prompts

    def build_answers(self, values: Mapping[str, Any]) -> PlatformAnswers:
        d = self.defaults
        java_version = str(values.get("java_version") or d.java_version)

        def _value(name: str) -> str:
            return str(values.get(name) or getattr(d, name))

        return PlatformAnswers(
            root_dir=resolve_root(values),
            group_id=require_answer(
                {"group_id": values.get("group_id") or d.group_id},
                "group_id",
                validate_java_package,
            ),
            platform_artifact_id=require_answer(
                {"platform_artifact_id": _value("platform_artifact_id")},
                "platform_artifact_id",
                validate_artifact_id,
            ),
            platform_version=_value("platform_version"),
            java_version=java_version,
            maven_min_version=_value("maven_min_version"),
            quarkus_platform_group_id=_value("quarkus_platform_group_id"),
            quarkus_platform_artifact_id=_value("quarkus_platform_artifact_id"),
            quarkus_platform_version=_value("quarkus_platform_version"),
            mandrel_builder_image=str(values.get("mandrel_builder_image") or d.builder_image_for(java_version)),
            enforcer_version=_value("enforcer_version"),
            surefire_version=_value("surefire_version"),
            spotless_version=_value("spotless_version"),
            checkstyle_version=_value("checkstyle_version"),
            spotbugs_version=_value("spotbugs_version"),
            archunit_version=_value("archunit_version"),
            docker_base_image=_value("docker_base_image"),
            add_workflows=as_flag(values.get("add_workflows"), True),
        )

    def steps(self, answers: PlatformAnswers) -> List[Step]:
        root = answers.root_dir
        context: Dict[str, Any] = asdict(answers)

        def _precheck() -> str:
            root.mkdir(parents=True, exist_ok=True)
            if (root / "pom.xml").exists():
                raise PreconditionError(f"pom.xml already exists: {root}")
            return "OK"

        def _base_folders() -> str:
            for name in ("services", "libs"):
                (root / name).mkdir(parents=True, exist_ok=True)
            return "Ensured services/ and libs/"

        return [
            Step("check target is empty", _precheck),
            *self.manifest_steps("platform", root, context),
            Step("create base folders", _base_folders),
            workflows_step(root, self.renderer, answers.add_workflows),
        ]


__all__ = ["PlatformAnswers", "PlatformGenerator"]
