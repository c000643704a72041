"""Tests for bootstrapping a platform repository."""

from __future__ import annotations

from pathlib import Path

from scaffolder.config import ScaffolderDefaults, load_repo_config
from scaffolder.generators import LibGenerator, PlatformGenerator
from scaffolder.runner import GeneratorRunner


def _bootstrap(root: Path, defaults: ScaffolderDefaults, **values: object):
    return GeneratorRunner().run(PlatformGenerator(defaults=defaults), {"root_dir": str(root), **values})


def test_platform_generator_writes_repo_skeleton(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    report = _bootstrap(root, defaults)

    assert report.ok, report.failures
    for relative in (
        "pom.xml",
        "bom/pom.xml",
        "platform-starter/pom.xml",
        ".platform-scaffolder.json",
        ".gitignore",
        "config/checkstyle/checkstyle.xml",
        "config/spotbugs/exclude.xml",
    ):
        assert (root / relative).is_file(), relative
    assert (root / "services").is_dir()
    assert (root / "libs").is_dir()

    root_pom = (root / "pom.xml").read_text(encoding="utf-8")
    assert "<groupId>com.acme</groupId>" in root_pom
    assert "<!-- scaffolder:modules:start -->" in root_pom
    assert "<maven.compiler.release>21</maven.compiler.release>" in root_pom
    bom = (root / "bom/pom.xml").read_text(encoding="utf-8")
    assert "<artifactId>quarkus-bom</artifactId>" in bom
    assert "<!-- scaffolder:deps:start -->" in bom
    starter = (root / "platform-starter/pom.xml").read_text(encoding="utf-8")
    assert defaults.builder_image_for() in starter


def test_platform_builder_image_follows_java_version(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    report = _bootstrap(root, defaults, java_version="17")

    assert report.ok, report.failures
    starter = (root / "platform-starter/pom.xml").read_text(encoding="utf-8")
    assert defaults.builder_image_for("17") in starter
    assert defaults.builder_image_for("21") not in starter


def test_platform_config_is_loadable(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    _bootstrap(root, defaults)

    config = load_repo_config(root)
    assert config.group_id == "com.acme"
    assert config.core_package == "com.acme.platform.core"
    assert config.service.docker_base_image == defaults.docker_base_image
    assert config.service.quarkus_extensions
    assert config.usecase.dependencies


def test_platform_generator_adds_workflows(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    _bootstrap(root, defaults)

    ci = (root / ".github/workflows/ci.yml").read_text(encoding="utf-8")
    publish = (root / ".github/workflows/publish-ghcr.yml").read_text(encoding="utf-8")
    assert "name: ci" in ci
    assert "fetch-depth: 0" in ci
    assert "pull_request" in ci
    assert "services_json" in ci
    assert "name: publish-ghcr" in publish
    assert "IMAGE_REGISTRY" in publish
    assert "ghcr.io" not in publish


def test_platform_generator_can_skip_workflows(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    report = _bootstrap(root, defaults, add_workflows="no")
    assert report.ok
    assert not (root / ".github").exists()
    assert report.changes[-1].message == "Skipped workflows"


def test_platform_generator_refuses_existing_repo(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    root.mkdir()
    (root / "pom.xml").write_text("<project/>", encoding="utf-8")

    report = _bootstrap(root, defaults)

    assert not report.ok
    assert report.failures[0].step == "check target is empty"
    assert "pom.xml already exists" in report.failures[0].error
    assert report.skipped
    assert (root / "pom.xml").read_text(encoding="utf-8") == "<project/>"


def test_lib_registers_in_generated_platform(tmp_path: Path, defaults: ScaffolderDefaults) -> None:
    root = tmp_path / "acme-platform"
    _bootstrap(root, defaults)

    report = GeneratorRunner().run(
        LibGenerator(defaults=defaults),
        {"root_dir": str(root), "lib_name": "shared-kernel", "base_package": "com.acme.sharedkernel"},
    )

    assert report.ok, report.failures
    root_pom = (root / "pom.xml").read_text(encoding="utf-8")
    assert (
        "    <!-- scaffolder:modules:start -->\n"
        "    <module>libs/shared-kernel</module>\n"
        "    <!-- scaffolder:modules:end -->\n"
    ) in root_pom
    bom = (root / "bom/pom.xml").read_text(encoding="utf-8")
    assert (
        "      <dependency>\n"
        "        <groupId>com.acme</groupId>\n"
        "        <artifactId>shared-kernel</artifactId>\n"
        "        <version>${project.version}</version>\n"
        "      </dependency>\n"
        "      <!-- scaffolder:deps:end -->\n"
    ) in bom
