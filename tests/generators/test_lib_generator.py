"""Tests for the internal library generator."""

from __future__ import annotations

from typing import Any, Dict

from scaffolder.config import ScaffolderDefaults
from scaffolder.generators import LibGenerator
from scaffolder.runner import GeneratorRunner, RunReport
from tests._fixtures.repo_builder import RepoBuilder


def _run(repo: RepoBuilder, defaults: ScaffolderDefaults, **values: Any) -> RunReport:
    answers: Dict[str, Any] = {
        "root_dir": str(repo.path()),
        "lib_name": "shared-kernel",
        "base_package": "com.acme.sharedkernel",
        **values,
    }
    return GeneratorRunner().run(LibGenerator(defaults=defaults), answers)


def test_lib_generator_writes_files(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    report = _run(platform_repo, defaults)

    assert report.ok, report.failures
    pom = platform_repo.read("libs/shared-kernel/pom.xml")
    assert "<artifactId>shared-kernel</artifactId>" in pom
    assert "<version>1.0.0-SNAPSHOT</version>" in pom
    assert "<artifactId>junit-jupiter</artifactId>" in pom
    assert "<scope>test</scope>" in pom
    assert "`com.acme:shared-kernel`" in platform_repo.read("libs/shared-kernel/README.md")
    assert (platform_repo.path() / "libs/shared-kernel/src/main/java/com/acme/sharedkernel/.gitkeep").is_file()
    test_source = platform_repo.read("libs/shared-kernel/src/test/java/com/acme/sharedkernel/SharedKernelTest.java")
    assert "package com.acme.sharedkernel;" in test_source
    assert "class SharedKernelTest" in test_source


def test_lib_generator_registers_module_and_bom(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    report = _run(platform_repo, defaults)

    messages = [change.message for change in report.changes]
    assert "Registered module: libs/shared-kernel" in messages
    assert "Registered BOM dependency: shared-kernel" in messages
    assert "<module>libs/shared-kernel</module>" in platform_repo.read("pom.xml")
    bom = platform_repo.read("bom/pom.xml")
    assert "<artifactId>shared-kernel</artifactId>" in bom
    assert "<version>${project.version}</version>" in bom


def test_lib_generator_refuses_existing_lib(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    _run(platform_repo, defaults)
    root_pom = platform_repo.read("pom.xml")

    report = _run(platform_repo, defaults)

    assert not report.ok
    assert "Lib already exists" in report.failures[0].error
    assert platform_repo.read("pom.xml") == root_pom


def test_lib_generator_skips_missing_bom(repo_builder: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    repo_builder.platform(with_bom=False)
    report = _run(repo_builder, defaults)

    assert report.ok
    assert report.changes[-1].message == "Skipped BOM registration (no bom/pom.xml)"


def test_lib_generator_reports_unsupported_bom(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    platform_repo.write({"bom/pom.xml": "<project>\n  <artifactId>bom</artifactId>\n</project>\n"})
    report = _run(platform_repo, defaults)

    assert report.ok
    assert report.changes[-1].message == "Skipped BOM registration (no dependencyManagement/dependencies)"
    assert "shared-kernel" not in platform_repo.read("bom/pom.xml")


def test_lib_generator_reports_missing_modules(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    platform_repo.write(
        {
            "pom.xml": """
            <project>
              <groupId>com.acme</groupId>
              <artifactId>platform</artifactId>
              <version>1.0.0-SNAPSHOT</version>
            </project>
            """
        }
    )
    report = _run(platform_repo, defaults)

    messages = [change.message for change in report.changes]
    assert "Skipped root pom module registration (no <modules>)" in messages


def test_lib_generator_honours_registration_flags(platform_repo: RepoBuilder, defaults: ScaffolderDefaults) -> None:
    report = _run(platform_repo, defaults, register_in_root_pom="false", register_in_bom=False)

    messages = [change.message for change in report.changes]
    assert "Skipped root pom module registration" in messages
    assert "Skipped BOM registration" in messages
    assert "libs/shared-kernel" not in platform_repo.read("pom.xml")


def test_lib_group_id_falls_back_to_root_pom(repo_builder: RepoBuilder) -> None:
    repo_builder.platform(group_id="org.example", config={})
    report = _run(repo_builder, ScaffolderDefaults(), base_package="org.example.sharedkernel")

    assert report.ok, report.failures
    assert "<groupId>org.example</groupId>" in repo_builder.read("libs/shared-kernel/pom.xml")
