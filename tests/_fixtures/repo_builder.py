"""Helper utilities for constructing temporary Maven repositories in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping, Optional

ROOT_POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project>
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group_id}</groupId>
  <artifactId>{artifact_id}</artifactId>
  <version>{version}</version>
  <packaging>pom</packaging>

  <modules>
    <module>bom</module>
    <!-- scaffolder:modules:start -->
    <!-- scaffolder:modules:end -->
  </modules>
</project>
"""

BOM_POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project>
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group_id}</groupId>
  <artifactId>bom</artifactId>
  <version>{version}</version>
  <packaging>pom</packaging>

  <dependencyManagement>
    <dependencies>
      <!-- scaffolder:deps:start -->
      <!-- scaffolder:deps:end -->
    </dependencies>
  </dependencyManagement>
</project>
"""

SERVICE_POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project>
  <modelVersion>4.0.0</modelVersion>
  <artifactId>{name}</artifactId>

  <properties>
    <root.package>{root_package}</root.package>
  </properties>
</project>
"""


def repo_config(group_id: str = "com.acme", **overrides: Any) -> dict:
    """A ``.platform-scaffolder.json`` payload with every value the generators need."""
    config: dict = {
        "schemaVersion": 1,
        "groupId": group_id,
        "platformArtifactId": "platform",
        "platformVersion": "1.0.0-SNAPSHOT",
        "core": {"package": f"{group_id}.platform.core"},
        "defaults": {
            "lib": {
                "testDependencies": [
                    {"groupId": "org.junit.jupiter", "artifactId": "junit-jupiter", "scope": "test"}
                ]
            },
            "service": {
                "addWorkflows": False,
                "dockerBaseImage": "registry.example/ubi-minimal:9.5",
                "quarkusExtensions": ["quarkus-rest"],
                "testDependencies": [
                    {"groupId": "io.quarkus", "artifactId": "quarkus-junit5", "scope": "test"}
                ],
            },
            "usecase": {
                "pom": {
                    "dependencies": [{"groupId": group_id, "artifactId": "platform-core-contract"}],
                    "testDependencies": [{"groupId": "io.quarkus", "artifactId": "quarkus-junit5"}],
                }
            },
        },
    }
    config.update(overrides)
    return config


class RepoBuilder:
    """Utility for writing files into a throwaway platform repository."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the repository."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def platform(
        self,
        *,
        group_id: str = "com.acme",
        artifact_id: str = "platform",
        version: str = "1.0.0-SNAPSHOT",
        with_bom: bool = True,
        config: Optional[dict] = None,
    ) -> "RepoBuilder":
        """Lay down a root pom, a BOM and the repo configuration."""
        files = {"pom.xml": ROOT_POM.format(group_id=group_id, artifact_id=artifact_id, version=version)}
        if with_bom:
            files["bom/pom.xml"] = BOM_POM.format(group_id=group_id, version=version)
        self.write(files)
        self.write_config(config if config is not None else repo_config(group_id))
        return self

    def service(self, name: str, root_package: str = "com.acme.orders") -> "RepoBuilder":
        self.write({f"services/{name}/pom.xml": SERVICE_POM.format(name=name, root_package=root_package)})
        return self

    def write_config(self, payload: Mapping[str, Any]) -> None:
        (self.root / ".platform-scaffolder.json").write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root


__all__ = ["BOM_POM", "ROOT_POM", "RepoBuilder", "SERVICE_POM", "repo_config"]
