"""Configuration for scaffolder runs: startup defaults and per-repo settings."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .textedit import Dependency

CONFIG_FILENAME = ".platform-scaffolder.json"
_ENV_PREFIX = "OFCX_"


class ConfigError(RuntimeError):
    """Raised when the repo configuration is unreadable or lacks a required value."""


@dataclass(frozen=True)
class ScaffolderDefaults:
    """Default answers resolved once at startup and handed to each generator."""

    group_id: Optional[str] = None
    platform_artifact_id: str = "platform"
    platform_version: str = "1.0.0-SNAPSHOT"
    java_version: str = "21"
    maven_min_version: str = "3.9.0"
    quarkus_platform_group_id: str = "io.quarkus.platform"
    quarkus_platform_artifact_id: str = "quarkus-bom"
    quarkus_platform_version: str = "3.19.1"
    enforcer_version: str = "3.5.0"
    surefire_version: str = "3.5.2"
    spotless_version: str = "2.44.3"
    checkstyle_version: str = "3.6.0"
    spotbugs_version: str = "4.8.6.6"
    archunit_version: str = "1.3.0"
    mandrel_builder_image: Optional[str] = None
    docker_base_image: str = "registry.access.redhat.com/ubi9/ubi-minimal:9.5"

    def builder_image_for(self, java_version: Optional[str] = None) -> str:
        """Configured Mandrel builder image, else the one matching ``java_version``."""
        if self.mandrel_builder_image:
            return self.mandrel_builder_image
        return mandrel_image_for(java_version or self.java_version)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ScaffolderDefaults":
        """Build defaults from ``OFCX_*`` variables, e.g. ``OFCX_JAVA_VERSION``."""
        values: Dict[str, Any] = {}
        for name in (item.name for item in fields(cls)):
            raw = environ.get(_ENV_PREFIX + _env_suffix(name))
            if raw:
                values[name] = raw
        return cls(**values)


def mandrel_image_for(java_version: str) -> str:
    return f"quay.io/quarkus/ubi-quarkus-mandrel-builder-image:23.1-java{java_version or '21'}"


def _env_suffix(name: str) -> str:
    # Plugin versions keep the historical *_PLUGIN_VERSION variable names.
    suffix = name.upper()
    if suffix in {
        "ENFORCER_VERSION",
        "SUREFIRE_VERSION",
        "SPOTLESS_VERSION",
        "CHECKSTYLE_VERSION",
        "SPOTBUGS_VERSION",
    }:
        return suffix.replace("_VERSION", "_PLUGIN_VERSION")
    return suffix


@dataclass
class LibDefaults:
    """``defaults.lib`` settings."""

    register_in_root_pom: bool = True
    register_in_bom: bool = True
    test_dependencies: List[Dependency] = field(default_factory=list)


@dataclass
class ServiceDefaults:
    """``defaults.service`` settings."""

    add_workflows: bool = True
    register_in_root_pom: bool = True
    internal_libs: List[str] = field(default_factory=list)
    docker_base_image: Optional[str] = None
    quarkus_extensions: List[str] = field(default_factory=list)
    test_dependencies: List[Dependency] = field(default_factory=list)


@dataclass
class UsecaseDefaults:
    """``defaults.usecase.pom`` settings."""

    dependencies: List[Dependency] = field(default_factory=list)
    test_dependencies: List[Dependency] = field(default_factory=list)


@dataclass
class RepoConfig:
    """Represents the settings stored in ``.platform-scaffolder.json``."""

    root: Path
    schema_version: int = 1
    group_id: Optional[str] = None
    platform_artifact_id: Optional[str] = None
    platform_version: Optional[str] = None
    core_package: Optional[str] = None
    libs_dir: str = "libs"
    lib: LibDefaults = field(default_factory=LibDefaults)
    service: ServiceDefaults = field(default_factory=ServiceDefaults)
    usecase: UsecaseDefaults = field(default_factory=UsecaseDefaults)

    @property
    def path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def require(self, value: Any, key: str) -> Any:
        """Return ``value`` or raise a ``ConfigError`` naming the missing ``key``."""
        if value is None or value == [] or value == "":
            raise ConfigError(f"Missing {key}; set it in {self.path}")
        return value

    def list_internal_libs(self) -> List[str]:
        """Names of existing libs (directories holding a pom.xml) under the libs dir."""
        libs_root = self.root / self.libs_dir
        if not libs_root.is_dir():
            return []
        return sorted(
            child.name
            for child in libs_root.iterdir()
            if child.is_dir() and (child / "pom.xml").exists()
        )


def load_repo_config(root: Path) -> RepoConfig:
    """Load the repo configuration; a missing file yields defaults."""
    root = root.expanduser().resolve()
    config_file = root / CONFIG_FILENAME
    if not config_file.exists():
        return RepoConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain an object at the root")

    defaults = _as_dict(data.get("defaults"))
    lib_data = _as_dict(defaults.get("lib"))
    service_data = _as_dict(defaults.get("service"))
    usecase_pom = _as_dict(_as_dict(defaults.get("usecase")).get("pom"))

    lib = LibDefaults(
        register_in_root_pom=_as_bool(lib_data.get("registerInRootPom"), True),
        register_in_bom=_as_bool(lib_data.get("registerInBom"), True),
        test_dependencies=_as_dependencies(lib_data.get("testDependencies"), "defaults.lib.testDependencies"),
    )
    service = ServiceDefaults(
        add_workflows=_as_bool(service_data.get("addWorkflows"), True),
        register_in_root_pom=_as_bool(service_data.get("registerInRootPom"), True),
        internal_libs=_as_str_list(service_data.get("internalLibs")),
        docker_base_image=_as_str(service_data.get("dockerBaseImage")),
        quarkus_extensions=_as_str_list(service_data.get("quarkusExtensions")),
        test_dependencies=_as_dependencies(
            service_data.get("testDependencies"), "defaults.service.testDependencies"
        ),
    )
    usecase = UsecaseDefaults(
        dependencies=_as_dependencies(
            usecase_pom.get("dependencies"), "defaults.usecase.pom.dependencies"
        ),
        test_dependencies=_as_dependencies(
            usecase_pom.get("testDependencies"), "defaults.usecase.pom.testDependencies"
        ),
    )

    schema_version = data.get("schemaVersion", 1)
    if not isinstance(schema_version, int) or isinstance(schema_version, bool):
        raise ConfigError("schemaVersion must be an integer")

    return RepoConfig(
        root=root,
        schema_version=schema_version,
        group_id=_as_str(data.get("groupId")),
        platform_artifact_id=_as_str(data.get("platformArtifactId")),
        platform_version=_as_str(data.get("platformVersion")),
        core_package=_as_str(_as_dict(data.get("core")).get("package")),
        libs_dir=_as_str(_as_dict(data.get("libs")).get("dir")) or "libs",
        lib=lib,
        service=service,
        usecase=usecase,
    )


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def _as_dependencies(value: Any, key: str) -> List[Dependency]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list")
    dependencies: List[Dependency] = []
    for item in value:
        entry = _as_dict(item)
        group_id = _as_str(entry.get("groupId"))
        artifact_id = _as_str(entry.get("artifactId"))
        if not group_id or not artifact_id:
            raise ConfigError(f"{key} entries need groupId and artifactId")
        dependencies.append(
            Dependency(
                group_id=group_id,
                artifact_id=artifact_id,
                version=_as_str(entry.get("version")),
                scope=_as_str(entry.get("scope")),
            )
        )
    return dependencies


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) and str(value).strip() else None


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LibDefaults",
    "RepoConfig",
    "ScaffolderDefaults",
    "ServiceDefaults",
    "UsecaseDefaults",
    "load_repo_config",
    "mandrel_image_for",
]
