"""File-level wrappers around the text mutator."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..errors import HostDocumentMissingError, MalformedDocumentError
from ..logging import get_logger
from .fragments import Dependency
from .mutator import (
    DependencyRegion,
    InsertionOutcome,
    Mutation,
    append_properties,
    insert_dependency,
    insert_module,
    splice,
)
from .region import PLAIN_DEPS_ANCHOR, find_anchor

_LOGGER = get_logger("textedit.materializer")

_GROUP_ID_PATTERN = re.compile(r"<groupId>\s*([^<\s]+)\s*</groupId>")
_ARTIFACT_ID_PATTERN = re.compile(r"<artifactId>\s*([^<\s]+)\s*</artifactId>")
_VERSION_PATTERN = re.compile(r"<version>\s*([^<\s]+)\s*</version>")


@dataclass(frozen=True)
class PomCoordinates:
    """First groupId/artifactId/version found in a pom, any of which may be missing."""

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None


def write_if_absent(path: Path, content: str) -> bool:
    """Create ``path`` with ``content`` unless it exists; report whether it was written."""
    if path.exists():
        _LOGGER.debug("Keeping existing %s", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    _write_text(path, content)
    _LOGGER.debug("Wrote %s", path)
    return True


def insert_module_entry(host_path: Path, module_path: str) -> InsertionOutcome:
    """Register ``module_path`` in the aggregator pom at ``host_path``."""
    document = _read_required(host_path)
    return _write_back(host_path, insert_module(document, module_path))


def insert_dependency_entry(
    host_path: Path,
    dependency: Dependency,
    region: DependencyRegion = DependencyRegion.MANAGED,
) -> InsertionOutcome:
    """Declare ``dependency`` in the pom at ``host_path``."""
    document = _read_required(host_path)
    return _write_back(host_path, insert_dependency(document, dependency, region))


def append_property_lines(host_path: Path, marker: str, lines: Sequence[str]) -> bool:
    """Append ``lines`` under ``marker`` once; the properties file is created if absent."""
    document = _read_text(host_path) if host_path.exists() else ""
    mutation = append_properties(document, marker, lines)
    if mutation.changed:
        host_path.parent.mkdir(parents=True, exist_ok=True)
    return _write_back(host_path, mutation) is InsertionOutcome.INSERTED


def ensure_dependencies_section(pom_path: Path) -> bool:
    """Add an empty top-level ``<dependencies>`` element when the pom has none.

    Lists nested in ``<dependencyManagement>``, ``<build>`` or ``<profiles>`` do
    not count as the project's own.
    """
    document = _read_required(pom_path)
    if find_anchor(document, PLAIN_DEPS_ANCHOR) is not None:
        return False
    index = document.rfind("</project>")
    if index == -1:
        raise MalformedDocumentError(f"Invalid pom.xml (missing </project>): {pom_path}")
    insertion = "  <dependencies>\n  </dependencies>\n"
    line_start = document.rfind("\n", 0, index) + 1
    if not document[line_start:index].strip():
        index = line_start
    _write_text(pom_path, splice(document, index, insertion))
    return True


def read_pom_coordinates(pom_path: Path) -> PomCoordinates:
    """Return the first coordinates declared in ``pom_path``; empty when unreadable."""
    try:
        xml = _read_text(pom_path)
    except OSError:
        return PomCoordinates()
    return PomCoordinates(
        group_id=_first_match(_GROUP_ID_PATTERN, xml),
        artifact_id=_first_match(_ARTIFACT_ID_PATTERN, xml),
        version=_first_match(_VERSION_PATTERN, xml),
    )


def read_pom_property(pom_path: Path, name: str) -> Optional[str]:
    """Return the value of ``<name>`` in ``pom_path`` if the file and element exist."""
    if not pom_path.exists():
        return None
    pattern = re.compile(rf"<{re.escape(name)}>\s*([^<\s]+)\s*</{re.escape(name)}>")
    return _first_match(pattern, _read_text(pom_path))


def _first_match(pattern: re.Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF documents byte-identical outside the splice.
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def _read_required(path: Path) -> str:
    if not path.exists():
        raise HostDocumentMissingError(path)
    return _read_text(path)


def _write_back(path: Path, mutation: Mutation) -> InsertionOutcome:
    if mutation.changed:
        _write_text(path, mutation.document)
        _LOGGER.debug("Updated %s", path)
    else:
        _LOGGER.debug("%s left unchanged (%s)", path, mutation.outcome.value)
    return mutation.outcome


__all__ = [
    "PomCoordinates",
    "append_property_lines",
    "ensure_dependencies_section",
    "insert_dependency_entry",
    "insert_module_entry",
    "read_pom_coordinates",
    "read_pom_property",
    "write_if_absent",
]
