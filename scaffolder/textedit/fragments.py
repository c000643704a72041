"""Render the text fragments spliced into manifests and properties files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .region import INDENT_UNIT


@dataclass(frozen=True)
class Dependency:
    """Maven coordinates for a ``<dependency>`` entry."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: Optional[str] = None

    def fields(self) -> List[tuple[str, Optional[str]]]:
        return [
            ("groupId", self.group_id),
            ("artifactId", self.artifact_id),
            ("version", self.version),
            ("scope", self.scope),
        ]


def element(tag: str, value: str) -> str:
    return f"<{tag}>{value}</{tag}>"


def render_list_item(tag: str, value: str, indent: str) -> str:
    """Render a single ``<tag>value</tag>`` line."""
    return f"{indent}{element(tag, value)}\n"


def render_block(
    tag: str,
    fields: Iterable[tuple[str, Optional[str]]],
    indent: str,
) -> str:
    """Render a multi-line element with one child per present field.

    Fields keep the given order; a field whose value is ``None`` or blank is
    left out entirely.
    """
    child_indent = indent + INDENT_UNIT
    lines = [f"{indent}<{tag}>"]
    for name, value in fields:
        if value is None or not str(value).strip():
            continue
        lines.append(f"{child_indent}{element(name, str(value).strip())}")
    lines.append(f"{indent}</{tag}>")
    return "\n".join(lines) + "\n"


def render_dependency(dependency: Dependency, indent: str) -> str:
    return render_block("dependency", dependency.fields(), indent)


def marker_comment(marker: str) -> str:
    return f"# {marker}"


def render_properties_block(marker: str, lines: Iterable[str]) -> str:
    """Render a marker comment followed by ``key=value`` lines.

    The leading blank line separates the block from whatever precedes it.
    """
    body = [line.strip() for line in lines if line.strip()]
    return "\n".join(["", marker_comment(marker), *body]) + "\n"


__all__ = [
    "Dependency",
    "element",
    "marker_comment",
    "render_block",
    "render_dependency",
    "render_list_item",
    "render_properties_block",
]
