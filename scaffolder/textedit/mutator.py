"""Idempotent insertion of entries into manifest text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from ..logging import get_logger
from .fragments import (
    Dependency,
    element,
    marker_comment,
    render_dependency,
    render_list_item,
    render_properties_block,
)
from .region import (
    DEPS_MARKERS,
    MANAGED_DEPS_ANCHOR,
    MODULES_ANCHOR,
    MODULES_MARKERS,
    PLAIN_DEPS_ANCHOR,
    Region,
    locate,
)

_LOGGER = get_logger("textedit")

MODULE_ENTRY_PREFIXES = ("<module>", "<!--")
DEPENDENCY_ENTRY_PREFIXES = ("<dependency>", "</dependency>", "<!--")
DEFAULT_MODULE_INDENT = "    "
DEFAULT_DEPENDENCY_INDENT = "      "


class InsertionOutcome(str, Enum):
    """Result of an idempotent insertion attempt."""

    ALREADY_PRESENT = "already-present"
    INSERTED = "inserted"
    UNSUPPORTED = "unsupported"


class DependencyRegion(str, Enum):
    """Which dependency list of a pom receives a new entry."""

    MANAGED = "managed"
    PLAIN = "plain"


@dataclass(frozen=True)
class EntityKey:
    """Literal substrings that together identify an entity inside a document."""

    needles: Tuple[str, ...]

    def found_in(self, document: str) -> bool:
        return all(needle in document for needle in self.needles)

    @classmethod
    def module(cls, module_path: str) -> "EntityKey":
        return cls((element("module", module_path),))

    @classmethod
    def dependency(cls, dependency: Dependency) -> "EntityKey":
        # groupId and artifactId are matched independently, not as one block.
        return cls(
            (
                element("groupId", dependency.group_id),
                element("artifactId", dependency.artifact_id),
            )
        )

    @classmethod
    def properties(cls, marker: str) -> "EntityKey":
        return cls((marker_comment(marker),))


@dataclass(frozen=True)
class Mutation:
    """A document after an insertion attempt together with its outcome."""

    document: str
    outcome: InsertionOutcome
    region: Optional[Region] = None

    @property
    def changed(self) -> bool:
        return self.outcome is InsertionOutcome.INSERTED


def line_ending(document: str) -> str:
    """``\\r\\n`` for documents that already use it, otherwise ``\\n``."""
    return "\r\n" if "\r\n" in document else "\n"


def splice(document: str, offset: int, fragment: str) -> str:
    """Insert ``fragment`` at ``offset`` leaving every other byte untouched.

    Fragments are rendered with ``\\n`` and take on the document's line ending.
    """
    newline = line_ending(document)
    if newline != "\n":
        fragment = fragment.replace("\n", newline)
    if offset > 0 and document[offset - 1] != "\n":
        fragment = newline + fragment
    return document[:offset] + fragment + document[offset:]


def mutate(
    document: str,
    key: EntityKey,
    render: Callable[[str], str],
    locator: Callable[[str], Optional[Region]],
) -> Mutation:
    """Insert the fragment produced by ``render`` unless ``key`` already matches."""
    if key.found_in(document):
        return Mutation(document, InsertionOutcome.ALREADY_PRESENT)

    region = locator(document)
    if region is None:
        _LOGGER.debug("No marker pair or anchor found for %s", key.needles)
        return Mutation(document, InsertionOutcome.UNSUPPORTED)

    _LOGGER.debug("Inserting %s via %s at offset %d", key.needles, region.via, region.offset)
    updated = splice(document, region.offset, render(region.indent))
    return Mutation(updated, InsertionOutcome.INSERTED, region)


def insert_module(document: str, module_path: str) -> Mutation:
    """Add ``<module>module_path</module>`` to an aggregator pom."""
    return mutate(
        document,
        EntityKey.module(module_path),
        lambda indent: render_list_item("module", module_path, indent),
        lambda text: locate(
            text,
            MODULES_MARKERS,
            MODULES_ANCHOR,
            entry_prefixes=MODULE_ENTRY_PREFIXES,
            default_indent=DEFAULT_MODULE_INDENT,
        ),
    )


def insert_dependency(
    document: str,
    dependency: Dependency,
    region: DependencyRegion = DependencyRegion.MANAGED,
) -> Mutation:
    """Add a ``<dependency>`` block to a BOM or to a project's dependency list."""
    anchor = MANAGED_DEPS_ANCHOR if region is DependencyRegion.MANAGED else PLAIN_DEPS_ANCHOR
    return mutate(
        document,
        EntityKey.dependency(dependency),
        lambda indent: render_dependency(dependency, indent),
        lambda text: locate(
            text,
            DEPS_MARKERS,
            anchor,
            entry_prefixes=DEPENDENCY_ENTRY_PREFIXES,
            default_indent=DEFAULT_DEPENDENCY_INDENT,
        ),
    )


def append_properties(document: str, marker: str, lines: Iterable[str]) -> Mutation:
    """Append a marker-tagged block of ``key=value`` lines at the end of the document."""
    block = render_properties_block(marker, lines)
    if not document:
        block = block.lstrip("\n")
    return mutate(
        document,
        EntityKey.properties(marker),
        lambda _indent: block,
        lambda text: Region(offset=len(text), indent="", via="append"),
    )


__all__ = [
    "DependencyRegion",
    "EntityKey",
    "InsertionOutcome",
    "Mutation",
    "append_properties",
    "insert_dependency",
    "insert_module",
    "line_ending",
    "mutate",
    "splice",
]
