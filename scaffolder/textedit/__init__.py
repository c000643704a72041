"""Idempotent text edits for Maven manifests and properties files."""

from .fragments import Dependency
from .materializer import (
    PomCoordinates,
    append_property_lines,
    ensure_dependencies_section,
    insert_dependency_entry,
    insert_module_entry,
    read_pom_coordinates,
    read_pom_property,
    write_if_absent,
)
from .mutator import DependencyRegion, EntityKey, InsertionOutcome, Mutation, mutate
from .region import Anchor, MarkerPair, Region, locate

__all__ = [
    "Anchor",
    "Dependency",
    "DependencyRegion",
    "EntityKey",
    "InsertionOutcome",
    "MarkerPair",
    "Mutation",
    "PomCoordinates",
    "Region",
    "append_property_lines",
    "ensure_dependencies_section",
    "insert_dependency_entry",
    "insert_module_entry",
    "locate",
    "mutate",
    "read_pom_coordinates",
    "read_pom_property",
    "write_if_absent",
]
