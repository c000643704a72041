"""Locate tool-writable regions inside semi-structured manifests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

INDENT_UNIT = "  "


@dataclass(frozen=True)
class MarkerPair:
    """Two sentinel comments bracketing a region the scaffolder may write into."""

    start: str
    end: str


@dataclass(frozen=True)
class Anchor:
    """Container tag pair used when a document carries no marker pair.

    ``within`` optionally names an element whose first occurrence must precede
    the open tag, e.g. ``<dependencyManagement>`` for BOM dependency lists.
    ``outside`` names elements whose nested open tags are skipped, which keeps
    a project's own ``<dependencies>`` apart from managed or plugin ones.
    """

    open_tag: str
    close_tag: str
    within: Optional[str] = None
    outside: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Region:
    """Insertion point and indentation resolved for a document."""

    offset: int
    indent: str
    via: str


MODULES_MARKERS = MarkerPair(
    start="<!-- scaffolder:modules:start -->",
    end="<!-- scaffolder:modules:end -->",
)
DEPS_MARKERS = MarkerPair(
    start="<!-- scaffolder:deps:start -->",
    end="<!-- scaffolder:deps:end -->",
)

MODULES_ANCHOR = Anchor("<modules>", "</modules>")
MANAGED_DEPS_ANCHOR = Anchor("<dependencies>", "</dependencies>", within="<dependencyManagement>")
PLAIN_DEPS_ANCHOR = Anchor(
    "<dependencies>",
    "</dependencies>",
    outside=("dependencyManagement", "build", "profiles"),
)


def locate(
    document: str,
    markers: Optional[MarkerPair],
    anchor: Optional[Anchor],
    *,
    entry_prefixes: Sequence[str],
    default_indent: str,
) -> Optional[Region]:
    """Return where a new entry belongs, or ``None`` when the shape is unsupported."""
    if markers is not None:
        region = _locate_markers(document, markers, entry_prefixes, default_indent)
        if region is not None:
            return region
    if anchor is not None:
        return _locate_anchor(document, anchor, entry_prefixes, default_indent)
    return None


def _locate_markers(
    document: str,
    markers: MarkerPair,
    entry_prefixes: Sequence[str],
    default_indent: str,
) -> Optional[Region]:
    start_idx = document.find(markers.start)
    end_idx = document.find(markers.end)
    if start_idx == -1 or end_idx == -1 or end_idx <= start_idx:
        return None

    offset = _insertion_offset(document, end_idx)
    inner = document[_line_start(document, start_idx):offset]
    previous = _last_nonblank_line(inner)
    indent: Optional[str] = None
    if previous is not None and previous.lstrip().startswith(tuple(entry_prefixes)):
        indent = _leading_whitespace(previous)
    if indent is None:
        indent = _own_line_indent(document, start_idx)
    if indent is None:
        indent = _own_line_indent(document, end_idx)
    return Region(offset=offset, indent=indent if indent is not None else default_indent, via="marker")


def _locate_anchor(
    document: str,
    anchor: Anchor,
    entry_prefixes: Sequence[str],
    default_indent: str,
) -> Optional[Region]:
    found = find_anchor(document, anchor)
    if found is None:
        return None
    open_idx, close_idx = found

    offset = _insertion_offset(document, close_idx)
    between = document[open_idx + len(anchor.open_tag):offset]
    indent = _sibling_indent(between, entry_prefixes)
    if indent is None:
        close_indent = _own_line_indent(document, close_idx)
        if close_indent is not None:
            indent = close_indent + INDENT_UNIT
    return Region(offset=offset, indent=indent if indent is not None else default_indent, via="anchor")


def find_anchor(document: str, anchor: Anchor) -> Optional[Tuple[int, int]]:
    """Indices of the anchor's open and close tags, or ``None`` when either is missing."""
    search_from = 0
    if anchor.within is not None:
        search_from = document.find(anchor.within)
        if search_from == -1:
            return None
    excluded = _element_spans(document, anchor.outside)
    open_idx = document.find(anchor.open_tag, search_from)
    while open_idx != -1 and any(start <= open_idx < end for start, end in excluded):
        open_idx = document.find(anchor.open_tag, open_idx + len(anchor.open_tag))
    if open_idx == -1:
        return None
    close_idx = document.find(anchor.close_tag, open_idx + len(anchor.open_tag))
    if close_idx == -1:
        return None
    return open_idx, close_idx


def _element_spans(document: str, names: Sequence[str]) -> List[Tuple[int, int]]:
    spans: List[Tuple[int, int]] = []
    for name in names:
        open_tag, close_tag = f"<{name}>", f"</{name}>"
        start = document.find(open_tag)
        while start != -1:
            end = document.find(close_tag, start)
            # An unclosed element runs to the end of the document.
            end = len(document) if end == -1 else end + len(close_tag)
            spans.append((start, end))
            start = document.find(open_tag, end)
    return spans


def _line_start(document: str, index: int) -> int:
    return document.rfind("\n", 0, index) + 1


def _insertion_offset(document: str, index: int) -> int:
    """Start of the line holding ``index`` when only whitespace precedes it there."""
    line_start = _line_start(document, index)
    if document[line_start:index].strip():
        return index
    return line_start


def _own_line_indent(document: str, index: int) -> Optional[str]:
    line_start = _line_start(document, index)
    prefix = document[line_start:index]
    if prefix.strip():
        return None
    return prefix


def _sibling_indent(text: str, entry_prefixes: Sequence[str]) -> Optional[str]:
    prefixes = tuple(entry_prefixes)
    for line in text.splitlines():
        if line.lstrip().startswith(prefixes):
            return _leading_whitespace(line)
    return None


def _last_nonblank_line(text: str) -> Optional[str]:
    for line in reversed(text.splitlines()):
        if line.strip():
            return line
    return None


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


__all__ = [
    "Anchor",
    "DEPS_MARKERS",
    "INDENT_UNIT",
    "MANAGED_DEPS_ANCHOR",
    "MODULES_ANCHOR",
    "MODULES_MARKERS",
    "MarkerPair",
    "PLAIN_DEPS_ANCHOR",
    "Region",
    "find_anchor",
    "locate",
]
