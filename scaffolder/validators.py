"""Answer validators; each returns ``None`` when valid or a message for the user."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

_ARTIFACT_ID = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")
_JAVA_PACKAGE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$")
_JAVA_IDENTIFIER = re.compile(r"^[a-z][a-z0-9]*$")

_JAVA_RESERVED = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "final", "finally", "float", "for", "goto", "if", "implements",
        "import", "instanceof", "int", "interface", "long", "native", "new",
        "package", "private", "protected", "public", "return", "short", "static",
        "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "try", "void", "volatile", "while", "true", "false", "null",
    }
)


def validate_artifact_id(value: object) -> Optional[str]:
    text = str(value or "").strip()
    if not text:
        return "Required"
    if not _ARTIFACT_ID.match(text):
        return "Use kebab-case: a-z, 0-9, '-' (must start with a letter)"
    if "--" in text:
        return "Avoid double dashes"
    return None


def validate_java_package(value: object) -> Optional[str]:
    text = str(value or "").strip()
    if not text:
        return "Required"
    if not _JAVA_PACKAGE.match(text):
        return "Invalid Java package (lowercase dotted), e.g. com.acme.myservice"
    reserved = [segment for segment in text.split(".") if segment in _JAVA_RESERVED]
    if reserved:
        return f"Java reserved word used as package segment: {reserved[0]}"
    return None


def validate_java_identifier(value: object) -> Optional[str]:
    """Single lowercase package segment, e.g. ``identity`` or ``issueotp``."""
    text = str(value or "").strip()
    if not text:
        return "Required"
    if not _JAVA_IDENTIFIER.match(text):
        return "Use lowercase letters and digits only (must start with a letter)"
    if text in _JAVA_RESERVED:
        return f"'{text}' is a reserved word"
    return None


def validate_root_path(value: object) -> Optional[str]:
    root = Path(str(value or ".")).expanduser().resolve()
    if not (root / "pom.xml").exists():
        return f"No pom.xml found at: {root}"
    return None


def validate_new_root_path(value: object) -> Optional[str]:
    root = Path(str(value or ".")).expanduser().resolve()
    if (root / "pom.xml").exists():
        return f"pom.xml already exists at: {root}"
    return None


__all__ = [
    "validate_artifact_id",
    "validate_java_identifier",
    "validate_java_package",
    "validate_new_root_path",
    "validate_root_path",
]
