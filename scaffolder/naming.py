"""Case conversions and Java naming helpers used by templates and generators."""

from __future__ import annotations

import re
from datetime import UTC, datetime

_SEPARATORS = re.compile(r"[_\s]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")


def to_kebab(value: str) -> str:
    """``"IssueOtp"`` -> ``"issue-otp"``."""
    text = _SEPARATORS.sub("-", str(value or "").strip())
    return _CAMEL_BOUNDARY.sub(r"\1-\2", text).lower()


def to_pascal(value: str) -> str:
    """``"issue-otp"`` -> ``"IssueOtp"``."""
    words = [word for word in _WORD_SPLIT.split(to_kebab(value)) if word]
    return "".join(word[:1].upper() + word[1:] for word in words)


def to_camel(value: str) -> str:
    pascal = to_pascal(value)
    return pascal[:1].lower() + pascal[1:]


def to_java_package_safe(value: str) -> str:
    """Lowercase alphanumerics only, suitable as a single package segment."""
    return re.sub(r"[^a-z0-9]", "", to_kebab(value).replace("-", ""))


def java_package_to_path(package: str) -> str:
    return str(package or "").strip().replace(".", "/")


def now_iso_date() -> str:
    return datetime.now(UTC).date().isoformat()


__all__ = [
    "java_package_to_path",
    "now_iso_date",
    "to_camel",
    "to_java_package_safe",
    "to_kebab",
    "to_pascal",
]
