"""Template rendering for generated files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from .config import ConfigError
from .naming import (
    java_package_to_path,
    now_iso_date,
    to_camel,
    to_java_package_safe,
    to_kebab,
    to_pascal,
)

TEMPLATES_DIR = Path(__file__).with_name("templates")


@dataclass(frozen=True)
class ManifestEntry:
    """One file a generator renders: template name and destination path pattern."""

    template: str
    path: str
    when: Optional[str] = None
    raw: bool = False


class TemplateRenderer:
    """Renders Jinja2 templates and per-generator file manifests."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._env.filters.update(
            kebab=to_kebab,
            pascal=to_pascal,
            camel=to_camel,
            java_package_safe=to_java_package_safe,
            java_package_path=java_package_to_path,
        )
        self._env.globals["now_iso_date"] = now_iso_date

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        try:
            return self._env.get_template(template).render(**context)
        except TemplateNotFound as exc:
            raise ConfigError(f"Template not found: {template}") from exc

    def render_string(self, text: str, context: Mapping[str, Any]) -> str:
        return self._env.from_string(text).render(**context)

    def read_raw(self, template: str) -> str:
        """Return a template's text without rendering it."""
        path = self.templates_dir / template
        if not path.is_file():
            raise ConfigError(f"Template not found: {template}")
        return path.read_text(encoding="utf-8")

    def load_manifest(self, name: str) -> List[ManifestEntry]:
        """Load ``manifests/<name>.yml`` listing the files a generator writes."""
        path = self.templates_dir / "manifests" / f"{name}.yml"
        if not path.is_file():
            raise ConfigError(f"Generator manifest not found: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise ConfigError(f"{path.name} must define a 'files' list")
        entries: List[ManifestEntry] = []
        for item in files:
            if not isinstance(item, dict) or "template" not in item or "path" not in item:
                raise ConfigError(f"{path.name}: every file needs 'template' and 'path'")
            entries.append(
                ManifestEntry(
                    template=str(item["template"]),
                    path=str(item["path"]),
                    when=str(item["when"]) if item.get("when") else None,
                    raw=bool(item.get("raw", False)),
                )
            )
        return entries

    def materialize(self, entry: ManifestEntry, context: Mapping[str, Any]) -> Dict[str, str]:
        """Resolve ``entry`` to ``{"path": ..., "content": ...}`` for ``context``."""
        content = self.read_raw(entry.template) if entry.raw else self.render(entry.template, context)
        return {"path": self.render_string(entry.path, context), "content": content}

    def is_enabled(self, entry: ManifestEntry, context: Mapping[str, Any]) -> bool:
        if entry.when is None:
            return True
        return bool(context.get(entry.when))


__all__ = ["ManifestEntry", "TEMPLATES_DIR", "TemplateRenderer"]
