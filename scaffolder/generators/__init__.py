"""Built-in generators and discovery of generator plugins."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable

from ..config import ScaffolderDefaults
from ..rendering import TemplateRenderer
from .base import Generator, Step
from .eventbus import EventBusGenerator
from .lib import LibGenerator
from .module import ModuleGenerator
from .platform import PlatformGenerator
from .service import ServiceGenerator
from .usecase import UsecaseGenerator

_ENTRY_POINT_GROUP = "platform_scaffolder.generators"

GeneratorFactory = Callable[..., Generator]

_BUILTIN_FACTORIES: Dict[str, GeneratorFactory] = {
    "platform": PlatformGenerator,
    "lib": LibGenerator,
    "service": ServiceGenerator,
    "module": ModuleGenerator,
    "usecase": UsecaseGenerator,
    "eventbus": EventBusGenerator,
}


def discover_generators(
    defaults: ScaffolderDefaults | None = None,
    renderer: TemplateRenderer | None = None,
) -> Dict[str, Generator]:
    """Return generators keyed by name; plugins cannot shadow built-ins."""
    defaults = defaults or ScaffolderDefaults()
    renderer = renderer or TemplateRenderer()
    generators: Dict[str, Generator] = {}

    def _add(name: str, factory: GeneratorFactory) -> None:
        key = name.lower()
        if key in generators:
            return
        instance = factory(defaults=defaults, renderer=renderer)
        if not isinstance(instance, Generator):
            raise TypeError(f"Generator factory for '{name}' did not return a Generator instance")
        generators[key] = instance

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Failed to load generator entry point '{entry.name}': {exc}") from exc
        _add(entry.name, loaded)

    return generators


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "EventBusGenerator",
    "Generator",
    "LibGenerator",
    "ModuleGenerator",
    "PlatformGenerator",
    "ServiceGenerator",
    "Step",
    "UsecaseGenerator",
    "discover_generators",
]
