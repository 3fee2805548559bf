from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Optional, Protocol, Sequence, Type

from camo.core.ast import Container
from camo.core.exceptions import BackendRegistryError


class Backend(Protocol):
    """Renders derived containers as text in some target language."""

    suffix: str

    def render(self, containers: Sequence[Container]) -> str: ...


class BackendRegistry:
    _registry: ClassVar[Dict[str, Type[Any]]] = {}

    @classmethod
    def register(
        cls,
        *,
        name: str,
        backend_class: Type[Any],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and name in cls._registry:
            existing = cls._registry[name]
            raise BackendRegistryError(
                f"Backend already registered for name={name!r}: {existing}"
            )
        cls._registry[name] = backend_class

    @classmethod
    def get(cls, name: str) -> Type[Any]:
        try:
            return cls._registry[name]
        except KeyError as exc:
            known = ", ".join(sorted(cls._registry)) or "<none>"
            raise BackendRegistryError(
                f"No backend registered for name={name!r} (registered: {known})"
            ) from exc

    @classmethod
    def try_get(cls, name: str) -> Optional[Type[Any]]:
        return cls._registry.get(name)

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_backend(
    *,
    name: str,
    overwrite: bool = False,
) -> Callable[[Type[Any]], Type[Any]]:
    def decorator(backend_class: Type[Any]) -> Type[Any]:
        BackendRegistry.register(name=name, backend_class=backend_class, overwrite=overwrite)
        return backend_class

    return decorator
