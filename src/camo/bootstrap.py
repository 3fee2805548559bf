from __future__ import annotations

import importlib
import sys
from types import ModuleType
from typing import Any, Iterable, List

from camo.core.exceptions import ExportError


BUILTIN_BACKEND_MODULES: tuple[str, ...] = (
    "camo.backends.typescript",
    "camo.backends.json_ast",
)


_LOADED = False


def load_builtin_backends(*, reload: bool = False, modules: Iterable[str] = BUILTIN_BACKEND_MODULES) -> None:
    """Import built-in backend modules so decorators register them.

    In production, call with reload=False (default) so imports are cheap.
    In tests, call with reload=True after clearing the registry to re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from camo.backends.registry import BackendRegistry

        BackendRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True


def load_modules(module_names: Iterable[str]) -> List[ModuleType]:
    """Import the modules holding `@camo` declarations."""
    loaded: List[ModuleType] = []
    for module_name in module_names:
        try:
            loaded.append(importlib.import_module(module_name))
        except ImportError as exc:
            raise ExportError(f"Cannot import module {module_name!r}: {exc}") from exc
    return loaded


def resolve_target(reference: str) -> Any:
    """Resolve a `package.module:Name` reference to the object it names."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ExportError(f"Target {reference!r} must look like 'package.module:Name'")
    (module,) = load_modules([module_name])
    target: Any = module
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ExportError(f"{module_name!r} has no attribute {attr_path!r}") from exc
    return target
