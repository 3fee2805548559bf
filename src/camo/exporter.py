from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional, Sequence, Union

from camo.backends.registry import BackendRegistry
from camo.bootstrap import load_builtin_backends, load_modules, resolve_target
from camo.core.ast import Container, Visibility
from camo.core.exceptions import DuplicateNameHandler, DuplicatePolicy, ExportError
from camo.core.logger import configure_logging, get_logger, push_export_module, reset_export_module
from camo.core.rename import rename_type
from camo.derive.declare import is_declared
from camo.derive.derive import derive
from camo.models.export_config import ExportConfig
from camo.typescript.ast import Definition
from camo.typescript.convert import from_container

logger = get_logger(__name__)


def collect_declarations(module: ModuleType) -> List[type]:
    """The `@camo` classes defined in `module`, in definition order.

    Declarations merely imported into the module are not included.
    """
    found: List[type] = []
    seen: set = set()
    for obj in vars(module).values():
        if not is_declared(obj) or obj.__module__ != module.__name__ or id(obj) in seen:
            continue
        seen.add(id(obj))
        found.append(obj)
    return found


def export(*targets: Any) -> List[Definition]:
    """TypeScript definitions for `targets`, in order."""
    return [from_container(derive(t)) for t in targets]


def _origin(target: Any) -> str:
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", repr(target))
    return f"{getattr(target, '__module__', '?')}:{name}"


def _exported(container: Container) -> Container:
    item = container.item.model_copy(update={"visibility": Visibility.PUB})
    return container.model_copy(update={"item": item})


def _write_text(path: Union[str, Path], text: str) -> Path:
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Cannot write {out}: {exc}") from exc
    return out


@dataclass
class ExportResult:
    name: str
    backend: str
    output: Optional[str]
    declarations: List[str] = field(default_factory=list)
    text: str = ""


class DefinitionExporter:
    """
    Derives declarations and renders them with one backend.

    Example:
        >>> from camo.exporter import DefinitionExporter
        >>> exporter = DefinitionExporter("typescript")
        >>> print(exporter.render([Foo, Bar]))
    """

    def __init__(
        self,
        backend: str = "typescript",
        *,
        duplicate_policy: Union[DuplicatePolicy, str] = DuplicatePolicy.FAIL,
        export_all: bool = False,
    ):
        load_builtin_backends()
        self.backend_name = backend
        self.backend = BackendRegistry.get(backend)()
        self.duplicates = DuplicateNameHandler(policy=DuplicatePolicy(duplicate_policy), logger=logger)
        self.export_all = export_all

    def containers(self, targets: Sequence[Any]) -> List[Container]:
        containers: List[Container] = []
        seen: Dict[str, str] = {}
        for target in targets:
            container = derive(target)
            if self.export_all:
                container = _exported(container)
            name = rename_type(container.attributes.rename, container.item.name)
            origin = _origin(target)
            if name in seen:
                keep = self.duplicates.handle(name, details={"first": seen[name], "duplicate": origin})
                if not keep:
                    logger.info(f"Skipping {origin}: {name!r} already exported from {seen[name]}")
                    continue
            else:
                seen[name] = origin
            containers.append(container)
        return containers

    def render(self, targets: Sequence[Any]) -> str:
        return self.backend.render(self.containers(targets))

    def write(self, targets: Sequence[Any], path: Union[str, Path]) -> Path:
        out = _write_text(path, self.render(targets))
        logger.info(f"Wrote {out}")
        return out

    def run(self, cfg: Union[Dict[str, Any], ExportConfig]) -> ExportResult:
        """
        Collect, derive, render and (optionally) write everything `cfg` names.

        Args:
            cfg: Export configuration as either a dict (validated here) or
                an `ExportConfig` model.

        Returns:
            ExportResult with the rendered text and the exported names.

        Raises:
            ValidationError: If a config dict is invalid.
            ExportError: If a module or target cannot be loaded, or a
                duplicate name is hit under the `fail` policy.
        """
        config = cfg if isinstance(cfg, ExportConfig) else ExportConfig.model_validate(cfg)
        configure_logging(config.log_level)

        targets: List[Any] = []
        for module in load_modules(config.modules):
            token = push_export_module(module.__name__)
            try:
                declarations = collect_declarations(module)
                logger.info(f"Collected {len(declarations)} declarations")
            finally:
                reset_export_module(token)
            targets.extend(declarations)
        targets.extend(resolve_target(t) for t in config.targets)

        containers = self.containers(targets)
        text = self.backend.render(containers)
        if config.output:
            out = _write_text(config.output, text)
            logger.info(f"Wrote {len(containers)} declarations to {out}")

        return ExportResult(
            name=config.name,
            backend=self.backend_name,
            output=config.output,
            declarations=[c.item.name for c in containers],
            text=text,
        )


def run_export(cfg: Union[Dict[str, Any], ExportConfig]) -> ExportResult:
    """Build an exporter from `cfg` and run it."""
    config = cfg if isinstance(cfg, ExportConfig) else ExportConfig.model_validate(cfg)
    exporter = DefinitionExporter(
        config.backend,
        duplicate_policy=config.duplicate_policy,
        export_all=config.export_all,
    )
    return exporter.run(config)
