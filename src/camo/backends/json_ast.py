from __future__ import annotations

from typing import List, Sequence

from pydantic import TypeAdapter

from camo.backends.registry import register_backend
from camo.core.ast import Container

_CONTAINERS = TypeAdapter(List[Container])


@register_backend(name="json")
class JsonAstBackend:
    """Dumps the language-neutral syntax tree, for tooling in other languages."""

    suffix = ".json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, containers: Sequence[Container]) -> str:
        return _CONTAINERS.dump_json(list(containers), indent=self.indent).decode() + "\n"


def load_containers(text: str | bytes) -> List[Container]:
    """Read back the output of the json backend."""
    return _CONTAINERS.validate_json(text)
