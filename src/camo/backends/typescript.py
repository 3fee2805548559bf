from __future__ import annotations

from typing import List, Sequence

from camo.backends.registry import register_backend
from camo.core.ast import Container
from camo.typescript.ast import Definition
from camo.typescript.convert import from_container, render


@register_backend(name="typescript")
class TypeScriptBackend:
    """Writes one `interface`/`type` declaration per container, blank-line separated."""

    suffix = ".ts"

    def definitions(self, containers: Sequence[Container]) -> List[Definition]:
        return [from_container(c) for c in containers]

    def render(self, containers: Sequence[Container]) -> str:
        return render(self.definitions(containers))
