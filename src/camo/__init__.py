"""camo.

Camo - type declarations shared between Python and TypeScript.

Declare records and tagged unions once in Python (pydantic models,
dataclasses, TypedDicts and `TaggedEnum` subclasses marked with `@camo`),
validate values against them at runtime, and export matching TypeScript
`interface`/`type` declarations for the front end.

Public API for clients using this library in build scripts.
"""

from camo.derive.declare import TaggedEnum, camo, variant
from camo.derive.derive import derive
from camo.exporter import DefinitionExporter, collect_declarations, export
from camo.cli import main, validate_config

__version__ = "0.1.0"

__all__ = [
    "TaggedEnum",
    "camo",
    "variant",
    "derive",
    "export",
    "collect_declarations",
    "DefinitionExporter",
    "main",
    "validate_config",
]
