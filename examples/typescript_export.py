"""
Example: Exporting TypeScript declarations and validating values.

This shows the two halves of a declaration:
- Export time: Python classes become `interface`/`type` declarations
- Run time: the same classes validate JSON coming back from the front end
"""

from camo.exporter import DefinitionExporter, collect_declarations
from camo.shapes import records, tagging


# =============================================================================
# Example 1: Write a module's declarations to a .ts file
# =============================================================================
exporter = DefinitionExporter("typescript")

out = exporter.write(collect_declarations(tagging), "build/types.ts")
print(f"Wrote {out}")


# =============================================================================
# Example 2: Validate incoming payloads against the same declarations
# =============================================================================
event = tagging.AdjacentlyTagged.validate(
    {"type": "secondVariant", "value": {"values": [1, 2, 3]}}
)
print(f"Validated: {tagging.AdjacentlyTagged.dump(event)}")

for payload in ({"field_one": 1, "field_two": True, "field_three": "x"}, 4.5, "Simple"):
    print(f"FooOrBar accepts {payload!r}: {records.FooOrBar.validate(payload)!r}")


# =============================================================================
# Example 3: Config-driven export from a build script
# =============================================================================
"""
# camo.json:
{
    "name": "frontend-types",
    "modules": ["camo.shapes.tagging"],
    "targets": ["camo.shapes.records:FooOrBar"],
    "export_all": true,
    "output": "web/src/types.ts"
}

# shell:
camo validate camo.json
camo run camo.json

# or without a config file:
camo export camo.shapes.tagging --export-all -o web/src/types.ts
"""
