import pytest

from camo.backends.json_ast import load_containers
from camo.bootstrap import load_modules, resolve_target
from camo.core.exceptions import BackendRegistryError, DuplicateNameHandler, DuplicatePolicy, ExportError
from camo.exporter import DefinitionExporter, collect_declarations, export, run_export
from camo.shapes import records, tagging

TYPES_TS = (
    "interface Foo {\n"
    "\tfieldOne: number;\n"
    "\tfieldTwo: boolean;\n"
    "\tfieldThree: string;\n"
    "\tfieldFour: number[];\n"
    "}\n"
    "\n"
    "type ExternallyTagged =\n"
    "\t| { firstVariant: string; }\n"
    "\t| { secondVariant: number[]; };\n"
    "\n"
    "type InternallyTagged =\n"
    '\t| { type: "firstVariant"; } & Foo\n'
    '\t| { type: "secondVariant"; } & { name: string; value: number; };\n'
    "\n"
    "type AdjacentlyTagged =\n"
    '\t| { type: "firstVariant"; value: string; }\n'
    '\t| { type: "secondVariant"; value: { values: number[]; }; };\n'
    "\n"
    "type NewType = number;\n"
    "\n"
    "type Generic<T> = T;\n"
    "\n"
)


def test_collect_declarations_in_definition_order():
    assert collect_declarations(tagging) == [
        tagging.Foo,
        tagging.ExternallyTagged,
        tagging.InternallyTagged,
        tagging.AdjacentlyTagged,
        tagging.NewType,
        tagging.Generic,
    ]
    assert collect_declarations(records) == [records.Foo, records.Bar, records.FooOrBar]


def test_tagging_module_renders_types_ts():
    exporter = DefinitionExporter("typescript")

    assert exporter.render(collect_declarations(tagging)) == TYPES_TS


def test_export_returns_definitions():
    definitions = export(tagging.NewType, tagging.Generic)

    assert [str(d) for d in definitions] == ["type NewType = number;\n", "type Generic<T> = T;\n"]


def test_duplicate_names_fail_by_default():
    exporter = DefinitionExporter()

    with pytest.raises(ExportError, match="Duplicate exported name 'Foo'"):
        exporter.render([tagging.Foo, records.Foo])


def test_duplicate_names_skip_keeps_the_first():
    exporter = DefinitionExporter(duplicate_policy="skip")

    text = exporter.render([tagging.Foo, records.Foo])

    assert text.count("interface Foo") == 1
    assert "fieldOne" in text
    assert "field_one" not in text


def test_duplicate_names_warn_keeps_both():
    exporter = DefinitionExporter(duplicate_policy=DuplicatePolicy.WARN)

    text = exporter.render([tagging.Foo, records.Foo])

    assert text.count("interface Foo") == 2


def test_custom_duplicate_handler_decides():
    seen = []

    def keep_all(name, details):
        seen.append((name, details["duplicate"]))
        return True

    exporter = DefinitionExporter()
    exporter.duplicates = DuplicateNameHandler(custom_handler=keep_all)

    exporter.render([tagging.Foo, records.Foo])

    assert seen == [("Foo", "camo.shapes.records:Foo")]


def test_export_all_marks_every_declaration():
    text = DefinitionExporter(export_all=True).render([tagging.Foo, tagging.NewType])

    assert text == (
        "export interface Foo {\n"
        "\tfieldOne: number;\n"
        "\tfieldTwo: boolean;\n"
        "\tfieldThree: string;\n"
        "\tfieldFour: number[];\n"
        "}\n\n"
        "export type NewType = number;\n\n"
    )


def test_write_creates_parent_directories(tmp_path):
    out = DefinitionExporter().write([records.Foo], tmp_path / "web" / "types.ts")

    assert out.read_text() == (
        "interface Foo {\n"
        "\tfield_one: number;\n"
        "\tfield_two: boolean;\n"
        "\tfield_three: string;\n"
        "}\n\n"
    )


def test_unknown_backend():
    with pytest.raises(BackendRegistryError, match="No backend registered for name='flow'"):
        DefinitionExporter("flow")


def test_run_with_modules_and_targets(tmp_path):
    out = tmp_path / "records.ts"

    result = run_export(
        {
            "name": "records",
            "modules": ["camo.shapes.records"],
            "targets": ["camo.shapes.tagging:NewType"],
            "output": str(out),
        }
    )

    assert result.name == "records"
    assert result.backend == "typescript"
    assert result.declarations == ["Foo", "Bar", "FooOrBar", "NewType"]
    assert out.read_text() == result.text
    assert result.text.endswith("type NewType = number;\n\n")


def test_run_json_backend():
    result = run_export({"modules": ["camo.shapes.tagging"], "backend": "json"})

    containers = load_containers(result.text)

    assert result.output is None
    assert [c.name for c in containers] == [
        "Foo",
        "ExternallyTagged",
        "InternallyTagged",
        "AdjacentlyTagged",
        "NewType",
        "Generic",
    ]
    assert containers[2].attributes.tag == "type"


def test_missing_module_and_target():
    with pytest.raises(ExportError, match="Cannot import module"):
        load_modules(["camo.shapes.does_not_exist"])

    with pytest.raises(ExportError, match="has no attribute"):
        resolve_target("camo.shapes.records:Baz")

    with pytest.raises(ExportError, match="must look like"):
        resolve_target("camo.shapes.records")
