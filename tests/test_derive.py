import dataclasses
import typing
from typing import Annotated, Dict, List, Optional, Tuple

import pytest
from pydantic import BaseModel, Field
from typing_extensions import TypedDict

from camo.core.ast import (
    ArrayType,
    EnumItem,
    GenericParameter,
    NamedContent,
    StructItem,
    TypePath,
    UnitContent,
    UnnamedContent,
    Visibility,
)
from camo.core.exceptions import DeriveError, UnsupportedTypeError
from camo.core.rename import RenameRule
from camo.derive.declare import TaggedEnum, camo, declared_attributes, is_declared, variant
from camo.derive.derive import derive, derive_type
from camo.shapes import records, tagging


def _field_names(container):
    return [f.name for f in container.item.content.fields]


def test_model_fields_use_wire_names():
    container = derive(tagging.Foo)

    assert isinstance(container.item, StructItem)
    assert container.item.name == "Foo"
    assert _field_names(container) == ["fieldOne", "fieldTwo", "fieldThree", "fieldFour"]
    assert container.item.content.fields[3].ty == ArrayType(element=TypePath.of("float"))


def test_nested_model_is_referenced_by_name():
    container = derive(records.Bar)

    assert _field_names(container) == ["field_four", "field_five"]
    assert container.item.content.fields[1].ty == TypePath.of("Foo")


def test_explicit_field_alias_wins():
    @camo
    class User(BaseModel):
        user_id: int = Field(alias="id")

    assert _field_names(derive(User)) == ["id"]


def test_root_model_becomes_newtype():
    container = derive(tagging.NewType)

    assert container.item.content == UnnamedContent(ty=TypePath.of("float"))
    assert container.item.parameters == []


def test_generic_root_model_keeps_its_parameter():
    container = derive(tagging.Generic)

    assert container.item.name == "Generic"
    assert container.item.parameters == [GenericParameter(name="T")]
    assert container.item.content == UnnamedContent(ty=TypePath.of("T"))


def test_typing_newtype():
    UserId = typing.NewType("UserId", str)

    container = derive(UserId)

    assert container.item.name == "UserId"
    assert container.item.content == UnnamedContent(ty=TypePath.of("str"))


def test_dataclass_and_typeddict():
    @dataclasses.dataclass
    class Point:
        x: float
        y: float

    class Label(TypedDict):
        text: str
        points: Tuple[Point, ...]

    assert _field_names(derive(Point)) == ["x", "y"]
    label = derive(Label)
    assert _field_names(label) == ["text", "points"]
    assert label.item.content.fields[1].ty == ArrayType(element=TypePath.of("Point"))


def test_enum_variants_in_declaration_order():
    container = derive(tagging.InternallyTagged)
    item = container.item

    assert isinstance(item, EnumItem)
    assert container.attributes.tag == "type"
    assert container.attributes.rename_all is RenameRule.CAMEL_CASE
    assert [v.name for v in item.variants] == ["FirstVariant", "SecondVariant"]
    assert item.variants[0].content == UnnamedContent(ty=TypePath.of("Foo"))
    assert isinstance(item.variants[1].content, NamedContent)
    assert [f.name for f in item.variants[1].content.fields] == ["name", "value"]


def test_unit_variant_and_variant_attributes():
    class Shape(TaggedEnum):
        Empty: None
        Circle: Annotated[float, variant(rename="snake_case")]

    variants = derive(Shape).item.variants

    assert variants[0].content == UnitContent()
    assert variants[1].attributes.rename is RenameRule.SNAKE_CASE
    assert variants[1].content == UnnamedContent(ty=TypePath.of("float"))


def test_export_flag_sets_visibility():
    @camo(export=True)
    class Visible(BaseModel):
        x: int

    assert derive(Visible).item.visibility is Visibility.PUB
    assert derive(tagging.Foo).item.visibility is Visibility.NONE


def test_declarations_are_not_inherited():
    class Child(tagging.Foo):
        pass

    assert is_declared(tagging.Foo)
    assert not is_declared(Child)
    assert declared_attributes(Child).rename_all is None


@pytest.mark.parametrize("annotation", [Optional[str], Dict[str, int], Tuple[int, str], typing.Any])
def test_unsupported_annotations(annotation):
    with pytest.raises(UnsupportedTypeError, match="where"):
        derive_type(annotation, where="Model.field")


def test_unsupported_field_names_its_location():
    class Broken(BaseModel):
        maybe: Optional[int] = None

    with pytest.raises(UnsupportedTypeError) as exc:
        derive(Broken)

    assert exc.value.details["where"] == "Broken.maybe"


def test_tag_on_a_struct_is_rejected():
    @camo(tag="type")
    class NotAnEnum(BaseModel):
        x: int

    with pytest.raises(DeriveError, match="only apply to TaggedEnum"):
        derive(NotAnEnum)


def test_invalid_attributes_are_rejected_at_declaration():
    with pytest.raises(DeriveError, match="Invalid container attributes"):
        camo(content="value")

    with pytest.raises(DeriveError, match="Invalid container attributes"):
        camo(rename_all="Title Case")


def test_camo_only_decorates_classes():
    with pytest.raises(DeriveError, match="only decorate classes"):
        camo(lambda: None)


def test_plain_classes_are_not_declarations():
    class Plain:
        x: int

    with pytest.raises(DeriveError, match="is not a TaggedEnum"):
        derive(Plain)


def test_list_annotation_of_models():
    assert derive_type(List[records.Foo]) == ArrayType(element=TypePath.of("Foo"))
