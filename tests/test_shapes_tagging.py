import pytest
from pydantic import ValidationError

from camo.shapes.tagging import AdjacentlyTagged, ExternallyTagged, Foo, Generic, InternallyTagged, NewType

FOO = {"fieldOne": 1.5, "fieldTwo": True, "fieldThree": "three", "fieldFour": [1, 2.5]}


def test_foo_reads_camel_case_keys():
    foo = Foo.model_validate(FOO)

    assert foo.field_one == 1.5
    assert foo.field_four == [1, 2.5]
    assert foo.model_dump(by_alias=True) == FOO


def test_foo_rejects_extra_and_snake_case_keys():
    with pytest.raises(ValidationError):
        Foo.model_validate({**FOO, "extra": 1})

    with pytest.raises(ValidationError):
        Foo.model_validate({"field_one": 1.5, "field_two": True, "field_three": "x", "field_four": []})


def test_externally_tagged_first_variant():
    value = ExternallyTagged.validate({"firstVariant": "x"})

    assert isinstance(value, ExternallyTagged.variant_type("firstVariant"))
    assert ExternallyTagged.dump(value) == {"firstVariant": "x"}


def test_externally_tagged_second_variant():
    value = ExternallyTagged.validate({"secondVariant": [1.0, 2.0]})

    assert isinstance(value, ExternallyTagged.variant_type("secondVariant"))
    assert ExternallyTagged.dump(value) == {"secondVariant": [1.0, 2.0]}


@pytest.mark.parametrize(
    "data",
    [
        {"firstVariant": "x", "secondVariant": [1.0]},
        {},
        {"thirdVariant": "x"},
        {"firstVariant": [1.0]},
        {"secondVariant": "x"},
        "firstVariant",
    ],
)
def test_externally_tagged_rejects(data):
    with pytest.raises(ValidationError):
        ExternallyTagged.validate(data)


def test_internally_tagged_first_variant_is_a_foo():
    value = InternallyTagged.validate({"type": "firstVariant", **FOO})

    assert isinstance(value, Foo)
    assert value.field_three == "three"
    assert InternallyTagged.dump(value) == {"type": "firstVariant", **FOO}


def test_internally_tagged_second_variant():
    value = InternallyTagged.validate({"type": "secondVariant", "name": "n", "value": 2})

    assert InternallyTagged.dump(value) == {"type": "secondVariant", "name": "n", "value": 2}


@pytest.mark.parametrize(
    "data",
    [
        FOO,
        {"type": "firstVariant", "name": "n", "value": 2},
        {"type": "secondVariant", **FOO},
        {"type": "firstVariant", **FOO, "name": "n"},
        {"type": "secondVariant", "name": "n"},
        {"type": "secondVariant", "name": "n", "value": 2, "extra": True},
        {"type": "FirstVariant", **FOO},
    ],
)
def test_internally_tagged_rejects(data):
    with pytest.raises(ValidationError):
        InternallyTagged.validate(data)


def test_adjacently_tagged_accepts_both_variants():
    first = AdjacentlyTagged.validate({"type": "firstVariant", "value": "x"})
    second = AdjacentlyTagged.validate({"type": "secondVariant", "value": {"values": [1, 2, 3]}})

    assert AdjacentlyTagged.dump(first) == {"type": "firstVariant", "value": "x"}
    assert AdjacentlyTagged.dump(second) == {"type": "secondVariant", "value": {"values": [1, 2, 3]}}


@pytest.mark.parametrize(
    "data",
    [
        {"type": "secondVariant", "value": "oops"},
        {"type": "firstVariant", "value": {"values": [1]}},
        {"type": "firstVariant"},
        {"type": "secondVariant", "value": {"values": [1], "extra": 2}},
        {"type": "firstVariant", "value": "x", "extra": 1},
        {"value": "x"},
    ],
)
def test_adjacently_tagged_rejects(data):
    with pytest.raises(ValidationError):
        AdjacentlyTagged.validate(data)


def test_adjacently_tagged_from_json():
    value = AdjacentlyTagged.validate_json('{"type": "firstVariant", "value": "x"}')

    assert AdjacentlyTagged.dump(value, mode="json") == {"type": "firstVariant", "value": "x"}


def test_new_type_accepts_numbers_only():
    assert NewType.model_validate(1.5).root == 1.5
    assert NewType.model_validate(2).root == 2
    assert NewType(3.0).model_dump() == 3.0

    with pytest.raises(ValidationError):
        NewType.model_validate("1.5")


def test_generic_reduces_to_its_parameter():
    assert Generic[str].model_validate("x").root == "x"
    assert Generic[str].model_validate("x").model_dump() == "x"

    with pytest.raises(ValidationError):
        Generic[str].model_validate(1)


def test_generic_over_foo():
    value = Generic[Foo].model_validate(FOO)

    assert isinstance(value.root, Foo)
    assert value.model_dump(by_alias=True) == FOO

    with pytest.raises(ValidationError):
        Generic[Foo].model_validate({**FOO, "extra": 1})


def test_tagged_enums_are_not_instantiable():
    with pytest.raises(TypeError, match="is a declaration"):
        ExternallyTagged()
