"""Plain snake_case records and an untagged union over them."""

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictStr

from camo.derive.declare import TaggedEnum, camo


@camo
class Foo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field_one: StrictFloat
    field_two: StrictBool
    field_three: StrictStr


@camo
class Bar(BaseModel):
    model_config = ConfigDict(extra="forbid")

    field_four: StrictFloat
    field_five: Foo


@camo(untagged=True)
class FooOrBar(TaggedEnum):
    Foo: Foo
    Bar: Bar
    Num: StrictFloat
    Simple: None
