"""
A camelCase record, the three tagged union styles, a newtype and a generic alias.

Exported with the TypeScript backend this module renders the `Foo`
interface followed by one `type` declaration per remaining class.
"""

import typing
from typing import List

from pydantic import BaseModel, ConfigDict, RootModel, StrictBool, StrictFloat, StrictStr
from pydantic.alias_generators import to_camel
from typing_extensions import TypedDict

from camo.derive.declare import TaggedEnum, camo

T = typing.TypeVar("T")


@camo
class Foo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    field_one: StrictFloat
    field_two: StrictBool
    field_three: StrictStr
    field_four: List[StrictFloat]


@camo(rename_all="camelCase")
class ExternallyTagged(TaggedEnum):
    FirstVariant: StrictStr
    SecondVariant: List[StrictFloat]


class NameValue(TypedDict):
    name: StrictStr
    value: StrictFloat


@camo(tag="type", rename_all="camelCase")
class InternallyTagged(TaggedEnum):
    FirstVariant: Foo
    SecondVariant: NameValue


class Values(TypedDict):
    values: List[StrictFloat]


@camo(tag="type", content="value", rename_all="camelCase")
class AdjacentlyTagged(TaggedEnum):
    FirstVariant: StrictStr
    SecondVariant: Values


@camo
class NewType(RootModel[StrictFloat]):
    pass


@camo
class Generic(RootModel[T], typing.Generic[T]):
    pass
