"""
Language-neutral syntax tree for declared types.

A `Container` is what the derive step produces for one declaration and what
every backend consumes. The tree is made of frozen pydantic models so it can
be dumped to JSON as-is (see the `json` backend and `camo inspect`).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from camo.core.rename import RenameRule, rename_type


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContainerAttributes(_Node):
    """Attributes placed on a declaration (serde container attributes)."""

    rename: Optional[RenameRule] = None
    rename_all: Optional[RenameRule] = None
    tag: Optional[str] = None
    content: Optional[str] = None
    untagged: bool = False

    @model_validator(mode="after")
    def _validate_tagging(self) -> "ContainerAttributes":
        if self.content is not None and self.tag is None:
            raise ValueError("content requires tag to be set")
        if self.untagged and (self.tag is not None or self.content is not None):
            raise ValueError("untagged cannot be combined with tag or content")
        if self.tag == "":
            raise ValueError("tag must not be empty")
        if self.content == "":
            raise ValueError("content must not be empty")
        return self


class VariantAttributes(_Node):
    """Attributes placed directly on an enum variant."""

    rename: Optional[RenameRule] = None
    rename_all: Optional[RenameRule] = None


class Visibility(str, Enum):
    NONE = "none"
    PUB = "pub"


class GenericParameter(_Node):
    name: str


class PathSegment(_Node):
    name: str
    arguments: List["Type"] = Field(default_factory=list)


class TypePath(_Node):
    """The name of a type declared elsewhere, e.g. `Foo` or `pkg.Wrapper[int]`."""

    kind: Literal["path"] = "path"
    segments: List[PathSegment]

    @classmethod
    def of(cls, *names: str, arguments: Optional[List["Type"]] = None) -> "TypePath":
        segments = [PathSegment(name=name) for name in names]
        if arguments:
            segments[-1] = PathSegment(name=names[-1], arguments=list(arguments))
        return cls(segments=segments)


class ArrayType(_Node):
    """A homogeneous sequence of `element`."""

    kind: Literal["array"] = "array"
    element: "Type"


Type = Annotated[Union[TypePath, ArrayType], Field(discriminator="kind")]


class BuiltinType(str, Enum):
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"

    @classmethod
    def from_path(cls, path: TypePath) -> Optional["BuiltinType"]:
        if len(path.segments) != 1:
            return None
        segment = path.segments[0]
        if segment.arguments:
            return None
        try:
            return cls(segment.name)
        except ValueError:
            return None


class NamedField(_Node):
    name: str
    ty: Type


class UnitContent(_Node):
    kind: Literal["unit"] = "unit"


class UnnamedContent(_Node):
    kind: Literal["unnamed"] = "unnamed"
    ty: Type


class NamedContent(_Node):
    kind: Literal["named"] = "named"
    fields: List[NamedField] = Field(default_factory=list)


StructContent = Annotated[Union[NamedContent, UnnamedContent], Field(discriminator="kind")]
VariantContent = Annotated[
    Union[UnitContent, UnnamedContent, NamedContent], Field(discriminator="kind")
]


class Variant(_Node):
    attributes: VariantAttributes = Field(default_factory=VariantAttributes)
    name: str
    content: VariantContent

    def tag_value(self, rename_all: Optional[RenameRule] = None) -> str:
        """The name the variant is tagged with once renaming rules are applied."""
        rule = self.attributes.rename if self.attributes.rename is not None else rename_all
        return rename_type(rule, self.name)


class StructItem(_Node):
    kind: Literal["struct"] = "struct"
    visibility: Visibility = Visibility.NONE
    name: str
    parameters: List[GenericParameter] = Field(default_factory=list)
    content: StructContent


class EnumItem(_Node):
    kind: Literal["enum"] = "enum"
    visibility: Visibility = Visibility.NONE
    name: str
    parameters: List[GenericParameter] = Field(default_factory=list)
    variants: List[Variant] = Field(default_factory=list)


Item = Annotated[Union[StructItem, EnumItem], Field(discriminator="kind")]


class Container(_Node):
    """A declaration together with its attributes."""

    attributes: ContainerAttributes = Field(default_factory=ContainerAttributes)
    item: Item

    @property
    def name(self) -> str:
        return self.item.name


for _model in (PathSegment, TypePath, ArrayType, NamedField, UnnamedContent, NamedContent,
               Variant, StructItem, EnumItem, Container):
    _model.model_rebuild()
