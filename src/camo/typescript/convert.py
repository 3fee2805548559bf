"""
Convert syntax-tree containers into TypeScript definitions.

Enums become unions whose variants follow the container's tagging style:

    style       unit              newtype(T)                  named fields
    external    "V"               { V: T; }                   { V: { ... }; }
    internal    { tag: "V"; }     { tag: "V"; } & T           { tag: "V"; } & { ... }
    adjacent    { tag: "V"; }     { tag: "V"; content: T; }   { tag: "V"; content: { ... }; }
    untagged    "V"               T                           { ... }
"""

from __future__ import annotations

from typing import List, Optional

from camo.core import ast as core
from camo.core.rename import RenameRule, rename_field, rename_type
from camo.typescript.ast import (
    AliasType,
    ArrayType,
    BuiltinType,
    Definition,
    Field,
    Interface,
    IntersectionType,
    LiteralType,
    ObjectType,
    PathSegment,
    TsType,
    TypePath,
    UnionType,
)

_BUILTINS = {
    core.BuiltinType.BOOL: BuiltinType.BOOLEAN,
    core.BuiltinType.INT: BuiltinType.NUMBER,
    core.BuiltinType.FLOAT: BuiltinType.NUMBER,
    core.BuiltinType.STR: BuiltinType.STRING,
}


def convert_type(ty: core.Type) -> TsType:
    if isinstance(ty, core.ArrayType):
        return ArrayType(element=convert_type(ty.element))
    builtin = core.BuiltinType.from_path(ty)
    if builtin is not None:
        return _BUILTINS[builtin]
    return TypePath(
        segments=[
            PathSegment(name=s.name, arguments=[convert_type(a) for a in s.arguments])
            for s in ty.segments
        ]
    )


def _fields(fields: List[core.NamedField], rule: Optional[RenameRule]) -> List[Field]:
    return [Field(name=rename_field(rule, f.name), ty=convert_type(f.ty)) for f in fields]


def _tag_field(tag: str, value: str) -> Field:
    return Field(name=tag, ty=LiteralType(value))


def _externally_tagged(name: str, variant: core.Variant) -> TsType:
    content = variant.content
    if isinstance(content, core.UnitContent):
        return LiteralType(name)
    if isinstance(content, core.UnnamedContent):
        return ObjectType([Field(name=name, ty=convert_type(content.ty))])
    inner = ObjectType(_fields(content.fields, variant.attributes.rename_all))
    return ObjectType([Field(name=name, ty=inner)])


def _internally_tagged(name: str, tag: str, variant: core.Variant) -> TsType:
    content = variant.content
    tagged = ObjectType([_tag_field(tag, name)])
    if isinstance(content, core.UnitContent):
        return tagged
    if isinstance(content, core.UnnamedContent):
        return IntersectionType(left=tagged, right=convert_type(content.ty))
    inner = ObjectType(_fields(content.fields, variant.attributes.rename_all))
    return IntersectionType(left=tagged, right=inner)


def _adjacently_tagged(name: str, tag: str, content_key: str, variant: core.Variant) -> TsType:
    content = variant.content
    if isinstance(content, core.UnitContent):
        return ObjectType([_tag_field(tag, name)])
    if isinstance(content, core.UnnamedContent):
        payload: TsType = convert_type(content.ty)
    else:
        payload = ObjectType(_fields(content.fields, variant.attributes.rename_all))
    return ObjectType([_tag_field(tag, name), Field(name=content_key, ty=payload)])


def _untagged(name: str, variant: core.Variant) -> TsType:
    content = variant.content
    if isinstance(content, core.UnitContent):
        return LiteralType(name)
    if isinstance(content, core.UnnamedContent):
        return convert_type(content.ty)
    return ObjectType(_fields(content.fields, variant.attributes.rename_all))


def convert_variant(attributes: core.ContainerAttributes, variant: core.Variant) -> TsType:
    name = variant.tag_value(attributes.rename_all)
    if attributes.untagged:
        return _untagged(name, variant)
    if attributes.tag is None:
        return _externally_tagged(name, variant)
    if attributes.content is None:
        return _internally_tagged(name, attributes.tag, variant)
    return _adjacently_tagged(name, attributes.tag, attributes.content, variant)


def from_container(container: core.Container) -> Definition:
    """Build the TypeScript definition for one declaration."""
    attributes = container.attributes
    item = container.item
    name = rename_type(attributes.rename, item.name)
    parameters = [p.name for p in item.parameters]
    export = item.visibility == core.Visibility.PUB

    if isinstance(item, core.EnumItem):
        return UnionType(
            name=name,
            variants=[convert_variant(attributes, v) for v in item.variants],
            parameters=parameters,
            export=export,
        )

    if isinstance(item.content, core.UnnamedContent):
        return AliasType(
            name=name,
            ty=convert_type(item.content.ty),
            parameters=parameters,
            export=export,
        )

    return Interface(
        name=name,
        fields=_fields(item.content.fields, attributes.rename_all),
        parameters=parameters,
        export=export,
    )


def render(definitions: List[Definition]) -> str:
    """Render definitions the way they are written to a `.ts` file."""
    return "".join(f"{d}\n" for d in definitions)
