"""
Runtime validation for `TaggedEnum` declarations.

`build_adapter` turns a declaration into a pydantic `TypeAdapter` whose
accepted wire shapes are exactly the ones the TypeScript backend renders
for the same declaration. Every variant record forbids unknown keys, so a
value always carries exactly the fields of one variant.
"""

from __future__ import annotations

import functools
import keyword
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, RootModel, Tag, TypeAdapter, create_model
from typing_extensions import is_typeddict

from camo.core.ast import ContainerAttributes
from camo.core.exceptions import DeriveError, UnsupportedTypeError
from camo.core.logger import get_logger
from camo.core.rename import RenameRule, rename_field
from camo.derive.declare import TaggedEnum
from camo.derive.derive import derive, is_unit, strip_annotated, wire_name

logger = get_logger(__name__)

_VARIANT_CONFIG = ConfigDict(extra="forbid")

FieldSpec = Tuple[Any, Any]


@dataclass(frozen=True)
class RuntimeEnum:
    """A built adapter together with the member type of each variant, by tag."""

    adapter: TypeAdapter
    members: Dict[str, Any]


def _python_name(wire: str, fallback: str, taken: set) -> str:
    name = wire
    if not wire.isidentifier() or keyword.iskeyword(wire) or wire.startswith("_"):
        name = fallback
    while name in taken:
        name += "_"
    return name


def _tag_field(tag: str, value: str) -> FieldSpec:
    return (Literal[value], Field(alias=tag))


def _model(name: str, fields: Dict[str, FieldSpec], base: Optional[type] = None) -> type:
    if base is None:
        return create_model(name, __config__=_VARIANT_CONFIG, **fields)
    return create_model(name, __base__=base, **fields)


def _named_fields(payload: type, rule: Optional[RenameRule]) -> Dict[str, FieldSpec]:
    hints = typing.get_type_hints(payload, include_extras=True)
    return {name: (hint, Field(alias=rename_field(rule, name))) for name, hint in hints.items()}


def _wire_names(fields: Dict[str, FieldSpec]) -> set:
    return {spec[1].alias or name for name, spec in fields.items()}


def _model_wire_names(model: type) -> set:
    return {wire_name(model, name) for name in model.model_fields}


class _VariantBuilder:
    def __init__(self, enum_cls: type, attributes: ContainerAttributes):
        self.enum_cls = enum_cls
        self.attributes = attributes

    def build(self, py_name: str, tag: str, payload: Any, rename_all: Optional[RenameRule]) -> Any:
        model_name = f"{self.enum_cls.__name__}{py_name}"
        bare = strip_annotated(payload)
        if is_unit(bare):
            kind = "unit"
        elif is_typeddict(bare):
            kind = "named"
        else:
            kind = "unnamed"

        attributes = self.attributes
        if attributes.untagged:
            return self._untagged(model_name, tag, kind, payload, bare, rename_all)
        if attributes.tag is None:
            return self._external(model_name, tag, kind, payload, bare, rename_all)
        if attributes.content is None:
            return self._internal(model_name, tag, kind, payload, bare, rename_all)
        return self._adjacent(model_name, tag, kind, payload, bare, rename_all)

    def _untagged(self, model_name, tag, kind, payload, bare, rename_all):
        if kind == "unit":
            return Literal[tag]
        if kind == "unnamed":
            return payload
        return _model(model_name, _named_fields(bare, rename_all))

    def _external(self, model_name, tag, kind, payload, bare, rename_all):
        if kind == "unit":
            return Literal[tag]
        if kind == "named":
            payload = _model(f"{model_name}Fields", _named_fields(bare, rename_all))
        key = _python_name(tag, "value", set())
        return _model(model_name, {key: (payload, Field(alias=tag))})

    def _internal(self, model_name, tag, kind, payload, bare, rename_all):
        tag_key = self.attributes.tag
        if kind == "unit":
            return _model(model_name, {_python_name(tag_key, "tag", set()): _tag_field(tag_key, tag)})

        if kind == "named":
            fields = _named_fields(bare, rename_all)
            if tag_key in _wire_names(fields):
                raise UnsupportedTypeError(
                    "Variant field clashes with the tag field",
                    details={"variant": model_name, "tag": tag_key},
                )
            key = _python_name(tag_key, "tag", set(fields))
            return _model(model_name, {key: _tag_field(tag_key, tag), **fields})

        if not (isinstance(bare, type) and issubclass(bare, BaseModel)) or issubclass(bare, RootModel):
            raise UnsupportedTypeError(
                "Internally tagged newtype variants must wrap a pydantic model",
                details={"variant": model_name, "payload": repr(payload)},
            )
        if tag_key in _model_wire_names(bare):
            raise UnsupportedTypeError(
                "Wrapped model already has a field named like the tag",
                details={"variant": model_name, "tag": tag_key},
            )
        key = _python_name(tag_key, "tag", set(bare.model_fields))
        return _model(model_name, {key: _tag_field(tag_key, tag)}, base=bare)

    def _adjacent(self, model_name, tag, kind, payload, bare, rename_all):
        tag_key = self.attributes.tag
        content_key = self.attributes.content
        fields: Dict[str, FieldSpec] = {_python_name(tag_key, "tag", set()): _tag_field(tag_key, tag)}
        if kind == "unit":
            return _model(model_name, fields)
        if kind == "named":
            payload = _model(f"{model_name}Fields", _named_fields(bare, rename_all))
        fields[_python_name(content_key, "content", set(fields))] = (payload, Field(alias=content_key))
        return _model(model_name, fields)


def _discriminator(attributes: ContainerAttributes, tags_by_type: Dict[type, str]):
    tag_key = attributes.tag

    def variant_tag(value: Any) -> Optional[str]:
        if isinstance(value, BaseModel):
            return tags_by_type.get(type(value))
        if tag_key is None:
            if isinstance(value, str):
                return value
            if isinstance(value, Mapping) and len(value) == 1:
                key = next(iter(value))
                return key if isinstance(key, str) else None
            return None
        if isinstance(value, Mapping):
            found = value.get(tag_key)
            return found if isinstance(found, str) else None
        return None

    return variant_tag


@functools.lru_cache(maxsize=None)
def runtime_enum(enum_cls: type) -> RuntimeEnum:
    """Build (once per class) the runtime validator of a `TaggedEnum`."""
    if not (isinstance(enum_cls, type) and issubclass(enum_cls, TaggedEnum)):
        raise DeriveError(f"{enum_cls!r} is not a TaggedEnum declaration")

    container = derive(enum_cls)
    attributes = container.attributes
    builder = _VariantBuilder(enum_cls, attributes)

    members: Dict[str, Any] = {}
    for variant, (py_name, payload, _) in zip(container.item.variants, enum_cls.variants()):
        tag = variant.tag_value(attributes.rename_all)
        if tag in members:
            raise DeriveError(f"{enum_cls.__name__}: two variants are tagged {tag!r}")
        members[tag] = builder.build(py_name, tag, payload, variant.attributes.rename_all)

    if not members:
        raise DeriveError(f"{enum_cls.__name__} declares no variants")

    if len(members) == 1:
        (only,) = members.values()
        return RuntimeEnum(adapter=TypeAdapter(only), members=members)

    if attributes.untagged:
        union: Any = Union[tuple(members.values())]
    else:
        tags_by_type = {m: t for t, m in members.items() if isinstance(m, type)}
        tagged: List[Any] = [typing.Annotated[m, Tag(t)] for t, m in members.items()]
        union = typing.Annotated[Union[tuple(tagged)], Discriminator(_discriminator(attributes, tags_by_type))]

    logger.debug(f"Built runtime adapter for {enum_cls.__name__} with variants {list(members)}")
    return RuntimeEnum(adapter=TypeAdapter(union), members=members)


def build_adapter(enum_cls: type) -> TypeAdapter:
    return runtime_enum(enum_cls).adapter


def variant_type(enum_cls: type, tag: str) -> Any:
    """The member type accepting the variant tagged `tag`."""
    members = runtime_enum(enum_cls).members
    try:
        return members[tag]
    except KeyError as exc:
        raise DeriveError(f"{enum_cls.__name__} has no variant tagged {tag!r}") from exc
