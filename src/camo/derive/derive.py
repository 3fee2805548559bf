"""
Turn Python declarations into the language-neutral syntax tree.

Supported declarations:
- `TaggedEnum` subclasses become enums.
- pydantic `RootModel` subclasses and `typing.NewType`s become newtype structs.
- pydantic models, dataclasses and TypedDicts become structs with named fields.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import typing
from typing import Any, List

from pydantic import BaseModel, RootModel
from typing_extensions import is_typeddict

from camo.core.ast import (
    ArrayType,
    BuiltinType,
    Container,
    EnumItem,
    GenericParameter,
    NamedContent,
    NamedField,
    StructItem,
    Type,
    TypePath,
    UnitContent,
    UnnamedContent,
    Variant,
    Visibility,
)
from camo.core.exceptions import DeriveError, UnsupportedTypeError
from camo.core.logger import get_logger
from camo.derive.declare import (
    TaggedEnum,
    declared_attributes,
    declared_export,
    enum_variants,
)

logger = get_logger(__name__)

_BUILTINS = {
    bool: BuiltinType.BOOL,
    int: BuiltinType.INT,
    float: BuiltinType.FLOAT,
    str: BuiltinType.STR,
}

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


def strip_annotated(tp: Any) -> Any:
    while typing.get_origin(tp) is typing.Annotated:
        tp = tp.__origin__
    return tp


def is_unit(payload: Any) -> bool:
    return payload is None or payload is type(None)


def _pydantic_origin(tp: type) -> tuple[type | None, tuple]:
    meta = getattr(tp, "__pydantic_generic_metadata__", None) or {}
    return meta.get("origin"), tuple(meta.get("args") or ())


def derive_type(annotation: Any, *, where: str = "") -> Type:
    """Map a Python annotation onto a syntax-tree type."""
    tp = strip_annotated(annotation)

    if isinstance(tp, typing.ForwardRef):
        tp = tp.__forward_arg__
    if isinstance(tp, str):
        return TypePath.of(*tp.split("."))
    if isinstance(tp, type) and tp in _BUILTINS:
        return TypePath.of(_BUILTINS[tp].value)
    if isinstance(tp, typing.TypeVar):
        return TypePath.of(tp.__name__)
    if isinstance(tp, typing.NewType):
        return TypePath.of(tp.__name__)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin in _SEQUENCE_ORIGINS:
        if len(args) != 1:
            raise UnsupportedTypeError(
                "Sequence types need exactly one element type",
                details={"where": where, "annotation": repr(annotation)},
            )
        return ArrayType(element=derive_type(args[0], where=where))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ArrayType(element=derive_type(args[0], where=where))
        raise UnsupportedTypeError(
            "Only homogeneous tuples (tuple[X, ...]) are supported",
            details={"where": where, "annotation": repr(annotation)},
        )

    if isinstance(tp, type) and issubclass(tp, BaseModel):
        model_origin, model_args = _pydantic_origin(tp)
        if model_origin is not None:
            return TypePath.of(
                model_origin.__name__,
                arguments=[derive_type(a, where=where) for a in model_args],
            )
        return TypePath.of(tp.__name__)

    if isinstance(origin, type) and not _is_stdlib(origin):
        return TypePath.of(origin.__name__, arguments=[derive_type(a, where=where) for a in args])

    if isinstance(tp, type) and origin is None and not _is_stdlib(tp):
        return TypePath.of(tp.__name__)

    raise UnsupportedTypeError(
        "Annotation has no counterpart in the type model",
        details={"where": where, "annotation": repr(annotation)},
    )


def _is_stdlib(tp: type) -> bool:
    module = getattr(tp, "__module__", "") or ""
    return module in ("builtins", "typing", "types") or module.startswith("collections")


def _class_name(target: type) -> str:
    model_origin, _ = _pydantic_origin(target)
    return (model_origin or target).__name__


def _generic_parameters(target: Any) -> List[GenericParameter]:
    meta = getattr(target, "__pydantic_generic_metadata__", None)
    if meta is not None:
        parameters = meta.get("parameters") or ()
    else:
        parameters = getattr(target, "__parameters__", ()) or ()
    return [GenericParameter(name=p.__name__) for p in parameters if isinstance(p, typing.TypeVar)]


def _resolve_hints(target: type) -> dict:
    try:
        return typing.get_type_hints(target, include_extras=True)
    except NameError as exc:
        raise DeriveError(f"Cannot resolve annotations of {target.__name__}: {exc}") from exc


def _typed_dict_fields(target: type) -> List[NamedField]:
    return [
        NamedField(name=name, ty=derive_type(hint, where=f"{target.__name__}.{name}"))
        for name, hint in _resolve_hints(target).items()
    ]


def wire_name(model: type, name: str) -> str:
    """The key a pydantic model field is read from and written to."""
    info = model.model_fields[name]
    if info.alias:
        return info.alias
    generator = model.model_config.get("alias_generator")
    if callable(generator):
        return generator(name)
    return name


def _model_fields(target: type) -> List[NamedField]:
    return [
        NamedField(
            name=wire_name(target, name),
            ty=derive_type(info.annotation, where=f"{target.__name__}.{name}"),
        )
        for name, info in target.model_fields.items()
    ]


def _dataclass_fields(target: type) -> List[NamedField]:
    hints = _resolve_hints(target)
    return [
        NamedField(name=f.name, ty=derive_type(hints[f.name], where=f"{target.__name__}.{f.name}"))
        for f in dataclasses.fields(target)
    ]


def _derive_variants(target: type) -> List[Variant]:
    variants: List[Variant] = []
    for name, payload, attributes in enum_variants(target):
        where = f"{target.__name__}.{name}"
        bare = strip_annotated(payload)
        if is_unit(bare):
            content = UnitContent()
        elif is_typeddict(bare):
            content = NamedContent(fields=_typed_dict_fields(bare))
        else:
            content = UnnamedContent(ty=derive_type(payload, where=where))
        variants.append(Variant(attributes=attributes, name=name, content=content))
    return variants


def derive(target: Any) -> Container:
    """Build the syntax tree of a declaration.

    Raises:
        DeriveError: If `target` is not a supported declaration.
        UnsupportedTypeError: If one of its annotations cannot be mapped.
    """
    attributes = declared_attributes(target)
    visibility = Visibility.PUB if declared_export(target) else Visibility.NONE

    if isinstance(target, typing.NewType):
        item = StructItem(
            visibility=visibility,
            name=target.__name__,
            content=UnnamedContent(ty=derive_type(target.__supertype__, where=target.__name__)),
        )
        return Container(attributes=attributes, item=item)

    if not isinstance(target, type):
        raise DeriveError(f"Cannot derive a type declaration from {target!r}")

    if issubclass(target, TaggedEnum):
        item = EnumItem(
            visibility=visibility,
            name=target.__name__,
            parameters=_generic_parameters(target),
            variants=_derive_variants(target),
        )
        logger.debug(f"Derived enum {item.name} with {len(item.variants)} variants")
        return Container(attributes=attributes, item=item)

    if attributes.tag is not None or attributes.untagged:
        raise DeriveError(
            f"{target.__name__}: tag, content and untagged only apply to TaggedEnum declarations"
        )

    if issubclass(target, RootModel):
        root = target.model_fields["root"]
        content = UnnamedContent(ty=derive_type(root.annotation, where=f"{target.__name__}.root"))
    elif issubclass(target, BaseModel):
        content = NamedContent(fields=_model_fields(target))
    elif dataclasses.is_dataclass(target):
        content = NamedContent(fields=_dataclass_fields(target))
    elif is_typeddict(target):
        content = NamedContent(fields=_typed_dict_fields(target))
    else:
        raise DeriveError(
            f"{target.__name__} is not a TaggedEnum, pydantic model, dataclass or TypedDict"
        )

    item = StructItem(
        visibility=visibility,
        name=_class_name(target),
        parameters=_generic_parameters(target),
        content=content,
    )
    logger.debug(f"Derived struct {item.name}")
    return Container(attributes=attributes, item=item)
