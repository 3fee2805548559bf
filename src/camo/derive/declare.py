from __future__ import annotations

import typing
from typing import Any, List, Optional, Tuple, TypeVar

from pydantic import ValidationError

from camo.core.ast import ContainerAttributes, VariantAttributes
from camo.core.exceptions import DeriveError
from camo.core.rename import RuleLike, parse_rule

_ATTRIBUTES = "__camo_attributes__"
_EXPORT = "__camo_export__"

T = TypeVar("T")


def camo(
    _target: Optional[T] = None,
    *,
    rename: RuleLike = None,
    rename_all: RuleLike = None,
    tag: Optional[str] = None,
    content: Optional[str] = None,
    untagged: bool = False,
    export: bool = False,
) -> Any:
    """Mark a class as a type declaration and attach its container attributes.

    Usable bare (`@camo`) or with arguments (`@camo(tag="type")`). The class
    itself is returned unchanged apart from two dunder attributes.
    """
    try:
        attributes = ContainerAttributes(
            rename=parse_rule(rename),
            rename_all=parse_rule(rename_all),
            tag=tag,
            content=content,
            untagged=untagged,
        )
    except (ValidationError, ValueError) as exc:
        raise DeriveError(f"Invalid container attributes: {exc}") from exc

    def decorator(target: T) -> T:
        if not isinstance(target, type):
            raise DeriveError(f"@camo can only decorate classes, got {target!r}")
        setattr(target, _ATTRIBUTES, attributes)
        setattr(target, _EXPORT, export)
        return target

    if _target is not None:
        return decorator(_target)
    return decorator


def is_declared(target: Any) -> bool:
    return isinstance(target, type) and _ATTRIBUTES in vars(target)


def declared_attributes(target: Any) -> ContainerAttributes:
    # vars() so that subclasses do not inherit their parent's attributes
    if isinstance(target, type):
        return vars(target).get(_ATTRIBUTES) or ContainerAttributes()
    return ContainerAttributes()


def declared_export(target: Any) -> bool:
    if isinstance(target, type):
        return bool(vars(target).get(_EXPORT, False))
    return False


def variant(*, rename: RuleLike = None, rename_all: RuleLike = None) -> VariantAttributes:
    """Per-variant attributes, used as `Annotated[Payload, variant(...)]`."""
    return VariantAttributes(rename=parse_rule(rename), rename_all=parse_rule(rename_all))


VariantSpec = Tuple[str, Any, VariantAttributes]


def split_variant_annotation(hint: Any) -> Tuple[Any, VariantAttributes]:
    if typing.get_origin(hint) is not typing.Annotated:
        return hint, VariantAttributes()
    base = hint.__origin__
    ours = [m for m in hint.__metadata__ if isinstance(m, VariantAttributes)]
    rest = [m for m in hint.__metadata__ if not isinstance(m, VariantAttributes)]
    payload = typing.Annotated[(base, *rest)] if rest else base
    return payload, (ours[-1] if ours else VariantAttributes())


def enum_variants(cls: type) -> List[VariantSpec]:
    """Variants of a `TaggedEnum` subclass, in declaration order."""
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise DeriveError(f"Cannot resolve variant annotations of {cls.__name__}: {exc}") from exc

    variants: List[VariantSpec] = []
    for name, hint in hints.items():
        if name.startswith("_") or typing.get_origin(hint) is typing.ClassVar:
            continue
        payload, attributes = split_variant_annotation(hint)
        variants.append((name, payload, attributes))
    return variants


class TaggedEnum:
    """Base class for sum types.

    Every public class annotation declares one variant, in order:

    - ``Name: None`` is a unit variant,
    - ``Name: SomeTypedDict`` is a variant with named fields,
    - anything else is a newtype variant wrapping that type.

    The tagging convention comes from the container attributes set with
    ``@camo``: no tag (externally tagged), ``tag`` (internally tagged),
    ``tag`` + ``content`` (adjacently tagged) or ``untagged``.

    Subclasses are declarations, not value types: values are validated with
    :meth:`validate` and come back as instances of generated variant models.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> Any:
        raise TypeError(f"{cls.__name__} is a declaration; use {cls.__name__}.validate(...)")

    @classmethod
    def variants(cls) -> List[VariantSpec]:
        return enum_variants(cls)

    @classmethod
    def adapter(cls):
        from camo.runtime.adapters import build_adapter

        return build_adapter(cls)

    @classmethod
    def variant_type(cls, tag: str) -> Any:
        from camo.runtime.adapters import variant_type

        return variant_type(cls, tag)

    @classmethod
    def validate(cls, data: Any) -> Any:
        return cls.adapter().validate_python(data)

    @classmethod
    def validate_json(cls, data: str | bytes) -> Any:
        return cls.adapter().validate_json(data)

    @classmethod
    def dump(cls, value: Any, *, mode: str = "python") -> Any:
        return cls.adapter().dump_python(value, mode=mode, by_alias=True)
