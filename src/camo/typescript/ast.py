"""
A subset of the TypeScript syntax, as values.

Every node renders itself with `str()`; the output of a definition is
what ends up in a generated `.ts` file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


class BuiltinType(str, Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PathSegment:
    name: str
    arguments: List["TsType"] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.arguments:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.arguments)}>"


@dataclass(frozen=True)
class TypePath:
    """The name of a type, e.g. `types.X` or `Wrapper<number>`."""

    segments: List[PathSegment]

    @classmethod
    def of(cls, *names: str) -> "TypePath":
        return cls(segments=[PathSegment(name=n) for n in names])

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)


@dataclass(frozen=True)
class Field:
    """A field in an `interface` or an object literal type."""

    name: str
    ty: "TsType"

    def __str__(self) -> str:
        return f"{self.name}: {self.ty};"


@dataclass(frozen=True)
class ObjectType:
    fields: List[Field] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + "".join(f" {f}" for f in self.fields) + " }"


@dataclass(frozen=True)
class LiteralType:
    """A string literal type."""

    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class ArrayType:
    element: "TsType"

    def __str__(self) -> str:
        return f"{self.element}[]"


@dataclass(frozen=True)
class IntersectionType:
    left: "TsType"
    right: "TsType"

    def __str__(self) -> str:
        return f"{self.left} & {self.right}"


TsType = Union[BuiltinType, TypePath, ObjectType, LiteralType, ArrayType, IntersectionType]


def _header(keyword: str, export: bool, name: str, parameters: List[str]) -> str:
    out = "export " if export else ""
    out += f"{keyword} {name}"
    if parameters:
        out += f"<{', '.join(parameters)}>"
    return out


@dataclass(frozen=True)
class Interface:
    """An `interface` declaration.

    Example:

        interface Foo {
            value: number;
        }
    """

    name: str
    fields: List[Field] = field(default_factory=list)
    parameters: List[str] = field(default_factory=list)
    export: bool = False

    def __str__(self) -> str:
        body = "".join(f"\t{f}\n" for f in self.fields)
        return f"{_header('interface', self.export, self.name, self.parameters)} {{\n{body}}}\n"


@dataclass(frozen=True)
class AliasType:
    """A `type` declaration aliasing some type, e.g. `type UserId = string;`."""

    name: str
    ty: TsType
    parameters: List[str] = field(default_factory=list)
    export: bool = False

    def __str__(self) -> str:
        return f"{_header('type', self.export, self.name, self.parameters)} = {self.ty};\n"


@dataclass(frozen=True)
class UnionType:
    """A `type` declaration consisting of multiple cases.

    Example:

        type Primitive =
            | number
            | boolean;
    """

    name: str
    variants: List[TsType] = field(default_factory=list)
    parameters: List[str] = field(default_factory=list)
    export: bool = False

    def __str__(self) -> str:
        cases = "".join(f"\n\t| {v}" for v in self.variants)
        return f"{_header('type', self.export, self.name, self.parameters)} ={cases};\n"


Definition = Union[Interface, AliasType, UnionType]
