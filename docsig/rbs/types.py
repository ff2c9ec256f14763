"""Immutable type expression values in the RBS type model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

NAMESPACE_SEPARATOR = "::"


@dataclass(frozen=True)
class TypeName:
    """A possibly qualified name; a leading empty path segment marks a root-anchored name."""

    name: str
    path: Tuple[str, ...] = ()

    @property
    def absolute(self) -> bool:
        return bool(self.path) and self.path[0] == ""

    def __str__(self) -> str:
        return NAMESPACE_SEPARATOR.join((*self.path, self.name))


def qualified_name(value: str) -> TypeName:
    """Split `A::B::C` into path `("A", "B")` and name `C`; `::A` keeps an empty root segment."""
    *path, name = value.split(NAMESPACE_SEPARATOR)
    return TypeName(name=name, path=tuple(path))


@dataclass(frozen=True)
class ClassReference:
    name: TypeName
    args: Tuple["TypeExpression", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return str(self.name)
        return f"{self.name}[{', '.join(str(arg) for arg in self.args)}]"


@dataclass(frozen=True)
class InterfaceReference:
    """Reference to an interface such as `_Each[T]`."""

    name: TypeName
    args: Tuple["TypeExpression", ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return str(self.name)
        return f"{self.name}[{', '.join(str(arg) for arg in self.args)}]"


@dataclass(frozen=True)
class AliasReference:
    """Reference to a type alias such as `string` or `int`."""

    name: TypeName

    def __str__(self) -> str:
        return str(self.name)


@dataclass(frozen=True)
class UnionType:
    types: Tuple["TypeExpression", ...]

    def __str__(self) -> str:
        return " | ".join(_wrap(member, (ProcType,)) for member in self.types)


@dataclass(frozen=True)
class OptionalType:
    inner: "TypeExpression"

    def __str__(self) -> str:
        return f"{_wrap(self.inner, (UnionType, ProcType))}?"


@dataclass(frozen=True)
class TupleType:
    types: Tuple["TypeExpression", ...] = ()

    def __str__(self) -> str:
        return f"[{', '.join(str(member) for member in self.types)}]"


@dataclass(frozen=True)
class ProcType:
    """A block or proc type, `^(A, B) -> R`."""

    parameters: Tuple["TypeExpression", ...]
    return_type: "TypeExpression"

    def __str__(self) -> str:
        params = ", ".join(str(param) for param in self.parameters)
        return f"^({params}) -> {_wrap(self.return_type, (UnionType,))}"


@dataclass(frozen=True)
class SelfType:
    def __str__(self) -> str:
        return "self"


@dataclass(frozen=True)
class VoidType:
    def __str__(self) -> str:
        return "void"


@dataclass(frozen=True)
class BoolType:
    def __str__(self) -> str:
        return "bool"


@dataclass(frozen=True)
class AnyType:
    def __str__(self) -> str:
        return "untyped"


@dataclass(frozen=True)
class NilType:
    def __str__(self) -> str:
        return "nil"


TypeExpression = Union[
    ClassReference,
    InterfaceReference,
    AliasReference,
    UnionType,
    OptionalType,
    TupleType,
    ProcType,
    SelfType,
    VoidType,
    BoolType,
    AnyType,
    NilType,
]

SELF = SelfType()
VOID = VoidType()
BOOL = BoolType()
UNTYPED = AnyType()
NIL = NilType()


def union(types: Iterable[TypeExpression]) -> TypeExpression:
    """Build a flattened union; a single member is returned unwrapped."""
    members: List[TypeExpression] = []
    for member in types:
        if isinstance(member, UnionType):
            members.extend(member.types)
        else:
            members.append(member)
    if not members:
        raise ValueError("A union needs at least one member")
    if len(members) == 1:
        return members[0]
    return UnionType(types=tuple(members))


def optional(inner: TypeExpression) -> TypeExpression:
    """Wrap a type as optional without double wrapping."""
    if isinstance(inner, OptionalType):
        return inner
    return OptionalType(inner=inner)


def nullable(expression: TypeExpression) -> bool:
    """Return True when the type can denote the absence of a value."""
    if isinstance(expression, (OptionalType, NilType)):
        return True
    if isinstance(expression, (UnionType, TupleType)):
        return any(nullable(member) for member in expression.types)
    return False


def _wrap(expression: TypeExpression, kinds: Tuple[type, ...]) -> str:
    text = str(expression)
    return f"({text})" if isinstance(expression, kinds) else text


__all__ = [
    "AliasReference",
    "AnyType",
    "BOOL",
    "BoolType",
    "ClassReference",
    "InterfaceReference",
    "NIL",
    "NilType",
    "OptionalType",
    "ProcType",
    "SELF",
    "SelfType",
    "TupleType",
    "TypeExpression",
    "TypeName",
    "UNTYPED",
    "UnionType",
    "VOID",
    "VoidType",
    "nullable",
    "optional",
    "qualified_name",
    "union",
]
