"""Signature declarations emitted for the RBS declaration model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .types import ClassReference, TypeExpression, TypeName


@dataclass(frozen=True)
class Param:
    """A named positional parameter."""

    name: str
    type: TypeExpression


@dataclass(frozen=True)
class Block:
    parameters: Tuple[Param, ...]
    return_type: TypeExpression
    required: bool = True


# A keyword argument name and its type, in source order.
Keyword = Tuple[str, TypeExpression]


@dataclass(frozen=True)
class Overload:
    """One call shape synthesized from parameter, option, returns and yields tags."""

    return_type: TypeExpression
    positionals: Tuple[Param, ...] = ()
    required_keywords: Tuple[Keyword, ...] = ()
    optional_keywords: Tuple[Keyword, ...] = ()
    block: Optional[Block] = None


@dataclass(frozen=True)
class RawOverload:
    """A call shape given literally with an `@rbs` tag."""

    signature: str


@dataclass(frozen=True)
class MethodSignature:
    name: str
    kind: str
    overloads: Tuple[Union[Overload, RawOverload], ...]
    comment: Optional[str] = None

    @property
    def singleton(self) -> bool:
        return self.kind == "singleton"


@dataclass(frozen=True)
class ConstantSignature:
    name: str
    type: TypeExpression
    comment: Optional[str] = None


@dataclass(frozen=True)
class AttributeReader:
    name: str
    ivar_name: str
    type: TypeExpression
    comment: Optional[str] = None


@dataclass(frozen=True)
class InstanceVariable:
    name: str
    type: TypeExpression


Member = Union[MethodSignature, ConstantSignature, AttributeReader, InstanceVariable]


@dataclass(frozen=True)
class ClassSignature:
    name: TypeName
    super_class: Optional[ClassReference] = None
    type_params: Tuple[str, ...] = ()
    members: Tuple[Member, ...] = ()
    comment: Optional[str] = None


@dataclass(frozen=True)
class ModuleSignature:
    name: TypeName
    type_params: Tuple[str, ...] = ()
    members: Tuple[Member, ...] = ()
    comment: Optional[str] = None


Declaration = Union[ClassSignature, ModuleSignature]


__all__ = [
    "AttributeReader",
    "Block",
    "ClassSignature",
    "ConstantSignature",
    "Declaration",
    "InstanceVariable",
    "Keyword",
    "Member",
    "MethodSignature",
    "ModuleSignature",
    "Overload",
    "Param",
    "RawOverload",
]
