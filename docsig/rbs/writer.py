"""Render declarations as RBS source text."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .declarations import (
    AttributeReader,
    Block,
    ClassSignature,
    ConstantSignature,
    Declaration,
    InstanceVariable,
    Member,
    MethodSignature,
    Overload,
    Param,
    RawOverload,
)

_IDENTIFIER = re.compile(r"\A[a-z_]\w*\Z")


class RBSWriter:
    """Formats declarations with a fixed indentation unit."""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def write(self, declarations: Iterable[Declaration]) -> str:
        blocks = ["\n".join(self.declaration(declaration)) for declaration in declarations]
        return "\n\n".join(blocks) + "\n" if blocks else ""

    def declaration(self, declaration: Declaration) -> List[str]:
        lines = _comment_lines(declaration.comment)
        head = f"{declaration.name}{_type_params(declaration.type_params)}"
        if isinstance(declaration, ClassSignature):
            superclass = f" < {declaration.super_class}" if declaration.super_class else ""
            lines.append(f"class {head}{superclass}")
        else:
            lines.append(f"module {head}")
        for member in declaration.members:
            lines.extend(self.indent + line for line in self.member(member))
        lines.append("end")
        return lines

    def member(self, member: Member) -> List[str]:
        if isinstance(member, MethodSignature):
            return self.method(member)
        if isinstance(member, ConstantSignature):
            return _comment_lines(member.comment) + [f"{member.name}: {member.type}"]
        if isinstance(member, AttributeReader):
            return _comment_lines(member.comment) + [f"attr_reader {member.name}: {member.type}"]
        if isinstance(member, InstanceVariable):
            return [f"{member.name}: {member.type}"]
        raise TypeError(f"Unsupported member {type(member).__name__}")

    def method(self, method: MethodSignature) -> List[str]:
        prefix = f"def self.{method.name}: " if method.singleton else f"def {method.name}: "
        lines = _comment_lines(method.comment)
        padding = " " * (len(prefix) - 2)
        for index, overload in enumerate(method.overloads):
            text = overload_text(overload)
            lines.append(prefix + text if index == 0 else f"{padding}| {text}")
        return lines


def overload_text(overload: Overload | RawOverload) -> str:
    """RBS method type text for one overload, e.g. `(String name, ?cached: bool?) -> void`."""
    if isinstance(overload, RawOverload):
        return overload.signature
    params: List[str] = [_param(param) for param in overload.positionals]
    params.extend(f"{name}: {type_}" for name, type_ in overload.required_keywords)
    params.extend(f"?{name}: {type_}" for name, type_ in overload.optional_keywords)
    block = f" {_block(overload.block)}" if overload.block else ""
    return f"({', '.join(params)}){block} -> {overload.return_type}"


def write_declarations(declarations: Iterable[Declaration], indent: str = "  ") -> str:
    return RBSWriter(indent).write(declarations)


def _param(param: Param) -> str:
    if _IDENTIFIER.match(param.name):
        return f"{param.type} {param.name}"
    return str(param.type)


def _block(block: Block) -> str:
    params = ", ".join(_param(param) for param in block.parameters)
    marker = "" if block.required else "?"
    return f"{marker}{{ ({params}) -> {block.return_type} }}"


def _type_params(params: Iterable[str]) -> str:
    params = list(params)
    return f"[{', '.join(params)}]" if params else ""


def _comment_lines(comment: Optional[str]) -> List[str]:
    if comment is None:
        return []
    return [f"# {line}".rstrip() for line in comment.split("\n")]


__all__ = ["RBSWriter", "overload_text", "write_declarations"]
