"""Compile free-text type annotations into type expressions.

Annotations written by people drift from the RBS grammar, so compilation is
total: legacy spellings are rewritten first, the result is parsed with a
small recursive-descent parser, and anything that still fails to parse
becomes `untyped`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import re
from typing import Callable, List, Optional, Tuple

from ..logging import get_logger
from .types import (
    BOOL,
    NIL,
    SELF,
    UNTYPED,
    VOID,
    AliasReference,
    ClassReference,
    InterfaceReference,
    ProcType,
    TupleType,
    TypeExpression,
    TypeName,
    optional,
    union,
)

logger = get_logger("rbs.compiler")

KEYWORD_TYPES = {
    "bool": BOOL,
    "void": VOID,
    "self": SELF,
    "nil": NIL,
    "untyped": UNTYPED,
    "any": UNTYPED,
}

# Only a `| nil` ending the whole annotation is rewritten; `Array(String | Nil)`
# keeps `Nil` as a class name.
_TRAILING_NIL = re.compile(r"\s*\|\s*nil\s*\Z", re.IGNORECASE)
_BOOLEAN = re.compile(r"(?<![\w:])Boolean\b(?!::)")
_TOKEN = re.compile(
    r"\s*(?:(?P<arrow>->)|(?P<scope>::)|(?P<name>[A-Za-z_]\w*)|(?P<punct>[|?\[\](),^]))"
)


class TypeSyntaxError(ValueError):
    """Raised internally when an annotation does not fit the type grammar."""


def _generic_parentheses(text: str) -> str:
    """Rewrite `Name(A, B)` to `Name[A, B]`, leaving grouping parentheses alone."""
    output: List[str] = []
    converted: List[bool] = []
    previous = ""
    for char in text:
        if char == "(":
            is_generic = previous.isalnum() or previous == "_"
            converted.append(is_generic)
            output.append("[" if is_generic else "(")
        elif char == ")" and converted:
            output.append("]" if converted.pop() else ")")
        else:
            output.append(char)
        if not char.isspace():
            previous = char
    return "".join(output)


def _trailing_nil(text: str) -> str:
    return _TRAILING_NIL.sub("?", text)


def _boolean(text: str) -> str:
    return _BOOLEAN.sub("bool", text)


# Applied in order, each to the output of the previous one.
LEGACY_REWRITES: Tuple[Callable[[str], str], ...] = (
    _generic_parentheses,
    _trailing_nil,
    _boolean,
)


def normalize_annotation(text: str) -> str:
    """Apply the legacy syntax rewrites to an annotation."""
    for rewrite in LEGACY_REWRITES:
        text = rewrite(text)
    return text.strip()


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    position = 0
    while position < len(text):
        if text[position:].strip() == "":
            break
        match = _TOKEN.match(text, position)
        if match is None:
            raise TypeSyntaxError(f"Unexpected character {text[position:].lstrip()[:1]!r}")
        kind = match.lastgroup or ""
        tokens.append(_Token(kind=kind, value=match.group(kind)))
        position = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over a token list with an explicit cursor."""

    def __init__(self, tokens: List[_Token]) -> None:
        self._tokens = tokens
        self._cursor = 0

    def parse(self) -> TypeExpression:
        if not self._tokens:
            raise TypeSyntaxError("Empty type annotation")
        expression = self._union()
        if self._peek() is not None:
            raise TypeSyntaxError(f"Unexpected token {self._peek().value!r}")  # type: ignore[union-attr]
        return expression

    def _peek(self) -> Optional[_Token]:
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    def _accept(self, value: str) -> bool:
        token = self._peek()
        if token is not None and token.kind != "name" and token.value == value:
            self._cursor += 1
            return True
        return False

    def _expect(self, value: str) -> None:
        if not self._accept(value):
            raise TypeSyntaxError(f"Expected {value!r}")

    def _union(self) -> TypeExpression:
        members = [self._postfix()]
        while self._accept("|"):
            members.append(self._postfix())
        return union(members)

    def _postfix(self) -> TypeExpression:
        expression = self._primary()
        while self._accept("?"):
            expression = optional(expression)
        return expression

    def _primary(self) -> TypeExpression:
        if self._accept("("):
            expression = self._union()
            self._expect(")")
            return expression
        if self._accept("["):
            return TupleType(types=self._list("]"))
        if self._accept("^"):
            self._expect("(")
            parameters = self._list(")")
            self._expect("->")
            return ProcType(parameters=parameters, return_type=self._postfix())
        return self._named()

    def _list(self, closing: str) -> Tuple[TypeExpression, ...]:
        items: List[TypeExpression] = []
        if self._accept(closing):
            return ()
        items.append(self._union())
        while self._accept(","):
            items.append(self._union())
        self._expect(closing)
        return tuple(items)

    def _identifier(self) -> str:
        token = self._peek()
        if token is None or token.kind != "name":
            raise TypeSyntaxError("Expected a type name")
        self._cursor += 1
        return token.value

    def _named(self) -> TypeExpression:
        segments: List[str] = []
        if self._accept("::"):
            segments.append("")
        segments.append(self._identifier())
        while self._accept("::"):
            segments.append(self._identifier())

        if len(segments) == 1 and segments[0] in KEYWORD_TYPES:
            return KEYWORD_TYPES[segments[0]]

        name = TypeName(name=segments[-1], path=tuple(segments[:-1]))
        args: Tuple[TypeExpression, ...] = ()
        if self._accept("["):
            args = self._list("]")
            if not args:
                raise TypeSyntaxError(f"Empty type arguments for {name}")

        if name.name.startswith("_"):
            return InterfaceReference(name=name, args=args)
        if name.name[0].islower():
            if args:
                raise TypeSyntaxError(f"Type alias {name} does not take arguments")
            return AliasReference(name=name)
        return ClassReference(name=name, args=args)


def parse_type(text: str) -> TypeExpression:
    """Parse canonical RBS type syntax, raising TypeSyntaxError on failure."""
    return _Parser(_tokenize(text)).parse()


@lru_cache(maxsize=1024)
def compile_type(annotation: str) -> TypeExpression:
    """Compile an annotation into a type expression; never raises."""
    try:
        return parse_type(normalize_annotation(annotation))
    except (TypeSyntaxError, RecursionError) as exc:
        logger.debug("Falling back to untyped for %r: %s", annotation, exc)
        return UNTYPED


__all__ = [
    "KEYWORD_TYPES",
    "LEGACY_REWRITES",
    "TypeSyntaxError",
    "compile_type",
    "normalize_annotation",
    "parse_type",
]
