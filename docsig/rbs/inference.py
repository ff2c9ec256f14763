"""Heuristic return types for methods without a `@returns` tag."""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence, Tuple

from .types import BOOL, SELF, UNTYPED, VOID, TypeExpression

CONSTRUCTOR_NAME = "initialize"

# Method name prefixes of fluent or mutating methods that return the receiver.
FLUENT_PREFIXES: Tuple[str, ...] = (
    "add",
    "append",
    "prepend",
    "push",
    "<<",
    "concat",
    "merge!",
    "sort!",
    "reverse!",
    "clear",
    "delete",
    "remove",
)

_Rule = Callable[[str, str, "re.Pattern[str]"], Optional[TypeExpression]]


def _predicate(name: str, constructor: str, fluent: "re.Pattern[str]") -> Optional[TypeExpression]:
    return BOOL if name.endswith("?") else None


def _constructor(name: str, constructor: str, fluent: "re.Pattern[str]") -> Optional[TypeExpression]:
    return VOID if name == constructor else None


def _fluent(name: str, constructor: str, fluent: "re.Pattern[str]") -> Optional[TypeExpression]:
    return SELF if fluent.match(name) else None


# First matching rule wins.
RULES: Tuple[_Rule, ...] = (_predicate, _constructor, _fluent)


def fluent_pattern(prefixes: Sequence[str]) -> "re.Pattern[str]":
    """Compile a prefix list into an anchored alternation; an empty list matches nothing."""
    if not prefixes:
        return re.compile(r"(?!)")
    return re.compile("|".join(re.escape(prefix) for prefix in prefixes))


_DEFAULT_FLUENT = fluent_pattern(FLUENT_PREFIXES)


def infer_return_type(
    name: str,
    constructor: str = CONSTRUCTOR_NAME,
    prefixes: Sequence[str] | None = None,
) -> TypeExpression:
    """Guess a return type from the method name alone."""
    fluent = _DEFAULT_FLUENT if prefixes is None else fluent_pattern(prefixes)
    for rule in RULES:
        inferred = rule(name, constructor, fluent)
        if inferred is not None:
            return inferred
    return UNTYPED


__all__ = ["CONSTRUCTOR_NAME", "FLUENT_PREFIXES", "RULES", "fluent_pattern", "infer_return_type"]
