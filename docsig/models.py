"""Definitions supplied by the source indexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class DefinitionKind(str, Enum):
    """Kinds of definitions that can carry documentation."""

    CLASS = "class"
    MODULE = "module"
    METHOD = "method"
    ATTRIBUTE = "attribute"
    CONSTANT = "constant"


@dataclass(frozen=True)
class Definition:
    """A named definition with its raw comment lines, as produced by the indexer."""

    name: str
    kind: DefinitionKind
    path: Tuple[str, ...] = ()
    comments: Tuple[str, ...] = ()
    children: Tuple["Definition", ...] = ()
    receiver: Optional[str] = None
    super_class: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any sequence from the indexer; store tuples.
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "comments", tuple(self.comments))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def qualified_name(self) -> str:
        """The definition name prefixed by its enclosing namespace."""
        return "::".join((*self.path, self.name))

    @property
    def singleton(self) -> bool:
        return self.receiver is not None

    def children_of(self, kind: DefinitionKind) -> Tuple["Definition", ...]:
        return tuple(child for child in self.children if child.kind is kind)


__all__ = ["Definition", "DefinitionKind"]
