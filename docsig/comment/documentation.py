"""Parsed documentation attached to a definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence, Tuple, Type, TypeVar

from ..models import Definition
from .parser import TagParser
from .tags import Tag

T = TypeVar("T", bound=Tag)


@dataclass(frozen=True)
class Documentation:
    """The tag tree and free-form description lines of one definition's comments."""

    tags: Tuple[Tag, ...] = ()
    text: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, comments: Sequence[str], parser: TagParser | None = None) -> "Documentation":
        result = (parser or TagParser()).parse(comments)
        return cls(tags=result.tags, text=result.text)

    def filter(self, kind: Type[T]) -> Iterator[T]:
        """Yield top-level tags of the given kind in source order."""
        for tag in self.tags:
            if isinstance(tag, kind):
                yield tag

    def first(self, kind: Type[T]) -> Optional[T]:
        return next(self.filter(kind), None)

    @property
    def description(self) -> Optional[str]:
        """Description lines joined with newlines; None when there are none."""
        if not self.text:
            return None
        return "\n".join(self.text)


class DocumentationCache:
    """Memoizes parsed documentation per definition object."""

    def __init__(self, parser: TagParser | None = None) -> None:
        self._parser = parser or TagParser()
        # Keyed by id(); the definition is stored alongside so the id cannot be reused.
        self._entries: Dict[int, Tuple[Definition, Documentation]] = {}

    @property
    def parser(self) -> TagParser:
        return self._parser

    def get(self, definition: Definition) -> Documentation:
        entry = self._entries.get(id(definition))
        if entry is not None and entry[0] is definition:
            return entry[1]
        documentation = Documentation.parse(definition.comments, self._parser)
        self._entries[id(definition)] = (definition, documentation)
        return documentation

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["Documentation", "DocumentationCache"]
