"""Indentation-sensitive parser from comment lines to tag trees."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import metadata
import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

from ..logging import get_logger
from .tags import (
    Attribute,
    Constant,
    Example,
    Option,
    Parameter,
    Pragma,
    Raises,
    Returns,
    Signature,
    Tag,
    Text,
    Throws,
    Yields,
)

logger = get_logger("comment.parser")

_ENTRY_POINT_GROUP = "docsig.directives"

DIRECTIVE_PATTERN = re.compile(r"\A\s*@(?P<directive>[\w?!-]+)(?:\s+(?P<text>.*?))?\s*\Z")

INDENTATION_UNITS: Tuple[str, ...] = ("  ", "\t")

BUILTIN_DIRECTIVES: Dict[str, Type[Tag]] = {
    "parameter": Parameter,
    "option": Option,
    "attribute": Attribute,
    "constant": Constant,
    "returns": Returns,
    "raises": Raises,
    "throws": Throws,
    "yields": Yields,
    "example": Example,
    "rbs": Signature,
    "deprecated": Text,
    "public": Pragma,
    "private": Pragma,
    "asynchronous": Pragma,
}


@dataclass(frozen=True)
class ParseResult:
    """Tags and plain text lines found at one indentation level."""

    tags: Tuple[Tag, ...] = ()
    text: Tuple[str, ...] = ()


class DirectiveRegistry:
    """Maps directive names to tag classes; unknown names build generic text tags."""

    def __init__(self, directives: Mapping[str, Type[Tag]] | None = None) -> None:
        self._directives: Dict[str, Type[Tag]] = dict(
            BUILTIN_DIRECTIVES if directives is None else directives
        )

    def register(self, name: str, kind: Type[Tag]) -> None:
        if not (isinstance(kind, type) and issubclass(kind, Tag)):
            raise TypeError(f"Directive '{name}' must be registered with a Tag subclass")
        self._directives[name] = kind

    def lookup(self, name: str) -> Type[Tag]:
        return self._directives.get(name, Text)

    def names(self) -> List[str]:
        return list(self._directives)

    def __contains__(self, name: object) -> bool:
        return name in self._directives

    def build(self, directive: str, text: Optional[str], nested: ParseResult) -> Tag:
        """Construct the tag for a directive, degrading to a text tag on malformed payloads."""
        kind = self.lookup(directive)
        tag = kind.parse(directive, text, nested.text, nested.tags)
        if tag is None:
            logger.debug("Malformed @%s payload %r; keeping it as text", directive, text)
            tag = Text(directive=directive, text=text, lines=nested.text, children=nested.tags)
        return tag


def default_registry(
    *,
    text_directives: Sequence[str] = (),
    pragma_directives: Sequence[str] = (),
    load_plugins: bool = True,
) -> DirectiveRegistry:
    """Return a registry with the built-in, configured and plugin directives."""
    registry = DirectiveRegistry()
    for name in text_directives:
        registry.register(name, Text)
    for name in pragma_directives:
        registry.register(name, Pragma)
    if load_plugins:
        for entry in _iter_entry_points():
            try:
                loaded = entry.load()
            except Exception as exc:  # pragma: no cover - depends on installed plugins
                raise RuntimeError(f"Failed to load directive entry point '{entry.name}': {exc}") from exc
            registry.register(entry.name, loaded)
    return registry


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    entry_points = metadata.entry_points()
    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)
    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[attr-defined]


def _at_level(line: str, level: int) -> bool:
    return any(line.startswith(unit * level) for unit in INDENTATION_UNITS)


class TagParser:
    """Recursive-descent parser over comment lines with an explicit level and cursor.

    A directive line opens a tag; the following lines indented one level
    deeper are parsed recursively and become that tag's children and body.
    Parsing of a level ends at the first line that is not indented to it.
    """

    def __init__(self, registry: DirectiveRegistry | None = None) -> None:
        self.registry = registry or DirectiveRegistry()

    def parse(self, lines: Sequence[str], level: int = 0) -> ParseResult:
        result, _ = self._parse_level(tuple(lines), 0, level, verbatim=False)
        return result

    def _parse_level(
        self, lines: Tuple[str, ...], cursor: int, level: int, *, verbatim: bool
    ) -> Tuple[ParseResult, int]:
        tags: List[Tag] = []
        text: List[str] = []
        while cursor < len(lines):
            line = lines[cursor]
            if not _at_level(line, level):
                break
            cursor += 1

            match = None if verbatim else DIRECTIVE_PATTERN.match(line)
            if match is None:
                text.append(line)
                continue

            directive = match.group("directive")
            kind = self.registry.lookup(directive)
            nested, cursor = self._parse_level(lines, cursor, level + 1, verbatim=kind.verbatim)
            inline = match.group("text") or None
            tags.append(self.registry.build(directive, inline, nested))
        return ParseResult(tags=tuple(tags), text=tuple(text)), cursor


__all__ = [
    "BUILTIN_DIRECTIVES",
    "DIRECTIVE_PATTERN",
    "DirectiveRegistry",
    "ParseResult",
    "TagParser",
    "default_registry",
]
