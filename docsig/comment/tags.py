"""Tag node variants produced from documentation directives."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import ClassVar, Iterator, Optional, Pattern, Sequence, Tuple, Type, TypeVar

T = TypeVar("T", bound="Tag")

_LEADING_WHITESPACE = re.compile(r"\A\s+")


@dataclass(frozen=True)
class Tag:
    """A parsed directive: inline text, nested body lines and nested child tags."""

    directive: str
    text: Optional[str] = None
    lines: Tuple[str, ...] = ()
    children: Tuple["Tag", ...] = ()

    # Grammar the inline text must match; None accepts anything.
    PATTERN: ClassVar[Optional[Pattern[str]]] = None
    # Nested lines are kept as raw text instead of being parsed for directives.
    verbatim: ClassVar[bool] = False

    @classmethod
    def parse(
        cls: Type[T],
        directive: str,
        text: Optional[str],
        lines: Sequence[str] = (),
        children: Sequence["Tag"] = (),
    ) -> Optional[T]:
        """Build the tag, or return None when the inline text does not fit the grammar."""
        fields = {}
        if cls.PATTERN is not None:
            match = cls.PATTERN.match(text or "")
            if match is None:
                return None
            fields = match.groupdict()
        return cls(
            directive=directive,
            text=text,
            lines=tuple(lines),
            children=tuple(children),
            **cls._fields_from_match(fields),
        )

    @classmethod
    def _fields_from_match(cls, groups: dict) -> dict:
        return {}

    def filter(self, kind: Type[T]) -> Iterator[T]:
        """Yield child tags of the given kind in source order."""
        for child in self.children:
            if isinstance(child, kind):
                yield child

    @property
    def base_indentation(self) -> Optional[str]:
        """The literal leading whitespace of the first body line."""
        if not self.lines:
            return None
        match = _LEADING_WHITESPACE.match(self.lines[0])
        return match.group(0) if match else None

    @property
    def body(self) -> Tuple[str, ...]:
        """Body lines with the base indentation prefix removed from each line."""
        indentation = self.base_indentation
        if not indentation:
            return self.lines
        return tuple(
            line[len(indentation):] if line.startswith(indentation) else line
            for line in self.lines
        )


@dataclass(frozen=True)
class Text(Tag):
    """Generic tag for free-form directives such as `@deprecated` or unknown names."""


@dataclass(frozen=True)
class Pragma(Tag):
    """A directive without payload, e.g. `@public` or `@asynchronous`."""


@dataclass(frozen=True)
class Attribute(Tag):
    """`@attribute [Type] details`"""

    type: str = ""
    details: Optional[str] = None

    PATTERN: ClassVar[Optional[Pattern[str]]] = re.compile(
        r"\A\[(?P<type>.*?)\](?:\s+(?P<details>.*?))?\s*\Z"
    )

    @classmethod
    def _fields_from_match(cls, groups: dict) -> dict:
        return {"type": groups["type"].strip(), "details": groups.get("details") or None}


@dataclass(frozen=True)
class Constant(Attribute):
    """`@constant [Type] details`"""


@dataclass(frozen=True)
class Returns(Attribute):
    """`@returns [Type] details`"""


@dataclass(frozen=True)
class Raises(Attribute):
    """`@raises [Type] details`"""


@dataclass(frozen=True)
class Parameter(Tag):
    """`@parameter name [Type] details`"""

    name: str = ""
    type: str = ""
    details: Optional[str] = None

    PATTERN: ClassVar[Optional[Pattern[str]]] = re.compile(
        r"\A(?P<name>\S+)\s+\[(?P<type>.*?)\](?:\s+(?P<details>.*?))?\s*\Z"
    )

    @classmethod
    def _fields_from_match(cls, groups: dict) -> dict:
        return {
            "name": groups["name"],
            "type": groups["type"].strip(),
            "details": groups.get("details") or None,
        }


@dataclass(frozen=True)
class Option(Parameter):
    """`@option :name [Type] details`, a keyword argument."""

    @property
    def keyword(self) -> str:
        """The option name without its leading colon."""
        return self.name[1:] if self.name.startswith(":") else self.name


@dataclass(frozen=True)
class Yields(Tag):
    """`@yields {|item| ...} details`, with nested `@parameter` tags for block arguments."""

    block: str = ""
    details: Optional[str] = None

    PATTERN: ClassVar[Optional[Pattern[str]]] = re.compile(
        r"\A(?P<block>\{.*?\})(?:\s+(?P<details>.*?))?\s*\Z"
    )

    @classmethod
    def _fields_from_match(cls, groups: dict) -> dict:
        return {"block": groups["block"], "details": groups.get("details") or None}

    @property
    def required(self) -> bool:
        markers = (self.directive, self.block)
        return not any("?" in marker or "optional" in marker for marker in markers)


@dataclass(frozen=True)
class Throws(Tag):
    """`@throws :symbol details`"""

    symbol: str = ""
    details: Optional[str] = None

    PATTERN: ClassVar[Optional[Pattern[str]]] = re.compile(
        r"\A(?P<symbol>:\S+)(?:\s+(?P<details>.*?))?\s*\Z"
    )

    @classmethod
    def _fields_from_match(cls, groups: dict) -> dict:
        return {"symbol": groups["symbol"], "details": groups.get("details") or None}


@dataclass(frozen=True)
class Example(Tag):
    """A code example with an optional title.

    - `@example Title`
    - `@example`

    The indented lines that follow are kept verbatim as the example code.
    """

    verbatim: ClassVar[bool] = True

    @property
    def title(self) -> Optional[str]:
        return self.text.strip() if self.text else None

    @property
    def code(self) -> Optional[str]:
        """The example code joined with newlines, or None when there are no lines."""
        if not self.lines:
            return None
        return "\n".join(self.body)


@dataclass(frozen=True)
class Signature(Tag):
    """`@rbs` directive: either a literal method signature or `generic T`."""

    PATTERN: ClassVar[Optional[Pattern[str]]] = re.compile(r"\A\S.*\Z")

    @property
    def generic(self) -> Optional[str]:
        """The declared type parameter name for `@rbs generic T`."""
        parts = self._words()
        if len(parts) >= 2 and parts[0] == "generic":
            return parts[1]
        return None

    @property
    def method_signature(self) -> Optional[str]:
        """The literal method signature, or None for generic declarations."""
        if self._words()[:1] == ["generic"]:
            return None
        return self.text

    def _words(self) -> list:
        return (self.text or "").split()


__all__ = [
    "Attribute",
    "Constant",
    "Example",
    "Option",
    "Parameter",
    "Pragma",
    "Raises",
    "Returns",
    "Signature",
    "Tag",
    "Text",
    "Throws",
    "Yields",
]
