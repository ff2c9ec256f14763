"""Documentation comment parsing."""

from .documentation import Documentation, DocumentationCache
from .parser import DirectiveRegistry, ParseResult, TagParser, default_registry
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

__all__ = [
    "Attribute",
    "Constant",
    "DirectiveRegistry",
    "Documentation",
    "DocumentationCache",
    "Example",
    "Option",
    "Parameter",
    "ParseResult",
    "Pragma",
    "Raises",
    "Returns",
    "Signature",
    "Tag",
    "TagParser",
    "Text",
    "Throws",
    "Yields",
    "default_registry",
]
