from __future__ import annotations

import pytest

from docsig.comment import DirectiveRegistry, TagParser
from docsig.rbs import SignatureAssembler


@pytest.fixture
def parser() -> TagParser:
    """Provide a tag parser with only the built-in directives."""
    return TagParser(DirectiveRegistry())


@pytest.fixture
def assembler() -> SignatureAssembler:
    """Provide an assembler with a fresh documentation cache."""
    return SignatureAssembler()
