"""Walk a definition tree and emit one declaration per class or module."""

from __future__ import annotations

from typing import Iterable, List

from ..logging import get_logger
from ..models import Definition, DefinitionKind
from .assembler import SignatureAssembler
from .declarations import Declaration
from .types import qualified_name

logger = get_logger("rbs.generator")

_CONTAINERS = (DefinitionKind.CLASS, DefinitionKind.MODULE)


class SignatureGenerator:
    """Produces declarations for every class and module, qualified by namespace.

    Nested classes and modules become separate declarations that follow their
    parent; methods, constants and attributes become members of the
    declaration that directly contains them.
    """

    def __init__(self, assembler: SignatureAssembler | None = None) -> None:
        self.assembler = assembler or SignatureAssembler()

    def generate(self, definitions: Iterable[Definition]) -> List[Declaration]:
        declarations: List[Declaration] = []
        for definition in definitions:
            if definition.kind not in _CONTAINERS:
                logger.debug(
                    "Skipping top-level %s %s", definition.kind.value, definition.qualified_name
                )
                continue
            self._visit(definition, declarations)
        return declarations

    def _visit(self, definition: Definition, declarations: List[Declaration]) -> None:
        name = qualified_name(definition.qualified_name)
        if definition.kind is DefinitionKind.CLASS:
            declarations.append(self.assembler.klass(definition, name=name))
        else:
            declarations.append(self.assembler.module(definition, name=name))

        for child in definition.children:
            if child.kind in _CONTAINERS:
                self._visit(child, declarations)


__all__ = ["SignatureGenerator"]
