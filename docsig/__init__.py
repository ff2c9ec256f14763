"""Compile documentation comments into RBS type signatures."""

from .models import Definition, DefinitionKind
from .pipeline import build_assembler, generate_declarations, generate_rbs

__all__ = [
    "Definition",
    "DefinitionKind",
    "build_assembler",
    "generate_declarations",
    "generate_rbs",
]
