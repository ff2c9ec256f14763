"""Type expressions and signature declarations for the RBS declaration model."""

from .assembler import SignatureAssembler
from .compiler import compile_type, normalize_annotation, parse_type
from .generator import SignatureGenerator
from .inference import infer_return_type
from .types import nullable, qualified_name
from .writer import RBSWriter, write_declarations

__all__ = [
    "RBSWriter",
    "SignatureAssembler",
    "SignatureGenerator",
    "compile_type",
    "infer_return_type",
    "normalize_annotation",
    "nullable",
    "parse_type",
    "qualified_name",
    "write_declarations",
]
