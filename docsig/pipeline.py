"""Wire configuration, parsing, assembly and rendering together."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .comment import DocumentationCache, TagParser, default_registry
from .config import DocSigConfig
from .logging import configure_logging, get_logger
from .models import Definition
from .rbs import RBSWriter, SignatureAssembler, SignatureGenerator
from .rbs.declarations import Declaration

logger = get_logger("pipeline")


def setup_logging(config: DocSigConfig) -> logging.Logger:
    """Apply the `logging` section of a loaded configuration."""
    return configure_logging(
        verbose=config.logging.verbose,
        quiet=config.logging.quiet,
        log_file=config.logging.file,
    )


def build_assembler(config: DocSigConfig | None = None, *, load_plugins: bool = True) -> SignatureAssembler:
    """Return an assembler honouring configured directives and inference settings."""
    if config is None:
        registry = default_registry(load_plugins=load_plugins)
        return SignatureAssembler(DocumentationCache(TagParser(registry)))

    registry = default_registry(
        text_directives=config.directives.text,
        pragma_directives=config.directives.pragma,
        load_plugins=load_plugins,
    )
    return SignatureAssembler(
        DocumentationCache(TagParser(registry)),
        constructor=config.inference.constructor,
        fluent_prefixes=config.inference.fluent_prefixes,
    )


def generate_declarations(
    definitions: Iterable[Definition], config: DocSigConfig | None = None
) -> List[Declaration]:
    generator = SignatureGenerator(build_assembler(config))
    declarations = generator.generate(definitions)
    logger.info("Generated %d declaration(s)", len(declarations))
    return declarations


def generate_rbs(definitions: Iterable[Definition], config: DocSigConfig | None = None) -> str:
    """Render RBS text for the classes and modules in a definition tree."""
    indent = config.output.indent if config is not None else "  "
    return RBSWriter(indent).write(generate_declarations(definitions, config))


__all__ = ["build_assembler", "generate_declarations", "generate_rbs", "setup_logging"]
