"""End-to-end tests from definitions to RBS text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from docsig import generate_declarations, generate_rbs
from docsig.comment import Pragma
from docsig.config import load_config
from docsig.logging import configure_logging, log_level
from docsig.pipeline import build_assembler, setup_logging
from tests._fixtures.definitions import klass, method, module


def _library():  # type: ignore[no-untyped-def]
    return module(
        "Library",
        ["A small library."],
        [
            klass(
                "Shelf",
                ["Holds books.", "@internal"],
                [
                    method("setup", ["Prepare the shelf."]),
                    method(
                        "find",
                        [
                            "@parameter title [String] The title.",
                            "@option :exact [Boolean?] Match the whole title.",
                            "@returns [Book | Nil]",
                        ],
                    ),
                    method("build", ["@rbs () -> Shelf"], receiver="self"),
                ],
                path=("Library",),
            )
        ],
    )


def test_generate_rbs_with_defaults() -> None:
    text = generate_rbs([_library()])

    assert text == (
        "# A small library.\n"
        "module Library\n"
        "end\n"
        "\n"
        "# Holds books.\n"
        "class Library::Shelf\n"
        "  # Prepare the shelf.\n"
        "  def setup: () -> untyped\n"
        "  def find: (String title, ?exact: bool?) -> Book?\n"
        "  def self.build: () -> Shelf\n"
        "end\n"
    )


def test_configuration_changes_inference_directives_and_indent(tmp_path: Path) -> None:
    (tmp_path / ".docsig.yml").write_text(
        "inference:\n  constructor: setup\ndirectives:\n  pragma: [internal]\noutput:\n  indent: 4\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)

    text = generate_rbs([_library()], config)

    assert "# Holds books.\nclass Library::Shelf\n" in text
    assert "    def setup: () -> void\n" in text


def test_build_assembler_registers_configured_directives(tmp_path: Path) -> None:
    (tmp_path / ".docsig.yml").write_text("directives:\n  pragma: [internal]\n", encoding="utf-8")

    assembler = build_assembler(load_config(tmp_path), load_plugins=False)
    documentation = assembler.documentation(klass("Shelf", ["@internal"]))

    assert isinstance(documentation.tags[0], Pragma)


def test_generate_declarations_counts_containers() -> None:
    assert len(generate_declarations([_library()])) == 2


@pytest.fixture
def docsig_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("docsig")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved[0]:
            handler.close()
    for handler in saved[0]:
        logger.addHandler(handler)
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_library_logger_is_silent_until_configured() -> None:
    handlers = logging.getLogger("docsig").handlers

    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_configure_logging_installs_handlers(tmp_path: Path, docsig_logger: logging.Logger) -> None:
    logger = configure_logging(verbose=True, log_file=tmp_path / "docsig.log")

    assert logger is docsig_logger
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2

    configure_logging()
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_quiet_console_still_writes_debug_to_file(
    tmp_path: Path, docsig_logger: logging.Logger
) -> None:
    log_file = tmp_path / "docsig.log"
    configure_logging(quiet=True, log_file=log_file)
    console = next(h for h in docsig_logger.handlers if not isinstance(h, logging.FileHandler))

    logging.getLogger("docsig.rbs.compiler").debug("fell back to untyped")
    for handler in docsig_logger.handlers:
        handler.flush()

    assert console.level == logging.WARNING
    assert "fell back to untyped" in log_file.read_text(encoding="utf-8")


@pytest.mark.parametrize(
    ("verbose", "quiet", "expected"),
    [(False, False, logging.INFO), (True, False, logging.DEBUG), (False, True, logging.WARNING)],
)
def test_log_level(verbose: bool, quiet: bool, expected: int) -> None:
    assert log_level(verbose=verbose, quiet=quiet) == expected


def test_verbose_and_quiet_are_exclusive() -> None:
    with pytest.raises(ValueError):
        log_level(verbose=True, quiet=True)


def test_setup_logging_follows_configuration(tmp_path: Path, docsig_logger: logging.Logger) -> None:
    (tmp_path / ".docsig.yml").write_text(
        "logging:\n  quiet: true\n  file: docsig.log\n", encoding="utf-8"
    )

    setup_logging(load_config(tmp_path))
    logging.getLogger("docsig.pipeline").info("configured")
    for handler in docsig_logger.handlers:
        handler.flush()

    assert "configured" in (tmp_path / "docsig.log").read_text(encoding="utf-8")
