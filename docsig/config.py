"""Configuration loading for docsig (.docsig.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .rbs.inference import CONSTRUCTOR_NAME, FLUENT_PREFIXES

CONFIG_FILENAME = ".docsig.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class InferenceConfig:
    """Return type inference settings."""

    constructor: str = CONSTRUCTOR_NAME
    fluent_prefixes: List[str] = field(default_factory=lambda: list(FLUENT_PREFIXES))


@dataclass
class DirectiveConfig:
    """Extra directive names recognised in documentation comments."""

    text: List[str] = field(default_factory=list)
    pragma: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Settings for rendering RBS text."""

    indent: str = "  "


@dataclass
class LoggingConfig:
    """Console verbosity and an optional log file, relative to the config root."""

    verbose: bool = False
    quiet: bool = False
    file: Optional[Path] = None


@dataclass
class DocSigConfig:
    """Represents the settings defined in .docsig.yml."""

    root: Path
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    directives: DirectiveConfig = field(default_factory=DirectiveConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> DocSigConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocSigConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    inference = InferenceConfig()
    inference_data = _as_dict(data.get("inference"))
    if inference_data:
        inference.constructor = _as_str(inference_data.get("constructor")) or CONSTRUCTOR_NAME
        if "fluent_prefixes" in inference_data:
            inference.fluent_prefixes = _as_str_list(inference_data.get("fluent_prefixes"))

    directives = DirectiveConfig()
    directive_data = _as_dict(data.get("directives"))
    if directive_data:
        directives.text = _as_str_list(directive_data.get("text"))
        directives.pragma = _as_str_list(directive_data.get("pragma"))

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        indent = output_data.get("indent")
        if isinstance(indent, int) and not isinstance(indent, bool):
            output.indent = " " * indent
        elif isinstance(indent, str) and indent:
            output.indent = indent

    logging_config = LoggingConfig()
    logging_data = _as_dict(data.get("logging"))
    if logging_data:
        logging_config.verbose = logging_data.get("verbose") is True
        logging_config.quiet = logging_data.get("quiet") is True
        if logging_config.verbose and logging_config.quiet:
            raise ConfigError("logging.verbose and logging.quiet cannot both be set")
        log_file = _as_str(logging_data.get("file"))
        if log_file:
            logging_config.file = root / log_file

    return DocSigConfig(
        root=root,
        inference=inference,
        directives=directives,
        output=output,
        logging=logging_config,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DirectiveConfig",
    "DocSigConfig",
    "InferenceConfig",
    "LoggingConfig",
    "OutputConfig",
    "load_config",
]
