"""
Project configuration loaded from grammarc.toml.

Example:

    [lexer]
    tab_width = 4

    [transform]
    ident_classification = "token"   # or "case"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError, ErrorContext
from .lexer import DEFAULT_TAB_WIDTH
from .transform import IdentClassification

logger = logging.getLogger(__name__)

MANIFEST_NAME = "grammarc.toml"


@dataclass
class LexerConfig:
    """Lexer configuration."""

    tab_width: int = DEFAULT_TAB_WIDTH


@dataclass
class TransformConfig:
    """Transform configuration."""

    ident_classification: IdentClassification = IdentClassification.TOKEN


@dataclass
class GrammarSettings:
    """All settings for one pipeline run."""

    lexer: LexerConfig = field(default_factory=LexerConfig)
    transform: TransformConfig = field(default_factory=TransformConfig)


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"[{name}] must be a table, got {section!r}",
            ErrorContext(file=path),
        )
    return section


def load_manifest(path: Path) -> GrammarSettings:
    """
    Load settings from a grammarc.toml file.

    Raises:
        ConfigError: If the file is not TOML, a section is not a table,
            or a setting has an invalid value
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path)) from e

    lexer_data = _section(data, "lexer", path)
    transform_data = _section(data, "transform", path)

    tab_width = lexer_data.get("tab_width", DEFAULT_TAB_WIDTH)
    if not isinstance(tab_width, int) or isinstance(tab_width, bool) or tab_width < 1:
        raise ConfigError(
            f"lexer.tab_width must be a positive integer, got {tab_width!r}",
            ErrorContext(file=path),
        )

    classification = transform_data.get("ident_classification", IdentClassification.TOKEN.value)
    try:
        ident_classification = IdentClassification(classification)
    except ValueError:
        choices = ", ".join(repr(c.value) for c in IdentClassification)
        raise ConfigError(
            f"transform.ident_classification must be one of {choices}, got {classification!r}",
            ErrorContext(file=path),
        ) from None

    return GrammarSettings(
        lexer=LexerConfig(tab_width=tab_width),
        transform=TransformConfig(ident_classification=ident_classification),
    )


def find_manifest(start: Path) -> Path | None:
    """Look for grammarc.toml in the given directory, or beside the given file."""
    directory = start if start.is_dir() else start.parent
    candidate = directory / MANIFEST_NAME
    if candidate.exists():
        return candidate
    return None


def load_settings(grammar_file: Path | None = None, config: Path | None = None) -> GrammarSettings:
    """
    Resolve settings for a run.

    An explicit config path wins; otherwise grammarc.toml beside the
    grammar file, then in the working directory; otherwise defaults.
    """
    if config is None:
        if grammar_file is not None:
            config = find_manifest(grammar_file)
        if config is None:
            config = find_manifest(Path.cwd())

    if config is None:
        logger.debug("No %s found, using defaults", MANIFEST_NAME)
        return GrammarSettings()

    logger.debug("Loading settings from %s", config)
    return load_manifest(config)
