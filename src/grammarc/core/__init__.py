"""Core grammarc functionality: lexer, parser, derivation tree, IR, transform, configuration."""

from . import ir
from .errors import (
    ConfigError,
    ErrorContext,
    GrammarError,
    LexicalError,
    ParseError,
    SourceFileError,
)
from .grammar_parser_impl import parse
from .lexer import tokenize
from .manifest import GrammarSettings, load_settings
from .pipeline import compile_file, compile_grammar
from .transform import transform

__all__ = [
    "ir",
    "GrammarError",
    "LexicalError",
    "ParseError",
    "ConfigError",
    "SourceFileError",
    "ErrorContext",
    "tokenize",
    "parse",
    "transform",
    "compile_grammar",
    "compile_file",
    "GrammarSettings",
    "load_settings",
]
