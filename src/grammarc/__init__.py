"""
grammarc - front end for combined lexer/parser grammar files.

Compiles ANTLR-style grammar text into an ordered list of productions:
tokenize, parse into a derivation tree, then flatten.
"""

from __future__ import annotations

from ._version import __version__

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    ConfigError,
    GrammarError,
    LexicalError,
    ParseError,
    SourceFileError,
    UnexpectedCharError,
    UnexpectedEofError,
    UnexpectedTokenError,
)
from .core.grammar_parser_impl import parse
from .core.ir import Grammar, LexerProduction, NonTerminal, ParserProduction, Terminal
from .core.lexer import Token, TokenKind, tokenize
from .core.node import Annotation, Node, SourceSpan
from .core.pipeline import compile_file, compile_grammar
from .core.transform import IdentClassification, transform

__all__ = [
    "__version__",
    "ir",
    # Pipeline
    "tokenize",
    "parse",
    "transform",
    "compile_grammar",
    "compile_file",
    # Types
    "Token",
    "TokenKind",
    "Node",
    "Annotation",
    "SourceSpan",
    "IdentClassification",
    "Grammar",
    "LexerProduction",
    "ParserProduction",
    "Terminal",
    "NonTerminal",
    # Errors
    "GrammarError",
    "LexicalError",
    "ParseError",
    "ConfigError",
    "SourceFileError",
    "UnexpectedCharError",
    "UnexpectedEofError",
    "UnexpectedTokenError",
]
