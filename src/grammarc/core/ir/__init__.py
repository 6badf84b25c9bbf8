"""
grammarc Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .grammar import (
    Grammar,
    Ident,
    LexerProduction,
    NonTerminal,
    ParserProduction,
    Production,
    Terminal,
)

__all__ = [
    "Grammar",
    "Ident",
    "LexerProduction",
    "NonTerminal",
    "ParserProduction",
    "Production",
    "Terminal",
]
