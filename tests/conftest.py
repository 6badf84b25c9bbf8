"""Shared pytest fixtures for grammarc tests."""

from pathlib import Path

import pytest

from grammarc.core.lexer import Token, TokenKind


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def grammars_dir(fixtures_dir: Path) -> Path:
    """Return path to grammar fixtures directory."""
    return fixtures_dir / "grammars"


@pytest.fixture
def program_tokens() -> list[Token]:
    """Tokens for ``program: rule SEMI | rule SEMI program;``, positions zeroed."""
    kinds = [
        (TokenKind.PARSER_IDENT, "program"),
        (TokenKind.COLON, ""),
        (TokenKind.PARSER_IDENT, "rule"),
        (TokenKind.LEXER_IDENT, "SEMI"),
        (TokenKind.BAR, ""),
        (TokenKind.PARSER_IDENT, "rule"),
        (TokenKind.LEXER_IDENT, "SEMI"),
        (TokenKind.PARSER_IDENT, "program"),
        (TokenKind.SEMICOLON, ""),
        (TokenKind.EOF, ""),
    ]
    return [Token(kind, value) for kind, value in kinds]
