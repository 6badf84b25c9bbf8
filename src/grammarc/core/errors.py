"""
Error types for grammar tokenizing, parsing, and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .lexer import Token, TokenKind


class GrammarError(Exception):
    """Base exception for all grammarc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message

    def with_file(self, file: Path) -> GrammarError:
        """Attach a source file to the error context and return self."""
        if self.context is not None:
            self.context = ErrorContext(file=file, row=self.context.row, col=self.context.col)
        else:
            self.context = ErrorContext(file=file)
        self.args = (self._format_message(),)
        return self


class LexicalError(GrammarError):
    """
    Raised when the source text cannot be split into tokens.

    Examples:
    - A character that starts no token
    - Whitespace inside a raw lexer pattern
    - Input with no tokens at all
    """


class UnexpectedCharError(LexicalError):
    """A character matched no token rule."""

    def __init__(self, char: str, context: ErrorContext | None = None):
        self.char = char
        super().__init__(f"Unexpected character: {char!r}", context)


class UnexpectedEofError(LexicalError):
    """Input ended where more was required."""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Unexpected end of input", context)


class ParseError(GrammarError):
    """
    Raised when the token stream does not form a grammar.

    Examples:
    - Missing ':' after a rule name
    - Missing ';' at the end of a rule
    - A lexer rule without a pattern
    """


class UnexpectedTokenError(ParseError):
    """The lookahead token is not what the current production requires."""

    def __init__(self, actual: Token, expected: TokenKind, context: ErrorContext | None = None):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Unexpected token {actual.describe()}, expected {expected.value}",
            context,
        )


class ConfigError(GrammarError):
    """Raised when grammarc.toml holds an invalid setting."""


class SourceFileError(GrammarError):
    """Raised when a grammar file cannot be read or is not UTF-8 text."""


@dataclass(frozen=True)
class ErrorContext:
    """
    Context information for an error, including source location.

    Rows and columns are stored 0-based, as tokens carry them, and
    displayed 1-based.

    Attributes:
        file: Path to the grammar file, when known
        row: Row of the offending input (0-indexed)
        col: Column of the offending input (0-indexed)
    """

    file: Path | None = None
    row: int | None = None
    col: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "grammar.g4:3:10"
        """
        parts = [str(self.file) if self.file else "<input>"]
        if self.row is not None:
            parts.append(str(self.row + 1))
            if self.col is not None:
                parts.append(str(self.col + 1))
        return ":".join(parts)


def make_unexpected_char(char: str, row: int, col: int) -> UnexpectedCharError:
    """
    Helper to create an UnexpectedCharError at a source position.

    Args:
        char: The offending character
        row: Row of the character (0-indexed)
        col: Column of the character (0-indexed)

    Returns:
        UnexpectedCharError with context attached
    """
    return UnexpectedCharError(char, ErrorContext(row=row, col=col))


def make_unexpected_eof(row: int | None = None, col: int | None = None) -> UnexpectedEofError:
    """Helper to create an UnexpectedEofError, optionally positioned."""
    if row is None:
        return UnexpectedEofError()
    return UnexpectedEofError(ErrorContext(row=row, col=col))


def make_unexpected_token(actual: Token, expected: TokenKind) -> UnexpectedTokenError:
    """
    Helper to create an UnexpectedTokenError located at the offending token.

    Args:
        actual: The lookahead token that did not match
        expected: The token kind the production required

    Returns:
        UnexpectedTokenError with context attached
    """
    return UnexpectedTokenError(actual, expected, ErrorContext(row=actual.row, col=actual.col))
