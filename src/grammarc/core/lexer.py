"""
Lexer/Tokenizer for combined grammar files.

Converts grammar text into a stream of tokens with source location tracking.
Identifiers are classified as lexer or parser rule names by their first
letter, and a small state machine decides when the text after a lexer
rule's ':' must be captured verbatim as a raw pattern.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import make_unexpected_char, make_unexpected_eof

logger = logging.getLogger(__name__)

DEFAULT_TAB_WIDTH = 4


class TokenKind(Enum):
    """Token kinds in the grammar language."""

    # Payload-carrying
    PARSER_IDENT = "parser identifier"
    LEXER_IDENT = "lexer identifier"
    LEXER_PATTERN = "lexer pattern"

    # Punctuation
    BAR = "'|'"
    SEMICOLON = "';'"
    COLON = "':'"

    # Special
    EOF = "end of input"


PUNCTUATION = {
    "|": TokenKind.BAR,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
}

IDENT_KINDS = (TokenKind.PARSER_IDENT, TokenKind.LEXER_IDENT)


class LexerState(Enum):
    """Where the lexer is within the current rule."""

    INITIAL = "initial"  # start of a rule
    OTHER = "other"
    LEXER_RULE = "lexer_rule"  # saw a lexer rule name, expects ':'
    LEXER_PATTERN = "lexer_pattern"  # saw that ':', expects a raw pattern


def next_state(state: LexerState, kind: TokenKind) -> LexerState:
    """Transition the lexer state after emitting a token of the given kind."""
    if kind == TokenKind.SEMICOLON:
        return LexerState.INITIAL
    if state == LexerState.INITIAL and kind == TokenKind.LEXER_IDENT:
        return LexerState.LEXER_RULE
    if state == LexerState.LEXER_RULE and kind == TokenKind.COLON:
        return LexerState.LEXER_PATTERN
    return LexerState.OTHER


@dataclass(frozen=True)
class Token:
    """
    A single token in a grammar file.

    Attributes:
        kind: Kind of token
        value: Identifier name or raw pattern text; empty for punctuation and EOF
        row: Row of the first character (0-indexed)
        col: Column of the first character (0-indexed)
    """

    kind: TokenKind
    value: str = ""
    row: int = 0
    col: int = 0

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.kind in (*IDENT_KINDS, TokenKind.LEXER_PATTERN):
            return f"{self.kind.value} {self.value!r}"
        return self.kind.value

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, {self.row}:{self.col})"


class Lexer:
    """
    Lexer for combined grammar files.

    Converts source text into a stream of tokens, switching into raw
    pattern capture after ``LexerRule:``.
    """

    def __init__(self, text: str, tab_width: int = DEFAULT_TAB_WIDTH):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            tab_width: Columns a tab character advances
        """
        self.text = text
        self.tab_width = tab_width
        self.pos = 0
        self.row = 0
        self.col = 0
        self.state = LexerState.INITIAL
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating row/column."""
        if self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\n":
                self.row += 1
                self.col = 0
            elif ch == "\t":
                self.col += self.tab_width
            else:
                self.col += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, newlines included."""
        while (ch := self.current_char()) is not None and ch.isspace():
            self.advance()

    def skip_line_comment(self) -> None:
        """Skip comment from // to end of line, leaving the newline."""
        if self.current_char() == "/" and self.peek_char() == "/":
            while self.current_char() not in (None, "\n"):
                self.advance()

    def skip_block_comment(self) -> None:
        """Skip comment from /* through */; an unterminated one runs to end of input."""
        if self.current_char() == "/" and self.peek_char() == "*":
            self.advance()
            self.advance()
            while self.current_char() is not None:
                if self.current_char() == "*" and self.peek_char() == "/":
                    self.advance()
                    self.advance()
                    return
                self.advance()

    def skip_trivia(self) -> None:
        """Skip whitespace and comments until nothing more can be skipped."""
        while True:
            start = self.pos
            self.skip_whitespace()
            self.skip_line_comment()
            self.skip_block_comment()
            if self.pos == start:
                return

    def read_pattern(self) -> str:
        """
        Read a raw lexer pattern up to, not including, the next unescaped ';'.

        Backslash escapes are kept verbatim in the pattern text.

        Raises:
            UnexpectedCharError: If whitespace appears inside the pattern
        """
        chars = []
        while (ch := self.current_char()) is not None and ch != ";":
            if ch.isspace():
                raise make_unexpected_char(ch, self.row, self.col)
            chars.append(ch)
            self.advance()
            if ch == "\\":
                escaped = self.current_char()
                if escaped is None:
                    break
                if escaped.isspace():
                    raise make_unexpected_char(escaped, self.row, self.col)
                chars.append(escaped)
                self.advance()
        return "".join(chars)

    def read_identifier(self) -> str:
        """
        Read an identifier, with an optional tick-enclosed literal suffix.

        ``rule``, ``SEMI``, ``expr'plus'`` and ``x''`` are all single
        identifiers. A lone trailing tick is not part of the identifier.
        """
        chars = []
        while (ch := self.current_char()) is not None and (ch.isalnum() or ch == "_"):
            chars.append(ch)
            self.advance()

        if self.current_char() == "'":
            offset = 1
            while (ch := self.peek_char(offset)) is not None and ch != "'" and not ch.isspace():
                offset += 1
            if self.peek_char(offset) == "'":
                for _ in range(offset + 1):
                    chars.append(self.current_char())
                    self.advance()

        return "".join(chars)

    def next_token(self) -> Token | None:
        """
        Produce the next token, or None once the input is exhausted.

        Raises:
            UnexpectedCharError: If a character starts no token
        """
        self.skip_trivia()

        ch = self.current_char()
        if ch is None:
            return None

        token_row = self.row
        token_col = self.col

        if self.state == LexerState.LEXER_PATTERN:
            token = Token(TokenKind.LEXER_PATTERN, self.read_pattern(), token_row, token_col)

        elif ch in PUNCTUATION:
            self.advance()
            token = Token(PUNCTUATION[ch], "", token_row, token_col)

        elif ch.isalnum() or ch == "_":
            value = self.read_identifier()
            kind = TokenKind.LEXER_IDENT if value[0].isupper() else TokenKind.PARSER_IDENT
            token = Token(kind, value, token_row, token_col)

        else:
            raise make_unexpected_char(ch, token_row, token_col)

        self.state = next_state(self.state, token.kind)
        return token

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with a single EOF token

        Raises:
            LexicalError: If a character cannot be tokenized, or the
                input holds no tokens at all
        """
        while (token := self.next_token()) is not None:
            self.tokens.append(token)

        if not self.tokens:
            raise make_unexpected_eof()

        last = self.tokens[-1]
        self.tokens.append(Token(TokenKind.EOF, "", last.row, last.col))

        logger.debug("Tokenized %d characters into %d tokens", len(self.text), len(self.tokens))
        return self.tokens


def tokenize(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> list[Token]:
    """
    Convenience function to tokenize grammar text.

    Args:
        text: Source text
        tab_width: Columns a tab character advances

    Returns:
        List of tokens
    """
    lexer = Lexer(text, tab_width=tab_width)
    return lexer.tokenize()
