"""
Parser mixin for the rule list and individual rules.

Grammar:
    S  := R1 ';' S | ε
    R1 := ParserIdent ':' R2
        | LexerIdent ':' LexerPattern
"""

from typing import TYPE_CHECKING

from .. import tree
from ..errors import make_unexpected_token
from ..lexer import IDENT_KINDS, Token, TokenKind
from ..node import Node

if TYPE_CHECKING:
    from .base import ParserProtocol

    _Base = ParserProtocol
else:
    _Base = object


class RuleParserMixin(_Base):
    """Parses the sequence of top-level rules."""

    def parse_s(self) -> Node[tree.ParseS]:
        """
        Parse the rules from the lookahead to the end of input.

        The rest of the grammar is held beneath the rule in front of it.
        Rules are read in a loop and the spine is assembled afterwards,
        from the end of input back to the first rule, so the number of
        rules is not limited by the interpreter's stack.
        """
        rules: list[tuple[Token, Node[tree.ParseR1]]] = []
        while self.match(*IDENT_KINDS):
            start = self.next
            rule = self.parse_r1()
            self.expect(TokenKind.SEMICOLON)
            rules.append((start, rule))

        if not self.match(TokenKind.EOF):
            raise make_unexpected_token(self.next, TokenKind.LEXER_IDENT)

        spine: Node[tree.ParseS] = self.node(tree.SEpsilon(), self.next)
        for start, rule in reversed(rules):
            spine = self.node(tree.SConcat(rule, spine), start)
        return spine

    def parse_r1(self) -> Node[tree.ParseR1]:
        """Parse one parser rule or lexer rule, without its ';'."""
        start = self.next

        # Parser rule
        if self.match(TokenKind.PARSER_IDENT):
            name = self.advance().value
            self.expect(TokenKind.COLON)
            body = self.parse_r2()
            return self.node(tree.R1NonTerminal(name, body), start)

        # Lexer rule
        if self.match(TokenKind.LEXER_IDENT):
            name = self.advance().value
            self.expect(TokenKind.COLON)
            if not self.match(TokenKind.LEXER_PATTERN):
                raise make_unexpected_token(self.next, TokenKind.LEXER_PATTERN)
            pattern = self.advance().value
            return self.node(tree.R1Terminal(name, pattern), start)

        raise make_unexpected_token(self.next, TokenKind.PARSER_IDENT)
