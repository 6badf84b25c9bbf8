"""
Parser mixin for the body of a parser rule.

Grammar:
    R2 := R3 R4
    R3 := ParserIdent R3 | LexerIdent R3 | ε
    R4 := '|' R2 | ε

The body grammar is not LL(1) in its usual left-recursive form; written
this way every choice is made on a single lookahead token.

R3 and the R2/R4 pair are right-recursive chains. Each is read in a loop
and folded into its nested nodes from the innermost one outwards, so a
rule may have any number of symbols or alternatives.
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


class AlternativeParserMixin(_Base):
    """Parses '|'-separated alternatives of symbol runs."""

    def parse_r2(self) -> Node[tree.ParseR2]:
        """
        Parse one alternative and everything after it, R4 included.

        R2 can derive the empty string, but only through R3 and R4, so it
        makes no decision of its own here.
        """
        # (start of the alternative, its symbols, the '|' after it)
        leading: list[tuple[Token, Node[tree.ParseR3], Token]] = []
        while True:
            start = self.next
            symbols = self.parse_r3()
            if not self.match(TokenKind.BAR):
                break
            leading.append((start, symbols, self.advance()))

        # parse_r3 only returns in front of '|' or ';'
        tail: Node[tree.ParseR4] = self.node(tree.R4Epsilon(), self.next)
        body = self.node(tree.R2Rule(symbols, tail), start)
        for start, symbols, bar in reversed(leading):
            tail = self.node(tree.R4Concat(body), bar)
            body = self.node(tree.R2Rule(symbols, tail), start)
        return body

    def parse_r3(self) -> Node[tree.ParseR3]:
        names: list[Token] = []
        while self.match(*IDENT_KINDS):
            names.append(self.advance())

        if not self.match(TokenKind.SEMICOLON, TokenKind.BAR):
            raise make_unexpected_token(self.next, TokenKind.SEMICOLON)

        run: Node[tree.ParseR3] = self.node(tree.R3Epsilon(), self.next)
        for token in reversed(names):
            if token.kind == TokenKind.PARSER_IDENT:
                run = self.node(tree.R3NonTerminal(token.value, run), token)
            else:
                run = self.node(tree.R3Terminal(token.value, run), token)
        return run
