"""
Grammar Parser Package.

This package provides the recursive-descent parser for combined grammar
files. The parser is built using mixins to separate the rule list from
the body of parser rules.

The main exports are:
- Parser: The complete parser class
- parse: Convenience function to parse a token list

Usage:
    from grammarc.core.grammar_parser_impl import parse
    from grammarc.core.lexer import tokenize

    derivation = parse(tokenize(text))
"""

import logging
from collections.abc import Iterable

from .. import tree
from ..lexer import Token
from ..node import Node, SourceSpan
from .alternatives import AlternativeParserMixin
from .base import BaseParser
from .rules import RuleParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    RuleParserMixin,
    AlternativeParserMixin,
):
    """
    Complete grammar parser combining all mixins.

    Parsing stops at the first unexpected token or premature end of
    input; there is no error recovery.
    """

    def parse(self) -> Node[tree.ParseS]:
        return self.parse_s()


def parse(tokens: Iterable[Token]) -> Node[tree.ParseS]:
    """
    Parse a token sequence into a derivation tree.

    Args:
        tokens: Tokens from the lexer, normally ending with EOF

    Returns:
        Root node of the derivation tree; empty input gives ``S.Epsilon``

    Raises:
        UnexpectedTokenError: If a token doesn't fit the grammar
        UnexpectedEofError: If the tokens end before an EOF token
    """
    remaining = iter(tokens)
    first = next(remaining, None)
    if first is None:
        root: Node[tree.ParseS] = Node(tree.SEpsilon())
        root.add_annotation(SourceSpan(row=0, col=0))
        return root

    root = Parser(first, remaining).parse()
    logger.debug("Parsed derivation tree rooted at %r", root.value.__class__.__name__)
    return root


__all__ = ["Parser", "parse"]
