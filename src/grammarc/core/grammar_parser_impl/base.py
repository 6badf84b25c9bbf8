"""
Base parser class for grammar files.

Provides the one-token lookahead and the token matching used by all parser mixins.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from ..errors import make_unexpected_eof, make_unexpected_token
from ..lexer import Token, TokenKind
from ..node import Node, SourceSpan

if TYPE_CHECKING:
    from .. import tree

T = TypeVar("T")


@runtime_checkable
class ParserProtocol(Protocol):
    """
    Protocol defining the interface available to parser mixins.

    This allows mypy to understand that mixins will have access to
    BaseParser methods when combined in the final Parser class.
    """

    next: Token

    def advance(self) -> Token: ...
    def expect(self, kind: TokenKind) -> Token: ...
    def match(self, *kinds: TokenKind) -> bool: ...
    def node(self, value: T, start: Token) -> Node[T]: ...

    # Productions that call across mixins
    def parse_r2(self) -> "Node[tree.ParseR2]": ...


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    The parser sees exactly one token of lookahead, ``next``. Tokens are
    pulled from the remaining input only when the current one is consumed,
    and a production may only decide on the lookahead it directly needs.
    """

    def __init__(self, first: Token, remaining: Iterator[Token]):
        """
        Initialize parser.

        Args:
            first: Initial lookahead token
            remaining: Tokens after the first
        """
        self.next = first
        self.remaining = remaining

    def advance(self) -> Token:
        """
        Consume the lookahead and return it.

        Raises:
            UnexpectedEofError: If the input ends before an EOF token
        """
        consumed = self.next
        try:
            self.next = next(self.remaining)
        except StopIteration:
            raise make_unexpected_eof(consumed.row, consumed.col) from None
        return consumed

    def expect(self, kind: TokenKind) -> Token:
        """
        Expect a specific token kind and consume it.

        Raises:
            UnexpectedTokenError: If the lookahead doesn't match
        """
        if self.next.kind != kind:
            raise make_unexpected_token(self.next, kind)
        return self.advance()

    def match(self, *kinds: TokenKind) -> bool:
        """Check if the lookahead matches any of the given kinds."""
        return self.next.kind in kinds

    def node(self, value: T, start: Token) -> Node[T]:
        """Wrap a tree value in a Node annotated with where its production began."""
        wrapped = Node(value)
        wrapped.add_annotation(SourceSpan(row=start.row, col=start.col))
        return wrapped
