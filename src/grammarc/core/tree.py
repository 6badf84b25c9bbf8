"""
Derivation tree built by the grammar parser.

The tree mirrors the five productions the parser itself uses:

    S  := R1 ';' S | ε
    R1 := ParserIdent ':' R2 | LexerIdent ':' LexerPattern
    R2 := R3 R4
    R3 := ParserIdent R3 | LexerIdent R3 | ε
    R4 := '|' R2 | ε

Every child subtree is held in a Node so it can carry annotations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .node import Node

# S


@dataclass(frozen=True)
class SConcat:
    """One rule followed by the rest of the grammar."""

    rule: Node[ParseR1]
    rest: Node[ParseS]


@dataclass(frozen=True)
class SEpsilon:
    """End of the grammar."""


# R1


@dataclass(frozen=True)
class R1NonTerminal:
    """A parser rule: name and its alternatives."""

    name: str
    body: Node[ParseR2]


@dataclass(frozen=True)
class R1Terminal:
    """A lexer rule: name and its raw pattern."""

    name: str
    pattern: str


# R2


@dataclass(frozen=True)
class R2Rule:
    """One alternative's symbols followed by the remaining alternatives."""

    symbols: Node[ParseR3]
    tail: Node[ParseR4]


# R3


@dataclass(frozen=True)
class R3NonTerminal:
    name: str
    rest: Node[ParseR3]


@dataclass(frozen=True)
class R3Terminal:
    name: str
    rest: Node[ParseR3]


@dataclass(frozen=True)
class R3Epsilon:
    """End of an alternative's symbol run."""


# R4


@dataclass(frozen=True)
class R4Concat:
    """'|' followed by further alternatives."""

    alternatives: Node[ParseR2]


@dataclass(frozen=True)
class R4Epsilon:
    """No further alternatives."""


ParseS = Union[SConcat, SEpsilon]
ParseR1 = Union[R1NonTerminal, R1Terminal]
ParseR2 = R2Rule
ParseR3 = Union[R3NonTerminal, R3Terminal, R3Epsilon]
ParseR4 = Union[R4Concat, R4Epsilon]


def _outline(value: object) -> tuple[str, list[Node]]:
    """Label for one variant and its child nodes, in print order."""
    if isinstance(value, SConcat):
        return "S.Concat", [value.rule, value.rest]
    if isinstance(value, R1NonTerminal):
        return f"R1.NonTerminal {value.name}", [value.body]
    if isinstance(value, R1Terminal):
        return f"R1.Terminal {value.name} {value.pattern}", []
    if isinstance(value, R2Rule):
        return "R2.Rule", [value.symbols, value.tail]
    if isinstance(value, R3NonTerminal):
        return f"R3.NonTerminal {value.name}", [value.rest]
    if isinstance(value, R3Terminal):
        return f"R3.Terminal {value.name}", [value.rest]
    if isinstance(value, R4Concat):
        return "R4.Concat", [value.alternatives]
    if isinstance(value, SEpsilon):
        return "S.Epsilon", []
    if isinstance(value, R3Epsilon):
        return "R3.Epsilon", []
    if isinstance(value, R4Epsilon):
        return "R4.Epsilon", []
    raise TypeError(f"Not a derivation tree node: {value!r}")


def format_tree(node: Node, indent: int = 0) -> str:
    """Render a derivation tree as an indented outline, one variant per line."""
    lines = []
    pending = [(node, indent)]
    while pending:
        current, depth = pending.pop()
        label, children = _outline(current.value)
        lines.append("  " * depth + label)
        pending.extend((child, depth + 1) for child in reversed(children))
    return "\n".join(lines)
