"""
Derivation tree to Grammar IR transform.

The derivation tree is right-recursive: each rule, symbol, and alternative
holds the remainder of its list beneath it. Walking that spine from the
root visits items in source order, so each list is built front to back
and never reversed.
"""

from __future__ import annotations

import logging
from enum import Enum

from . import ir, tree
from .node import Node

logger = logging.getLogger(__name__)


class IdentClassification(str, Enum):
    """How identifiers inside alternatives become Terminal or NonTerminal."""

    TOKEN = "token"  # by the token kind the lexer assigned
    CASE = "case"  # by the first letter of the name


def transform(
    root: Node[tree.ParseS],
    classification: IdentClassification = IdentClassification.TOKEN,
) -> ir.Grammar:
    """
    Flatten a derivation tree into a Grammar.

    The tree is assumed to come from a successful parse; nothing is
    validated here.

    Args:
        root: Root node returned by the parser
        classification: Rule for classifying identifiers in alternatives

    Returns:
        Grammar with productions in source order
    """
    rules: list[ir.Production] = []
    node = root
    while isinstance(node.value, tree.SConcat):
        rules.append(_visit_r1(node.value.rule, classification))
        node = node.value.rest

    logger.debug("Transformed derivation tree into %d productions", len(rules))
    return ir.Grammar(rules=rules)


def _visit_r1(node: Node[tree.ParseR1], classification: IdentClassification) -> ir.Production:
    value = node.value
    if isinstance(value, tree.R1Terminal):
        return ir.LexerProduction(name=value.name, pattern=value.pattern)
    return ir.ParserProduction(
        name=value.name,
        alternatives=_visit_r2(value.body, classification),
    )


def _visit_r2(node: Node[tree.ParseR2], classification: IdentClassification) -> list[list[ir.Ident]]:
    """Collect the alternatives of an R2 chain, first alternative first."""
    alternatives = []
    current: Node[tree.ParseR2] | None = node
    while current is not None:
        alternatives.append(_visit_r3(current.value.symbols, classification))
        tail = current.value.tail.value
        current = tail.alternatives if isinstance(tail, tree.R4Concat) else None
    return alternatives


def _visit_r3(node: Node[tree.ParseR3], classification: IdentClassification) -> list[ir.Ident]:
    """Collect the symbols of an R3 chain, first symbol first."""
    symbols: list[ir.Ident] = []
    value = node.value
    while isinstance(value, (tree.R3NonTerminal, tree.R3Terminal)):
        symbols.append(_make_ident(value, classification))
        value = value.rest.value
    return symbols


def _make_ident(
    value: tree.R3NonTerminal | tree.R3Terminal, classification: IdentClassification
) -> ir.Ident:
    if classification == IdentClassification.CASE:
        is_terminal = value.name[:1].isupper()
    else:
        is_terminal = isinstance(value, tree.R3Terminal)

    if is_terminal:
        return ir.Terminal(name=value.name)
    return ir.NonTerminal(name=value.name)
