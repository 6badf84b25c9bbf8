"""
Grammar IR types.

This module contains the flattened, source-ordered representation of a
grammar produced by the tree transform: a list of productions, each a
lexer rule or a parser rule with its alternatives.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Terminal(BaseModel):
    """A reference to a lexer rule inside an alternative."""

    kind: Literal["terminal"] = "terminal"
    name: str

    model_config = ConfigDict(frozen=True)


class NonTerminal(BaseModel):
    """A reference to a parser rule inside an alternative."""

    kind: Literal["nonterminal"] = "nonterminal"
    name: str

    model_config = ConfigDict(frozen=True)


Ident = Annotated[Union[Terminal, NonTerminal], Field(discriminator="kind")]


class LexerProduction(BaseModel):
    """
    A terminal definition.

    Attributes:
        name: Lexer rule name (starts uppercase)
        pattern: Raw match pattern, exactly as written
    """

    kind: Literal["lexer"] = "lexer"
    name: str
    pattern: str

    model_config = ConfigDict(frozen=True)


class ParserProduction(BaseModel):
    """
    A nonterminal definition.

    Attributes:
        name: Parser rule name
        alternatives: One symbol sequence per '|'-separated alternative,
            in source order; an empty sequence is an empty alternative
    """

    kind: Literal["parser"] = "parser"
    name: str
    alternatives: list[list[Ident]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def symbols(self) -> list[Ident]:
        """All identifiers referenced by the alternatives, first use first, without repeats."""
        seen: set[tuple[str, str]] = set()
        result: list[Ident] = []
        for alternative in self.alternatives:
            for ident in alternative:
                key = (ident.kind, ident.name)
                if key not in seen:
                    seen.add(key)
                    result.append(ident)
        return result

    @property
    def is_nullable_directly(self) -> bool:
        """Check if some alternative is empty."""
        return any(not alternative for alternative in self.alternatives)


Production = Annotated[Union[LexerProduction, ParserProduction], Field(discriminator="kind")]


class Grammar(BaseModel):
    """
    A complete grammar.

    Attributes:
        rules: Productions in the order they appear in the source
    """

    rules: list[Production] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def lexer_rules(self) -> list[LexerProduction]:
        return [rule for rule in self.rules if isinstance(rule, LexerProduction)]

    @property
    def parser_rules(self) -> list[ParserProduction]:
        return [rule for rule in self.rules if isinstance(rule, ParserProduction)]

    def names(self) -> list[str]:
        """Rule names in source order."""
        return [rule.name for rule in self.rules]

    def get(self, name: str) -> LexerProduction | ParserProduction | None:
        """Get the first production with the given name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None
