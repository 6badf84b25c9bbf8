"""
Tests for the recursive-descent grammar parser.

Tests cover:
- Derivation tree shape for parser and lexer rules
- Nullable alternatives
- Source span annotations
- Syntax errors and premature end of input
"""

import pytest

from grammarc.core import tree
from grammarc.core.errors import UnexpectedEofError, UnexpectedTokenError
from grammarc.core.grammar_parser_impl import parse
from grammarc.core.lexer import Token, TokenKind, tokenize
from grammarc.core.node import SourceSpan
from grammarc.core.tree import format_tree


def r3_names(node) -> list[tuple[str, str]]:
    """Walk an R3 chain into (variant, name) pairs."""
    result = []
    value = node.value
    while not isinstance(value, tree.R3Epsilon):
        result.append((type(value).__name__, value.name))
        value = value.rest.value
    return result


# =============================================================================
# Tree Shape
# =============================================================================


class TestDerivationTree:
    """Test the shape of parsed trees."""

    def test_program_production(self, program_tokens):
        root = parse(program_tokens)

        assert isinstance(root.value, tree.SConcat)
        rule = root.value.rule.value
        assert isinstance(rule, tree.R1NonTerminal)
        assert rule.name == "program"

        first = rule.body.value
        assert isinstance(first, tree.R2Rule)
        assert r3_names(first.symbols) == [
            ("R3NonTerminal", "rule"),
            ("R3Terminal", "SEMI"),
        ]

        tail = first.tail.value
        assert isinstance(tail, tree.R4Concat)
        second = tail.alternatives.value
        assert r3_names(second.symbols) == [
            ("R3NonTerminal", "rule"),
            ("R3Terminal", "SEMI"),
            ("R3NonTerminal", "program"),
        ]
        assert isinstance(second.tail.value, tree.R4Epsilon)

        assert isinstance(root.value.rest.value, tree.SEpsilon)

    def test_lexer_rule(self):
        root = parse(tokenize("ID: [a-z]+;"))
        rule = root.value.rule.value
        assert rule == tree.R1Terminal("ID", "[a-z]+")

    def test_rules_nest_in_source_order(self):
        root = parse(tokenize("a: B; B: x; c: ;"))
        names = []
        node = root
        while isinstance(node.value, tree.SConcat):
            names.append(node.value.rule.value.name)
            node = node.value.rest
        assert names == ["a", "B", "c"]

    def test_empty_token_list(self):
        root = parse([])
        assert isinstance(root.value, tree.SEpsilon)

    def test_only_eof(self):
        root = parse([Token(TokenKind.EOF)])
        assert isinstance(root.value, tree.SEpsilon)

    def test_generator_input(self, program_tokens):
        assert parse(iter(program_tokens)) == parse(program_tokens)


class TestNullableAlternatives:
    """Empty symbol runs are legal alternatives."""

    def test_empty_body(self):
        root = parse(tokenize("program: ;"))
        body = root.value.rule.value.body.value
        assert isinstance(body.symbols.value, tree.R3Epsilon)
        assert isinstance(body.tail.value, tree.R4Epsilon)

    def test_empty_last_alternative(self):
        root = parse(tokenize("a: b | ;"))
        body = root.value.rule.value.body.value
        assert r3_names(body.symbols) == [("R3NonTerminal", "b")]
        second = body.tail.value.alternatives.value
        assert isinstance(second.symbols.value, tree.R3Epsilon)

    def test_empty_first_alternative(self):
        root = parse(tokenize("a: | B;"))
        body = root.value.rule.value.body.value
        assert isinstance(body.symbols.value, tree.R3Epsilon)
        second = body.tail.value.alternatives.value
        assert r3_names(second.symbols) == [("R3Terminal", "B")]


class TestSourceSpans:
    """Every node carries the position where its production began."""

    def test_rule_spans(self):
        root = parse(tokenize("a: b;\nC: x;"))
        assert root.get_annotation(SourceSpan) == SourceSpan(row=0, col=0)

        second = root.value.rest
        assert second.value.rule.get_annotation(SourceSpan) == SourceSpan(row=1, col=0)

        end = second.value.rest
        assert end.get_annotation(SourceSpan) == SourceSpan(row=1, col=4)

    def test_symbol_spans(self):
        root = parse(tokenize("a: bb CC;"))
        symbols = root.value.rule.value.body.value.symbols
        assert symbols.get_annotation(SourceSpan) == SourceSpan(row=0, col=3)
        assert symbols.value.rest.get_annotation(SourceSpan) == SourceSpan(row=0, col=6)

    def test_empty_input_root_span(self):
        assert parse([]).get_annotation(SourceSpan) == SourceSpan(row=0, col=0)


# =============================================================================
# Errors
# =============================================================================


class TestSyntaxErrors:
    """The first unexpected token aborts the parse."""

    def test_missing_colon(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("Abc 123"))
        error = exc_info.value
        assert error.expected == TokenKind.COLON
        assert error.actual == Token(TokenKind.PARSER_IDENT, "123", 0, 4)

    def test_missing_semicolon(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("program: rule"))
        assert exc_info.value.actual.kind == TokenKind.EOF
        assert exc_info.value.expected == TokenKind.SEMICOLON

    def test_rule_cannot_start_with_punctuation(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("; a: b;"))
        assert exc_info.value.actual.kind == TokenKind.SEMICOLON
        assert exc_info.value.expected == TokenKind.LEXER_IDENT

    def test_colon_inside_alternative(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("a: b : c;"))
        assert exc_info.value.actual.kind == TokenKind.COLON
        assert exc_info.value.expected == TokenKind.SEMICOLON

    def test_lexer_rule_without_pattern(self):
        tokens = [
            Token(TokenKind.LEXER_IDENT, "A"),
            Token(TokenKind.COLON),
            Token(TokenKind.PARSER_IDENT, "b"),
            Token(TokenKind.SEMICOLON),
            Token(TokenKind.EOF),
        ]
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokens)
        assert exc_info.value.expected == TokenKind.LEXER_PATTERN

    def test_second_rule_error_reports_its_position(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("a: b;\nc d;"))
        assert exc_info.value.context.format() == "<input>:2:3"

    def test_message_names_both_tokens(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize("Abc 123"))
        assert "parser identifier '123'" in str(exc_info.value)
        assert "expected ':'" in str(exc_info.value)


class TestPrematureEnd:
    """Token lists that stop before an EOF token."""

    def test_no_eof_after_last_rule(self):
        tokens = [
            Token(TokenKind.PARSER_IDENT, "a"),
            Token(TokenKind.COLON),
            Token(TokenKind.SEMICOLON),
        ]
        with pytest.raises(UnexpectedEofError):
            parse(tokens)

    def test_single_identifier(self):
        with pytest.raises(UnexpectedEofError):
            parse([Token(TokenKind.PARSER_IDENT, "a")])


# =============================================================================
# Large Grammars
# =============================================================================


class TestLargeGrammars:
    """Chain length is bounded by memory, not by the interpreter's stack."""

    def test_many_rules(self):
        text = "".join(f"r{i}: A;\n" for i in range(2000))
        root = parse(tokenize(text))

        count = 0
        node = root
        while isinstance(node.value, tree.SConcat):
            assert node.value.rule.value.name == f"r{count}"
            assert node.get_annotation(SourceSpan) == SourceSpan(row=count, col=0)
            count += 1
            node = node.value.rest
        assert count == 2000

    def test_many_symbols(self):
        text = "a: " + " ".join(f"s{i}" for i in range(2000)) + ";"
        body = parse(tokenize(text)).value.rule.value.body.value
        names = r3_names(body.symbols)
        assert len(names) == 2000
        assert names[0] == ("R3NonTerminal", "s0")
        assert names[-1] == ("R3NonTerminal", "s1999")

    def test_many_alternatives(self):
        text = "a: " + " | ".join(f"T{i}" for i in range(1000)) + ";"
        body = parse(tokenize(text)).value.rule.value.body

        seen = []
        while True:
            seen.extend(r3_names(body.value.symbols))
            tail = body.value.tail.value
            if isinstance(tail, tree.R4Epsilon):
                break
            body = tail.alternatives
        assert seen == [("R3Terminal", f"T{i}") for i in range(1000)]

    def test_alternative_spans(self):
        root = parse(tokenize("a: B | c;"))
        body = root.value.rule.value.body
        assert body.get_annotation(SourceSpan) == SourceSpan(row=0, col=3)
        tail = body.value.tail
        assert tail.get_annotation(SourceSpan) == SourceSpan(row=0, col=5)
        last = tail.value.alternatives
        assert last.get_annotation(SourceSpan) == SourceSpan(row=0, col=7)
        assert last.value.tail.get_annotation(SourceSpan) == SourceSpan(row=0, col=8)

    def test_deep_trees_compare_equal(self):
        text = "".join(f"r{i}: x y | Z;\n" for i in range(2000))
        tokens = tokenize(text)
        assert parse(iter(tokens)) == parse(tokens)

    def test_error_after_many_rules(self):
        text = "".join(f"r{i}: A;\n" for i in range(2000)) + "b c: d;"
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse(tokenize(text))
        assert exc_info.value.context.format() == "<input>:2001:3"

    def test_outline_of_long_alternative(self):
        text = "a: " + " ".join(f"s{i}" for i in range(2000)) + ";"
        lines = format_tree(parse(tokenize(text))).splitlines()
        assert len(lines) == 2000 + 6
        assert lines[3] == "      R3.NonTerminal s0"
        assert lines[-3] == "  " * 2003 + "R3.Epsilon"
        assert lines[-1] == "  S.Epsilon"
