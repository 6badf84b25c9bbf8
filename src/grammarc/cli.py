"""
grammarc CLI - Entry point.

Commands:
- compile: Compile a grammar file and show its productions
- tokens: Show the token stream of a grammar file
- tree: Show the derivation tree of a grammar file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from grammarc._version import __version__
from grammarc.core import ir
from grammarc.core.errors import GrammarError
from grammarc.core.grammar_parser_impl import parse
from grammarc.core.lexer import Token, tokenize
from grammarc.core.manifest import GrammarSettings, load_settings
from grammarc.core.pipeline import compile_file, read_grammar
from grammarc.core.tree import format_tree

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="grammarc – compile combined lexer/parser grammar files",
    no_args_is_help=True,
)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"grammarc version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
    debug: int = typer.Option(
        0,
        "--debug",
        "-d",
        count=True,
        help="Turn debugging information on (repeat for more)",
    ),
) -> None:
    """grammarc CLI main callback for global options."""
    level = _LOG_LEVELS[min(debug, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _settings(grammar_file: Path, config: Path | None) -> GrammarSettings:
    try:
        return load_settings(grammar_file, config)
    except GrammarError as e:
        _fail(e)


def _fail(error: GrammarError) -> NoReturn:
    err_console.print(Text.assemble(("Error: ", "bold red"), str(error)), soft_wrap=True)
    raise typer.Exit(code=1)


def _production_table(grammar: ir.Grammar) -> Table:
    table = Table(title="Productions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Name", style="bold")
    table.add_column("Definition")

    for index, rule in enumerate(grammar.rules, start=1):
        if isinstance(rule, ir.LexerProduction):
            table.add_row(str(index), "lexer", rule.name, Text(rule.pattern))
        else:
            alternatives = [
                " ".join(ident.name for ident in alternative) or "ε"
                for alternative in rule.alternatives
            ]
            table.add_row(str(index), "parser", rule.name, Text(" | ".join(alternatives)))
    return table


def _token_table(tokens: list[Token]) -> Table:
    table = Table(title="Tokens")
    table.add_column("Row", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Kind")
    table.add_column("Value")
    for token in tokens:
        table.add_row(str(token.row), str(token.col), token.kind.name, Text(token.value))
    return table


@app.command(name="compile")
def compile_command(
    grammar_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
    as_json: bool = typer.Option(False, "--json", help="Print the grammar as JSON"),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Path to grammarc.toml"
    ),
) -> None:
    """Compile a grammar file and show its productions."""
    settings = _settings(grammar_file, config)
    try:
        grammar = compile_file(grammar_file, settings)
    except GrammarError as e:
        _fail(e)

    if as_json:
        typer.echo(grammar.model_dump_json(indent=2))
    else:
        console.print(_production_table(grammar))


@app.command(name="tokens")
def tokens_command(
    grammar_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Path to grammarc.toml"
    ),
) -> None:
    """Show the token stream of a grammar file."""
    settings = _settings(grammar_file, config)
    try:
        tokens = tokenize(read_grammar(grammar_file), tab_width=settings.lexer.tab_width)
    except GrammarError as e:
        _fail(e.with_file(grammar_file))

    console.print(_token_table(tokens))


@app.command(name="tree")
def tree_command(
    grammar_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Grammar file"),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Path to grammarc.toml"
    ),
) -> None:
    """Show the derivation tree of a grammar file."""
    settings = _settings(grammar_file, config)
    try:
        root = parse(tokenize(read_grammar(grammar_file), tab_width=settings.lexer.tab_width))
    except GrammarError as e:
        _fail(e.with_file(grammar_file))

    typer.echo(format_tree(root))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main()
