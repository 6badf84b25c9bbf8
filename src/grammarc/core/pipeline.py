import logging
from pathlib import Path

from . import ir
from .errors import ErrorContext, GrammarError, SourceFileError
from .grammar_parser_impl import parse
from .lexer import tokenize
from .manifest import GrammarSettings
from .transform import transform

logger = logging.getLogger(__name__)


def compile_grammar(text: str, settings: GrammarSettings | None = None) -> ir.Grammar:
    """
    Compile grammar text into a Grammar.

    Runs the lexer, the parser, and the tree transform in turn. The first
    error raised by any stage ends the run.

    Args:
        text: Grammar source text
        settings: Lexer and transform settings (defaults if omitted)

    Returns:
        Grammar with productions in source order

    Raises:
        LexicalError: If the text cannot be tokenized
        ParseError: If the tokens do not form a grammar
    """
    settings = settings or GrammarSettings()

    tokens = tokenize(text, tab_width=settings.lexer.tab_width)
    derivation = parse(tokens)
    grammar = transform(derivation, settings.transform.ident_classification)

    logger.info(
        "Compiled %d lexer rules and %d parser rules",
        len(grammar.lexer_rules),
        len(grammar.parser_rules),
    )
    return grammar


def read_grammar(path: Path) -> str:
    """
    Read a grammar file as UTF-8 text.

    Raises:
        SourceFileError: If the file cannot be read or is not valid UTF-8
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceFileError(
            f"Not valid UTF-8 (byte {e.start}): {e.reason}", ErrorContext(file=path)
        ) from e
    except OSError as e:
        raise SourceFileError(
            f"Cannot read file: {e.strerror or e}", ErrorContext(file=path)
        ) from e
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def compile_file(path: Path, settings: GrammarSettings | None = None) -> ir.Grammar:
    """
    Compile a grammar file.

    Args:
        path: Grammar file, read as UTF-8
        settings: Lexer and transform settings (defaults if omitted)

    Returns:
        Grammar with productions in source order

    Raises:
        GrammarError: With the file attached to its context
    """
    text = read_grammar(path)
    try:
        return compile_grammar(text, settings)
    except GrammarError as e:
        raise e.with_file(path)
