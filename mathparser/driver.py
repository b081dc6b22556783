"""
Parse driver.

Runs the lexer and the parser over a complete input and turns every kind
of failure (lexical, structural, trailing input) into one ParseFailure
value carrying a Diagnostic. Malformed input never raises across this
boundary; callers inspect the returned ParseOutput.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from .lexer import Lexer, LexerError, Diagnostic
from .parser import Expr, Parser, ParserConfig, ParseError, to_pretty_form, to_full_form

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """A successful parse."""
    expr: Expr
    success: ClassVar[bool] = True

    def to_pretty_form(self) -> str:
        return to_pretty_form(self.expr)

    def to_full_form(self) -> str:
        return to_full_form(self.expr)


@dataclass(frozen=True)
class ParseFailure:
    """A failed parse; renders as its diagnostic in either form."""
    diagnostic: Diagnostic
    success: ClassVar[bool] = False

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def label(self) -> str:
        return self.diagnostic.label

    def to_pretty_form(self) -> str:
        return self.diagnostic.render()

    def to_full_form(self) -> str:
        return self.diagnostic.render()


ParseOutput = Union[ParseResult, ParseFailure]


def parse(source: str, name: str = "<string>", config: Optional[ParserConfig] = None) -> ParseOutput:
    """
    Parse source text as one complete expression.

    Args:
        source: Source text
        name: Label used in diagnostics, usually a file name
        config: Parser options

    Returns:
        ParseResult with the root expression, or ParseFailure
    """
    try:
        tokens = Lexer(source, name).tokenize()
        expr = Parser(tokens, config, source).parse()
    except (LexerError, ParseError) as e:
        logger.debug("parse of %s failed: %s", name, e)
        return ParseFailure(e.diagnostic)

    return ParseResult(expr)


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> ParseOutput:
    """
    Read a UTF-8 file and parse its contents, labelled with the path.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse(source, filepath, config)


def parse_string(source: str, name: str = "<string>", config: Optional[ParserConfig] = None) -> Expr:
    """
    Convenience function to parse a source string.

    Returns:
        Root expression

    Raises:
        LexerError: If no lexeme matches somewhere in the input
        ParseError: If the input is not a single expression
    """
    tokens = Lexer(source, name).tokenize()
    return Parser(tokens, config, source).parse()
