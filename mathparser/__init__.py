"""
mathparser Package

Parses Mathematica-style expressions into an immutable expression tree
and renders the tree back as text.

Architecture:
    mathparser/
    ├── lexer/           # Tokenization, comments, diagnostics
    ├── parser/          # Packrat parser, expression nodes, text forms
    ├── driver.py        # parse(): whole-input parsing, failures as values
    └── cli.py           # Command line entry point

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, LexerError, Diagnostic
from .parser import Parser, ParserConfig, ParseError, to_pretty_form, to_full_form
from .driver import parse, parse_file, parse_string, ParseResult, ParseFailure

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParserConfig",

    # Entry points
    "parse",
    "parse_file",
    "parse_string",
    "ParseResult",
    "ParseFailure",

    # Serializations
    "to_pretty_form",
    "to_full_form",

    # Errors
    "Diagnostic",
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
