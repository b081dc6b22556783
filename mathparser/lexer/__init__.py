"""
mathparser Lexer Package

Implements the lexical scanner for Mathematica-style expressions.

Key Features:
- Nested (* block comments *)
- Numeric literals kept as literal text
- String literals with escape decoding
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
]
