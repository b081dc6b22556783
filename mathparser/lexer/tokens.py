"""
Token definitions for the mathparser lexer.

This module defines the token types of the Mathematica-style expression
syntax:
- Literals (numbers and strings)
- Identifiers
- Operators and punctuation

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """
    Enumeration of all token types.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input

    # ========================================================================
    # Literals and identifiers
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14, .5, 1.e-3
    STRING = auto()                 # "hello \"world\""
    IDENTIFIER = auto()             # x, Plus, f2

    # ========================================================================
    # Operators
    # ========================================================================

    # Arithmetic operators
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    POWER = auto()                  # ^

    # Comparison operators
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >

    # Logical operators
    LOGICAL_AND = auto()            # &&
    LOGICAL_OR = auto()             # ||
    LOGICAL_NOT = auto()            # !

    # Range operator
    SPAN = auto()                   # ;;

    # ========================================================================
    # Delimiters
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,


# Operator and punctuation lexemes. The lexer tries longer lexemes first.
OPERATORS = {
    # Two-character operators
    '&&': TokenType.LOGICAL_AND,
    '||': TokenType.LOGICAL_OR,
    '==': TokenType.EQUAL,
    '!=': TokenType.NOT_EQUAL,
    ';;': TokenType.SPAN,

    # Single-character operators
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.DIVIDE,
    '^': TokenType.POWER,
    '<': TokenType.LESS_THAN,
    '>': TokenType.GREATER_THAN,
    '!': TokenType.LOGICAL_NOT,

    # Delimiters
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '[': TokenType.LEFT_BRACKET,
    ']': TokenType.RIGHT_BRACKET,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
}

# Human readable names used in "expected ..." diagnostics
TOKEN_DESCRIPTIONS = {
    TokenType.EOF: "end of input",
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.IDENTIFIER: "identifier",
}
TOKEN_DESCRIPTIONS.update({token_type: f"'{lexeme}'" for lexeme, token_type in OPERATORS.items()})

# Escape sequences recognised inside string literals. Any other escaped
# character stands for itself.
ESCAPE_SEQUENCES = {
    '"': '"',
    '\\': '\\',
    'n': '\n',
    't': '\t',
    'r': '\r',
}


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting only; parsed expressions never keep one.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Contains the token type, lexeme (raw text), decoded value and
    source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Decoded value (e.g., unescaped string)
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def end_offset(self) -> int:
        """Offset just past the last character of the lexeme."""
        return self.location.offset + len(self.lexeme)

    def describe(self) -> str:
        """Describe the token for diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.lexeme}'"
