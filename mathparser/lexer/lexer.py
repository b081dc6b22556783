"""
mathparser Lexer - turns Mathematica-style source text into tokens

Whitespace and (* block comments *) are skipped between tokens. Comments
nest, so "(* a (* b *) c *)" is a single comment.

Author: xwest
"""

import re
import logging
from typing import List

from .tokens import Token, TokenType, SourceLocation, OPERATORS, ESCAPE_SEQUENCES
from .errors import (
    source_line_at, create_invalid_character_error,
    create_unterminated_string_error, create_unterminated_comment_error
)

logger = logging.getLogger(__name__)

DIGITS = '0123456789'


class Lexer:
    """
    Lexical analyzer for Mathematica-style expressions.

    Converts source text into a list of tokens terminated by an EOF token.
    Numbers are kept as their literal text; they never carry a sign, the
    parser decides what a leading '-' means.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text
            filename: Name of the source for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?')
        self.identifier_pattern = re.compile(r'[a-zA-Z][a-zA-Z0-9]*')

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        Returns:
            List of tokens including the EOF token

        Raises:
            LexerError: If no lexeme matches at some position
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

        while True:
            self._skip_whitespace_and_comments()
            if self.pos >= len(self.source):
                break
            self.tokens.append(self._next_token())

        self.tokens.append(Token(TokenType.EOF, "", None, self._location()))
        logger.debug("%s: %d tokens", self.filename, len(self.tokens))
        return self.tokens

    def _next_token(self) -> Token:
        """Scan the token starting at the current position."""
        location = self._location()
        current_char = self.source[self.pos]

        # Numbers
        if current_char in DIGITS or (current_char == '.' and self._peek() in DIGITS):
            return self._tokenize_pattern(self.number_pattern, TokenType.NUMBER, location)

        # Identifiers
        if current_char.isascii() and current_char.isalpha():
            return self._tokenize_pattern(self.identifier_pattern, TokenType.IDENTIFIER, location)

        # String literals
        if current_char == '"':
            return self._tokenize_string(location)

        # Operators and punctuation (longest first)
        for op_len in (2, 1):
            potential_op = self.source[self.pos:self.pos + op_len]
            if len(potential_op) == op_len and potential_op in OPERATORS:
                self._advance_by(op_len)
                return Token(OPERATORS[potential_op], potential_op, None, location)

        raise create_invalid_character_error(
            current_char, location, source_line_at(self.source, location)
        )

    def _tokenize_pattern(self, pattern, token_type: TokenType, location: SourceLocation) -> Token:
        """Tokenize a lexeme described by a regex (numbers, identifiers)."""
        match = pattern.match(self.source, self.pos)
        lexeme = match.group(0)
        self._advance_by(len(lexeme))
        return Token(token_type, lexeme, lexeme, location)

    def _tokenize_string(self, location: SourceLocation) -> Token:
        """Tokenize a double quoted string literal, decoding escapes."""
        start_pos = self.pos
        self._advance()  # Skip opening quote

        value_parts = []

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            if self.source[self.pos] == '\\':
                if self.pos + 1 >= len(self.source):
                    break
                self._advance()  # Skip backslash
                escape_char = self.source[self.pos]
                value_parts.append(ESCAPE_SEQUENCES.get(escape_char, escape_char))
                self._advance()
            else:
                value_parts.append(self.source[self.pos])
                self._advance()

        if self.pos >= len(self.source) or self.source[self.pos] != '"':
            raise create_unterminated_string_error(location, source_line_at(self.source, location))

        self._advance()  # Skip closing quote

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.STRING, lexeme, ''.join(value_parts), location)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and nested block comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            if self.source.startswith('(*', self.pos):
                self._skip_comment()
                continue

            break

    def _skip_comment(self):
        """Skip a (* ... *) comment, honouring nested comments."""
        location = self._location()
        self._advance_by(2)
        depth = 1

        while depth > 0:
            if self.pos >= len(self.source):
                raise create_unterminated_comment_error(location, source_line_at(self.source, location))
            if self.source.startswith('(*', self.pos):
                depth += 1
                self._advance_by(2)
            elif self.source.startswith('*)', self.pos):
                depth -= 1
                self._advance_by(2)
            else:
                self._advance()

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()
