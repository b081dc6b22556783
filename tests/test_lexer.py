"""
Test suite for the mathparser lexer.

Tests cover:
- Identifiers, numbers, strings and operators
- Whitespace and nested comment skipping
- String escape decoding
- Lexical errors and their locations

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathparser.lexer.lexer import Lexer, tokenize_string
from mathparser.lexer.tokens import TokenType
from mathparser.lexer.errors import LexerError


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        return [token.type for token in tokenize_string(source)]

    def _lexemes(self, source: str):
        return [token.lexeme for token in tokenize_string(source)][:-1]

    def test_application_tokens(self):
        """Test tokens of a simple application."""
        self.assertEqual(self._types("f[x, 2.5e-3]"), [
            TokenType.IDENTIFIER, TokenType.LEFT_BRACKET, TokenType.IDENTIFIER,
            TokenType.COMMA, TokenType.NUMBER, TokenType.RIGHT_BRACKET, TokenType.EOF,
        ])
        self.assertEqual(self._lexemes("f[x, 2.5e-3]"), ["f", "[", "x", ",", "2.5e-3", "]"])

    def test_number_shapes(self):
        """Test every numeric literal shape is one token kept as text."""
        for text in ["10", "1.", ".5", "3.14", "1e10", "1E+2", "2.5e-3", ".5e7"]:
            with self.subTest(text=text):
                tokens = tokenize_string(text)
                self.assertEqual(len(tokens), 2)
                self.assertEqual(tokens[0].type, TokenType.NUMBER)
                self.assertEqual(tokens[0].value, text)

    def test_number_never_carries_sign(self):
        """Test that a leading minus is its own token."""
        self.assertEqual(self._types("-5"), [TokenType.MINUS, TokenType.NUMBER, TokenType.EOF])

    def test_incomplete_exponent_is_identifier(self):
        """Test that '2e' is a number followed by an identifier."""
        self.assertEqual(self._lexemes("2e"), ["2", "e"])
        self.assertEqual(self._lexemes("2x3"), ["2", "x3"])

    def test_identifiers(self):
        """Test identifiers are letters followed by letters and digits."""
        self.assertEqual(self._lexemes("Plus x1 abc2def"), ["Plus", "x1", "abc2def"])

    def test_operators_longest_match(self):
        """Test that two character operators win over one character ones."""
        operators = [t for t in self._types("a&&b||!c==d!=e<f>g;;h")
                     if t not in (TokenType.IDENTIFIER, TokenType.EOF)]
        self.assertEqual(operators, [
            TokenType.LOGICAL_AND, TokenType.LOGICAL_OR, TokenType.LOGICAL_NOT,
            TokenType.EQUAL, TokenType.NOT_EQUAL, TokenType.LESS_THAN,
            TokenType.GREATER_THAN, TokenType.SPAN,
        ])
        self.assertEqual(self._lexemes("+-*/^{}(),"), list("+-*/^{}(),"))

    def test_double_brackets_are_separate_tokens(self):
        """Test that '[[' lexes as two adjacent '[' tokens."""
        tokens = tokenize_string("a[[1]]")
        self.assertEqual([t.type for t in tokens[1:3]], [TokenType.LEFT_BRACKET] * 2)
        self.assertEqual(tokens[2].location.offset, tokens[1].end_offset)

    def test_nested_comment_skipped(self):
        """Test that nested comments are skipped as a whole."""
        tokens = tokenize_string("(* a (* b *) c *) 1")
        self.assertEqual([t.type for t in tokens], [TokenType.NUMBER, TokenType.EOF])
        self.assertEqual(tokens[0].value, "1")

    def test_comment_between_tokens(self):
        """Test comments and newlines between tokens."""
        self.assertEqual(self._lexemes("1 (* one *)\n+ (* two *) 2"), ["1", "+", "2"])

    def test_unterminated_comment(self):
        """Test that a comment missing its inner close is unterminated."""
        with self.assertRaises(LexerError) as context:
            tokenize_string("1 + (* a (* b *) 2")
        diagnostic = context.exception.diagnostic
        self.assertEqual(diagnostic.code, "L003")
        self.assertEqual(diagnostic.location.column, 5)

    def test_string_escapes(self):
        """Test the escape table for string literals."""
        cases = {
            r'"plain"': 'plain',
            r'"a\"b"': 'a"b',
            r'"x\\y"': 'x\\y',
            r'"line\nbreak"': 'line\nbreak',
            r'"tab\tstop"': 'tab\tstop',
            r'"\q"': 'q',
            '"multi\nline"': 'multi\nline',
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                token = tokenize_string(source)[0]
                self.assertEqual(token.type, TokenType.STRING)
                self.assertEqual(token.value, expected)
                self.assertEqual(token.lexeme, source)

    def test_unterminated_string(self):
        """Test unterminated string literals, including a trailing backslash."""
        for source in ['"abc', '1 + "abc\\']:
            with self.subTest(source=source):
                with self.assertRaises(LexerError) as context:
                    tokenize_string(source)
                self.assertEqual(context.exception.diagnostic.code, "L002")

    def test_invalid_character(self):
        """Test that a character starting no lexeme is reported where it is."""
        for source, column in [("1 @ 2", 3), ("a & b", 3), ("a; b", 2)]:
            with self.subTest(source=source):
                with self.assertRaises(LexerError) as context:
                    tokenize_string(source)
                diagnostic = context.exception.diagnostic
                self.assertEqual(diagnostic.code, "L001")
                self.assertEqual(diagnostic.location.column, column)
                self.assertEqual(diagnostic.source_line, source)

    def test_locations(self):
        """Test line and column tracking across newlines."""
        tokens = Lexer("a\n  b", "input.m").tokenize()
        self.assertEqual((tokens[1].location.line, tokens[1].location.column), (2, 3))
        self.assertEqual(tokens[1].location.filename, "input.m")
        self.assertEqual(str(tokens[1].location), "input.m:2:3")

    def test_eof_at_end_of_input(self):
        """Test the EOF token sits at the end of the input."""
        tokens = tokenize_string("x  ")
        self.assertEqual(tokens[-1].type, TokenType.EOF)
        self.assertEqual(tokens[-1].location.offset, 3)
        self.assertEqual(tokens[-1].location.column, 4)

    def test_empty_input(self):
        """Test empty and comment-only inputs produce only EOF."""
        for source in ["", "   ", "(* nothing *)"]:
            with self.subTest(source=source):
                self.assertEqual(self._types(source), [TokenType.EOF])


if __name__ == '__main__':
    unittest.main()
