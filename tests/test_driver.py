"""
Test suite for the parse driver and diagnostics.

Tests cover:
- Successful parses and their text forms
- Lexical and structural failures returned as values
- Diagnostic rendering with source excerpt and caret
- Parsing files

Author: xwest
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathparser import parse, parse_file, parse_string, ParseResult, ParseFailure, ParseError
from mathparser.lexer import LexerError
from mathparser.parser import ParserConfig, Plus, Times, Number, Symbol


class TestParseDriver(unittest.TestCase):
    """Test cases for parse()."""

    def test_success(self):
        result = parse("1 + 2x")
        self.assertIsInstance(result, ParseResult)
        self.assertTrue(result.success)
        self.assertEqual(result.expr, Plus(Number("1"), Times(Number("2"), Symbol("x"))))
        self.assertEqual(result.to_pretty_form(), "Plus[1, Times[2, x]]")
        self.assertEqual(result.to_full_form(), '["Plus", 1, ["Times", 2, "x"]]')

    def test_comments_and_whitespace_ignored(self):
        result = parse("  (* sum *) a +\n b (* done *)  ")
        self.assertEqual(result.to_pretty_form(), "Plus[a, b]")

    def test_structural_failure(self):
        result = parse("1 +")
        self.assertIsInstance(result, ParseFailure)
        self.assertFalse(result.success)
        self.assertEqual(result.message, "expected expression but found end of input")
        self.assertEqual(result.label, "<string>")
        self.assertEqual(
            result.to_pretty_form(),
            "<string>:1:4 failure: expected expression but found end of input\n\n1 +\n   ^",
        )
        self.assertEqual(result.to_full_form(), result.to_pretty_form())

    def test_failure_on_later_line(self):
        result = parse("f[1,\n  2", name="input.m")
        self.assertEqual(
            result.to_pretty_form(),
            "input.m:2:4 failure: expected ',' or ']' but found end of input\n\n  2\n   ^",
        )

    def test_trailing_input(self):
        result = parse("(a) )")
        self.assertEqual(result.diagnostic.code, "P002")
        self.assertTrue(result.to_pretty_form().startswith(
            "<string>:1:5 failure: expected end of input but found ')'"))

    def test_lexical_failure(self):
        result = parse('1 + "abc')
        self.assertFalse(result.success)
        self.assertEqual(result.diagnostic.code, "L002")
        self.assertEqual(result.diagnostic.location.column, 5)
        self.assertTrue(result.to_pretty_form().endswith('1 + "abc\n    ^'))

    def test_invalid_character(self):
        result = parse("a $ b")
        self.assertEqual(result.message, "no lexeme matches at '$'")
        self.assertEqual(result.diagnostic.location.column, 3)

    def test_label_is_base_name(self):
        result = parse("1 +", name=os.path.join("some", "dir", "expr.m"))
        self.assertTrue(result.to_pretty_form().startswith("expr.m:1:4 failure:"))

    def test_parsed_list_pretty_form(self):
        self.assertEqual(parse("{1, 2, 3}").to_pretty_form(), "List[1, 2, 3]")

    def test_whitespace_does_not_change_result(self):
        results = [parse(source).expr for source in ["1+2", "1 + 2", "1  +  2"]]
        self.assertEqual(results, [Plus(Number("1"), Number("2"))] * 3)

    def test_deep_nesting_is_a_failure_value(self):
        """Test nesting deeper than the stack allows never raises from parse()."""
        for source in ["a[[" * 400 + "1" + "]]" * 400, "(" * 400 + "1" + ")" * 400]:
            with self.subTest(kind=source[:3]):
                result = parse(source)
                self.assertIsInstance(result, ParseFailure)
                self.assertEqual(result.diagnostic.code, "P003")
                self.assertTrue(result.to_pretty_form().startswith("<string>:1:"))

    def test_deep_valid_input_succeeds(self):
        result = parse("{" * 17 + "1" + "}" * 17)
        self.assertTrue(result.success)

    def test_help_text_rendered_on_request(self):
        diagnostic = parse("1 +").diagnostic
        self.assertNotIn("help:", diagnostic.render())
        self.assertEqual(
            diagnostic.render(show_help=True),
            diagnostic.render() + "\n  help: The parser expected to see expression at this position.",
        )

    def test_config_passed_through(self):
        result = parse("2x", config=ParserConfig(implicit_multiplication=False))
        self.assertFalse(result.success)


class TestParseFileAndString(unittest.TestCase):
    """Test cases for the file and string conveniences."""

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "input.m")
            with open(path, "w", encoding="utf-8") as f:
                f.write("(* header *)\nf[x] + 1\n")

            result = parse_file(path)
            self.assertTrue(result.success)
            self.assertEqual(result.to_pretty_form(), "Plus[f[x], 1]")

    def test_parse_file_failure_labelled_with_file_name(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "broken.m")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{1, 2")

            result = parse_file(path)
            self.assertFalse(result.success)
            self.assertEqual(result.label, "broken.m")

    def test_parse_file_missing(self):
        with self.assertRaises(OSError):
            parse_file(os.path.join(tempfile.gettempdir(), "does-not-exist", "x.m"))

    def test_parse_string(self):
        self.assertEqual(parse_string("a + b"), Plus(Symbol("a"), Symbol("b")))
        with self.assertRaises(ParseError):
            parse_string("a +")
        with self.assertRaises(LexerError):
            parse_string("a @ b")


if __name__ == '__main__':
    unittest.main()
