"""
Error handling for the mathparser parser.

The parser backtracks freely between alternative rules; only when no
alternative matches is a ParseError built, positioned at the furthest
token any rule reached.

Author: xwest
"""

from typing import Iterable, Optional

from ..lexer.tokens import Token
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the input is not a valid expression.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        source_line: str = "",
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location,
            code=code,
            help_text=help_text,
            source_line=source_line,
        )
        self.token = token

    def __str__(self) -> str:
        return self.diagnostic.header


def describe_expected(expected: Iterable[str]) -> str:
    """Join expectations as "a, b or c"."""
    items = sorted(set(expected))
    if not items:
        return "expression"
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} or {items[-1]}"


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Iterable[str], found: Token, source_line: str = "") -> ParseError:
    """Create an error for a token no rule could continue with."""
    expected_str = describe_expected(expected)
    return ParseError(
        message=f"expected {expected_str} but found {found.describe()}",
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position.",
        source_line=source_line,
    )


def create_trailing_input_error(found: Token, source_line: str = "") -> ParseError:
    """Create an error for input left over after a complete expression."""
    return ParseError(
        message=f"expected end of input but found {found.describe()}",
        token=found,
        code="P002",
        help_text="A complete expression was parsed but input remains after it.",
        source_line=source_line,
    )


def create_nesting_error(limit: Optional[int], found: Token, source_line: str = "") -> ParseError:
    """
    Create an error for brackets nested too deeply.

    limit is the configured ParserConfig.max_nesting_depth, or None when the
    interpreter's recursion limit was reached first.
    """
    if limit is None:
        message = "expression nested too deeply"
        help_text = "The nesting exceeds what the interpreter's recursion limit allows."
    else:
        message = f"expression nested more than {limit} levels deep"
        help_text = "Raise ParserConfig.max_nesting_depth to accept deeper input."

    return ParseError(
        message=message,
        token=found,
        code="P003",
        help_text=help_text,
        source_line=source_line,
    )
