"""
Error handling for the mathparser lexer.

Provides the Diagnostic record shared by the lexer and the parser, and the
rendering of a diagnostic as a positioned message with a source excerpt
and caret.

Author: xwest
"""

import os
from typing import Optional
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass(frozen=True)
class Diagnostic:
    """A positioned failure report shared by the lexer and the parser."""
    message: str
    location: SourceLocation
    code: Optional[str] = None
    help_text: Optional[str] = None
    source_line: str = ""

    @property
    def label(self) -> str:
        """Source label as shown to users (file name without directories)."""
        return os.path.basename(self.location.filename) or self.location.filename

    @property
    def header(self) -> str:
        return f"{self.label}:{self.location.line}:{self.location.column} failure: {self.message}"

    def render(self, show_help: bool = False) -> str:
        """
        Render the diagnostic for humans.

        The first line names the source, line, column and message. It is
        followed by a blank line, the offending source line, and a caret
        under the failing column. With show_help, a "help:" line follows
        the caret when the diagnostic has help text.
        """
        caret = " " * (self.location.column - 1) + "^"
        result = f"{self.header}\n\n{self.source_line}\n{caret}"
        if show_help and self.help_text:
            result += f"\n  help: {self.help_text}"
        return result

    def __str__(self) -> str:
        return self.render()


def source_line_at(source: str, location: SourceLocation) -> str:
    """Return the full source line containing the given location."""
    start = source.rfind("\n", 0, location.offset) + 1
    end = source.find("\n", location.offset)
    if end == -1:
        end = len(source)
    return source[start:end].rstrip("\r")


class LexerError(Exception):
    """
    Exception raised when no lexeme matches at a position.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        source_line: str = "",
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            code=code,
            help_text=help_text,
            source_line=source_line,
        )

    def __str__(self) -> str:
        return self.diagnostic.header


# Helper functions for creating common errors

def create_invalid_character_error(char: str, location: SourceLocation, source_line: str = "") -> LexerError:
    """Create an error for a character that starts no lexeme."""
    if char.isprintable():
        help_text = f"The character '{char}' does not start any token."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"no lexeme matches at '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        source_line=source_line,
    )


def create_unterminated_string_error(location: SourceLocation, source_line: str = "") -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        message="unterminated string literal",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        source_line=source_line,
    )


def create_unterminated_comment_error(location: SourceLocation, source_line: str = "") -> LexerError:
    """Create an error for a comment that is never closed."""
    return LexerError(
        message="unterminated comment",
        location=location,
        code="L003",
        help_text="Every '(*' needs a matching '*)', including nested comments.",
        source_line=source_line,
    )
