"""
mathparser Parser Package

Implements a packrat (memoizing recursive descent) parser for
Mathematica-style expressions and the expression tree it produces.

Key Features:
- Precedence climbing from || down to [[ ]] indexing
- Implicit multiplication by juxtaposition ("2x", "(a+b)(c+d)")
- Range syntax with defaults (";;", "2;;", ";;3;;2")
- Immutable, structurally comparable expression nodes
- Pretty form and full (Lisp) form serializations

Author: xwest
"""

from .ast_nodes import (
    Expr, Symbol, Number, String, Apply, Builtin, Singleton,
    Plus, Subtract, Times, Divide, Power, Exp,
    Or, And, Not, Equal, Unequal, Less, Greater,
    List, Part, Span,
    ALL, TRUE, FALSE, BUILTINS, SINGLETONS, to_expr, build,
)
from .forms import to_pretty_form, to_full_form
from .parser import Parser, ParserConfig, parse_tokens
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "ParserConfig", "parse_tokens",

    # Expression nodes
    "Expr", "Symbol", "Number", "String", "Apply", "Builtin", "Singleton",
    "Plus", "Subtract", "Times", "Divide", "Power", "Exp",
    "Or", "And", "Not", "Equal", "Unequal", "Less", "Greater",
    "List", "Part", "Span",
    "ALL", "TRUE", "FALSE", "BUILTINS", "SINGLETONS", "to_expr", "build",

    # Serializations
    "to_pretty_form", "to_full_form",

    # Error handling
    "ParseError",
]
