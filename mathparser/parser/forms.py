"""
Text forms of expressions.

Two serializations are supported:

- Pretty form, for inspection: Plus[a, b], List[1, 2, 3], "text".
  Operators are always written in Head[args] notation.
- Full (Lisp) form, a uniform bracketed form in which the head is
  serialized like any other element: ["Plus", "a", "b"].

Author: xwest
"""

from .ast_nodes import Expr, Symbol, Number, String, Apply, Builtin, Singleton

# Characters re-escaped when a String is written back out. The backslash
# must come first.
_STRING_ESCAPES = (
    ('\\', '\\\\'),
    ('"', '\\"'),
    ('\n', '\\n'),
    ('\t', '\\t'),
    ('\r', '\\r'),
)


def quote_string(value: str) -> str:
    """Quote and escape a decoded string value."""
    for char, escaped in _STRING_ESCAPES:
        value = value.replace(char, escaped)
    return f'"{value}"'


def to_pretty_form(expr: Expr) -> str:
    """Render an expression in Head[args] notation."""
    if isinstance(expr, Symbol):
        return expr.name
    elif isinstance(expr, Number):
        return expr.value
    elif isinstance(expr, String):
        return quote_string(expr.value)
    elif isinstance(expr, Singleton):
        return expr.name
    elif isinstance(expr, Builtin):
        head = expr.name
    elif isinstance(expr, Apply):
        head = to_pretty_form(expr.head)
    else:
        raise TypeError(f"not an expression: {expr!r}")

    args = ", ".join(to_pretty_form(arg) for arg in expr.args)
    return f"{head}[{args}]"


def to_full_form(expr: Expr) -> str:
    """Render an expression as nested [head, args...] lists."""
    if isinstance(expr, (Symbol, Singleton)):
        return quote_string(expr.name)
    elif isinstance(expr, Number):
        return expr.value
    elif isinstance(expr, String):
        return quote_string(expr.value)
    elif isinstance(expr, (Builtin, Apply)):
        elements = [to_full_form(expr.head)]
        elements.extend(to_full_form(arg) for arg in expr.args)
        return f"[{', '.join(elements)}]"
    raise TypeError(f"not an expression: {expr!r}")
