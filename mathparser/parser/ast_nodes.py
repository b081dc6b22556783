"""
Abstract Syntax Tree node definitions for mathparser.

Defines the closed set of expression nodes produced by the parser:
- Symbol, Number and String leaves
- Apply, the generic Head[arg1, arg2, ...] shape
- Builtin operator forms (Plus, Times, Part, ...), which are applications
  whose head is fixed to the operator's canonical name
- Singletons (All, True, False)

Nodes are immutable and compare structurally, so the tree produced for
"a + b" is equal to the one produced for "Plus[a, b]". Nodes carry no
source positions and no parent links.

Author: xwest
"""

from abc import ABC
from typing import Any, Dict, Tuple, Type
from dataclasses import dataclass


class Expr(ABC):
    """Base class for all expression nodes."""

    def __call__(self, *args: Any) -> 'Apply':
        """Build the application self[args...]."""
        return Apply(self, tuple(to_expr(arg) for arg in args))

    def __str__(self) -> str:
        from .forms import to_pretty_form
        return to_pretty_form(self)


# ============================================================================
# Leaves
# ============================================================================

@dataclass(frozen=True)
class Symbol(Expr):
    """A bare identifier."""
    name: str


@dataclass(frozen=True)
class Number(Expr):
    """A numeric literal, kept as its literal text (e.g. "-1.5e3")."""
    value: str


@dataclass(frozen=True)
class String(Expr):
    """A string literal, holding the decoded (unescaped) text."""
    value: str


# ============================================================================
# Applications
# ============================================================================

@dataclass(frozen=True)
class Apply(Expr):
    """Generic application head[args...]; head may itself be any expression."""
    head: Expr
    args: Tuple[Expr, ...] = ()


class Builtin(Expr):
    """
    Base class for operator forms.

    An operator form is an application whose head is the class name, e.g.
    Plus(a, b) stands for Plus[a, b]. Arguments keep source order.
    """

    def __init__(self, *args: Expr):
        object.__setattr__(self, "args", tuple(args))

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def head(self) -> Symbol:
        return Symbol(self.name)

    def __setattr__(self, key, value):
        raise AttributeError(f"{self.name} nodes are immutable")

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((self.name, self.args))

    def __repr__(self) -> str:
        return f"{self.name}({', '.join(repr(arg) for arg in self.args)})"


# Arithmetic
class Plus(Builtin):
    pass


class Subtract(Builtin):
    pass


class Times(Builtin):
    pass


class Divide(Builtin):
    pass


class Power(Builtin):
    pass


class Exp(Builtin):
    """Only produced by the explicit Exp[x] syntax."""


# Logical
class Or(Builtin):
    pass


class And(Builtin):
    pass


class Not(Builtin):
    pass


# Relational
class Equal(Builtin):
    pass


class Unequal(Builtin):
    pass


class Less(Builtin):
    pass


class Greater(Builtin):
    pass


# Structural
class List(Builtin):
    pass


class Part(Builtin):
    """expr[[i, j, ...]]; the indexed expression is the first argument."""


class Span(Builtin):
    """start;;stop or start;;stop;;step."""


@dataclass(frozen=True)
class Singleton(Expr):
    """A nullary named constant, i.e. an operator form without arguments."""
    name: str

    @property
    def head(self) -> Symbol:
        return Symbol(self.name)

    @property
    def args(self) -> Tuple[Expr, ...]:
        return ()


ALL = Singleton("All")
TRUE = Singleton("True")
FALSE = Singleton("False")

# Head names that parse to operator forms when written as Name[args]
BUILTINS: Dict[str, Type[Builtin]] = {
    cls.__name__: cls
    for cls in (
        Plus, Subtract, Times, Divide, Power, Exp,
        Or, And, Not,
        Equal, Unequal, Less, Greater,
        List, Part, Span,
    )
}

# Identifiers that parse to singletons
SINGLETONS: Dict[str, Singleton] = {singleton.name: singleton for singleton in (ALL, TRUE, FALSE)}

# -1 as used by negation: -x is Times(-1, x)
MINUS_ONE = Number("-1")


def to_expr(value: Any) -> Expr:
    """
    Convert a Python value into an expression node.

    bool becomes True/False, int and float become Number, str becomes
    String; expressions are returned unchanged.
    """
    if isinstance(value, Expr):
        return value
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, (int, float)):
        return Number(repr(value))
    if isinstance(value, str):
        return String(value)
    raise TypeError(f"cannot convert {type(value).__name__} to an expression")


def build(head: str, *args: Any) -> Expr:
    """
    Build the node for head[args...] the way the parser would.

    Registered operator names produce operator forms, any other head
    produces a generic Apply.
    """
    arguments = tuple(to_expr(arg) for arg in args)
    if head in BUILTINS:
        return BUILTINS[head](*arguments)
    return Apply(Symbol(head), arguments)
