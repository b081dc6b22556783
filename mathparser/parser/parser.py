"""
mathparser Packrat Parser Implementation

Implements a memoizing (packrat) recursive descent parser for
Mathematica-style expressions. Every precedence level is a method; the
result of each (rule, token position) attempt is cached, so backtracking
between alternatives never re-parses the same input twice.

Precedence levels, loosest first:

    ||  &&  ! (prefix)  == !=  < >  ;;  + -  * / juxtaposition  - (prefix)  ^  [[ ]]

Left associative levels are parsed as iterative folds; ^ is collected
iteratively and folded to the right.

Author: xwest
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Dict, Optional, Set, Tuple, Type, List as TokenList

from ..lexer.tokens import Token, TokenType, TOKEN_DESCRIPTIONS
from ..lexer.errors import source_line_at
from .ast_nodes import (
    Expr, Symbol, Number, String, Apply, Builtin,
    Plus, Subtract, Times, Divide, Power, Or, And, Not,
    Equal, Unequal, Less, Greater, List, Part, Span,
    ALL, BUILTINS, SINGLETONS, MINUS_ONE,
)
from .errors import (
    ParseError, create_unexpected_token_error, create_trailing_input_error,
    create_nesting_error
)

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """Configuration for the parser"""
    implicit_multiplication: bool = True  # "2x" is Times[2, x]
    fold_negative_literals: bool = True  # "-2" is the Number -2
    resolve_builtins: bool = True  # "Plus[a, b]" is the same node as "a + b"
    memoize: bool = True
    max_nesting_depth: Optional[int] = None  # Brackets, braces and parentheses; None for no cap


# Tokens that can begin an atom, and therefore an implicit multiplication operand
ATOM_START = {
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.LEFT_PAREN,
    TokenType.LEFT_BRACE,
}

OR_OPERATORS: Dict[TokenType, Type[Builtin]] = {TokenType.LOGICAL_OR: Or}
AND_OPERATORS: Dict[TokenType, Type[Builtin]] = {TokenType.LOGICAL_AND: And}
EQUALITY_OPERATORS: Dict[TokenType, Type[Builtin]] = {
    TokenType.EQUAL: Equal,
    TokenType.NOT_EQUAL: Unequal,
}
RELATIONAL_OPERATORS: Dict[TokenType, Type[Builtin]] = {
    TokenType.LESS_THAN: Less,
    TokenType.GREATER_THAN: Greater,
}
ADDITIVE_OPERATORS: Dict[TokenType, Type[Builtin]] = {
    TokenType.PLUS: Plus,
    TokenType.MINUS: Subtract,
}
MULTIPLICATIVE_OPERATORS: Dict[TokenType, Type[Builtin]] = {
    TokenType.MULTIPLY: Times,
    TokenType.DIVIDE: Divide,
}


class MemoEntry:
    """A record in the memo table: the rule's result and where it stopped."""

    __slots__ = ("result", "end")

    def __init__(self, result: Optional[Expr], end: int):
        self.result = result
        self.end = end

    def __repr__(self) -> str:
        return f"MemoEntry({self.result!r}, end={self.end})"


# Placeholder stored while a rule is running at a position
_IN_PROGRESS = MemoEntry(None, -1)


def memoize(rule: Callable[['Parser'], Optional[Expr]]):
    """
    Cache a rule's outcome per token position.

    A rule that fails leaves the cursor where it started. A rule that is
    re-entered at a position where it is still running fails instead of
    recursing.
    """
    name = rule.__name__

    @wraps(rule)
    def wrapper(self: 'Parser') -> Optional[Expr]:
        start = self.current
        if not self.config.memoize:
            result = rule(self)
            if result is None:
                self.current = start
            return result

        key = (name, start)
        entry = self._memo.get(key)
        if entry is _IN_PROGRESS:
            return None
        if entry is not None:
            self.current = entry.end
            return entry.result

        self._memo[key] = _IN_PROGRESS
        result = rule(self)
        if result is None:
            self.current = start
        self._memo[key] = MemoEntry(result, self.current)
        return result

    return wrapper


class Parser:
    """
    Packrat parser for Mathematica-style expressions.

    A Parser instance parses one token list once; its memo table is
    private to that parse.
    """

    def __init__(self, tokens: TokenList[Token], config: Optional[ParserConfig] = None, source: str = ""):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
            config: Parser options
            source: Source text, used for diagnostic excerpts only
        """
        self.tokens = tokens
        self.config = config or ParserConfig()
        self.source = source
        self.current = 0
        self.depth = 0
        self._memo: Dict[Tuple[str, int], MemoEntry] = {}

        # Furthest position any rule failed at, and what was expected there
        self.furthest = 0
        self.expected: Set[str] = set()

    def parse(self) -> Expr:
        """
        Parse the whole token list as a single expression.

        Returns:
            Root expression

        Raises:
            ParseError: If the tokens are not exactly one expression, or
                are nested deeper than the interpreter's stack allows
        """
        try:
            expr = self._parse_expression()
        except RecursionError:
            token = self._peek()
            logger.debug("recursion limit reached at token %d", self.current)
            raise create_nesting_error(None, token, self._source_line(token)) from None

        if expr is not None and self._check(TokenType.EOF):
            logger.debug("parsed %d tokens, %d memo entries", len(self.tokens), len(self._memo))
            return expr

        if expr is not None and self.furthest <= self.current:
            token = self._peek()
            raise create_trailing_input_error(token, self._source_line(token))

        token = self.tokens[self.furthest]
        raise create_unexpected_token_error(self.expected, token, self._source_line(token))

    # Precedence levels, loosest first

    def _parse_expression(self) -> Optional[Expr]:
        """Parse a complete expression."""
        return self._parse_or()

    @memoize
    def _parse_or(self) -> Optional[Expr]:
        return self._fold_left(self._parse_and, OR_OPERATORS)

    @memoize
    def _parse_and(self) -> Optional[Expr]:
        return self._fold_left(self._parse_not, AND_OPERATORS)

    @memoize
    def _parse_not(self) -> Optional[Expr]:
        """Parse prefix logical negation: !a, !!a."""
        count = 0
        while self._match(TokenType.LOGICAL_NOT):
            count += 1

        operand = self._parse_equality()
        if operand is None:
            return None

        for _ in range(count):
            operand = Not(operand)
        return operand

    @memoize
    def _parse_equality(self) -> Optional[Expr]:
        return self._fold_left(self._parse_relational, EQUALITY_OPERATORS)

    @memoize
    def _parse_relational(self) -> Optional[Expr]:
        return self._fold_left(self._parse_span, RELATIONAL_OPERATORS)

    @memoize
    def _parse_span(self) -> Optional[Expr]:
        """
        Parse range syntax.

        i;;j  i;;  ;;j  ;;  i;;j;;k  i;;;;k  ;;j;;k  ;;;;k
        A missing start is 1, a missing stop is All.
        """
        start = self._parse_additive()
        if not self._check(TokenType.SPAN):
            return start

        self._advance()
        stop = self._parse_additive()

        args = [start or Number("1"), stop or ALL]

        if self._check(TokenType.SPAN):
            mark = self.current
            self._advance()
            step = self._parse_additive()
            if step is None:
                self.current = mark
            else:
                args.append(step)

        return Span(*args)

    @memoize
    def _parse_additive(self) -> Optional[Expr]:
        return self._fold_left(self._parse_multiplicative, ADDITIVE_OPERATORS)

    @memoize
    def _parse_multiplicative(self) -> Optional[Expr]:
        """Parse *, / and implicit multiplication by juxtaposition."""
        left = self._parse_unary()
        if left is None:
            return None

        while True:
            token_type = self._peek().type
            if token_type in MULTIPLICATIVE_OPERATORS:
                mark = self.current
                self._advance()
                right = self._parse_unary()
                if right is None:
                    self.current = mark
                    return left
                left = MULTIPLICATIVE_OPERATORS[token_type](left, right)
            elif self.config.implicit_multiplication and token_type in ATOM_START:
                # The operand cannot start with '-', so "a -b" stays a subtraction
                right = self._parse_power()
                if right is None:
                    return left
                left = Times(left, right)
            else:
                return left

    @memoize
    def _parse_unary(self) -> Optional[Expr]:
        """Parse prefix minus; it binds looser than ^ so -a^b is -(a^b)."""
        count = 0
        while self._match(TokenType.MINUS):
            count += 1
        first = self._peek()

        operand = self._parse_power()
        if operand is None:
            return None
        return self._negate(operand, count, first)

    @memoize
    def _parse_power(self) -> Optional[Expr]:
        """
        Parse right associative exponentiation.

        Exponents may carry their own prefix minus: a^-b^c is a^(-(b^c)).
        """
        base = self._parse_part()
        if base is None:
            return None

        exponents = []
        while self._check(TokenType.POWER):
            mark = self.current
            self._advance()

            count = 0
            while self._match(TokenType.MINUS):
                count += 1
            first = self._peek()

            operand = self._parse_part()
            if operand is None:
                self.current = mark
                break
            exponents.append((operand, count, first))

        if not exponents:
            return base

        operand, count, first = exponents.pop()
        result = self._negate(operand, count, first)
        while exponents:
            operand, count, first = exponents.pop()
            result = self._negate(Power(operand, result), count, first)
        return Power(base, result)

    @memoize
    def _parse_part(self) -> Optional[Expr]:
        """Parse postfix indexing: expr[[i, j]][[k]]."""
        expr = self._parse_atom()
        if expr is None:
            return None

        while self._check_double(TokenType.LEFT_BRACKET):
            mark = self.current
            opening = self._advance()
            self._advance()
            depth = self._enter(opening)
            try:
                indices = self._parse_sequence(TokenType.RIGHT_BRACKET, double=True)
            finally:
                self._leave(depth)
            if indices is None:
                self.current = mark
                break
            expr = Part(expr, *indices)

        return expr

    @memoize
    def _parse_atom(self) -> Optional[Expr]:
        """Parse an atom: grouping, list, application, symbol, number or string."""
        token = self._peek()

        if token.type == TokenType.LEFT_PAREN:
            return self._parse_group()
        if token.type == TokenType.LEFT_BRACE:
            return self._parse_list()
        if token.type == TokenType.IDENTIFIER:
            return self._parse_application() or self._parse_symbol()
        if token.type == TokenType.NUMBER:
            self._advance()
            return Number(token.value)
        if token.type == TokenType.STRING:
            self._advance()
            return String(token.value)

        self._fail("expression")
        return None

    # Atoms

    @memoize
    def _parse_group(self) -> Optional[Expr]:
        """Parse a parenthesized expression; grouping adds no node."""
        opening = self._advance()
        depth = self._enter(opening)
        try:
            expr = self._parse_expression()
            if expr is None or not self._expect(TokenType.RIGHT_PAREN):
                return None
            return expr
        finally:
            self._leave(depth)

    @memoize
    def _parse_list(self) -> Optional[Expr]:
        """Parse {a, b, ...}."""
        opening = self._advance()
        depth = self._enter(opening)
        try:
            elements = self._parse_sequence(TokenType.RIGHT_BRACE)
            if elements is None:
                return None
            return List(*elements)
        finally:
            self._leave(depth)

    @memoize
    def _parse_application(self) -> Optional[Expr]:
        """Parse name[args] and curried applications name[args][args]."""
        name = self._advance().lexeme
        if not self._check_application_bracket():
            return None

        args = self._parse_arguments()
        if args is None:
            return None
        expr = self._make_application(name, args)

        while self._check_application_bracket():
            mark = self.current
            args = self._parse_arguments()
            if args is None:
                self.current = mark
                break
            expr = Apply(expr, args)

        return expr

    def _parse_symbol(self) -> Expr:
        name = self._advance().lexeme
        if self.config.resolve_builtins and name in SINGLETONS:
            return SINGLETONS[name]
        return Symbol(name)

    def _parse_arguments(self) -> Optional[Tuple[Expr, ...]]:
        opening = self._advance()
        depth = self._enter(opening)
        try:
            return self._parse_sequence(TokenType.RIGHT_BRACKET)
        finally:
            self._leave(depth)

    def _make_application(self, name: str, args: Tuple[Expr, ...]) -> Expr:
        if self.config.resolve_builtins and name in BUILTINS:
            return BUILTINS[name](*args)
        return Apply(Symbol(name), args)

    # Shared building blocks

    def _fold_left(self, operand: Callable[[], Optional[Expr]],
                   operators: Dict[TokenType, Type[Builtin]]) -> Optional[Expr]:
        """Parse operand (operator operand)* and fold it to the left."""
        left = operand()
        if left is None:
            return None

        while self._peek().type in operators:
            mark = self.current
            node_type = operators[self._advance().type]
            right = operand()
            if right is None:
                self.current = mark
                break
            left = node_type(left, right)

        return left

    def _parse_sequence(self, closer: TokenType, double: bool = False) -> Optional[Tuple[Expr, ...]]:
        """
        Parse comma separated expressions up to a closing delimiter.

        The opening delimiter has already been consumed. With double=True the
        closer must appear twice with nothing between, as in ']]'.
        """
        if self._match_closer(closer, double):
            return ()

        items = []
        while True:
            item = self._parse_expression()
            if item is None:
                return None
            items.append(item)

            if self._match(TokenType.COMMA):
                continue
            if self._match_closer(closer, double):
                return tuple(items)
            self._fail(TOKEN_DESCRIPTIONS[TokenType.COMMA])
            return None

    def _negate(self, operand: Expr, count: int, first: Token) -> Expr:
        """
        Apply count prefix minus signs to operand.

        The innermost minus folds into a Number when it is written directly
        in front of a number literal: -2 is Number("-2"), while -x and -(2)
        are Times[-1, ...].
        """
        if count == 0:
            return operand
        if (self.config.fold_negative_literals and first.type == TokenType.NUMBER
                and isinstance(operand, Number)):
            operand = Number("-" + operand.value)
            count -= 1
        for _ in range(count):
            operand = Times(MINUS_ONE, operand)
        return operand

    def _enter(self, opening: Token) -> int:
        """Track bracket nesting; too deep nesting aborts the parse."""
        self.depth += 1
        if self.config.max_nesting_depth is not None and self.depth > self.config.max_nesting_depth:
            raise create_nesting_error(self.config.max_nesting_depth, opening, self._source_line(opening))
        return self.depth

    def _leave(self, depth: int):
        self.depth = depth - 1

    # Utility methods

    def _fail(self, expected: str):
        """Record that `expected` was needed at the current position."""
        if self.current > self.furthest:
            self.furthest = self.current
            self.expected = {expected}
        elif self.current == self.furthest:
            self.expected.add(expected)

    def _expect(self, token_type: TokenType) -> bool:
        """Consume a required token, recording a failure if it is missing."""
        if self._match(token_type):
            return True
        self._fail(TOKEN_DESCRIPTIONS[token_type])
        return False

    def _match_closer(self, closer: TokenType, double: bool) -> bool:
        if not double:
            return self._expect(closer)
        if self._check_double(closer):
            self._advance()
            self._advance()
            return True
        self._fail("']]'")
        return False

    def _match(self, token_type: TokenType) -> bool:
        """Check if current token matches type and consume if so."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _check_double(self, token_type: TokenType) -> bool:
        """Check for two adjacent tokens of one type, e.g. '[[' or ']]'."""
        if self.current + 1 >= len(self.tokens):
            return False
        first = self.tokens[self.current]
        second = self.tokens[self.current + 1]
        return (first.type == token_type and second.type == token_type
                and second.location.offset == first.end_offset)

    def _check_application_bracket(self) -> bool:
        """A single '[' opens arguments; '[[' always opens Part."""
        return self._check(TokenType.LEFT_BRACKET) and not self._check_double(TokenType.LEFT_BRACKET)

    def _advance(self) -> Token:
        """Consume and return current token; EOF is never consumed."""
        token = self._peek()
        if token.type != TokenType.EOF:
            self.current += 1
        return token

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self.tokens[self.current]

    def _source_line(self, token: Token) -> str:
        return source_line_at(self.source, token.location) if self.source else ""


def parse_tokens(tokens: TokenList[Token], config: Optional[ParserConfig] = None, source: str = "") -> Expr:
    """
    Convenience function to parse a token list.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(tokens, config, source).parse()


__all__ = ["Parser", "ParserConfig", "ParseError", "parse_tokens", "memoize"]
