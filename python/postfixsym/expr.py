# PostfixSym SDK - Symbolic Expressions
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Expression tree for PostfixSym.

An expression is one of exactly four node kinds:

- ``Literal``: a known float value
- ``Named``: a variable or symbolic constant, resolved through a binding map
- ``BinaryResult``: an operation applied to a left and a right operand
- ``UnaryResult``: a function applied to one argument

Nodes are frozen dataclasses. Every transform (simplify, derivative,
clean_decimals) builds a new tree, so sub-trees can be shared freely.
The recursive algorithms live in their own modules and dispatch on the
node kind; this module only holds the data and the structural helpers
that do not need any rule table.

Example:
    >>> x = var('x')
    >>> expr = x ** 2 + 3
    >>> free_vars(expr)
    frozenset({'x'})
"""

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass
from fractions import Fraction
from typing import Union, FrozenSet, TYPE_CHECKING

if TYPE_CHECKING:
    from .operations import Operation
    from .functions import Function


# Type alias for things that can be converted to expressions
ExprLike = Union['Expr', int, float, Fraction]


class Expr(ABC):
    """
    Base class for symbolic expressions.

    Expressions are immutable and can be composed using Python operators,
    which build the same nodes the postfix parser does.
    """

    # Operator overloading for natural math syntax

    def __neg__(self) -> Expr:
        return _binary('*', Literal(-1.0), self)

    def __add__(self, other: ExprLike) -> Expr:
        return _binary('+', self, _to_expr(other))

    def __radd__(self, other: ExprLike) -> Expr:
        return _binary('+', _to_expr(other), self)

    def __sub__(self, other: ExprLike) -> Expr:
        return _binary('-', self, _to_expr(other))

    def __rsub__(self, other: ExprLike) -> Expr:
        return _binary('-', _to_expr(other), self)

    def __mul__(self, other: ExprLike) -> Expr:
        return _binary('*', self, _to_expr(other))

    def __rmul__(self, other: ExprLike) -> Expr:
        return _binary('*', _to_expr(other), self)

    def __truediv__(self, other: ExprLike) -> Expr:
        return _binary('/', self, _to_expr(other))

    def __rtruediv__(self, other: ExprLike) -> Expr:
        return _binary('/', _to_expr(other), self)

    def __pow__(self, other: ExprLike) -> Expr:
        return _binary('^', self, _to_expr(other))

    def __rpow__(self, other: ExprLike) -> Expr:
        return _binary('^', _to_expr(other), self)

    def __str__(self) -> str:
        from .render import to_string
        return to_string(self)


def _to_expr(x: ExprLike) -> Expr:
    """Convert a value to an Expr."""
    if isinstance(x, Expr):
        return x
    elif isinstance(x, (int, float, Fraction)):
        return Literal(float(x))
    else:
        raise TypeError(f"Cannot convert {type(x).__name__} to Expr")


def _binary(token: str, left: Expr, right: Expr) -> BinaryResult:
    # Imported here: the operation table itself builds expressions.
    from .symbols import OPERATIONS
    return BinaryResult(OPERATIONS[token], left, right)


@dataclass(frozen=True)
class Literal(Expr):
    """
    A known numeric value.

    ``==`` and hashing compare the float exactly, so literals can be dict
    keys. Use ``structurally_equal`` for the epsilon comparison.
    """
    value: float

    def __post_init__(self):
        # Bypass frozen dataclass __setattr__
        object.__setattr__(self, 'value', float(self.value))

    def is_integer(self, epsilon: float = 1e-6) -> bool:
        """True if the value is within epsilon of its nearest integer."""
        try:
            return abs(self.value - round(self.value)) < epsilon
        except (OverflowError, ValueError):
            # inf and nan have no nearest integer
            return False

    def __repr__(self) -> str:
        return f"const({self.value!r})"


@dataclass(frozen=True)
class Named(Expr):
    """A variable or an as-yet-unbound symbolic constant such as ``pi``."""
    name: str

    def __repr__(self) -> str:
        return f"var('{self.name}')"


@dataclass(frozen=True)
class BinaryResult(Expr):
    """An operation applied to two operands: ``left op right``."""
    op: Operation
    left: Expr
    right: Expr

    def __repr__(self) -> str:
        return f"({self.left!r} {self.op.token} {self.right!r})"


@dataclass(frozen=True)
class UnaryResult(Expr):
    """A function applied to one argument: ``func(arg)``."""
    func: Function
    arg: Expr

    def __repr__(self) -> str:
        return f"{self.func.name}({self.arg!r})"


@dataclass(frozen=True)
class Equation:
    """Two expressions asserted equal: ``left = right``."""
    left: Expr
    right: Expr

    def __str__(self) -> str:
        return f"{self.left} = {self.right}"


# Structural helpers

def free_vars(expr: Expr) -> FrozenSet[str]:
    """Return all names used in this expression, bound or not."""
    if isinstance(expr, Literal):
        return frozenset()
    if isinstance(expr, Named):
        return frozenset({expr.name})
    if isinstance(expr, BinaryResult):
        return free_vars(expr.left) | free_vars(expr.right)
    if isinstance(expr, UnaryResult):
        return free_vars(expr.arg)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def structurally_equal(e1: Expr, e2: Expr, epsilon: float = 1e-6) -> bool:
    """
    Check if two expressions are obviously equal, without simplifying.

    Literals compare within epsilon, names compare exactly, and composite
    nodes require the same rule bundle (by identity) and equal children.
    ``x + y`` and ``y + x`` are not structurally equal.
    """
    if isinstance(e1, Literal):
        return isinstance(e2, Literal) and abs(e1.value - e2.value) < epsilon
    if isinstance(e1, Named):
        return isinstance(e2, Named) and e1.name == e2.name
    if isinstance(e1, BinaryResult):
        return (
            isinstance(e2, BinaryResult)
            and e1.op is e2.op
            and structurally_equal(e1.left, e2.left, epsilon)
            and structurally_equal(e1.right, e2.right, epsilon)
        )
    if isinstance(e1, UnaryResult):
        return (
            isinstance(e2, UnaryResult)
            and e1.func is e2.func
            and structurally_equal(e1.arg, e2.arg, epsilon)
        )
    raise TypeError(f"Unknown expression node: {type(e1).__name__}")


def is_simple(expr: Expr) -> bool:
    """True only for leaves: a Literal or a Named."""
    return isinstance(expr, (Literal, Named))


def leftmost_term(expr: Expr) -> Expr:
    """
    Return the first term a reader sees when the expression is printed.

    Functions count as a term of their own, so ``sin(x) * 2`` starts with
    ``sin(x)`` rather than ``x``.
    """
    while isinstance(expr, BinaryResult):
        expr = expr.left
    return expr


# Public constructors

def var(name: str) -> Named:
    """Create a symbolic variable with the given name."""
    if not isinstance(name, str):
        raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Variable name cannot be empty")
    return Named(name)


def const(value: Union[int, float, Fraction]) -> Literal:
    """Create a literal expression."""
    return Literal(float(value))
