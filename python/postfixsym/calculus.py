# PostfixSym SDK - Symbolic Differentiation
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Symbolic differentiation.

``derivative`` is a purely structural transform: it never simplifies, so
its output usually contains terms like ``1 * (2 * x^(2 - 1))``. Pipe the
result through ``simplify`` and ``clean_decimals`` for readable output,
or use ``differentiate`` from the engine module which does exactly that.

Example:
    >>> from postfixsym import parse
    >>> d = derivative(parse("x 2 ^ sin"), 'x')
    >>> str(d)
    '(cos((x ^ 2)) * (1 * (2 * (x ^ (2 - 1)))))'
"""

from __future__ import annotations

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult


def is_function_of(expr: Expr, var_name: str) -> bool:
    """
    True iff ``var_name`` occurs as a Named leaf anywhere in the expression.

    Bindings are not consulted: a name bound to a constant still counts.
    """
    if isinstance(expr, Literal):
        return False
    if isinstance(expr, Named):
        return expr.name == var_name
    if isinstance(expr, BinaryResult):
        return is_function_of(expr.left, var_name) or is_function_of(expr.right, var_name)
    if isinstance(expr, UnaryResult):
        return is_function_of(expr.arg, var_name)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def derivative(expr: Expr, var_name: str) -> Expr:
    """
    Differentiate an expression with respect to ``var_name``.

    Args:
        expr: Expression to differentiate.
        var_name: Name of the variable.

    Returns:
        A new, unsimplified expression for the derivative.
    """
    if isinstance(expr, Literal):
        return Literal(0.0)
    if isinstance(expr, Named):
        return Literal(1.0) if expr.name == var_name else Literal(0.0)
    if isinstance(expr, UnaryResult):
        # Chain rule
        if is_function_of(expr.arg, var_name):
            return expr.func.derivative(expr.arg, var_name)
        return Literal(0.0)
    if isinstance(expr, BinaryResult):
        return expr.op.derivative(expr.left, expr.right, var_name)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")
