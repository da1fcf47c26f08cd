# PostfixSym SDK - Rendering
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Plain-text and LaTeX rendering of expression trees.

Plain text is fully parenthesized infix: binary nodes render as
``(left OP right)`` and functions as ``name(arg)``. Integral literals drop
their ``.0``, as do values within epsilon of an integer.

LaTeX output asks each operation or function for its own format, so
division becomes ``\\frac{}{}`` and multiplication drops the ``\\cdot``
next to a simple factor (``2x`` rather than ``2 \\cdot x``).

Example:
    >>> from postfixsym import parse
    >>> to_string(parse("2 x * sin"))
    'sin((2 * x))'
    >>> to_latex(parse("2 x *"))
    '\\\\left(2x\\\\right)'
"""

from __future__ import annotations
from typing import Mapping, Optional, Union

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult, Equation, is_simple, leftmost_term
from .symbols import operation_token, function_name
from .config import DEFAULT_CONFIG


def format_number(value: float, epsilon: float = DEFAULT_CONFIG.epsilon) -> str:
    """Format a literal value, rounding anything within epsilon of an integer."""
    if Literal(value).is_integer(epsilon):
        return str(round(value))
    return repr(value)


def to_string(expr: Union[Expr, Equation], epsilon: float = DEFAULT_CONFIG.epsilon) -> str:
    """Render an expression as fully parenthesized infix text."""
    if isinstance(expr, Equation):
        return f"{to_string(expr.left, epsilon)} = {to_string(expr.right, epsilon)}"
    if isinstance(expr, Literal):
        return format_number(expr.value, epsilon)
    if isinstance(expr, Named):
        return expr.name
    if isinstance(expr, BinaryResult):
        left = to_string(expr.left, epsilon)
        right = to_string(expr.right, epsilon)
        return f"({left} {operation_token(expr.op)} {right})"
    if isinstance(expr, UnaryResult):
        return f"{function_name(expr.func)}({to_string(expr.arg, epsilon)})"
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def to_latex(
    expr: Union[Expr, Equation],
    latex_mappings: Optional[Mapping[str, str]] = None,
    epsilon: float = DEFAULT_CONFIG.epsilon,
) -> str:
    """
    Render an expression as LaTeX.

    Args:
        expr: Expression or equation to render.
        latex_mappings: LaTeX for specific names, e.g. ``{'phi': '\\\\phi'}``.
                        Unmapped names render as themselves.
        epsilon: Literals this close to an integer render as that integer.

    Returns:
        A LaTeX math-mode fragment (without surrounding ``$``).
    """
    if isinstance(expr, Equation):
        return f"{to_latex(expr.left, latex_mappings, epsilon)} = {to_latex(expr.right, latex_mappings, epsilon)}"
    if isinstance(expr, Literal):
        return format_number(expr.value, epsilon)
    if isinstance(expr, Named):
        if latex_mappings and expr.name in latex_mappings:
            return latex_mappings[expr.name]
        return expr.name
    if isinstance(expr, BinaryResult):
        # Reverse lookup also checks the bundle is registered
        operation_token(expr.op)
        return expr.op.to_latex(
            expr.left,
            expr.right,
            to_latex(expr.left, latex_mappings, epsilon),
            to_latex(expr.right, latex_mappings, epsilon),
        )
    if isinstance(expr, UnaryResult):
        function_name(expr.func)
        return expr.func.to_latex(to_latex(expr.arg, latex_mappings, epsilon))
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


__all__ = [
    'to_string',
    'to_latex',
    'format_number',
    'is_simple',
    'leftmost_term',
]
