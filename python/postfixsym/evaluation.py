# PostfixSym SDK - Numeric Evaluation
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Numeric evaluation of expression trees.

Evaluation follows IEEE 754 floating-point semantics: dividing by zero
gives ``inf`` or ``nan`` rather than raising, and callers are expected
to check for non-finite results themselves.
"""

from __future__ import annotations
from typing import Optional

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult
from .bindings import Bindings, resolve
from .exceptions import UnboundSymbol


def evaluate(expr: Expr, bindings: Optional[Bindings] = None) -> float:
    """
    Evaluate an expression to a float.

    Args:
        expr: Expression to evaluate.
        bindings: Values for the names used in the expression. A bound
                  expression is evaluated with the same bindings.

    Returns:
        The value of the expression.

    Raises:
        UnboundSymbol: If a name in the expression has no binding.
    """
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Named):
        binding = resolve(bindings, expr.name)
        if binding is None:
            raise UnboundSymbol(expr.name)
        return evaluate(binding.expression, bindings)
    if isinstance(expr, BinaryResult):
        return expr.op.apply(evaluate(expr.left, bindings), evaluate(expr.right, bindings))
    if isinstance(expr, UnaryResult):
        return expr.func.apply(evaluate(expr.arg, bindings))
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def can_evaluate(expr: Expr, bindings: Optional[Bindings] = None) -> bool:
    """
    Check whether an expression may be folded to a single value.

    A name counts only if it is bound to a reducible constant whose own
    expression can be evaluated. Names bound with ``reduce=False`` are
    kept symbolic even though ``evaluate`` would resolve them.
    """
    if isinstance(expr, Literal):
        return True
    if isinstance(expr, Named):
        binding = resolve(bindings, expr.name)
        return binding is not None and binding.reduce and can_evaluate(binding.expression, bindings)
    if isinstance(expr, BinaryResult):
        return can_evaluate(expr.left, bindings) and can_evaluate(expr.right, bindings)
    if isinstance(expr, UnaryResult):
        return can_evaluate(expr.arg, bindings)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def get_unknowns(expr: Expr, bindings: Optional[Bindings] = None) -> list[Named]:
    """
    List the names in an expression that have no binding.

    Names are returned in left-to-right order and repeat as often as
    they occur.
    """
    if isinstance(expr, Literal):
        return []
    if isinstance(expr, Named):
        return [] if resolve(bindings, expr.name) is not None else [expr]
    if isinstance(expr, BinaryResult):
        return get_unknowns(expr.left, bindings) + get_unknowns(expr.right, bindings)
    if isinstance(expr, UnaryResult):
        return get_unknowns(expr.arg, bindings)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def has_constant_term(expr: Expr, bindings: Optional[Bindings] = None) -> bool:
    """True if any leaf of the expression is a literal or a bound name."""
    if isinstance(expr, Literal):
        return True
    if isinstance(expr, Named):
        return resolve(bindings, expr.name) is not None
    if isinstance(expr, BinaryResult):
        return has_constant_term(expr.left, bindings) or has_constant_term(expr.right, bindings)
    if isinstance(expr, UnaryResult):
        return has_constant_term(expr.arg, bindings)
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")
