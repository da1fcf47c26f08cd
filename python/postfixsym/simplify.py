# PostfixSym SDK - Symbolic Simplification
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Rewrite engine: simplification, decimal cleanup and equality checks.

``simplify`` makes a single bottom-up pass over the tree:

1. Constant folding (2 + 3 -> 5, including bound names)
2. Per-operation identities (x * 1 -> x, x - x -> 0, x ^ 0 -> 1, ...)
3. Distribution of a foldable operand into a grouped one
   (2 * (3 + x) -> 6 + 2 * x)

It is not a fixed-point loop, so running it again may simplify further.

``clean_decimals`` turns the floats left behind by folding into readable
forms: bound constants, integers, or small fractions.

Example:
    >>> from postfixsym import parse
    >>> expr = simplify(parse("6 8 / 2 10 / /"))
    >>> str(clean_decimals(expr))
    '(15 / 4)'
"""

from __future__ import annotations
import logging
import math
from typing import Mapping, Optional, Sequence, Union

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult, free_vars, structurally_equal
from .bindings import Bindings, resolve
from .evaluation import evaluate, can_evaluate
from .operations import DIVIDE
from .rational import approximate_fraction
from .exceptions import UnboundSymbol
from .config import Config, DEFAULT_CONFIG
from .domain import EvaluationDomain, VariableDomain

logger = logging.getLogger(__name__)

# Sampled range for variables that analytically_equals has no domain for
DEFAULT_SAMPLE_RANGE = (-10.0, 10.0)


def simplify(expr: Expr, bindings: Optional[Bindings] = None, config: Optional[Config] = None) -> Expr:
    """
    Simplify an expression in one bottom-up pass.

    Args:
        expr: Expression to simplify.
        bindings: Names that may be folded to their values. Names bound
                  with ``reduce=False`` are kept symbolic.
        config: Supplies the epsilon used by the identities.

    Returns:
        A new expression that evaluates to the same value.
    """
    config = config or DEFAULT_CONFIG
    return _simplify(expr, bindings, config.epsilon)


def _simplify(expr: Expr, bindings: Optional[Bindings], epsilon: float) -> Expr:
    if isinstance(expr, Literal):
        return expr

    if isinstance(expr, Named):
        if can_evaluate(expr, bindings):
            return Literal(evaluate(expr, bindings))
        return expr

    if isinstance(expr, UnaryResult):
        arg = _simplify(expr.arg, bindings, epsilon)
        if can_evaluate(arg, bindings):
            return Literal(expr.func.apply(evaluate(arg, bindings)))
        return UnaryResult(expr.func, arg)

    if isinstance(expr, BinaryResult):
        left = _simplify(expr.left, bindings, epsilon)
        right = _simplify(expr.right, bindings, epsilon)

        if can_evaluate(left, bindings) and can_evaluate(right, bindings):
            return Literal(expr.op.apply(evaluate(left, bindings), evaluate(right, bindings)))

        result = expr.op.simplify(left, right, epsilon)
        if can_evaluate(result, bindings):
            return Literal(evaluate(result, bindings))

        if isinstance(result, BinaryResult):
            distributed = None
            if isinstance(result.right, BinaryResult):
                distributed = result.op.distribute(result.left, result.right, bindings)
            elif isinstance(result.left, BinaryResult) and result.op.commutative:
                distributed = result.op.distribute(result.right, result.left, bindings)

            if distributed is not None:
                logger.debug("Distributed %s into %s", result.op.token, distributed)
                return distributed

        return result

    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def clean_decimals(expr: Expr, bindings: Optional[Bindings] = None, config: Optional[Config] = None) -> Expr:
    """
    Replace literals with bound constants, integers or fractions.

    Each literal is tried in order against:

    1. A foldable bound name with the same value, in binding-map order
       (3.14159... -> pi)
    2. The nearest integer (2.0000001 -> 2)
    3. The simplest fraction within epsilon (0.75 -> 3 / 4)

    Non-finite literals are left alone.

    Raises:
        DecimalCleanupError: If the fraction search hits
            ``config.max_fraction_iterations``.
    """
    config = config or DEFAULT_CONFIG

    if isinstance(expr, Literal):
        return _clean_literal(expr, bindings, config)
    if isinstance(expr, Named):
        return expr
    if isinstance(expr, BinaryResult):
        return BinaryResult(
            expr.op,
            clean_decimals(expr.left, bindings, config),
            clean_decimals(expr.right, bindings, config),
        )
    if isinstance(expr, UnaryResult):
        return UnaryResult(expr.func, clean_decimals(expr.arg, bindings, config))
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def _clean_literal(literal: Literal, bindings: Optional[Bindings], config: Config) -> Expr:
    value = literal.value
    epsilon = config.epsilon

    for name in bindings or {}:
        named = Named(name)
        if can_evaluate(named, bindings) and abs(evaluate(named, bindings) - value) < epsilon:
            return named

    if literal.is_integer(epsilon):
        return Literal(round(value))

    if not math.isfinite(value):
        return literal

    fraction = approximate_fraction(value, epsilon, config.max_fraction_iterations)
    if fraction.denominator == 1:
        return Literal(fraction.numerator)
    return BinaryResult(DIVIDE, Literal(fraction.numerator), Literal(fraction.denominator))


def _values_match(a: float, b: float, epsilon: float) -> bool:
    """Sample comparison: nan matches nan, infinities match by sign."""
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    if math.isinf(a) or math.isinf(b):
        return a == b
    return abs(a - b) < epsilon


def analytically_equals(
    a: Expr,
    b: Expr,
    bindings: Optional[Bindings] = None,
    domain: Union[EvaluationDomain, Mapping[str, Sequence[float]], None] = None,
    config: Optional[Config] = None,
) -> bool:
    """
    Check if two expressions evaluate to the same values over a sampled domain.

    Trees of different shape are compared by value, so ``2 * x`` and
    ``x + x`` are analytically equal. Samples where either side cannot be
    evaluated because a name has no binding are skipped. Names bound with
    ``reduce=False`` are still evaluated and compared.

    Args:
        a: First expression.
        b: Second expression.
        bindings: Fixed bindings shared by every sample.
        domain: An EvaluationDomain, or a mapping from variable name to the
                values it takes. If omitted, every unbound name is sampled
                over [-10, 10) with ``config.sample_count`` points.
        config: Supplies the tolerance and default sample count.

    Returns:
        False at the first sample where the values differ by more than
        epsilon, otherwise True.
    """
    config = config or DEFAULT_CONFIG

    if domain is None:
        unbound = sorted(name for name in free_vars(a) | free_vars(b) if resolve(bindings, name) is None)
        lo, hi = DEFAULT_SAMPLE_RANGE
        variables = [VariableDomain.linear(name, lo, hi, config.sample_count) for name in unbound]
        domain = EvaluationDomain(bindings, variables)
    else:
        domain = EvaluationDomain.coerce(domain, bindings)

    for index, sample in enumerate(domain.samples()):
        try:
            va = evaluate(a, sample)
            vb = evaluate(b, sample)
        except UnboundSymbol as e:
            logger.debug("Skipping sample %d: %s", index, e)
            continue
        if not _values_match(va, vb, config.epsilon):
            logger.debug(
                "Analytic mismatch at sample %d (%s): %r != %r",
                index,
                {v.name: v.values[index] for v in domain.variables},
                va,
                vb,
            )
            return False
    return True


__all__ = [
    'simplify',
    'clean_decimals',
    'analytically_equals',
    'structurally_equal',
]
