# PostfixSym SDK - Rational Number Utilities
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Utilities for human-friendly rational approximation of floats.

Evaluation stays in floating point, so a folded sub-expression such as
``6 / 8 / (2 / 10)`` comes out as ``3.75`` rather than ``15/4``. Decimal
cleanup turns those values back into small fractions.

The Problem:
    >>> from fractions import Fraction
    >>> Fraction(0.1)
    Fraction(3602879701896397, 36028797018963968)  # Binary representation!

The Solution:
    >>> from postfixsym.rational import approximate_fraction
    >>> approximate_fraction(0.1, 1e-6)
    Fraction(1, 10)

The search walks the Stern-Brocot tree: starting from the bounds 0/1 and
1/1 it repeatedly takes the mediant (a+c)/(b+d) and keeps whichever half
still contains the target, stopping at the first fraction within epsilon.
The first hit is always the fraction with the smallest denominator in the
tolerance window.
"""

import logging
import math
from fractions import Fraction
from typing import Tuple

from .exceptions import DecimalCleanupError

logger = logging.getLogger(__name__)


def split_decimal(x: float) -> Tuple[int, float]:
    """
    Split a value into its floor and a fractional part in [0, 1).

    Examples:
        >>> split_decimal(3.75)
        (3, 0.75)
        >>> split_decimal(-0.5)
        (-1, 0.5)
    """
    n = math.floor(x)
    return n, x - n


def _run_length(beyond, move_n: int, move_d: int, fixed_n: int, fixed_d: int, estimate: float) -> int:
    """
    Largest j >= 1 such that (move + j*fixed) is still outside the window.

    ``estimate`` is the float solution of the run's linear inequality. It
    is corrected with the exact test, so rounding cannot change the walk.
    """
    j = max(1, math.ceil(estimate) - 1)
    while j > 1 and not beyond(move_n + j * fixed_n, move_d + j * fixed_d):
        j -= 1
    while beyond(move_n + (j + 1) * fixed_n, move_d + (j + 1) * fixed_d):
        j += 1
    return j


def mediant_fraction(x: float, epsilon: float, max_iterations: int) -> Tuple[int, int]:
    """
    Find the simplest p/q in [0, 1] with q*(x - epsilon) <= p <= q*(x + epsilon).

    A run of mediants falling on the same side of the window is taken in
    one iteration (continued-fraction acceleration), so the iteration count
    grows with the number of continued-fraction terms, not the denominator.

    Args:
        x: Target value, expected in [0, 1).
        epsilon: Accepted absolute error.
        max_iterations: Maximum number of runs to take.

    Returns:
        Tuple (p, q) in lowest terms.

    Raises:
        DecimalCleanupError: If no fraction is found within max_iterations.
    """
    high = x + epsilon
    low = x - epsilon

    def above(n: int, d: int) -> bool:
        return d * high < n

    def below(n: int, d: int) -> bool:
        return d * low > n

    lower_n, lower_d = 0, 1
    upper_n, upper_d = 1, 1

    for iteration in range(1, max_iterations + 1):
        middle_n = lower_n + upper_n
        middle_d = lower_d + upper_d

        if above(middle_n, middle_d):
            # (upper + j*lower) stays above while j*(lower_d*high - lower_n) < upper_n - upper_d*high
            estimate = (upper_n - upper_d * high) / (lower_d * high - lower_n)
            j = _run_length(above, upper_n, upper_d, lower_n, lower_d, estimate)
            upper_n, upper_d = upper_n + j * lower_n, upper_d + j * lower_d
        elif below(middle_n, middle_d):
            estimate = (lower_d * low - lower_n) / (upper_n - upper_d * low)
            j = _run_length(below, lower_n, lower_d, upper_n, upper_d, estimate)
            lower_n, lower_d = lower_n + j * upper_n, lower_d + j * upper_d
        else:
            logger.debug("Found %d/%d for %r after %d iterations", middle_n, middle_d, x, iteration)
            return middle_n, middle_d

    raise DecimalCleanupError(x, max_iterations)


def approximate_fraction(x: float, epsilon: float, max_iterations: int = 1_000_000) -> Fraction:
    """
    Approximate a float by the simplest Fraction within epsilon.

    Args:
        x: A finite float.
        epsilon: Accepted absolute error.
        max_iterations: Maximum Stern-Brocot runs for the fractional part.

    Returns:
        A Fraction f with abs(f - x) <= epsilon (up to float rounding).

    Raises:
        ValueError: If x is not finite.
        DecimalCleanupError: If the search exceeds max_iterations.

    Examples:
        >>> approximate_fraction(3.75, 1e-6)
        Fraction(15, 4)
        >>> approximate_fraction(-0.5, 1e-6)
        Fraction(-1, 2)
        >>> approximate_fraction(0.333333, 1e-3)
        Fraction(1, 3)
    """
    if not math.isfinite(x):
        raise ValueError(f"Cannot approximate non-finite value {x!r} by a fraction")

    n, frac = split_decimal(x)
    if abs(frac) < epsilon:
        return Fraction(n)
    if abs(frac - 1) < epsilon:
        return Fraction(n + 1)

    p, q = mediant_fraction(frac, epsilon, max_iterations)
    return Fraction(n * q + p, q)
