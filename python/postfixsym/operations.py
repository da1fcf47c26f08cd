# PostfixSym SDK - Binary Operations
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Rule bundles for the five binary operations.

Each operation knows how to:

1. Apply itself to two floats (IEEE 754 semantics via NumPy)
2. Differentiate ``left op right`` with respect to a variable
3. Apply its algebraic identities to already-simplified operands
4. Distribute a foldable operand into a grouped operand
5. Format itself as LaTeX

The instances ``ADD``, ``SUBTRACT``, ``MULTIPLY``, ``DIVIDE`` and ``POWER``
are created once at import and never mutated. Trees refer to them by
identity.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .expr import Expr, Literal, BinaryResult, UnaryResult, is_simple, leftmost_term, structurally_equal
from .bindings import Bindings
from .evaluation import evaluate, can_evaluate
from .calculus import derivative, is_function_of


def _is_value(expr: Expr, value: float, epsilon: float) -> bool:
    """True if expr is a Literal equal to value within epsilon."""
    return isinstance(expr, Literal) and abs(expr.value - value) < epsilon


class Operation(ABC):
    """Base class for binary operation rule bundles."""

    token: str = ''
    commutative: bool = False

    def apply(self, a: float, b: float) -> float:
        """Apply the operation to two floats."""
        with np.errstate(all='ignore'):
            return float(self._apply(np.float64(a), np.float64(b)))

    @abstractmethod
    def _apply(self, a: np.float64, b: np.float64) -> np.float64:
        ...

    @abstractmethod
    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        """Derivative of ``left op right`` with respect to ``var_name``."""
        ...

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        """
        Apply algebraic identities to ``left op right``.

        Both operands are already simplified and at least one of them
        cannot be folded. Returns a plain node if no identity applies.
        """
        return BinaryResult(self, left, right)

    def distribute(self, outer: Expr, group: BinaryResult, bindings: Optional[Bindings]) -> Optional[Expr]:
        """
        Push a foldable ``outer`` operand into ``group``'s operands.

        Computes ``outer op group``. Returns None when ``outer`` cannot be
        folded or the group's operation does not allow distribution.
        """
        return None

    def to_latex(self, left: Expr, right: Expr, left_latex: str, right_latex: str) -> str:
        """Format ``left op right`` given the LaTeX of both operands."""
        return f"\\left({left_latex} {self.token} {right_latex}\\right)"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Add(Operation):
    """Addition: left + right."""

    token = '+'
    commutative = True

    def _apply(self, a, b):
        return a + b

    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        left_dep = is_function_of(left, var_name)
        right_dep = is_function_of(right, var_name)
        if left_dep and right_dep:
            return BinaryResult(ADD, derivative(left, var_name), derivative(right, var_name))
        if left_dep:
            return derivative(left, var_name)
        if right_dep:
            return derivative(right, var_name)
        return Literal(0.0)

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        # a + a -> 2 * a
        if structurally_equal(left, right, epsilon):
            return BinaryResult(MULTIPLY, Literal(2.0), left)
        return BinaryResult(self, left, right)

    def distribute(self, outer, group, bindings):
        if not can_evaluate(outer, bindings):
            return None

        first, second = group.left, group.right
        first_known = can_evaluate(first, bindings)
        second_known = can_evaluate(second, bindings)
        c = evaluate(outer, bindings)

        if group.op is ADD:
            # c + (a + b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(self.apply(simple, evaluate(second, bindings)))
                return BinaryResult(ADD, Literal(simple), second)
            if second_known:
                return BinaryResult(ADD, Literal(self.apply(c, evaluate(second, bindings))), first)
        elif group.op is SUBTRACT:
            # c + (a - b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(SUBTRACT.apply(simple, evaluate(second, bindings)))
                return BinaryResult(SUBTRACT, Literal(simple), second)
            if second_known:
                return BinaryResult(ADD, Literal(SUBTRACT.apply(c, evaluate(second, bindings))), first)
        return None


class Subtract(Operation):
    """Subtraction: left - right."""

    token = '-'

    def _apply(self, a, b):
        return a - b

    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        left_dep = is_function_of(left, var_name)
        right_dep = is_function_of(right, var_name)
        if left_dep and right_dep:
            return BinaryResult(SUBTRACT, derivative(left, var_name), derivative(right, var_name))
        if left_dep:
            return derivative(left, var_name)
        if right_dep:
            return BinaryResult(MULTIPLY, Literal(-1.0), derivative(right, var_name))
        return Literal(0.0)

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        # a - a -> 0
        if structurally_equal(left, right, epsilon):
            return Literal(0.0)
        return BinaryResult(self, left, right)

    def distribute(self, outer, group, bindings):
        if not can_evaluate(outer, bindings):
            return None

        first, second = group.left, group.right
        first_known = can_evaluate(first, bindings)
        second_known = can_evaluate(second, bindings)
        c = evaluate(outer, bindings)

        if group.op is ADD:
            # c - (a + b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(self.apply(simple, evaluate(second, bindings)))
                return BinaryResult(SUBTRACT, Literal(simple), second)
            if second_known:
                return BinaryResult(SUBTRACT, Literal(self.apply(c, evaluate(second, bindings))), first)
        elif group.op is SUBTRACT:
            # c - (a - b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(ADD.apply(simple, evaluate(second, bindings)))
                return BinaryResult(ADD, Literal(simple), second)
            if second_known:
                return BinaryResult(SUBTRACT, Literal(ADD.apply(c, evaluate(second, bindings))), first)
        return None


class Multiply(Operation):
    """Multiplication: left * right."""

    token = '*'
    commutative = True

    def _apply(self, a, b):
        return a * b

    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        left_dep = is_function_of(left, var_name)
        right_dep = is_function_of(right, var_name)
        if left_dep and right_dep:
            # Product rule: f'g + fg'
            f_prime_g = BinaryResult(MULTIPLY, derivative(left, var_name), right)
            f_g_prime = BinaryResult(MULTIPLY, left, derivative(right, var_name))
            return BinaryResult(ADD, f_prime_g, f_g_prime)
        if left_dep:
            return BinaryResult(MULTIPLY, right, derivative(left, var_name))
        if right_dep:
            return BinaryResult(MULTIPLY, left, derivative(right, var_name))
        return Literal(0.0)

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        if _is_value(left, 0.0, epsilon) or _is_value(right, 0.0, epsilon):
            return Literal(0.0)
        if _is_value(left, 1.0, epsilon):
            return right
        if _is_value(right, 1.0, epsilon):
            return left
        # a * a -> a ^ 2
        if structurally_equal(left, right, epsilon):
            return BinaryResult(POWER, left, Literal(2.0))
        return BinaryResult(self, left, right)

    def distribute(self, outer, group, bindings):
        if not can_evaluate(outer, bindings):
            return None

        first, second = group.left, group.right
        first_known = can_evaluate(first, bindings)
        second_known = can_evaluate(second, bindings)
        c = evaluate(outer, bindings)

        if group.op is ADD:
            # c * (a + b) -> (c * a) + (c * b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(ADD.apply(simple, self.apply(c, evaluate(second, bindings))))
                return BinaryResult(ADD, Literal(simple), BinaryResult(MULTIPLY, outer, second))
            if second_known:
                simple = self.apply(c, evaluate(second, bindings))
                return BinaryResult(ADD, Literal(simple), BinaryResult(MULTIPLY, outer, first))
        elif group.op is SUBTRACT:
            # c * (a - b) -> (c * a) - (c * b)
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(SUBTRACT.apply(simple, self.apply(c, evaluate(second, bindings))))
                return BinaryResult(SUBTRACT, Literal(simple), BinaryResult(MULTIPLY, outer, second))
            if second_known:
                simple = self.apply(c, evaluate(second, bindings))
                return BinaryResult(SUBTRACT, BinaryResult(MULTIPLY, outer, first), Literal(simple))
        elif group.op is MULTIPLY:
            # c * (a * b) -> (c * a) * b
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(self.apply(simple, evaluate(second, bindings)))
                return BinaryResult(MULTIPLY, Literal(simple), second)
            if second_known:
                return BinaryResult(MULTIPLY, Literal(self.apply(c, evaluate(second, bindings))), first)
        elif group.op is DIVIDE:
            # c * (a / b) -> (c * a) / b
            if first_known:
                simple = self.apply(c, evaluate(first, bindings))
                if second_known:
                    return Literal(DIVIDE.apply(simple, evaluate(second, bindings)))
                return BinaryResult(DIVIDE, Literal(simple), second)
            if second_known:
                # (c / b) * a
                return BinaryResult(MULTIPLY, Literal(DIVIDE.apply(c, evaluate(second, bindings))), first)
        return None

    def to_latex(self, left, right, left_latex, right_latex):
        # Lead with the simple factor: 2x rather than x2
        if not is_simple(left) and is_simple(right):
            first, second = right_latex, left_latex
            second_expr = left
        else:
            first, second = left_latex, right_latex
            second_expr = right

        use_dot = (
            not (is_simple(left) or is_simple(right))
            or isinstance(leftmost_term(second_expr), Literal)
        )
        separator = " \\cdot " if use_dot else ""
        return f"\\left({first}{separator}{second}\\right)"


class Divide(Operation):
    """Division: left / right."""

    token = '/'

    def _apply(self, a, b):
        return np.divide(a, b)

    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        left_dep = is_function_of(left, var_name)
        right_dep = is_function_of(right, var_name)
        if left_dep and right_dep:
            # Quotient rule: (f'g - fg') / g^2
            f_prime_g = BinaryResult(MULTIPLY, derivative(left, var_name), right)
            f_g_prime = BinaryResult(MULTIPLY, left, derivative(right, var_name))
            numerator = BinaryResult(SUBTRACT, f_prime_g, f_g_prime)
            denominator = BinaryResult(POWER, right, Literal(2.0))
            return BinaryResult(DIVIDE, numerator, denominator)
        if left_dep:
            coefficient = BinaryResult(DIVIDE, Literal(1.0), right)
            return BinaryResult(MULTIPLY, coefficient, derivative(left, var_name))
        if right_dep:
            # f / g == f * g^-1
            reciprocal = BinaryResult(POWER, right, Literal(-1.0))
            return derivative(BinaryResult(MULTIPLY, left, reciprocal), var_name)
        return Literal(0.0)

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        if _is_value(right, 1.0, epsilon):
            return left
        # a / a -> 1
        if structurally_equal(left, right, epsilon):
            return Literal(1.0)
        return BinaryResult(self, left, right)

    def to_latex(self, left, right, left_latex, right_latex):
        return f"\\frac{{{left_latex}}}{{{right_latex}}}"


class Power(Operation):
    """Exponentiation: left ^ right."""

    token = '^'

    def _apply(self, a, b):
        return np.power(a, b)

    def derivative(self, left: Expr, right: Expr, var_name: str) -> Expr:
        from .functions import LN

        base_dep = is_function_of(left, var_name)
        exp_dep = is_function_of(right, var_name)

        if base_dep and exp_dep:
            # Generalized power rule: f' * g * f^(g-1) + f^g * ln(f) * g'
            g_minus_one = BinaryResult(SUBTRACT, right, Literal(1.0))
            f_to_g_minus_one = BinaryResult(POWER, left, g_minus_one)
            g_f_to_g_minus_one = BinaryResult(MULTIPLY, right, f_to_g_minus_one)
            first_term = BinaryResult(MULTIPLY, derivative(left, var_name), g_f_to_g_minus_one)

            ln_f = UnaryResult(LN, left)
            f_to_g = BinaryResult(POWER, left, right)
            f_to_g_ln_f = BinaryResult(MULTIPLY, f_to_g, ln_f)
            second_term = BinaryResult(MULTIPLY, f_to_g_ln_f, derivative(right, var_name))

            return BinaryResult(ADD, first_term, second_term)

        if base_dep:
            # Power rule, short-circuited for exponents that are exactly 0 or 1
            if can_evaluate(right):
                exponent = evaluate(right)
                if exponent == 0:
                    return Literal(0.0)
                if exponent == 1:
                    return derivative(left, var_name)

            new_exponent = BinaryResult(SUBTRACT, right, Literal(1.0))
            power_term = BinaryResult(POWER, left, new_exponent)
            term = BinaryResult(MULTIPLY, right, power_term)
            # Chain rule
            return BinaryResult(MULTIPLY, derivative(left, var_name), term)

        if exp_dep:
            # Exponential rule with the chain rule: g' * ln(f) * f^g
            ln_term = UnaryResult(LN, left)
            exp_term = BinaryResult(POWER, left, right)
            multiplied = BinaryResult(MULTIPLY, ln_term, exp_term)
            return BinaryResult(MULTIPLY, derivative(right, var_name), multiplied)

        return Literal(0.0)

    def simplify(self, left: Expr, right: Expr, epsilon: float) -> Expr:
        if _is_value(right, 0.0, epsilon) or _is_value(left, 1.0, epsilon):
            return Literal(1.0)
        if _is_value(right, 1.0, epsilon):
            return left
        if _is_value(left, 0.0, epsilon):
            return Literal(0.0)
        return BinaryResult(self, left, right)

    def to_latex(self, left, right, left_latex, right_latex):
        return f"\\left({left_latex}^{{{right_latex}}}\\right)"


ADD = Add()
SUBTRACT = Subtract()
MULTIPLY = Multiply()
DIVIDE = Divide()
POWER = Power()
