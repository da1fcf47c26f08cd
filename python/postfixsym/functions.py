# PostfixSym SDK - Unary Functions
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Rule bundles for unary functions.

Each function carries its postfix name, its LaTeX command, the NumPy
ufunc used to apply it, and its derivative rule. Derivatives already
include the chain rule factor ``u'``.

Constructors for building expressions in Python:
- sin, cos, tan, asin, acos, atan
- sinh, cosh, tanh
- ln, log10, abs_
"""

from __future__ import annotations
from abc import ABC, abstractmethod

import numpy as np

from .expr import Expr, ExprLike, Literal, BinaryResult, UnaryResult, _to_expr
from .operations import ADD, SUBTRACT, MULTIPLY, DIVIDE, POWER
from .calculus import derivative


class Function(ABC):
    """Base class for unary function rule bundles."""

    name: str = ''
    latex: str = ''
    ufunc = None

    def apply(self, x: float) -> float:
        """Apply the function to a float. Out-of-domain inputs give nan."""
        with np.errstate(all='ignore'):
            return float(type(self).ufunc(np.float64(x)))

    @abstractmethod
    def derivative(self, arg: Expr, var_name: str) -> Expr:
        """Derivative of ``f(arg)``, chain rule included."""
        ...

    def to_latex(self, arg_latex: str) -> str:
        return f"{self.latex}\\left({arg_latex}\\right)"

    def __call__(self, arg: ExprLike) -> UnaryResult:
        return UnaryResult(self, _to_expr(arg))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _squared(u: Expr) -> BinaryResult:
    return BinaryResult(POWER, u, Literal(2.0))


class Sin(Function):
    name = 'sin'
    latex = '\\sin'
    ufunc = np.sin

    def derivative(self, arg, var_name):
        return BinaryResult(MULTIPLY, UnaryResult(COS, arg), derivative(arg, var_name))


class Cos(Function):
    name = 'cos'
    latex = '\\cos'
    ufunc = np.cos

    def derivative(self, arg, var_name):
        neg_sin = BinaryResult(MULTIPLY, Literal(-1.0), UnaryResult(SIN, arg))
        return BinaryResult(MULTIPLY, neg_sin, derivative(arg, var_name))


class Tan(Function):
    name = 'tan'
    latex = '\\tan'
    ufunc = np.tan

    def derivative(self, arg, var_name):
        # sec^2(u) * u'
        return BinaryResult(DIVIDE, derivative(arg, var_name), _squared(UnaryResult(COS, arg)))


class Asin(Function):
    name = 'asin'
    latex = '\\arcsin'
    ufunc = np.arcsin

    def derivative(self, arg, var_name):
        root = BinaryResult(POWER, BinaryResult(SUBTRACT, Literal(1.0), _squared(arg)), Literal(0.5))
        return BinaryResult(DIVIDE, derivative(arg, var_name), root)


class Acos(Function):
    name = 'acos'
    latex = '\\arccos'
    ufunc = np.arccos

    def derivative(self, arg, var_name):
        root = BinaryResult(POWER, BinaryResult(SUBTRACT, Literal(1.0), _squared(arg)), Literal(0.5))
        neg = BinaryResult(MULTIPLY, Literal(-1.0), derivative(arg, var_name))
        return BinaryResult(DIVIDE, neg, root)


class Atan(Function):
    name = 'atan'
    latex = '\\arctan'
    ufunc = np.arctan

    def derivative(self, arg, var_name):
        return BinaryResult(DIVIDE, derivative(arg, var_name), BinaryResult(ADD, Literal(1.0), _squared(arg)))


class Sinh(Function):
    name = 'sinh'
    latex = '\\sinh'
    ufunc = np.sinh

    def derivative(self, arg, var_name):
        return BinaryResult(MULTIPLY, UnaryResult(COSH, arg), derivative(arg, var_name))


class Cosh(Function):
    name = 'cosh'
    latex = '\\cosh'
    ufunc = np.cosh

    def derivative(self, arg, var_name):
        return BinaryResult(MULTIPLY, UnaryResult(SINH, arg), derivative(arg, var_name))


class Tanh(Function):
    name = 'tanh'
    latex = '\\tanh'
    ufunc = np.tanh

    def derivative(self, arg, var_name):
        return BinaryResult(DIVIDE, derivative(arg, var_name), _squared(UnaryResult(COSH, arg)))


class Ln(Function):
    """Natural logarithm. Negative arguments give nan, zero gives -inf."""
    name = 'ln'
    latex = '\\ln'
    ufunc = np.log

    def derivative(self, arg, var_name):
        return BinaryResult(DIVIDE, derivative(arg, var_name), arg)


class Log10(Function):
    name = 'log10'
    latex = '\\log_{10}'
    ufunc = np.log10

    def derivative(self, arg, var_name):
        denominator = BinaryResult(MULTIPLY, arg, UnaryResult(LN, Literal(10.0)))
        return BinaryResult(DIVIDE, derivative(arg, var_name), denominator)


class Abs(Function):
    name = 'abs'
    latex = ''
    ufunc = np.abs

    def derivative(self, arg, var_name):
        # d|u| = u' * u / |u|, undefined at u = 0
        numerator = BinaryResult(MULTIPLY, derivative(arg, var_name), arg)
        return BinaryResult(DIVIDE, numerator, UnaryResult(ABS, arg))

    def to_latex(self, arg_latex: str) -> str:
        return f"\\left|{arg_latex}\\right|"


SIN = Sin()
COS = Cos()
TAN = Tan()
ASIN = Asin()
ACOS = Acos()
ATAN = Atan()
SINH = Sinh()
COSH = Cosh()
TANH = Tanh()
LN = Ln()
LOG10 = Log10()
ABS = Abs()


# Public constructors

def sin(x: ExprLike) -> UnaryResult:
    """Sine."""
    return SIN(x)


def cos(x: ExprLike) -> UnaryResult:
    """Cosine."""
    return COS(x)


def tan(x: ExprLike) -> UnaryResult:
    """Tangent."""
    return TAN(x)


def asin(x: ExprLike) -> UnaryResult:
    """Arcsine. Defined on [-1, 1]."""
    return ASIN(x)


def acos(x: ExprLike) -> UnaryResult:
    """Arccosine. Defined on [-1, 1]."""
    return ACOS(x)


def atan(x: ExprLike) -> UnaryResult:
    return ATAN(x)


def sinh(x: ExprLike) -> UnaryResult:
    return SINH(x)


def cosh(x: ExprLike) -> UnaryResult:
    return COSH(x)


def tanh(x: ExprLike) -> UnaryResult:
    return TANH(x)


def ln(x: ExprLike) -> UnaryResult:
    """Natural logarithm."""
    return LN(x)


def log10(x: ExprLike) -> UnaryResult:
    """Base-10 logarithm."""
    return LOG10(x)


def abs_(x: ExprLike) -> UnaryResult:
    """Absolute value. Named with a trailing underscore to keep the builtin."""
    return ABS(x)
