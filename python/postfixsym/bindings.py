# PostfixSym SDK - Binding Maps
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Binding maps resolve names to values during evaluation and simplification.

A binding map is a plain mapping from a name to a ``Constant``. For
convenience, plain numbers and expressions are accepted as values and
treated as reducible constants.

Example:
    >>> from postfixsym.bindings import Constant, constant
    >>> from postfixsym.expr import const
    >>> bindings = {'r': constant(2), 'i': Constant(const(-1) ** 0.5, reduce=False)}
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Mapping, Optional, Union

from .expr import Expr, ExprLike, Literal, _to_expr


@dataclass(frozen=True)
class Constant:
    """
    A bound expression and whether it may be folded into a single value.

    Attributes:
        expression: The value of the name, as an expression.
        reduce: True if simplification may replace the name by its value.
                False keeps it symbolic, e.g. ``i = sqrt(-1)``.
    """
    expression: Expr
    reduce: bool = True

    def __post_init__(self):
        if not isinstance(self.expression, Expr):
            object.__setattr__(self, 'expression', _to_expr(self.expression))


# Values accepted in a binding map
BindingValue = Union[Constant, Expr, int, float, Fraction]
Bindings = Mapping[str, BindingValue]


def constant(value: ExprLike, reduce: bool = True) -> Constant:
    """Create a Constant from a number or expression."""
    return Constant(_to_expr(value), reduce)


def resolve(bindings: Optional[Bindings], name: str) -> Optional[Constant]:
    """Look up a name, coercing plain values to a reducible Constant."""
    if not bindings or name not in bindings:
        return None
    value = bindings[name]
    if isinstance(value, Constant):
        return value
    return Constant(_to_expr(value))


def normalize_bindings(bindings: Optional[Bindings]) -> dict[str, Constant]:
    """Return a new dict with every value coerced to a Constant."""
    if not bindings:
        return {}
    return {name: resolve(bindings, name) for name in bindings}


# Reserved constants, available to every engine unless overridden
CONSTANTS: dict[str, Constant] = {
    'e': Constant(Literal(math.e)),
    'pi': Constant(Literal(math.pi)),
}

LATEX_CONSTANTS: dict[str, str] = {
    'e': 'e',
    'pi': '\\pi',
}


def complete_bindings(additional: Optional[Bindings] = None) -> dict[str, Constant]:
    """
    Reserved constants merged with caller bindings.

    Caller entries win over the reserved ones of the same name.
    """
    merged = dict(CONSTANTS)
    merged.update(normalize_bindings(additional))
    return merged


def complete_latex_mappings(additional: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Default LaTeX names for the reserved constants, merged with caller mappings."""
    merged = dict(LATEX_CONSTANTS)
    if additional:
        merged.update(additional)
    return merged
