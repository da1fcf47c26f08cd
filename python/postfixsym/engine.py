# PostfixSym SDK - Engine
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
High-level Engine API for PostfixSym.

This module provides the main user-facing interface: an ``Engine`` holds a
configuration, default bindings and LaTeX mappings, and every method
accepts either an expression tree or a postfix string.
"""

from __future__ import annotations
from typing import Mapping, Optional, Sequence, Union

from .expr import Expr, Named, Equation, structurally_equal as _structurally_equal
from .bindings import Bindings, Constant, complete_bindings, complete_latex_mappings, normalize_bindings
from .config import Config
from .parser import parse as _parse
from .evaluation import (
    evaluate as _evaluate,
    can_evaluate as _can_evaluate,
    get_unknowns as _get_unknowns,
)
from .calculus import derivative as _derivative
from .simplify import (
    simplify as _simplify,
    clean_decimals as _clean_decimals,
    analytically_equals as _analytically_equals,
)
from .render import to_string as _to_string, to_latex as _to_latex
from .domain import EvaluationDomain

# Either a tree or postfix source text
Source = Union[Expr, str, Sequence[str]]


class Engine:
    """
    High-level interface for parsing, simplifying and differentiating.

    The engine's bindings include the reserved constants ``e`` and ``pi``
    unless ``include_constants`` is False. Bindings passed to a method are
    layered over the engine's own for that call only.

    Example:
        engine = Engine(Config.high_precision())
        d = engine.differentiate("x 2 ^ sin", 'x')
        print(engine.to_latex(d))
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        bindings: Optional[Bindings] = None,
        latex_mappings: Optional[Mapping[str, str]] = None,
        include_constants: bool = True,
    ):
        """
        Initialize the engine.

        Args:
            config: Tolerances and sampling settings. Defaults to Config().
            bindings: Names known to every call.
            latex_mappings: LaTeX for specific names.
            include_constants: If True (default), bind ``e`` and ``pi`` and
                               render ``pi`` as ``\\pi``.
        """
        self.config = config or Config()
        if include_constants:
            self.bindings = complete_bindings(bindings)
            self.latex_mappings = complete_latex_mappings(latex_mappings)
        else:
            self.bindings = normalize_bindings(bindings)
            self.latex_mappings = dict(latex_mappings or {})

    def _bindings(self, bindings: Optional[Bindings]) -> dict[str, Constant]:
        if not bindings:
            return self.bindings
        merged = dict(self.bindings)
        merged.update(normalize_bindings(bindings))
        return merged

    def _expr(self, source: Source) -> Expr:
        if isinstance(source, Expr):
            return source
        return _parse(source)

    def parse(self, tokens: Union[str, Sequence[str]]) -> Expr:
        """Parse postfix tokens into an expression tree."""
        return _parse(tokens)

    def evaluate(self, source: Source, bindings: Optional[Bindings] = None) -> float:
        """
        Evaluate an expression to a float.

        Raises:
            UnboundSymbol: If a name has no binding.
        """
        return _evaluate(self._expr(source), self._bindings(bindings))

    def can_evaluate(self, source: Source, bindings: Optional[Bindings] = None) -> bool:
        return _can_evaluate(self._expr(source), self._bindings(bindings))

    def get_unknowns(self, source: Source, bindings: Optional[Bindings] = None) -> list[Named]:
        """Names with no binding, left to right, with repeats."""
        return _get_unknowns(self._expr(source), self._bindings(bindings))

    def simplify(self, source: Source, bindings: Optional[Bindings] = None) -> Expr:
        """One bottom-up simplification pass."""
        return _simplify(self._expr(source), self._bindings(bindings), self.config)

    def clean_decimals(self, source: Source, bindings: Optional[Bindings] = None) -> Expr:
        """Replace literals with bound constants, integers or fractions."""
        return _clean_decimals(self._expr(source), self._bindings(bindings), self.config)

    def derivative(self, source: Source, var_name: str) -> Expr:
        """Unsimplified derivative with respect to ``var_name``."""
        return _derivative(self._expr(source), var_name)

    def differentiate(self, source: Source, var_name: str, bindings: Optional[Bindings] = None) -> Expr:
        """
        Differentiate, then simplify and clean up decimals.

        Args:
            source: Expression or postfix tokens.
            var_name: Variable to differentiate with respect to.
            bindings: Extra bindings for simplification and cleanup.

        Returns:
            A readable derivative.
        """
        merged = self._bindings(bindings)
        d = _derivative(self._expr(source), var_name)
        return _clean_decimals(_simplify(d, merged, self.config), merged, self.config)

    def to_string(self, source: Union[Source, Equation]) -> str:
        if isinstance(source, Equation):
            return _to_string(source, self.config.epsilon)
        return _to_string(self._expr(source), self.config.epsilon)

    def to_latex(self, source: Union[Source, Equation], latex_mappings: Optional[Mapping[str, str]] = None) -> str:
        """Render as LaTeX, with call mappings layered over the engine's."""
        mappings = dict(self.latex_mappings)
        if latex_mappings:
            mappings.update(latex_mappings)
        if isinstance(source, Equation):
            return _to_latex(source, mappings, self.config.epsilon)
        return _to_latex(self._expr(source), mappings, self.config.epsilon)

    def structurally_equal(self, a: Source, b: Source) -> bool:
        return _structurally_equal(self._expr(a), self._expr(b), self.config.epsilon)

    def analytically_equals(
        self,
        a: Source,
        b: Source,
        domain: Union[EvaluationDomain, Mapping[str, Sequence[float]], None] = None,
        bindings: Optional[Bindings] = None,
    ) -> bool:
        """Compare two expressions by value over a sampled domain."""
        return _analytically_equals(
            self._expr(a),
            self._expr(b),
            self._bindings(bindings),
            domain,
            self.config,
        )

    def __repr__(self) -> str:
        return f"Engine(config={self.config!r}, bindings={sorted(self.bindings)})"


# Global engine instance for convenience functions
_global_engine: Optional[Engine] = None


def _get_engine() -> Engine:
    """Get or create global engine instance."""
    global _global_engine
    if _global_engine is None:
        _global_engine = Engine()
    return _global_engine


# Convenience functions that use the global engine

def evaluate(source: Source, bindings: Optional[Bindings] = None) -> float:
    """Evaluate an expression, with ``e`` and ``pi`` bound."""
    return _get_engine().evaluate(source, bindings)


def simplify(source: Source, bindings: Optional[Bindings] = None) -> Expr:
    """Simplify an expression, with ``e`` and ``pi`` bound."""
    return _get_engine().simplify(source, bindings)


def clean_decimals(source: Source, bindings: Optional[Bindings] = None) -> Expr:
    return _get_engine().clean_decimals(source, bindings)


def differentiate(source: Source, var_name: str, bindings: Optional[Bindings] = None) -> Expr:
    """Derivative, simplified and cleaned up."""
    return _get_engine().differentiate(source, var_name, bindings)


def to_latex(source: Union[Source, Equation], latex_mappings: Optional[Mapping[str, str]] = None) -> str:
    return _get_engine().to_latex(source, latex_mappings)


def analytically_equals(
    a: Source,
    b: Source,
    domain: Union[EvaluationDomain, Mapping[str, Sequence[float]], None] = None,
    bindings: Optional[Bindings] = None,
) -> bool:
    """Compare two expressions by value over a sampled domain."""
    return _get_engine().analytically_equals(a, b, domain, bindings)


def can_evaluate(source: Source, bindings: Optional[Bindings] = None) -> bool:
    return _get_engine().can_evaluate(source, bindings)


def get_unknowns(source: Source, bindings: Optional[Bindings] = None) -> list[Named]:
    """Names with no binding other than ``e`` and ``pi``."""
    return _get_engine().get_unknowns(source, bindings)
