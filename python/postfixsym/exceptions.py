# PostfixSym SDK - Exceptions
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""Exception hierarchy for PostfixSym."""

from __future__ import annotations
from typing import Optional


class PostfixSymError(Exception):
    """Base class for all PostfixSym exceptions."""
    pass


class MalformedExpression(PostfixSymError):
    """
    Raised when a postfix token stream does not describe exactly one expression.

    Attributes:
        index: Token index at which an operator found too few operands,
               or None if the failure was detected after the last token.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        if index is not None:
            message = f"{message} (token index {index})"
        super().__init__(message)
        self.index = index


class UnboundSymbol(PostfixSymError):
    """Raised when a named symbol is evaluated without a binding."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' is unknown: no binding was supplied")
        self.name = name


class UnrecognizedOperator(PostfixSymError):
    """
    Raised when an operator or function has no registered token.

    Reaching this from a registry lookup means the registry is inconsistent.
    It is also raised while decoding persisted trees that name a token
    this package does not know.
    """

    def __init__(self, symbol: str, context: Optional[str] = None):
        message = f"Unrecognized operator or function: '{symbol}'"
        if context:
            message += f" in {context}"
        suggestion = _get_suggestion_for_symbol(symbol)
        if suggestion:
            message += f"\n  Suggestion: {suggestion}"
        super().__init__(message)
        self.symbol = symbol
        self.suggestion = suggestion


class DecimalCleanupError(PostfixSymError):
    """Raised when no fraction within tolerance is found before the iteration cap."""

    def __init__(self, value: float, iterations: int):
        super().__init__(
            f"Could not approximate {value!r} by a fraction within {iterations} iterations. "
            f"Increase Config.max_fraction_iterations or epsilon."
        )
        self.value = value
        self.iterations = iterations


class SerializationError(PostfixSymError):
    """Raised when a persisted expression payload is structurally invalid."""
    pass


def _get_suggestion_for_symbol(symbol: str) -> Optional[str]:
    """Get a helpful suggestion for an unrecognized operator or function token."""
    suggestions = {
        # Common misspellings
        '**': "Use '^' for exponentiation.",
        'pow': "Use '^' for exponentiation.",
        'sine': "Did you mean 'sin'?",
        'cosine': "Did you mean 'cos'?",
        'tangent': "Did you mean 'tan'?",
        'arcsin': "Did you mean 'asin'?",
        'arccos': "Did you mean 'acos'?",
        'arctan': "Did you mean 'atan'?",
        'log': "Use 'ln' for the natural logarithm or 'log10' for base 10.",
        'exp': "Use 'e x ^' for the exponential function.",
        'sqrt': "Use 'x 0.5 ^' for the square root.",
        'asinh': "Inverse hyperbolic functions are not supported.",
        'acosh': "Inverse hyperbolic functions are not supported.",
        'atanh': "Inverse hyperbolic functions are not supported.",
        '%': "Modulo is not supported.",
        'mod': "Modulo is not supported.",
    }
    return suggestions.get(symbol.lower())
