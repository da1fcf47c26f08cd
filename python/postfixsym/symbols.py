# PostfixSym SDK - Symbol Table
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Fixed registries mapping postfix tokens to rule bundles.

The tables are plain dict literals built once at import. Reverse lookups
go through the same tables, so a bundle that is not registered here cannot
be rendered or persisted.
"""

from __future__ import annotations

from .operations import Operation, ADD, SUBTRACT, MULTIPLY, DIVIDE, POWER
from .functions import (
    Function,
    SIN, COS, TAN, ASIN, ACOS, ATAN,
    SINH, COSH, TANH,
    LN, LOG10, ABS,
)
from .exceptions import UnrecognizedOperator


OPERATIONS: dict[str, Operation] = {
    '+': ADD,
    '-': SUBTRACT,
    '*': MULTIPLY,
    '/': DIVIDE,
    '^': POWER,
}

FUNCTIONS: dict[str, Function] = {
    'sin': SIN,
    'cos': COS,
    'tan': TAN,
    'asin': ASIN,
    'acos': ACOS,
    'atan': ATAN,
    'sinh': SINH,
    'cosh': COSH,
    'tanh': TANH,
    'ln': LN,
    'log10': LOG10,
    'abs': ABS,
}

_OPERATION_TOKENS = {id(op): token for token, op in OPERATIONS.items()}
_FUNCTION_NAMES = {id(func): name for name, func in FUNCTIONS.items()}


def is_operation(token: str) -> bool:
    """True if the token names a binary operation."""
    return token in OPERATIONS


def is_function(token: str) -> bool:
    return token in FUNCTIONS


def operation_token(op: Operation) -> str:
    """Registered token of an operation bundle."""
    try:
        return _OPERATION_TOKENS[id(op)]
    except KeyError:
        raise UnrecognizedOperator(repr(op), context="operation has no registered token") from None


def function_name(func: Function) -> str:
    """Registered name of a function bundle."""
    try:
        return _FUNCTION_NAMES[id(func)]
    except KeyError:
        raise UnrecognizedOperator(repr(func), context="function has no registered name") from None


def lookup_operation(token: str) -> Operation:
    if token not in OPERATIONS:
        raise UnrecognizedOperator(token, context="unknown operation token")
    return OPERATIONS[token]


def lookup_function(name: str) -> Function:
    if name not in FUNCTIONS:
        raise UnrecognizedOperator(name, context="unknown function name")
    return FUNCTIONS[name]
