# PostfixSym SDK - Expression Persistence
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Save and reload expression trees as JSON.

Trees are encoded as nested dicts with a ``kind`` tag per node. Rule
bundles are stored by their registered token and looked up again on load,
so a reloaded tree shares the same operation and function instances as a
freshly parsed one.

Node encodings:
    {"kind": "literal", "value": 2.0}
    {"kind": "named", "name": "x"}
    {"kind": "binary", "op": "*", "left": {...}, "right": {...}}
    {"kind": "unary", "func": "sin", "arg": {...}}
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Union

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult
from .symbols import operation_token, function_name, lookup_operation, lookup_function
from .exceptions import SerializationError

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def to_dict(expr: Expr) -> dict[str, Any]:
    """Convert an expression to a JSON-serializable dictionary."""
    if isinstance(expr, Literal):
        return {'kind': 'literal', 'value': expr.value}
    if isinstance(expr, Named):
        return {'kind': 'named', 'name': expr.name}
    if isinstance(expr, BinaryResult):
        return {
            'kind': 'binary',
            'op': operation_token(expr.op),
            'left': to_dict(expr.left),
            'right': to_dict(expr.right),
        }
    if isinstance(expr, UnaryResult):
        return {
            'kind': 'unary',
            'func': function_name(expr.func),
            'arg': to_dict(expr.arg),
        }
    raise TypeError(f"Unknown expression node: {type(expr).__name__}")


def from_dict(payload: dict[str, Any]) -> Expr:
    """
    Rebuild an expression from ``to_dict`` output.

    Raises:
        SerializationError: If a node is not a dict, has an unknown kind,
            or is missing a field.
        UnrecognizedOperator: If an operation or function token is not
            registered.
    """
    if not isinstance(payload, dict):
        raise SerializationError(f"Expected an expression node, got {type(payload).__name__}")

    kind = payload.get('kind')
    try:
        if kind == 'literal':
            return Literal(payload['value'])
        if kind == 'named':
            return Named(payload['name'])
        if kind == 'binary':
            return BinaryResult(
                lookup_operation(payload['op']),
                from_dict(payload['left']),
                from_dict(payload['right']),
            )
        if kind == 'unary':
            return UnaryResult(lookup_function(payload['func']), from_dict(payload['arg']))
    except KeyError as e:
        raise SerializationError(f"Missing field {e} in '{kind}' node") from e
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Invalid '{kind}' node: {e}") from e

    raise SerializationError(f"Unknown node kind: {kind!r}")


def save(expr: Expr, path: Union[str, Path]) -> None:
    """Save an expression to a JSON file."""
    data = {
        'format_version': FORMAT_VERSION,
        'expr': to_dict(expr),
    }
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("Saved expression to %s", path)


def load(path: Union[str, Path]) -> Expr:
    """
    Load an expression saved with ``save``.

    Raises:
        SerializationError: If the file does not hold a saved expression.
    """
    with open(path) as f:
        data = json.load(f)

    if not isinstance(data, dict) or 'expr' not in data:
        raise SerializationError(f"{path} does not contain a saved expression")
    version = data.get('format_version')
    if version != FORMAT_VERSION:
        raise SerializationError(f"Unsupported format version {version!r} in {path}")

    expr = from_dict(data['expr'])
    logger.info("Loaded expression from %s", path)
    return expr
