# PostfixSym SDK - Postfix Parser
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Build expression trees from postfix (RPN) token streams.

Tokens are processed left to right against an operand stack:

- a registered operation token pops ``right`` then ``left``
- a registered function name pops its argument
- anything else is a literal if it is written as a plain decimal number
  (``3``, ``-0.5``, ``.25``, ``6.02e23``), otherwise a name. Spellings
  that ``float()`` also accepts, such as ``inf``, ``nan`` or ``1_000``,
  are names. Constants such as ``pi`` stay symbolic until a binding map
  resolves them.

Example:
    >>> parse("4 3 / pi * r 3 ^ *")
    (((const(4.0) / const(3.0)) * var('pi')) * (var('r') ^ const(3.0)))
"""

from __future__ import annotations
import logging
import re
from typing import Iterable, Union

from .expr import Expr, Literal, Named, BinaryResult, UnaryResult
from .symbols import is_operation, is_function, lookup_operation, lookup_function
from .exceptions import MalformedExpression

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def tokenize(source: str) -> list[str]:
    """Split a postfix string on whitespace."""
    return source.split()


def parse_token(token: str) -> Expr:
    """Turn a single operand token into a Literal or a Named leaf."""
    if NUMBER_PATTERN.fullmatch(token):
        return Literal(float(token))
    return Named(token)


def parse(tokens: Union[str, Iterable[str]]) -> Expr:
    """
    Parse postfix tokens into an expression tree.

    Args:
        tokens: A whitespace-separated string, or an iterable of tokens.

    Returns:
        The root of the expression tree.

    Raises:
        MalformedExpression: If an operator or function finds too few
            operands, or the stream does not leave exactly one expression.
    """
    if isinstance(tokens, str):
        tokens = tokenize(tokens)
    else:
        tokens = list(tokens)

    stack: list[Expr] = []
    for index, token in enumerate(tokens):
        if is_operation(token):
            if len(stack) < 2:
                raise MalformedExpression(
                    f"Not enough operands for '{token}' on the expression stack", index=index
                )
            right = stack.pop()
            left = stack.pop()
            stack.append(BinaryResult(lookup_operation(token), left, right))
        elif is_function(token):
            if not stack:
                raise MalformedExpression(
                    f"Not enough operands for '{token}' on the expression stack", index=index
                )
            stack.append(UnaryResult(lookup_function(token), stack.pop()))
        else:
            stack.append(parse_token(token))

    logger.debug("Parsed %d tokens, %d item(s) left on the stack", len(tokens), len(stack))

    if len(stack) != 1:
        raise MalformedExpression(
            f"Expected exactly one expression after parsing, found {len(stack)}"
        )
    return stack[0]
