# PostfixSym SDK - Parser Tests
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Tests for building expression trees from postfix tokens.
"""

import pytest

from postfixsym import parse, MalformedExpression
from postfixsym.expr import Literal, Named, BinaryResult, UnaryResult
from postfixsym.operations import ADD, SUBTRACT, DIVIDE, POWER, MULTIPLY
from postfixsym.functions import SIN, LN


class TestOperands:
    """Tests for operand tokens."""

    def test_integer_literal(self):
        """A numeric token becomes a Literal."""
        assert parse("42") == Literal(42.0)

    def test_float_literal(self):
        """Decimal and exponent notation are accepted."""
        assert parse("0.25") == Literal(0.25)
        assert parse("1e3") == Literal(1000.0)

    def test_negative_literal(self):
        """A leading minus on a number is part of the literal."""
        assert parse("-3.5") == Literal(-3.5)

    def test_name(self):
        """Anything that is not a number is a name."""
        assert parse("x") == Named('x')

    def test_constant_stays_symbolic(self):
        """pi is not resolved at parse time."""
        assert parse("pi") == Named('pi')

    def test_leading_dot_literal(self):
        assert parse(".5") == Literal(0.5)
        assert parse("2.") == Literal(2.0)

    @pytest.mark.parametrize("token", ["inf", "nan", "Infinity", "1_000", "0x10"])
    def test_python_only_spellings_are_names(self, token):
        """Only plain decimal notation makes a literal."""
        assert parse(token) == Named(token)


class TestOperators:
    """Tests for operator and function tokens."""

    def test_operand_order(self):
        """The last pushed operand is the right one."""
        expr = parse("8 2 -")
        assert expr == BinaryResult(SUBTRACT, Literal(8.0), Literal(2.0))

    def test_nested(self):
        """Nested postfix builds the expected tree."""
        expr = parse("x 2 ^ 1 +")
        assert expr == BinaryResult(ADD, BinaryResult(POWER, Named('x'), Literal(2.0)), Literal(1.0))

    def test_function(self):
        """A function token wraps the top of the stack."""
        assert parse("x sin") == UnaryResult(SIN, Named('x'))

    def test_function_of_expression(self):
        """Functions apply to whole sub-trees."""
        expr = parse("x 1 + ln")
        assert expr == UnaryResult(LN, BinaryResult(ADD, Named('x'), Literal(1.0)))

    def test_sphere_volume(self):
        """The sphere volume formula parses into the expected shape."""
        expr = parse("4 3 / pi * r 3 ^ *")
        assert expr.op is MULTIPLY
        assert expr.left == BinaryResult(MULTIPLY, BinaryResult(DIVIDE, Literal(4.0), Literal(3.0)), Named('pi'))
        assert expr.right == BinaryResult(POWER, Named('r'), Literal(3.0))

    def test_token_list(self):
        """A pre-split token list is accepted."""
        assert parse(['2', 'x', '*']) == parse("2 x *")

    def test_token_iterator(self):
        """A one-shot iterator of tokens is accepted."""
        assert parse(iter(["1", "x", "+"])) == BinaryResult(ADD, Literal(1.0), Named('x'))
        assert parse(t for t in "x sin".split()) == UnaryResult(SIN, Named('x'))

    def test_extra_whitespace(self):
        """Runs of whitespace separate tokens."""
        assert parse("  2\tx   * ") == parse("2 x *")

    def test_bundles_are_shared(self):
        """Every parse refers to the same operation instance."""
        assert parse("1 2 +").op is parse("3 4 +").op


class TestMalformed:
    """Tests for malformed token streams."""

    def test_operator_first(self):
        """An operator before two operands exist fails."""
        with pytest.raises(MalformedExpression) as info:
            parse("+ 2")
        assert info.value.index == 0

    def test_operator_with_one_operand(self):
        """The index points at the failing operator."""
        with pytest.raises(MalformedExpression) as info:
            parse("2 +")
        assert info.value.index == 1

    def test_function_without_operand(self):
        """A function needs one operand."""
        with pytest.raises(MalformedExpression):
            parse("sin")

    def test_leftover_operands(self):
        """More than one item left on the stack fails."""
        with pytest.raises(MalformedExpression, match="found 2") as info:
            parse("1 2")
        assert info.value.index is None

    def test_empty(self):
        """An empty stream has no expression."""
        with pytest.raises(MalformedExpression, match="found 0"):
            parse("")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
