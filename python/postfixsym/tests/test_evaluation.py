# PostfixSym SDK - Evaluation Tests
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Tests for numeric evaluation, bindings and unknown discovery.
"""

import math

import pytest

from postfixsym import parse, UnboundSymbol
from postfixsym.bindings import Constant, constant, complete_bindings, complete_latex_mappings
from postfixsym.evaluation import evaluate, can_evaluate, get_unknowns, has_constant_term
from postfixsym.expr import Named, const


class TestEvaluate:
    """Tests for evaluate()."""

    def test_literal(self):
        assert evaluate(parse("2.5")) == 2.5

    def test_arithmetic(self):
        assert evaluate(parse("6 8 / 2 10 / /")) == pytest.approx(3.75)

    def test_bound_name(self):
        assert evaluate(parse("x 2 ^"), {'x': 3}) == 9.0

    def test_constant_binding(self):
        """Constant values and plain numbers are both accepted."""
        bindings = {'a': constant(2), 'b': 3.0}
        assert evaluate(parse("a b *"), bindings) == 6.0

    def test_binding_is_an_expression(self):
        """A binding may be defined in terms of another binding."""
        bindings = {'tau': Constant(parse("2 pi *")), 'pi': math.pi}
        assert evaluate(parse("tau"), bindings) == pytest.approx(2 * math.pi)

    def test_sphere_volume(self):
        """4/3 pi r^3 with r = 2."""
        result = evaluate(parse("4 3 / pi * r 3 ^ *"), complete_bindings({'r': 2}))
        assert result == pytest.approx(33.51032, abs=1e-5)

    def test_unbound(self):
        with pytest.raises(UnboundSymbol) as info:
            evaluate(parse("x 1 +"))
        assert info.value.name == 'x'

    def test_irreducible_binding_still_evaluates(self):
        """reduce=False only prevents folding, not evaluation."""
        bindings = {'k': Constant(const(2.0), reduce=False)}
        assert evaluate(parse("k 3 *"), bindings) == 6.0


class TestIEEESemantics:
    """Non-finite results follow floating-point rules instead of raising."""

    def test_divide_by_zero(self):
        assert evaluate(parse("1 0 /")) == math.inf
        assert evaluate(parse("-1 0 /")) == -math.inf

    def test_zero_over_zero(self):
        assert math.isnan(evaluate(parse("0 0 /")))

    def test_log_of_zero(self):
        assert evaluate(parse("0 ln")) == -math.inf

    def test_asin_out_of_domain(self):
        assert math.isnan(evaluate(parse("2 asin")))

    def test_negative_base_fractional_power(self):
        assert math.isnan(evaluate(parse("-8 1 3 / ^")))

    def test_result_is_python_float(self):
        assert type(evaluate(parse("2 sin"))) is float


class TestCanEvaluate:
    """Tests for can_evaluate()."""

    def test_literals(self):
        assert can_evaluate(parse("1 2 + sin"))

    def test_unbound_name(self):
        assert not can_evaluate(parse("x 1 +"))

    def test_bound_name(self):
        assert can_evaluate(parse("x 1 +"), {'x': 1})

    def test_irreducible_binding(self):
        """Names bound with reduce=False are never foldable."""
        i = Constant(parse("-1 0.5 ^"), reduce=False)
        assert not can_evaluate(parse("i 2 *"), {'i': i})

    def test_binding_with_unknowns(self):
        """A binding whose expression has unknowns is not foldable."""
        assert not can_evaluate(parse("a"), {'a': parse("b 1 +")})


class TestUnknowns:
    """Tests for get_unknowns() and has_constant_term()."""

    def test_order_and_repeats(self):
        unknowns = get_unknowns(parse("x y * x +"))
        assert unknowns == [Named('x'), Named('y'), Named('x')]

    def test_bound_names_skipped(self):
        assert get_unknowns(parse("x pi *"), complete_bindings()) == [Named('x')]

    def test_no_unknowns(self):
        assert get_unknowns(parse("2 3 +")) == []

    def test_has_constant_term(self):
        assert has_constant_term(parse("x 2 *"))
        assert not has_constant_term(parse("x y *"))
        assert has_constant_term(parse("x y *"), {'y': 1})


class TestReservedConstants:
    """Tests for the reserved e and pi bindings."""

    def test_complete_bindings(self):
        bindings = complete_bindings()
        assert evaluate(parse("pi"), bindings) == math.pi
        assert evaluate(parse("e"), bindings) == math.e

    def test_caller_overrides(self):
        bindings = complete_bindings({'pi': 3})
        assert evaluate(parse("pi"), bindings) == 3.0

    def test_latex_defaults(self):
        mappings = complete_latex_mappings({'phi': '\\phi'})
        assert mappings['pi'] == '\\pi'
        assert mappings['e'] == 'e'
        assert mappings['phi'] == '\\phi'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
