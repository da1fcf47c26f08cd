# Tests for domain.py - Sampled evaluation domains

import pytest


class TestVariableDomain:
    """Tests for VariableDomain."""

    def test_values_are_floats(self):
        from postfixsym.domain import VariableDomain
        d = VariableDomain('x', [1, 2, 3])
        assert d.values == (1.0, 2.0, 3.0)
        assert all(isinstance(v, float) for v in d.values)

    def test_linear_half_open(self):
        """The upper end is excluded."""
        from postfixsym.domain import VariableDomain
        d = VariableDomain.linear('x', -10, 10, 4)
        assert d.values == (-10.0, -5.0, 0.0, 5.0)

    def test_linear_default_count(self):
        from postfixsym.domain import VariableDomain
        d = VariableDomain.linear('x', 0, 1)
        assert len(d) == 1000
        assert d.values[0] == 0.0
        assert max(d.values) < 1.0

    def test_linear_invalid_range(self):
        from postfixsym.domain import VariableDomain
        with pytest.raises(ValueError, match="Invalid range"):
            VariableDomain.linear('x', 1, 1, 10)

    def test_linear_invalid_count(self):
        from postfixsym.domain import VariableDomain
        with pytest.raises(ValueError):
            VariableDomain.linear('x', 0, 1, 0)

    def test_empty_name(self):
        from postfixsym.domain import VariableDomain
        with pytest.raises(ValueError):
            VariableDomain('', [1.0])

    def test_hashable(self):
        from postfixsym.domain import VariableDomain
        assert len({VariableDomain('x', [1]), VariableDomain('x', [1.0])}) == 1

    def test_as_array(self):
        from postfixsym.domain import VariableDomain
        arr = VariableDomain('x', [1, 2]).as_array()
        assert arr.dtype.name == 'float64'
        assert arr.tolist() == [1.0, 2.0]


class TestEvaluationDomain:
    """Tests for EvaluationDomain."""

    def test_samples(self):
        from postfixsym.domain import VariableDomain, EvaluationDomain
        from postfixsym.evaluation import evaluate
        from postfixsym import parse

        domain = EvaluationDomain({'a': 10}, [VariableDomain('x', [1, 2]), VariableDomain('y', [3, 4])])
        expr = parse("a x * y +")
        assert [evaluate(expr, s) for s in domain.samples()] == [13.0, 24.0]

    def test_len(self):
        from postfixsym.domain import VariableDomain, EvaluationDomain
        assert len(EvaluationDomain({}, [VariableDomain('x', [1, 2, 3])])) == 3
        assert len(EvaluationDomain({'a': 1})) == 1

    def test_mismatched_lengths(self):
        from postfixsym.domain import VariableDomain, EvaluationDomain
        with pytest.raises(ValueError, match="same length"):
            EvaluationDomain({}, [VariableDomain('x', [1, 2]), VariableDomain('y', [1])])

    def test_duplicate_variables(self):
        from postfixsym.domain import VariableDomain, EvaluationDomain
        with pytest.raises(ValueError, match="Duplicate"):
            EvaluationDomain({}, [VariableDomain('x', [1]), VariableDomain('x', [2])])

    def test_variables_shadow_bindings(self):
        from postfixsym.domain import VariableDomain, EvaluationDomain
        from postfixsym.evaluation import evaluate
        from postfixsym import parse

        domain = EvaluationDomain({'x': 100}, [VariableDomain('x', [1])])
        assert evaluate(parse("x"), domain.bindings_at(0)) == 1.0

    def test_from_ranges(self):
        from postfixsym.domain import EvaluationDomain
        domain = EvaluationDomain.from_ranges({'x': (0, 1), 'y': (-1, 1)}, count=10)
        assert domain.var_order() == ['x', 'y']
        assert len(domain) == 10

    def test_coerce_mapping(self):
        from postfixsym.domain import EvaluationDomain
        domain = EvaluationDomain.coerce({'x': [1, 2]}, {'a': 3})
        assert domain.var_order() == ['x']
        assert set(domain.bindings) == {'a'}

    def test_coerce_keeps_domain_bindings(self):
        """Domain bindings win over bindings passed alongside."""
        from postfixsym.domain import VariableDomain, EvaluationDomain
        from postfixsym.evaluation import evaluate
        from postfixsym import parse

        domain = EvaluationDomain({'a': 1}, [VariableDomain('x', [0])])
        merged = EvaluationDomain.coerce(domain, {'a': 5, 'b': 2})
        sample = merged.bindings_at(0)
        assert evaluate(parse("a b +"), sample) == 3.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
