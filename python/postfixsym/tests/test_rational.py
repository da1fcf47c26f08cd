# Tests for rational.py - Fraction search for decimal cleanup

import math

import pytest
from fractions import Fraction


class TestSplitDecimal:
    """Tests for split_decimal()."""

    def test_positive(self):
        from postfixsym.rational import split_decimal

        assert split_decimal(3.75) == (3, 0.75)

    def test_negative(self):
        """The fractional part is always non-negative."""
        from postfixsym.rational import split_decimal

        assert split_decimal(-0.5) == (-1, 0.5)
        n, frac = split_decimal(-2.25)
        assert n == -3
        assert frac == pytest.approx(0.75)


class TestMediantFraction:
    """Tests for the Stern-Brocot search."""

    def test_half(self):
        from postfixsym.rational import mediant_fraction

        assert mediant_fraction(0.5, 1e-6, 100) == (1, 2)

    def test_smallest_denominator_first(self):
        """The first fraction within epsilon wins."""
        from postfixsym.rational import mediant_fraction

        assert mediant_fraction(0.3334, 1e-3, 100) == (1, 3)

    def test_cap(self):
        from postfixsym.rational import mediant_fraction
        from postfixsym.exceptions import DecimalCleanupError

        with pytest.raises(DecimalCleanupError) as info:
            mediant_fraction(math.sqrt(2) - 1, 1e-12, 5)
        assert info.value.iterations == 5

    def test_fraction_near_epsilon(self):
        """A long run of mediants toward 0 is taken in one step."""
        from postfixsym.rational import mediant_fraction

        p, q = mediant_fraction(3e-6, 1e-6, 5)
        assert abs(p / q - 3e-6) <= 1e-6

    def test_matches_single_step_walk(self):
        """Taking runs at once finds the same fraction as one mediant at a time."""
        from postfixsym.rational import mediant_fraction

        for x, epsilon in [(0.75, 1e-6), (0.3334, 1e-3), (0.1415926535, 1e-6), (0.0004, 1e-6), (0.9991, 1e-5)]:
            assert mediant_fraction(x, epsilon, 100) == _single_step_walk(x, epsilon)


def _single_step_walk(x, epsilon):
    lower_n, lower_d, upper_n, upper_d = 0, 1, 1, 1
    while True:
        middle_n, middle_d = lower_n + upper_n, lower_d + upper_d
        if middle_d * (x + epsilon) < middle_n:
            upper_n, upper_d = middle_n, middle_d
        elif middle_d * (x - epsilon) > middle_n:
            lower_n, lower_d = middle_n, middle_d
        else:
            return middle_n, middle_d


class TestApproximateFraction:
    """Tests for approximate_fraction() - human-friendly conversion."""

    def test_simple_decimals(self):
        """The main use case: common decimal numbers."""
        from postfixsym.rational import approximate_fraction

        # These are the problematic cases with Fraction(float)
        assert approximate_fraction(0.1, 1e-6) == Fraction(1, 10)
        assert approximate_fraction(0.2, 1e-6) == Fraction(1, 5)
        assert approximate_fraction(0.25, 1e-6) == Fraction(1, 4)
        assert approximate_fraction(0.5, 1e-6) == Fraction(1, 2)

    def test_mixed_number(self):
        from postfixsym.rational import approximate_fraction

        assert approximate_fraction(3.75, 1e-6) == Fraction(15, 4)
        assert approximate_fraction(-0.5, 1e-6) == Fraction(-1, 2)

    def test_integers(self):
        from postfixsym.rational import approximate_fraction

        assert approximate_fraction(7.0, 1e-6) == Fraction(7)
        assert approximate_fraction(6.9999999, 1e-6) == Fraction(7)
        assert approximate_fraction(-2.0, 1e-6) == Fraction(-2)

    def test_within_epsilon(self):
        from postfixsym.rational import approximate_fraction

        for x in (0.123, 2.718281828, -1.414213562):
            f = approximate_fraction(x, 1e-6)
            assert abs(float(f) - x) <= 1e-6 + 1e-12

    def test_high_precision_near_integer(self):
        """Values just above an integer stay well under the preset's cap."""
        from postfixsym.rational import approximate_fraction
        from postfixsym.config import Config

        config = Config.high_precision()
        f = approximate_fraction(3.000000002, config.epsilon, config.max_fraction_iterations)
        assert f.denominator > 1
        assert abs(float(f) - 3.000000002) <= 1e-9 + 1e-15

        g = approximate_fraction(0.999999997, config.epsilon, 10)
        assert abs(float(g) - 0.999999997) <= 1e-9 + 1e-15

    def test_non_finite(self):
        from postfixsym.rational import approximate_fraction

        with pytest.raises(ValueError):
            approximate_fraction(float('inf'), 1e-6)
        with pytest.raises(ValueError):
            approximate_fraction(float('nan'), 1e-6)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
