# PostfixSym SDK - Configuration
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""Configuration settings for PostfixSym."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """
    Configuration for simplification, decimal cleanup and equality checks.

    Attributes:
        epsilon: Tolerance used when comparing literals, detecting integers,
                 matching bound constants and approximating fractions.
        max_fraction_iterations: Maximum runs of mediants in the Stern-Brocot
                 search before decimal cleanup gives up.
        sample_count: Default number of samples for generated variable domains.
    """
    epsilon: float = 1e-6
    max_fraction_iterations: int = 1_000_000
    sample_count: int = 1000

    def __post_init__(self):
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_fraction_iterations < 1:
            raise ValueError(
                f"max_fraction_iterations must be at least 1, got {self.max_fraction_iterations}"
            )
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {self.sample_count}")

    @classmethod
    def low_precision(cls) -> Config:
        """Coarse tolerance; fractions come out with small denominators."""
        return cls(epsilon=1e-3)

    @classmethod
    def medium_precision(cls) -> Config:
        """Balanced configuration (default)."""
        return cls()

    @classmethod
    def high_precision(cls) -> Config:
        """Tight tolerance for values that need large denominators."""
        return cls(
            epsilon=1e-9,
            max_fraction_iterations=10_000_000,
        )

    def __repr__(self) -> str:
        return (
            f"Config(epsilon={self.epsilon}, "
            f"max_fraction_iterations={self.max_fraction_iterations}, "
            f"sample_count={self.sample_count})"
        )


DEFAULT_CONFIG = Config()
