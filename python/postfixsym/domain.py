# PostfixSym SDK - Evaluation Domains
# Copyright (c) 2024 PostfixSym Contributors. All rights reserved.

"""
Sampled domains for evaluating expressions at many points.

A ``VariableDomain`` is an ordered list of values one variable takes. An
``EvaluationDomain`` pairs several of them (all of the same length) with
fixed bindings, and yields one binding map per sample. Analytic equality
and graphing both consume domains this way.

Example:
    >>> from postfixsym.domain import VariableDomain, EvaluationDomain
    >>> x = VariableDomain.linear('x', -10, 10, 4)
    >>> x.values
    (-10.0, -5.0, 0.0, 5.0)
    >>> domain = EvaluationDomain({}, [x])
    >>> len(domain)
    4
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Sequence, Union

import numpy as np

from .bindings import Bindings, Constant, normalize_bindings
from .config import Config, DEFAULT_CONFIG


@dataclass(frozen=True)
class VariableDomain:
    """
    The ordered values a single variable takes during sampled evaluation.

    Domains are immutable and can be used as dictionary keys.
    """
    name: str
    values: tuple[float, ...]

    def __init__(self, name: str, values: Sequence[float]):
        """
        Create a domain for ``name``.

        Args:
            name: Variable name.
            values: Values to take, in order (converted to float).

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            raise ValueError("Variable name cannot be empty")

        # Bypass frozen dataclass __setattr__
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'values', tuple(float(v) for v in values))

    @classmethod
    def linear(cls, name: str, lo: float, hi: float, count: Optional[int] = None) -> VariableDomain:
        """
        Evenly spaced samples of the half-open range [lo, hi).

        The i-th sample is ``lo + i / count * (hi - lo)``.

        Raises:
            ValueError: If lo >= hi or count < 1.
        """
        if count is None:
            count = DEFAULT_CONFIG.sample_count
        if not lo < hi:
            raise ValueError(f"Invalid range: lo={lo} >= hi={hi}")
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        samples = lo + np.arange(count, dtype=np.float64) / count * (hi - lo)
        return cls(name, samples.tolist())

    def as_array(self) -> np.ndarray:
        """Values as a float64 array."""
        return np.asarray(self.values, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __repr__(self) -> str:
        if len(self.values) > 4:
            return f"VariableDomain({self.name!r}, [{self.values[0]}, ..., {self.values[-1]}], n={len(self)})"
        return f"VariableDomain({self.name!r}, {list(self.values)})"


@dataclass
class EvaluationDomain:
    """
    Fixed bindings plus variables that take their values sample by sample.

    Every variable domain must have the same number of values. Variables
    shadow bindings of the same name.

    Example:
        >>> domain = EvaluationDomain.from_ranges({'x': (0, 1), 'y': (-1, 1)}, count=10)
        >>> domain.var_order()
        ['x', 'y']
    """
    bindings: dict[str, Constant] = field(default_factory=dict)
    variables: list[VariableDomain] = field(default_factory=list)

    def __init__(self, bindings: Optional[Bindings] = None, variables: Sequence[VariableDomain] = ()):
        self.bindings = normalize_bindings(bindings)
        self.variables = list(variables)

        lengths = {len(v) for v in self.variables}
        if len(lengths) > 1:
            sizes = ", ".join(f"{v.name}={len(v)}" for v in self.variables)
            raise ValueError(f"All variable domains must have the same length, got {sizes}")

        names = [v.name for v in self.variables]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate variable domains: {names}")

    @classmethod
    def from_ranges(
        cls,
        ranges: Mapping[str, tuple[float, float]],
        bindings: Optional[Bindings] = None,
        count: Optional[int] = None,
        config: Optional[Config] = None,
    ) -> EvaluationDomain:
        """Sample each named range [lo, hi) with the same number of points."""
        if count is None:
            count = (config or DEFAULT_CONFIG).sample_count
        variables = [VariableDomain.linear(name, lo, hi, count) for name, (lo, hi) in ranges.items()]
        return cls(bindings, variables)

    @classmethod
    def coerce(
        cls,
        domain: Union[EvaluationDomain, Mapping[str, Sequence[float]]],
        bindings: Optional[Bindings] = None,
    ) -> EvaluationDomain:
        """
        Accept an EvaluationDomain or a ``{name: values}`` mapping.

        Bindings passed here are merged under the domain's own bindings.
        """
        if isinstance(domain, EvaluationDomain):
            if not bindings:
                return domain
            merged = normalize_bindings(bindings)
            merged.update(domain.bindings)
            return cls(merged, domain.variables)
        variables = [VariableDomain(name, values) for name, values in domain.items()]
        return cls(bindings, variables)

    def var_order(self) -> list[str]:
        return [v.name for v in self.variables]

    def __len__(self) -> int:
        """Number of samples. A domain without variables has one sample."""
        if not self.variables:
            return 1
        return len(self.variables[0])

    def bindings_at(self, index: int) -> dict[str, Constant]:
        """Binding map for the sample at ``index``."""
        sample = dict(self.bindings)
        for variable in self.variables:
            sample[variable.name] = Constant(variable.values[index])
        return sample

    def samples(self) -> Iterator[dict[str, Constant]]:
        """Yield one binding map per sample."""
        for i in range(len(self)):
            yield self.bindings_at(i)

    def __repr__(self) -> str:
        return f"EvaluationDomain(bindings={sorted(self.bindings)}, variables={self.variables!r})"
