"""Integer samplers used by the stochastic turtle actions."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod


class Distribution(ABC):
    @abstractmethod
    def sample(self) -> int:
        """Draw one integer."""

    @abstractmethod
    def clone(self) -> Distribution:
        """Return a copy that shares no mutable state with this one."""


class Uniform(Distribution):
    """Uniform over the inclusive range ``[lower, upper]``."""

    def __init__(self, lower: int, upper: int, seed: int | None = None) -> None:
        if lower > upper:
            raise ValueError(f"lower bound {lower} exceeds upper bound {upper}")
        self.lower = lower
        self.upper = upper
        self._rng = random.Random(seed)

    def sample(self) -> int:
        return self._rng.randint(self.lower, self.upper)

    def clone(self) -> Uniform:
        other = Uniform(self.lower, self.upper)
        other._rng.setstate(self._rng.getstate())
        return other

    def __eq__(self, other: object) -> bool:
        # Equal over the range only; generator position is not part of the value.
        if not isinstance(other, Uniform):
            return NotImplemented
        return (self.lower, self.upper) == (other.lower, other.upper)

    def __hash__(self) -> int:
        return hash((Uniform, self.lower, self.upper))

    def __repr__(self) -> str:
        return f"Uniform({self.lower}, {self.upper})"


class Constant(Distribution):
    def __init__(self, value: int) -> None:
        self.value = value

    def sample(self) -> int:
        return self.value

    def clone(self) -> Constant:
        return Constant(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Constant, self.value))

    def __repr__(self) -> str:
        return f"Constant({self.value})"
