"""Environment — the habitat an organism is exposed to.

An Environment pairs an Ecology with the value each of its factors takes
in this particular habitat.  It is read-only for the length of a run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from genecolony.eco.ecology import Ecology, Factor

T = TypeVar("T")
X = TypeVar("X")


@dataclass(frozen=True)
class EcoFactor(Generic[X]):
    """The value a Factor takes in a habitat."""

    factor: Factor
    value: X

    def __str__(self) -> str:
        return f"{self.factor}={self.value}"


@dataclass(frozen=True)
class Environment(Generic[T, X]):
    """An ecology together with its habitat values.

    Attributes:
        name: Name of this environment.
        ecology: Factors and adaptation rules.
        habitat: Factor name to its value here.
    """

    name: str
    ecology: Ecology[T, X]
    habitat: Mapping[str, EcoFactor[X]] = field(default_factory=dict)

    @classmethod
    def of(
        cls,
        name: str,
        ecology: Ecology[T, X],
        values: Mapping[str, X],
    ) -> Environment[T, X]:
        """Build an Environment from plain ``{factor name: value}`` pairs.

        Raises:
            KeyError: If a value names a factor the ecology does not have.
        """
        habitat = {n: EcoFactor(ecology.factors[n], v) for n, v in values.items()}
        return cls(name, ecology, habitat)

    def eco_factor(self, name: str) -> EcoFactor[X] | None:
        return self.habitat.get(name)

    def __str__(self) -> str:
        values = ", ".join(str(f) for f in self.habitat.values())
        return f"Environment({self.name}: {values})"
