"""Ecology — how well a Phenotype suits a set of environmental factors.

For each trait of a Phenotype the Ecology looks up the Factor of the
same name.  Traits without a Factor are dropped without any warning.
Every matched (Factor, Trait) pair is handed to the Adapter; if the
Adapter yields nothing for any matched pair, the Adaptatype cannot be
built and ``AdaptationError`` is raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from genecolony.evolution.random import Identifier
from genecolony.exceptions import AdaptationError

if TYPE_CHECKING:
    from genecolony.eco.environment import EcoFactor
    from genecolony.genetics.phenotype import Phenotype, Trait

T = TypeVar("T")
X = TypeVar("X")


@dataclass(frozen=True)
class Factor:
    """A named environmental dimension, matched to traits by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Fitness:
    """A fitness score in the closed interval [0, 1]."""

    x: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.x <= 1.0:
            msg = f"fitness must lie in [0, 1], got {self.x}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.x:.4f}"


FitnessFunction = Callable[[T, Any, X], Fitness]
EcoFitness = Callable[["EcoFactor[X]"], "Fitness | None"]


@dataclass(frozen=True)
class Adaptation(Generic[X]):
    """The adaptation of one trait to one factor.

    Attributes:
        factor: The factor this adaptation answers to.
        eco_fitness: Fitness of the adapted trait for a given value of
            the factor, or None where it is undefined.
    """

    factor: Factor
    eco_fitness: EcoFitness = field(compare=False)

    def fitness(self, eco_factor: EcoFactor[X]) -> Fitness | None:
        return self.eco_fitness(eco_factor)

    def __str__(self) -> str:
        return f"Adaptation({self.factor})"


Adapter = Callable[[Factor, "Trait[T]", FitnessFunction], "Adaptation[X] | None"]


@dataclass(frozen=True)
class Adaptatype(Generic[X]):
    """Every adaptation of one Phenotype to an Ecology."""

    identifier: Identifier
    adaptations: tuple[Adaptation[X], ...]

    def __len__(self) -> int:
        return len(self.adaptations)

    def __str__(self) -> str:
        return f"{self.identifier}: " + ", ".join(str(a) for a in self.adaptations)


@dataclass(frozen=True)
class Ecology(Generic[T, X]):
    """Factors of an ecological niche and the rules for adapting to them.

    Attributes:
        name: Name of this ecology.
        factors: Factor name to Factor; keys are the names traits are
            looked up by.
        fitness_function: ``(trait value, function type, eco value)``
            to Fitness.
        adapter: Builds the Adaptation for a matched (Factor, Trait).
    """

    name: str
    factors: Mapping[str, Factor]
    fitness_function: FitnessFunction = field(compare=False)
    adapter: Adapter = field(compare=False)

    @classmethod
    def of(
        cls,
        name: str,
        factor_names: list[str] | tuple[str, ...],
        fitness_function: FitnessFunction,
        adapter: Adapter,
    ) -> Ecology[T, X]:
        """Build an Ecology keyed by the names of its factors."""
        factors = {n: Factor(n) for n in factor_names}
        return cls(name, factors, fitness_function, adapter)

    def apply(self, phenotype: Phenotype[T]) -> Adaptatype[X]:
        """Adapt ``phenotype`` to this ecology.

        Raises:
            AdaptationError: If the adapter yields nothing for a trait
                whose factor was found.
        """
        adaptations: list[Adaptation[X]] = []
        for t in phenotype.traits:
            factor = self.factors.get(t.characteristic.name)
            if factor is None:
                continue
            adaptation = self.adapter(factor, t, self.fitness_function)
            if adaptation is None:
                msg = f"{self.name}: no adaptation of {t} to factor {factor}"
                raise AdaptationError(msg)
            adaptations.append(adaptation)
        return Adaptatype(
            identifier=phenotype.identifier.retag("at"),
            adaptations=tuple(adaptations),
        )

    __call__ = apply

    def __str__(self) -> str:
        return f"Ecology({self.name}, factors={sorted(self.factors)})"
