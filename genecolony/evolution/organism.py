"""Organism — one member of a colony's population.

An organism owns its Nucleus.  Its Genotype and Phenotype are derived
from it on first use and cached; its identity is fixed at construction.
Fitness is always measured against an explicit Environment.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import numpy as np

from genecolony.eco.ecology import Adaptatype, Fitness
from genecolony.evolution.generation import Generation
from genecolony.evolution.random import Identifier
from genecolony.exceptions import UnimplementedFeatureError

if TYPE_CHECKING:
    from genecolony.eco.environment import Environment
    from genecolony.genetics.genome import Genome
    from genecolony.genetics.genotype import Genotype
    from genecolony.genetics.phenotype import Phenotype
    from genecolony.genetics.sequence import Nucleus

B = TypeVar("B")
X = TypeVar("X")


@dataclass(frozen=True)
class Organism(Generic[B, X]):
    """A single organism.

    Attributes:
        identifier: Identity assigned at construction.  Its generation
            tag records the birth generation and never changes.
        genome: Rules transcribing and expressing the nucleus.
        nucleus: The organism's genetic material.
        generation: Generation the organism currently belongs to.
        fecundity: Number of clones produced by asexual reproduction.
    """

    identifier: Identifier
    genome: Genome[B, Any, Any]
    nucleus: Nucleus[B]
    generation: Generation = Generation()
    fecundity: int = 1

    def __hash__(self) -> int:
        return hash(self.identifier)

    @property
    def name(self) -> str:
        return self.identifier.name

    @cached_property
    def genotype(self) -> Genotype[Any]:
        """Genes of this organism (raises TranscriptionError if ill-formed)."""
        return self.genome.transcribe(self.nucleus, self.identifier.retag("gt"))

    @cached_property
    def phenotype(self) -> Phenotype[Any]:
        return self.genome.express(self.genotype)

    def adaptatype(self, environment: Environment[Any, X]) -> Adaptatype[X]:
        """Adapt this organism's phenotype to ``environment``'s ecology."""
        return environment.ecology.apply(self.phenotype)

    def fitness(self, environment: Environment[Any, X]) -> Fitness | None:
        """Measure this organism against ``environment``.

        The result is the arithmetic mean of the fitness of every
        adaptation, each evaluated against the habitat value of its
        factor.

        Returns:
            The fitness, or None if there is nothing to measure: the
            adaptatype is empty, the habitat lacks a factor, or an
            adaptation has no fitness for the habitat value.
        """
        adaptatype = self.adaptatype(environment)
        if not adaptatype.adaptations:
            return None
        scores: list[float] = []
        for adaptation in adaptatype.adaptations:
            eco_factor = environment.eco_factor(adaptation.factor.name)
            if eco_factor is None:
                return None
            f = adaptation.fitness(eco_factor)
            if f is None:
                return None
            scores.append(f.x)
        return Fitness(float(np.mean(scores)))

    def offspring(self) -> tuple[Organism[B, X], ...]:
        """Reproduce asexually.

        Each child is a clone of this organism's nucleus, born into the
        next generation with an identity derived from its parent's.

        Raises:
            UnimplementedFeatureError: If the genome is sexual; mating
                between pairs is not supported.
            GenerationExhaustedError: If there is no next generation.
        """
        if self.genome.sexual:
            msg = f"{self.name}: sexual reproduction is not implemented"
            raise UnimplementedFeatureError(msg)
        generation = self.generation.next()
        return tuple(
            replace(
                self,
                identifier=Identifier(
                    self.identifier.prefix,
                    self.identifier.id.derive(i),
                    generation.value,
                ),
                generation=generation,
            )
            for i in range(self.fecundity)
        )

    def __str__(self) -> str:
        return f"{self.name} (generation {self.generation})"
