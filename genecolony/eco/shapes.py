"""Shapes — the default fitness function and adapter.

A FunctionShape is the "function type" handed to a fitness function.
It decides how a trait value compares with the value of the matching
eco factor: a hard step, a smooth logistic step, or a bell centred on
the eco value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from genecolony.eco.ecology import Adaptation, Factor, Fitness, FitnessFunction
from genecolony.eco.environment import EcoFactor
from genecolony.genetics.phenotype import Trait


class FunctionShape(Enum):
    """Shape of the fitness response to (trait - eco value)."""

    DIRAC = "dirac"
    DIRAC_INVERTED = "dirac_inverted"
    LOGISTIC = "logistic"
    LOGISTIC_INVERTED = "logistic_inverted"
    GAUSSIAN = "gaussian"

    def evaluate(self, delta: float) -> float:
        """Return the response in [0, 1] for ``delta = trait - eco``."""
        if self is FunctionShape.DIRAC:
            return 1.0 if delta >= 0 else 0.0
        if self is FunctionShape.DIRAC_INVERTED:
            return 1.0 if delta < 0 else 0.0
        if self is FunctionShape.LOGISTIC:
            return float(1.0 / (1.0 + np.exp(-delta)))
        if self is FunctionShape.LOGISTIC_INVERTED:
            return float(1.0 / (1.0 + np.exp(delta)))
        return float(np.exp(-(delta**2)))


def shaped_fitness(
    trait_value: float,
    shape: FunctionShape,
    eco_value: float,
) -> Fitness:
    """Fitness of ``trait_value`` against ``eco_value`` under ``shape``."""
    return Fitness(shape.evaluate(trait_value - eco_value))


@dataclass(frozen=True)
class ShapeAdapter:
    """Adapts a trait using the shape configured for its factor.

    Factors with no configured shape cannot be adapted.

    Attributes:
        shapes: Factor name to the shape its fitness follows.
    """

    shapes: Mapping[str, FunctionShape] = field(default_factory=dict)

    def __call__(
        self,
        factor: Factor,
        t: Trait[float],
        fitness_function: FitnessFunction,
    ) -> Adaptation[float] | None:
        shape = self.shapes.get(factor.name)
        if shape is None:
            return None

        def eco_fitness(eco_factor: EcoFactor[float]) -> Fitness:
            return fitness_function(t.value, shape, eco_factor.value)

        return Adaptation(factor, eco_fitness)
