"""SimulationEngine — the main generation loop.

Builds the species a config describes, seeds the first generation and
evolves it:

1. Build genome, ecology and environment from the config
2. Seed the colony from a base source seeded with ``config.seed``
3. Evolve generation by generation, notifying listeners
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from genecolony.evolution.colony import Colony
from genecolony.evolution.evolution import Evolution, GenerationListener
from genecolony.evolution.generation import Generation
from genecolony.evolution.random import long_rng
from genecolony.genetics.dna import base_rng
from genecolony.simulation.species import (
    build_ecology,
    build_environment,
    build_genome,
)
from genecolony.visualization.visualizer import NullVisualizer, Visualizer

if TYPE_CHECKING:
    from genecolony.eco.environment import Environment
    from genecolony.genetics.dna import Base
    from genecolony.genetics.genome import Genome
    from genecolony.simulation.config import SimulationConfig


@dataclass
class SimulationEngine:
    """Drives the simulation forward generation by generation.

    Attributes:
        config: Loaded simulation configuration.
        visualizer: Receives organism lifecycle notifications.
        genome: The species' genome.
        environment: Habitat the colony is measured against.
        colony: Current generation of the colony.
        evolution: Generation loop and its listeners.
    """

    config: SimulationConfig
    visualizer: Visualizer = field(default_factory=NullVisualizer)
    genome: Genome[Base, str, float] = field(init=False)
    environment: Environment[float, float] = field(init=False)
    colony: Colony[Base, float] = field(init=False)
    evolution: Evolution = field(init=False, default_factory=Evolution)

    def __post_init__(self) -> None:
        """Build the species and seed the first generation from config."""
        self.genome = build_genome(self.config)
        ecology = build_ecology(self.config)
        self.environment = build_environment(self.config, ecology)
        colony = Colony(
            name=self.config.colony_name,
            genome=self.genome,
            environment=self.environment,
            generation=Generation(0, self.config.max_generation),
            visualizer=self.visualizer,
            ids=long_rng(self.config.seed + 1),
            fitness_threshold=self.config.fitness_threshold,
            fecundity=self.config.fecundity,
        )
        self.colony = colony.seed(self.config.colony_size, base_rng(self.config.seed))

    @property
    def generation(self) -> int:
        return self.colony.generation.value

    def add_listener(self, listener: GenerationListener) -> None:
        """Register a listener for completed generations.

        Args:
            listener: The listener to add.
        """
        self.evolution.add_listener(listener)

    def run(self, generations: int | None = None) -> Colony[Base, float]:
        """Evolve the colony.

        Args:
            generations: Number of generations to advance; defaults to
                ``config.generations``.

        Returns:
            The colony reached when the run ends.
        """
        if generations is None:
            generations = self.config.generations
        self.colony = self.evolution.evolve(self.colony, generations)
        return self.colony
