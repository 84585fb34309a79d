"""Shared fixtures for the genecolony test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from genecolony.eco.ecology import Ecology
from genecolony.eco.environment import Environment
from genecolony.eco.shapes import FunctionShape, ShapeAdapter, shaped_fitness
from genecolony.evolution.colony import Colony
from genecolony.evolution.organism import Organism
from genecolony.evolution.random import RNG, Id, Identifier
from genecolony.genetics.dna import (
    Base,
    MendelianExpresser,
    TableTraitMapper,
    base_rng,
    dna_transcriber,
    parse_sequence,
)
from genecolony.genetics.genome import Genome
from genecolony.genetics.genotype import Characteristic, Chromosome, Locus
from genecolony.genetics.sequence import Location, Nucleus
from genecolony.simulation.config import SimulationConfig

HEIGHT = Characteristic("height", ("T", "G", "C", "A"))
COLOR = Characteristic("color", ("A", "C", "G", "T"))
TABLES = {
    "height": {"A": 1.0, "C": 1.5, "G": 2.0, "T": 2.5},
    "color": {"A": 0.0, "C": 1.0, "G": 2.0, "T": 3.0},
}
KARYOTYPE = (
    Chromosome(
        "chr1",
        (
            Locus(Location("height", 0), HEIGHT),
            Locus(Location("color", 1), COLOR),
        ),
    ),
)


@dataclass
class RecordingVisualizer:
    """Visualizer that remembers the names of notified organisms."""

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    destroyed: list[str] = field(default_factory=list)

    def create_avatar(self, organism: Organism) -> None:
        self.created.append(organism.name)

    def update_avatar(self, organism: Organism) -> None:
        self.updated.append(organism.name)

    def destroy_avatar(self, organism: Organism) -> None:
        self.destroyed.append(organism.name)


def nucleus_of(*homologues: str) -> Nucleus[Base]:
    """A single-chromosome nucleus, e.g. ``nucleus_of("TA", "GC")``."""
    return (tuple(parse_sequence(h) for h in homologues),)


@pytest.fixture
def rng() -> RNG[Base]:
    """A deterministic base source for reproducible tests."""
    return base_rng(seed=12345)


@pytest.fixture
def genome() -> Genome[Base, str, float]:
    """A diploid, asexual genome with height and color loci."""
    return Genome(
        name="test",
        karyotype=KARYOTYPE,
        transcriber=dna_transcriber,
        expresser=MendelianExpresser(TableTraitMapper(TABLES)),
    )


@pytest.fixture
def ecology() -> Ecology[float, float]:
    """An ecology with a single logistic ``height`` factor."""
    return Ecology.of(
        "test-ecology",
        ["height"],
        shaped_fitness,
        ShapeAdapter({"height": FunctionShape.LOGISTIC}),
    )


@pytest.fixture
def environment(ecology: Ecology[float, float]) -> Environment[float, float]:
    """A habitat where height is measured against 1.5."""
    return Environment.of("test-habitat", ecology, {"height": 1.5})


@pytest.fixture
def visualizer() -> RecordingVisualizer:
    return RecordingVisualizer()


@pytest.fixture
def make_organism(
    genome: Genome[Base, str, float],
) -> Callable[..., Organism[Base, float]]:
    """Factory building organisms from homologue strings."""

    def make(
        *homologues: str,
        uid: int = 1,
        fecundity: int = 1,
    ) -> Organism[Base, float]:
        return Organism(
            identifier=Identifier("org", Id(uid), 0),
            genome=genome,
            nucleus=nucleus_of(*homologues),
            fecundity=fecundity,
        )

    return make


@pytest.fixture
def colony(
    genome: Genome[Base, str, float],
    environment: Environment[float, float],
    visualizer: RecordingVisualizer,
) -> Colony[Base, float]:
    """An empty colony at generation 0 using the test genome and habitat."""
    return Colony(
        name="test-colony",
        genome=genome,
        environment=environment,
        visualizer=visualizer,
    )


@pytest.fixture
def make_nucleus() -> Callable[..., Nucleus[Base]]:
    """Factory building single-chromosome nuclei from homologue strings."""
    return nucleus_of


@pytest.fixture
def default_config() -> SimulationConfig:
    """A small default config (no YAML file needed)."""
    return SimulationConfig(colony_size=20)
