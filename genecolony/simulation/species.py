"""Species — build the genome, ecology and environment a config describes."""

from __future__ import annotations

from genecolony.audit import audit
from genecolony.eco.ecology import Ecology
from genecolony.eco.environment import Environment
from genecolony.eco.shapes import FunctionShape, ShapeAdapter, shaped_fitness
from genecolony.genetics.dna import (
    Base,
    MendelianExpresser,
    TableTraitMapper,
    dna_transcriber,
)
from genecolony.genetics.genome import Genome
from genecolony.genetics.genotype import Characteristic, Chromosome, Locus
from genecolony.genetics.sequence import Location
from genecolony.simulation.config import SimulationConfig


def build_genome(config: SimulationConfig) -> Genome[Base, str, float]:
    """Build a natural DNA genome from the configured chromosomes."""
    karyotype = []
    tables: dict[str, dict[str, float]] = {}
    for chromosome_name, loci in config.chromosomes.items():
        built = []
        for spec in loci:
            name = spec["name"]
            location = Location(name, int(spec["offset"]), int(spec.get("length", 1)))
            characteristic = Characteristic(name, tuple(spec.get("dominance", ())))
            built.append(Locus(location, characteristic))
            tables[name] = {str(k): float(v) for k, v in spec.get("traits", {}).items()}
        karyotype.append(Chromosome(chromosome_name, tuple(built)))

    genome = Genome(
        name=config.colony_name,
        karyotype=tuple(karyotype),
        transcriber=dna_transcriber,
        expresser=MendelianExpresser(TableTraitMapper(tables)),
        ploidy=config.ploidy,
        sexual=config.sexual,
    )
    return audit(genome)


def build_ecology(config: SimulationConfig) -> Ecology[float, float]:
    """Build an ecology with one shaped factor per configured factor."""
    shapes = {n: FunctionShape(f["shape"]) for n, f in config.factors.items()}
    ecology = Ecology.of(
        f"{config.colony_name}-ecology",
        list(config.factors),
        shaped_fitness,
        ShapeAdapter(shapes),
    )
    return audit(ecology)


def build_environment(
    config: SimulationConfig,
    ecology: Ecology[float, float],
) -> Environment[float, float]:
    """Build the habitat holding each factor's configured value."""
    values = {n: float(f["value"]) for n, f in config.factors.items()}
    return audit(Environment.of(f"{config.colony_name}-habitat", ecology, values))
