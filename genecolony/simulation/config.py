"""Config — load simulation parameters from YAML files.

The run parameters and the whole species description (chromosomes,
loci, dominance, trait tables, ecological factors and their habitat
values) live in YAML and are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


def _default_chromosomes() -> dict[str, list[dict[str, Any]]]:
    return {
        "chr1": [
            {
                "name": "height",
                "offset": 0,
                "length": 1,
                "dominance": ["T", "G", "C", "A"],
                "traits": {"A": 1.0, "C": 1.5, "G": 2.0, "T": 2.5},
            },
            {
                "name": "color",
                "offset": 1,
                "length": 1,
                "dominance": ["A", "C", "G", "T"],
                "traits": {"A": 0.0, "C": 1.0, "G": 2.0, "T": 3.0},
            },
        ],
    }


def _default_factors() -> dict[str, dict[str, Any]]:
    return {"height": {"shape": "logistic", "value": 1.5}}


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        colony_name: Name given to the colony.
        colony_size: Number of organisms seeded into the first generation.
        generations: Number of generations to evolve.
        max_generation: Last generation the counter may reach, or None.
        fitness_threshold: Minimum fitness needed to survive.
        fecundity: Clones produced per survivor (asexual genomes).
        ploidy: Homologous sequences per chromosome.
        sexual: Whether the genome reproduces sexually.
        log_level: loguru level for console output.
        chromosomes: Chromosome name to its loci.  Each locus has a
            ``name``, ``offset``, optional ``length`` (default 1), a
            ``dominance`` order and a ``traits`` table of allele to
            trait value.
        factors: Factor name to ``shape`` (a FunctionShape value) and
            habitat ``value``.
    """

    seed: int = 42
    colony_name: str = "colony"
    colony_size: int = 50
    generations: int = 20
    max_generation: int | None = None
    fitness_threshold: float = 0.5
    fecundity: int = 1
    ploidy: int = 2
    sexual: bool = False
    log_level: str = "INFO"

    chromosomes: dict[str, list[dict[str, Any]]] = field(
        default_factory=_default_chromosomes,
    )
    factors: dict[str, dict[str, Any]] = field(default_factory=_default_factors)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            colony_name=data.get("colony_name", cls.colony_name),
            colony_size=data.get("colony_size", cls.colony_size),
            generations=data.get("generations", cls.generations),
            max_generation=data.get("max_generation", cls.max_generation),
            fitness_threshold=data.get(
                "fitness_threshold",
                cls.fitness_threshold,
            ),
            fecundity=data.get("fecundity", cls.fecundity),
            ploidy=data.get("ploidy", cls.ploidy),
            sexual=data.get("sexual", cls.sexual),
            log_level=data.get("log_level", cls.log_level),
            chromosomes=data.get("chromosomes", _default_chromosomes()),
            factors=data.get("factors", _default_factors()),
        )
