"""Colony — one generation of a population and the rules that evolve it.

A Colony is an immutable snapshot: every operation that changes the
population or the generation returns a new Colony.  One step of
evolution runs as follows:

1. Evaluate the fitness of every organism against the environment
2. Split the population into survivors and casualties
3. Notify the visualizer (kill casualties, update survivors)
4. Cull: advance the generation with an empty population
5. Fill the new generation with the survivors' offspring
   and destroy the avatars of survivors that did not carry over

Seeding a fresh population from random genetic material is a separate,
explicit step that does not advance the generation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from loguru import logger

from genecolony.audit import audit
from genecolony.evolution.generation import Generation
from genecolony.evolution.organism import Organism
from genecolony.evolution.random import RNG, Identifier, long_rng, next_id
from genecolony.exceptions import FitnessUndefinedError, UnimplementedFeatureError
from genecolony.visualization.visualizer import NullVisualizer, Visualizer

if TYPE_CHECKING:
    from genecolony.eco.ecology import Adaptatype, Fitness
    from genecolony.eco.environment import Environment
    from genecolony.genetics.genome import Genome
    from genecolony.genetics.phenotype import Phenotype
    from genecolony.genetics.sequence import Nucleus

B = TypeVar("B")
X = TypeVar("X")

FIT_THRESHOLD = 0.5


@dataclass(frozen=True)
class Colony(Generic[B, X]):
    """A generation's population together with its environment.

    Attributes:
        name: Colony name.
        genome: Genome shared by every member.
        environment: Habitat members are measured against.
        generation: This snapshot's generation.
        organisms: Members of this generation, in creation order.
        visualizer: Receives lifecycle notifications for members.
        ids: Source of identity tokens for newly created members.
        fitness_threshold: Minimum fitness needed to survive.
        fecundity: Offspring per organism under asexual reproduction.
    """

    name: str
    genome: Genome[B, Any, Any]
    environment: Environment[Any, X]
    generation: Generation = Generation()
    organisms: tuple[Organism[B, X], ...] = ()
    visualizer: Visualizer = field(
        default_factory=NullVisualizer,
        compare=False,
        repr=False,
    )
    ids: RNG[int] = field(
        default_factory=lambda: long_rng(0),
        compare=False,
        repr=False,
    )
    fitness_threshold: float = FIT_THRESHOLD
    fecundity: int = 1

    __hash__ = None

    def __len__(self) -> int:
        return len(self.organisms)

    @property
    def is_exhausted(self) -> bool:
        """True once the population has died out."""
        return not self.organisms

    def is_fit(self, f: Fitness) -> bool:
        """Return True if ``f`` is enough to survive to the next generation."""
        return f.x >= self.fitness_threshold

    def build(
        self,
        organisms: Iterable[Organism[B, X]],
        generation: Generation,
    ) -> Colony[B, X]:
        """Return a colony like this one with another population and generation."""
        return replace(self, organisms=tuple(organisms), generation=generation)

    def create_organism(
        self,
        nucleus: Nucleus[B],
        identifier: Identifier,
    ) -> Organism[B, X]:
        """Create a member of this generation from ``nucleus``."""
        organism = Organism(
            identifier=identifier,
            genome=self.genome,
            nucleus=nucleus,
            generation=self.generation,
            fecundity=self.fecundity,
        )
        self.visualizer.create_avatar(organism)
        return audit(organism)

    def update_organism(self, organism: Organism[B, X], *, kill: bool) -> None:
        """Tell the visualizer that ``organism`` died or carries on."""
        if kill:
            self.visualizer.destroy_avatar(organism)
        else:
            self.visualizer.update_avatar(organism)

    def fitness_of(self, organism: Organism[B, X]) -> Fitness:
        """Return the fitness of ``organism`` in this colony's environment.

        Raises:
            FitnessUndefinedError: If the fitness cannot be computed.
        """
        f = organism.fitness(self.environment)
        if f is None:
            msg = f"{self.name}: fitness of {organism.name} is undefined"
            raise FitnessUndefinedError(msg)
        return f

    def evaluate_fitness(self, organism: Organism[B, X]) -> bool:
        """Return True if ``organism`` is fit enough to survive.

        Raises:
            FitnessUndefinedError: If the fitness cannot be computed.
        """
        f = self.fitness_of(organism)
        fit = self.is_fit(f)
        logger.debug(
            "[{}][gen {}] {} fitness={} fit={}",
            self.name,
            self.generation,
            organism.name,
            f,
            fit,
        )
        return fit

    @property
    def offspring(self) -> Iterator[Organism[B, X]]:
        """Lazily yield the candidates for the next generation.

        Sexual genomes yield every member with a fitness of at least 0
        as a mating candidate.  Asexual genomes yield the offspring of
        each member in turn.
        """
        if self.genome.sexual:
            return (o for o in self.organisms if self.fitness_of(o).x >= 0)
        return (child for o in self.organisms for child in o.offspring())

    def cull_members(self) -> Colony[B, X]:
        """Advance to the next generation with an empty population.

        Raises:
            GenerationExhaustedError: If the generation has no successor.
        """
        return self.build((), self.generation.next())

    def seed_members(
        self,
        size: int,
        genome: Genome[B, Any, Any],
        ploidy: int,
        rng: RNG[B],
    ) -> Colony[B, X]:
        """Populate this generation with ``size`` freshly recombined members.

        Nuclei are drawn one after another from ``rng``; the result keeps
        this colony's generation.  Any current members are replaced and
        their avatars destroyed.

        Raises:
            ValueError: If ``ploidy`` does not match the genome.
        """
        if ploidy != genome.ploidy:
            msg = (
                f"ploidy {ploidy} does not match genome {genome.name} "
                f"({genome.ploidy})"
            )
            raise ValueError(msg)

        nuclei = []
        for _ in range(size):
            nucleus, rng = genome.recombine(rng)
            nuclei.append(nucleus)

        for organism in self.organisms:
            self.update_organism(organism, kill=True)

        ids = self.ids
        organisms = []
        for nucleus in nuclei:
            uid, ids = next_id(ids)
            identifier = Identifier("org", uid, self.generation.value)
            organisms.append(self.create_organism(nucleus, identifier))

        logger.info(
            "[{}][gen {}] Seeded {} organisms",
            self.name,
            self.generation,
            size,
        )
        return replace(self.build(organisms, self.generation), ids=ids)

    def seed(self, size: int, rng: RNG[B]) -> Colony[B, X]:
        """Seed ``size`` members using this colony's own genome."""
        return self.seed_members(size, self.genome, self.genome.ploidy, rng)

    def next_generation(self) -> Colony[B, X]:
        """Run one full step of evolution.

        Returns:
            The colony of the next generation, populated by the
            offspring of this generation's survivors.

        Raises:
            FitnessUndefinedError: If any member's fitness is undefined.
            GenerationExhaustedError: If the generation has no successor.
        """
        culled = self.cull_members()

        survivors: list[Organism[B, X]] = []
        casualties: list[Organism[B, X]] = []
        for organism in self.organisms:
            if self.evaluate_fitness(organism):
                survivors.append(organism)
            else:
                casualties.append(organism)

        for organism in casualties:
            self.update_organism(organism, kill=True)
        for organism in survivors:
            self.update_organism(organism, kill=False)

        parents = self.build(survivors, self.generation)
        existing = {o.identifier for o in survivors}
        children = []
        for child in parents.offspring:
            if child.identifier in existing:
                child = replace(child, generation=culled.generation)
            else:
                self.visualizer.create_avatar(child)
                audit(child)
            children.append(child)

        carried = {c.identifier for c in children}
        for organism in survivors:
            if organism.identifier not in carried:
                self.update_organism(organism, kill=True)

        logger.info(
            "[{}][gen {}] {} survived, {} culled, {} in generation {}",
            self.name,
            self.generation,
            len(survivors),
            len(casualties),
            len(children),
            culled.generation,
        )
        return culled.build(children, culled.generation)

    def apply(self, phenotype: Phenotype[Any]) -> Adaptatype[X]:
        """Adapting a phenotype to a colony is not supported."""
        msg = f"{self.name}: a colony cannot adapt a phenotype"
        raise UnimplementedFeatureError(msg)

    def __str__(self) -> str:
        return (
            f"{self.name} generation {self.generation} "
            f"with {len(self.organisms)} organisms"
        )
