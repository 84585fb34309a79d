"""Genome — the rulebook turning genetic material into traits.

A Genome binds a karyotype to two pure functions:

- a *transcriber* ``(Sequence, Location) -> Allele | None`` used to read
  each locus of each homologous sequence of a Nucleus into a Gene;
- an *expresser* ``(Characteristic, Gene) -> Trait | None`` used to turn
  each Gene into an observable Trait.

The two steps fail differently.  A locus that cannot be transcribed
makes the whole Genotype ill-formed, so transcription raises
``TranscriptionError``.  A gene that does not express is just an absent
trait, so expression skips it.

Genomes hold no per-organism state and are shared by every organism of
a species for the length of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from genecolony.evolution.random import RNG, Id, Identifier
from genecolony.exceptions import TranscriptionError
from genecolony.genetics.genotype import (
    Allele,
    Characteristic,
    Chromosome,
    Gene,
    Genotype,
    Locus,
)
from genecolony.genetics.phenotype import Phenotype, Trait
from genecolony.genetics.sequence import Location, Nucleus, Sequence

B = TypeVar("B")
G = TypeVar("G")
T = TypeVar("T")

TranscriberFunction = Callable[[Sequence[B], Location], Allele[G] | None]
ExpresserFunction = Callable[[Characteristic, Gene[G]], Trait[T] | None]

_ANONYMOUS = Identifier("gt", Id(0))


@dataclass(frozen=True)
class Genome(Generic[B, G, T]):
    """Transcription and expression rules for one species.

    Attributes:
        name: Species-level name for this genome.
        karyotype: Chromosomes, in the order their sequence sets appear
            in a Nucleus.
        transcriber: Reads one allele from one sequence at a location.
        expresser: Expresses one gene as a trait, or yields None.
        ploidy: Number of homologous sequences per chromosome.
        sexual: True if reproduction requires mating.
    """

    name: str
    karyotype: tuple[Chromosome, ...]
    transcriber: TranscriberFunction
    expresser: ExpresserFunction
    ploidy: int = 2
    sexual: bool = False

    @property
    def loci(self) -> tuple[Locus, ...]:
        """Every locus of the karyotype, in transcription order."""
        return tuple(locus for c in self.karyotype for locus in c.loci)

    def transcribe(
        self,
        nucleus: Nucleus[B],
        identifier: Identifier = _ANONYMOUS,
    ) -> Genotype[G]:
        """Transcribe ``nucleus`` into a Genotype.

        Args:
            nucleus: One sequence set per chromosome of the karyotype.
            identifier: Identity given to the resulting Genotype.

        Returns:
            A Genotype with one Gene per locus.

        Raises:
            TranscriptionError: If the nucleus does not match the
                karyotype and ploidy, or any locus fails to transcribe.
        """
        if len(nucleus) != len(self.karyotype):
            msg = (
                f"{self.name}: nucleus has {len(nucleus)} sequence sets, "
                f"karyotype has {len(self.karyotype)} chromosomes"
            )
            raise TranscriptionError(msg)

        genes: list[Gene[G]] = []
        for chromosome, sequences in zip(self.karyotype, nucleus, strict=True):
            if len(sequences) != self.ploidy:
                msg = (
                    f"{self.name}: chromosome {chromosome.name} has "
                    f"{len(sequences)} sequences, ploidy is {self.ploidy}"
                )
                raise TranscriptionError(msg)
            for locus in chromosome.loci:
                alleles = tuple(
                    self._transcribe_locus(s, locus, chromosome) for s in sequences
                )
                genes.append(Gene(locus=locus, alleles=alleles))
        return Genotype(identifier=identifier, genes=tuple(genes))

    def _transcribe_locus(
        self,
        sequence: Sequence[B],
        locus: Locus,
        chromosome: Chromosome,
    ) -> Allele[G]:
        allele = self.transcriber(sequence, locus.location)
        if allele is None:
            msg = (
                f"{self.name}: cannot transcribe locus {locus.name} "
                f"on chromosome {chromosome.name}"
            )
            raise TranscriptionError(msg)
        return allele

    def express(self, genotype: Genotype[G]) -> Phenotype[T]:
        """Express ``genotype`` as a Phenotype.

        Genes for which the expresser yields None contribute no trait.
        """
        traits = []
        for gene in genotype.genes:
            t = self.expresser(gene.characteristic, gene)
            if t is not None:
                traits.append(t)
        return Phenotype(
            identifier=genotype.identifier.retag("pt"),
            traits=tuple(traits),
        )

    def recombine(self, rng: RNG[B]) -> tuple[Nucleus[B], RNG[B]]:
        """Draw a fresh Nucleus from ``rng``.

        Bases are drawn chromosome by chromosome, homologue by homologue,
        so the same source always yields the same Nucleus.

        Returns:
            The new Nucleus and the source advanced past every draw.
        """
        sets = []
        for chromosome in self.karyotype:
            sequences = []
            for _ in range(self.ploidy):
                bases, rng = rng.take(chromosome.length)
                sequences.append(Sequence(tuple(bases)))
            sets.append(tuple(sequences))
        return tuple(sets), rng

    def __str__(self) -> str:
        kind = "sexual" if self.sexual else "asexual"
        return (
            f"Genome({self.name}, {len(self.karyotype)} chromosomes, "
            f"ploidy={self.ploidy}, {kind})"
        )
