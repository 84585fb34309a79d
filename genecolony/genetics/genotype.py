"""Genotype — the genes transcribed from a Nucleus.

The karyotype (chromosomes and their loci) lives in the Genome; the
types here are the per-organism results of transcription.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from genecolony.evolution.random import Identifier
from genecolony.genetics.sequence import Location

G = TypeVar("G")


@dataclass(frozen=True)
class Characteristic:
    """A named dimension of trait space.

    Attributes:
        name: Name shared with the matching ecological Factor.
        dominance: Allele values in order of dominance; in a
            heterozygous gene the first one present is expressed.
    """

    name: str
    dominance: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Locus:
    """A Location on a chromosome bound to the Characteristic it governs."""

    location: Location
    characteristic: Characteristic

    @property
    def name(self) -> str:
        return self.location.name


@dataclass(frozen=True)
class Chromosome:
    """One chromosome of a karyotype.

    Attributes:
        name: Chromosome name.
        loci: Loci found on this chromosome, in transcription order.
        is_sex: True for a sex chromosome.
    """

    name: str
    loci: tuple[Locus, ...]
    is_sex: bool = False

    @property
    def length(self) -> int:
        """Minimum sequence length covering every locus."""
        return max((locus.location.end for locus in self.loci), default=0)


@dataclass(frozen=True)
class Allele(Generic[G]):
    """One variant value of a gene."""

    value: G

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Gene(Generic[G]):
    """A transcribed locus with one allele per homologous copy."""

    locus: Locus
    alleles: tuple[Allele[G], ...]

    @property
    def characteristic(self) -> Characteristic:
        return self.locus.characteristic

    @property
    def is_homozygous(self) -> bool:
        return len(set(self.alleles)) == 1

    def __str__(self) -> str:
        return f"{self.locus.name}:{'/'.join(str(a) for a in self.alleles)}"


@dataclass(frozen=True)
class Genotype(Generic[G]):
    """All genes of one organism, in karyotype order."""

    identifier: Identifier
    genes: tuple[Gene[G], ...]

    def __len__(self) -> int:
        return len(self.genes)

    def __str__(self) -> str:
        return f"{self.identifier}: " + " ".join(str(g) for g in self.genes)
