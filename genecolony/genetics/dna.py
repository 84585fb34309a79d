"""DNA — the default "natural" instantiation of the genetics model.

Four-symbol bases, string alleles read straight off the sequence, and
Mendelian dominance deciding which allele of a diploid gene is
expressed.  Trait values are floats looked up per characteristic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from genecolony.evolution.random import RNG, choice_of
from genecolony.genetics.genotype import Allele, Characteristic, Gene
from genecolony.genetics.phenotype import Trait
from genecolony.genetics.sequence import Location, Sequence

TraitMapper = Callable[[Characteristic, Allele[str]], Trait[float] | None]


class Base(Enum):
    """One of the four nucleotide bases."""

    A = "A"
    C = "C"
    G = "G"
    T = "T"

    def __str__(self) -> str:
        return self.value


def base_rng(seed: int) -> RNG[Base]:
    """A seeded source of uniformly distributed bases."""
    return RNG.seeded(seed, choice_of(tuple(Base)))


def parse_sequence(text: str) -> Sequence[Base]:
    """Build a Sequence from a string such as ``"GATTACA"``."""
    return Sequence(tuple(Base(ch) for ch in text.upper()))


def dna_transcriber(sequence: Sequence[Base], location: Location) -> Allele[str] | None:
    """Read the bases at ``location`` as a string allele."""
    bases = sequence.at(location)
    if bases is None:
        return None
    return Allele("".join(b.value for b in bases))


@dataclass(frozen=True)
class TableTraitMapper:
    """Maps an allele to a trait value through per-characteristic tables.

    Attributes:
        tables: Characteristic name to ``{allele value: trait value}``.
    """

    tables: Mapping[str, Mapping[str, float]] = field(default_factory=dict)

    def __call__(
        self,
        characteristic: Characteristic,
        allele: Allele[str],
    ) -> Trait[float] | None:
        table = self.tables.get(characteristic.name)
        if table is None or allele.value not in table:
            return None
        return Trait(characteristic, float(table[allele.value]))


@dataclass(frozen=True)
class MendelianExpresser:
    """Expresses the dominant allele of a gene.

    A homozygous gene expresses its only allele.  A heterozygous gene
    expresses whichever of its alleles ranks first in the
    characteristic's dominance order; a gene carrying no ranked allele
    is not expressed.
    """

    trait_mapper: TraitMapper

    def __call__(
        self,
        characteristic: Characteristic,
        gene: Gene[str],
    ) -> Trait[float] | None:
        allele = self.expressed_allele(characteristic, gene)
        if allele is None:
            return None
        return self.trait_mapper(characteristic, allele)

    @staticmethod
    def expressed_allele(
        characteristic: Characteristic,
        gene: Gene[str],
    ) -> Allele[str] | None:
        if not gene.alleles:
            return None
        if gene.is_homozygous:
            return gene.alleles[0]
        present = {a.value: a for a in gene.alleles}
        for value in characteristic.dominance:
            if value in present:
                return present[value]
        return None
