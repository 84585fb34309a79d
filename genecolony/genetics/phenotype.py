"""Phenotype — observable traits expressed from a Genotype."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from genecolony.evolution.random import Identifier
from genecolony.genetics.genotype import Characteristic

T = TypeVar("T")


@dataclass(frozen=True)
class Trait(Generic[T]):
    """The value of one characteristic for one organism."""

    characteristic: Characteristic
    value: T

    def __str__(self) -> str:
        return f"{self.characteristic.name}={self.value}"


@dataclass(frozen=True)
class Phenotype(Generic[T]):
    """Traits of one organism.

    May hold fewer traits than its Genotype has genes: genes that do not
    express are simply absent.
    """

    identifier: Identifier
    traits: tuple[Trait[T], ...]

    def __len__(self) -> int:
        return len(self.traits)

    def trait(self, name: str) -> Trait[T] | None:
        """Return the trait for characteristic ``name``, if expressed."""
        for t in self.traits:
            if t.characteristic.name == name:
                return t
        return None

    def __str__(self) -> str:
        return f"{self.identifier}: " + " ".join(str(t) for t in self.traits)
