"""Sequence — raw genetic material.

A Sequence is an ordered run of bases.  A SequenceSet holds the
homologous copies of one chromosome (its length is the ploidy) and a
Nucleus holds one SequenceSet per chromosome of the karyotype.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

B = TypeVar("B")


@dataclass(frozen=True)
class Location:
    """Address of a run of bases within a Sequence.

    Attributes:
        name: Name of the locus found at this location.
        offset: Index of the first base.
        length: Number of bases.
    """

    name: str
    offset: int
    length: int = 1

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass(frozen=True)
class Sequence(Generic[B]):
    """An ordered, immutable run of bases."""

    bases: tuple[B, ...]

    def __len__(self) -> int:
        return len(self.bases)

    def at(self, location: Location) -> tuple[B, ...] | None:
        """Return the bases at ``location``, or None if it overruns the end."""
        if location.offset < 0 or location.end > len(self.bases):
            return None
        return self.bases[location.offset : location.end]

    def __str__(self) -> str:
        return "".join(str(b) for b in self.bases)


SequenceSet = tuple[Sequence[B], ...]
Nucleus = tuple[SequenceSet[B], ...]
