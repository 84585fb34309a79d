"""Generation — incrementable version counters for colonies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from genecolony.exceptions import GenerationExhaustedError

V = TypeVar("V", bound="Incrementable")


class Incrementable(Protocol):
    """A value with a deterministic successor."""

    def next(self: V) -> V: ...


@dataclass(frozen=True, order=True)
class Generation:
    """Integer generation counter with an optional inclusive upper limit.

    Attributes:
        value: Current generation number.
        limit: Last generation that may be reached, or None for unbounded.
    """

    value: int = 0
    limit: int | None = None

    def next(self) -> Generation:
        """Return the following generation.

        Raises:
            GenerationExhaustedError: If ``limit`` has been reached.
        """
        if self.limit is not None and self.value >= self.limit:
            msg = f"generation {self.value} is the last (limit {self.limit})"
            raise GenerationExhaustedError(msg)
        return Generation(self.value + 1, self.limit)

    @property
    def has_next(self) -> bool:
        return self.limit is None or self.value < self.limit

    def __str__(self) -> str:
        return str(self.value)
