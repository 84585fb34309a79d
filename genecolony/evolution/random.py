"""Random — explicit-state random sources and identity tokens.

An ``RNG`` never mutates: ``next()`` returns the drawn value together
with a *new* ``RNG`` carrying the advanced bit-generator state.  Callers
thread that state themselves, which keeps seeding reproducible for a
given seed and draw order.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, TypeVar

import numpy as np
from numpy.random import PCG64, Generator

T = TypeVar("T")

_ID_BOUND = 2**63


@dataclass(frozen=True)
class RNG(Generic[T]):
    """An immutable random source of values of type ``T``.

    Attributes:
        state: Snapshot of a PCG64 bit-generator state.
        draw: Function producing one value from a live Generator.
    """

    state: dict[str, Any] = field(repr=False)
    draw: Callable[[Generator], T] = field(repr=False, compare=False)

    @classmethod
    def seeded(cls, seed: int, draw: Callable[[Generator], T]) -> RNG[T]:
        """Create a source whose first state is derived from ``seed``."""
        return cls(state=PCG64(seed).state, draw=draw)

    def next(self) -> tuple[T, RNG[T]]:
        """Draw one value.

        Returns:
            The value and the source to use for the following draw.
        """
        generator = Generator(PCG64(0))
        generator.bit_generator.state = self.state
        value = self.draw(generator)
        return value, replace(self, state=generator.bit_generator.state)

    def take(self, n: int) -> tuple[list[T], RNG[T]]:
        """Draw ``n`` values sequentially."""
        values: list[T] = []
        rng = self
        for _ in range(n):
            value, rng = rng.next()
            values.append(value)
        return values, rng


def choice_of(values: tuple[T, ...]) -> Callable[[Generator], T]:
    """Return a draw function choosing uniformly from ``values``."""

    def draw(generator: Generator) -> T:
        return values[int(generator.integers(len(values)))]

    return draw


def draw_long(generator: Generator) -> int:
    """Draw a non-negative 63-bit integer."""
    return int(generator.integers(_ID_BOUND))


def long_rng(seed: int) -> RNG[int]:
    """A source of 63-bit integers, used for identity tokens."""
    return RNG.seeded(seed, draw_long)


@dataclass(frozen=True)
class Id:
    """An opaque identity token, rendered as 16 hex digits."""

    value: int

    def __str__(self) -> str:
        return f"{self.value:016x}"

    def derive(self, index: int) -> Id:
        """Deterministically derive the ``index``-th child token."""
        generator = np.random.default_rng([self.value, index])
        return Id(draw_long(generator))


@dataclass(frozen=True)
class Identifier:
    """Name of an entity: a type prefix, an Id and optionally a generation."""

    prefix: str
    id: Id
    generation: int | None = None

    @property
    def name(self) -> str:
        if self.generation is None:
            return f"{self.prefix}-{self.id}"
        return f"{self.prefix}-{self.generation}-{self.id}"

    def __str__(self) -> str:
        return self.name

    def retag(self, prefix: str) -> Identifier:
        """Return an identifier sharing this Id under another prefix."""
        return replace(self, prefix=prefix)


def next_id(rng: RNG[int]) -> tuple[Id, RNG[int]]:
    """Draw a fresh Id, returning it with the advanced source."""
    value, rng = rng.next()
    return Id(value), rng
