"""Evolution — drives a colony through successive generations.

Listeners are told about every completed generation and, once the run
is over, receive a final ``None`` to mark the end of the evolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from loguru import logger

if TYPE_CHECKING:
    from genecolony.evolution.colony import Colony


class GenerationListener(Protocol):
    """Receives a colony after each generation, then ``None`` at the end.

    Implementations must accept ``None``.
    """

    def on_generation(self, evolvable: Colony | None) -> None: ...


@dataclass
class GenerationRecord:
    """Population size reached by one generation."""

    generation: int
    population: int


@dataclass
class GenerationLog:
    """Listener that logs and records each generation.

    Attributes:
        records: One record per completed generation, in order.
        finished: Set once the end-of-evolution marker arrives.
    """

    records: list[GenerationRecord] = field(default_factory=list)
    finished: bool = False

    def on_generation(self, evolvable: Colony | None) -> None:
        if evolvable is None:
            self.finished = True
            logger.info("Evolution finished after {} generations", len(self.records))
            return
        record = GenerationRecord(evolvable.generation.value, len(evolvable.organisms))
        self.records.append(record)
        logger.info(
            "[{}] generation {}: {} organisms",
            evolvable.name,
            record.generation,
            record.population,
        )


@dataclass
class Evolution:
    """Repeatedly steps a colony and notifies listeners.

    Attributes:
        listeners: Subscribers notified after every generation.
    """

    listeners: list[GenerationListener] = field(default_factory=list)

    def add_listener(self, listener: GenerationListener) -> None:
        self.listeners.append(listener)

    def evolve(self, colony: Colony, generations: int) -> Colony:
        """Evolve ``colony`` for at most ``generations`` steps.

        Stops early once the population is exhausted or the generation
        counter has no successor.  Listeners receive the ``None`` marker
        however the run ends, including when a step raises.

        Args:
            colony: The populated starting colony.
            generations: Maximum number of steps.

        Returns:
            The last colony reached.
        """
        try:
            for _ in range(generations):
                if colony.is_exhausted:
                    logger.info(
                        "[{}] population exhausted at generation {}",
                        colony.name,
                        colony.generation,
                    )
                    break
                if not colony.generation.has_next:
                    logger.info(
                        "[{}] generation limit {} reached",
                        colony.name,
                        colony.generation,
                    )
                    break
                colony = colony.next_generation()
                self._notify(colony)
        finally:
            self._notify(None)
        return colony

    def _notify(self, colony: Colony | None) -> None:
        for listener in self.listeners:
            listener.on_generation(colony)
