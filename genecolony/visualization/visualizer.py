"""Visualizer — receiver of organism lifecycle notifications.

The engine tells its visualizer about every organism it creates, keeps,
or kills.  Notifications are fire-and-forget: return values are ignored
and nothing is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from loguru import logger

if TYPE_CHECKING:
    from genecolony.evolution.organism import Organism


class Visualizer(Protocol):
    """Anything that can track organism avatars."""

    def create_avatar(self, organism: Organism) -> None: ...

    def update_avatar(self, organism: Organism) -> None: ...

    def destroy_avatar(self, organism: Organism) -> None: ...


class NullVisualizer:
    """Ignores every notification."""

    def create_avatar(self, organism: Organism) -> None:
        pass

    def update_avatar(self, organism: Organism) -> None:
        pass

    def destroy_avatar(self, organism: Organism) -> None:
        pass


class LoggingVisualizer:
    """Writes each notification to the log at DEBUG level."""

    def create_avatar(self, organism: Organism) -> None:
        logger.debug("[avatar] created {}", organism.name)

    def update_avatar(self, organism: Organism) -> None:
        logger.debug("[avatar] updated {}", organism.name)

    def destroy_avatar(self, organism: Organism) -> None:
        logger.debug("[avatar] destroyed {}", organism.name)
